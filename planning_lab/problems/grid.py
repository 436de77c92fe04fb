# planning_lab/problems/grid.py
from __future__ import annotations
from typing import Hashable, List, Optional, Sequence, Set, Tuple

from ..core.problem import Problem, Transition

Coord = Tuple[int, int]

MOVES = {
    "Up": (-1, 0),
    "Down": (1, 0),
    "Left": (0, -1),
    "Right": (0, 1),
}


class GridProblem(Problem):
    """
    4-neighbor grid pathfinding with unit costs.

    - State: (row, col) tuple
    - applicable_actions(s): subset of {'Up','Down','Left','Right'} that keep you in-bounds and off walls
    - resulting_states(a, s): [next (row, col)]
    - is_solution(s): s == goal
    - c(s,a,s'): 1.0
    - heuristic(s): Manhattan distance (admissible on 4-neighbor grid)
    """
    def __init__(self, rows: int, cols: int, start: Coord, goal: Coord, walls: Optional[Set[Coord]] = None):
        self.rows = rows
        self.cols = cols
        self.start = start
        self.goal = goal
        self.walls = set(walls or ())
        for cell in (start, goal):
            if not self.passable(cell):
                raise ValueError(f"{cell} is outside the grid or a wall")

    def passable(self, cell: Coord) -> bool:
        r, c = cell
        return 0 <= r < self.rows and 0 <= c < self.cols and cell not in self.walls

    def initial_state(self) -> Hashable:
        return self.start

    def is_solution(self, state: Hashable) -> bool:
        return state == self.goal

    def applicable_actions(self, state: Hashable) -> List[str]:
        r, c = state
        return [name for name, (dr, dc) in MOVES.items() if self.passable((r + dr, c + dc))]

    def resulting_states(self, action: Hashable, state: Hashable) -> Sequence[Hashable]:
        self.require_applicable(action, state)
        r, c = state
        dr, dc = MOVES[action]
        return [(r + dr, c + dc)]

    def transition(self, action: Hashable, state: Hashable, next_state: Hashable) -> Transition:
        self.require_applicable(action, state)
        return Transition(action, 1.0)

    def heuristic(self, state: Hashable) -> float:
        r, c = state
        gr, gc = self.goal
        return float(abs(r - gr) + abs(c - gc))

    def __repr__(self) -> str:
        return f"GridProblem({self.rows}x{self.cols}, {self.start} -> {self.goal}, {len(self.walls)} walls)"


def make_grid_problem() -> GridProblem:
    # Example: 5x7 grid, a few walls
    walls = {(1, 3), (2, 3), (3, 3), (3, 4)}
    return GridProblem(rows=5, cols=7, start=(0, 0), goal=(4, 6), walls=walls)
