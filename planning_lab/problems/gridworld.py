# planning_lab/problems/gridworld.py
# Slippery grid world: a Markov decision problem where every move fails (and leaves you in place) with probability `slip`.
from __future__ import annotations
from typing import Hashable, List, Optional, Sequence, Set

from .grid import MOVES, Coord
from ..core.problem import MarkovDecisionProblem, Transition


class SlipperyGrid(MarkovDecisionProblem):
    """
    - State: (row, col), any cell off the walls
    - applicable_actions(s): moves that stay in-bounds and off walls; none at the goal
    - resulting_states(a, s): [moved, s] (just [moved] when slip == 0)
    - P(moved) = 1 - slip, P(s) = slip; every attempt costs 1
    Expected cost to the goal from an open cell is manhattan / (1 - slip).
    """
    def __init__(self, rows: int, cols: int, goal: Coord, walls: Optional[Set[Coord]] = None,
                 slip: float = 0.2, start: Coord = (0, 0)):
        if not 0.0 <= slip < 1.0:
            raise ValueError(f"slip must be in [0, 1), got {slip}")
        self.rows = rows
        self.cols = cols
        self.goal = goal
        self.walls = set(walls or ())
        self.slip = slip
        self.start = start

    def passable(self, cell: Coord) -> bool:
        r, c = cell
        return 0 <= r < self.rows and 0 <= c < self.cols and cell not in self.walls

    def states(self) -> List[Coord]:
        return [(r, c) for r in range(self.rows) for c in range(self.cols) if (r, c) not in self.walls]

    def initial_state(self) -> Coord:
        return self.start

    def is_solution(self, state: Hashable) -> bool:
        return state == self.goal

    def applicable_actions(self, state: Hashable) -> List[str]:
        if state == self.goal:
            return []
        r, c = state
        return [name for name, (dr, dc) in MOVES.items() if self.passable((r + dr, c + dc))]

    def resulting_states(self, action: Hashable, state: Hashable) -> Sequence[Coord]:
        self.require_applicable(action, state)
        r, c = state
        dr, dc = MOVES[action]
        moved = (r + dr, c + dc)
        return [moved, state] if self.slip > 0 else [moved]

    def transition(self, action: Hashable, state: Hashable, next_state: Hashable) -> Transition:
        self.require_applicable(action, state)
        p = self.slip if next_state == state else 1.0 - self.slip
        return Transition(action, 1.0, p)

    def heuristic(self, state: Hashable) -> float:
        r, c = state
        gr, gc = self.goal
        return float(abs(r - gr) + abs(c - gc))

    def __repr__(self) -> str:
        return f"SlipperyGrid({self.rows}x{self.cols}, goal={self.goal}, slip={self.slip:g})"
