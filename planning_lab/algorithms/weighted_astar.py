# planning_lab/algorithms/weighted_astar.py
# Weighted A*, a variant of A* that scales the heuristic by a weight factor to trade path cost for search effort.
from __future__ import annotations
from typing import Optional

from .astar import AStar
from ..core.metrics import SearchResult, measure
from ..core.problem import Problem
from ..core.search import Evaluation, Heuristic


class WAStar(AStar):
    """
    Weighted A*: f = g + w*h (w>1 focuses search; not optimal in general).
    With an admissible h the solution costs at most w times the optimum.
    """
    def __init__(self, heuristic: Optional[Heuristic] = None, weight: float = 1.5):
        if weight < 1:
            raise ValueError(f"weight must be >= 1, got {weight}")
        super().__init__(heuristic)
        self.weight = float(weight)

    @property
    def name(self) -> str:
        return f"WA*(w={self.weight:g})"

    @property
    def evaluation(self) -> Evaluation:
        h, w = self.heuristic, self.weight
        return lambda n: n.cost + w * h(n.state)

    def is_optimal(self) -> bool:
        return self.weight == 1.0

    def __repr__(self) -> str:
        return f"WAStar(weight={self.weight:g})"


def weighted_a_star_search(problem: Problem, w: float = 1.5, h: Optional[Heuristic] = None) -> SearchResult:
    algorithm = WAStar(h, w)
    return measure(algorithm.name, algorithm, problem)
