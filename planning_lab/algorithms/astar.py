# planning_lab/algorithms/astar.py
from __future__ import annotations
from typing import Optional

from .best_first import BestFirstSearch
from ..core.metrics import SearchResult, measure
from ..core.problem import Problem
from ..core.search import Heuristic, HeuristicAlgorithm


class AStar(HeuristicAlgorithm, BestFirstSearch):
    """A*: best-first on f = g + h; optimal when h is admissible (never overestimates)."""
    name = "A*"

    def __init__(self, heuristic: Optional[Heuristic] = None):
        BestFirstSearch.__init__(self)
        HeuristicAlgorithm.__init__(self, heuristic)

    def is_optimal(self) -> bool:
        return True

    def complexity(self) -> str:
        return "O(b^d)"

    def space_complexity(self) -> str:
        return self.complexity()


def a_star_search(problem: Problem, heuristic: Optional[Heuristic] = None) -> SearchResult:
    return measure("A*", AStar(heuristic), problem)
