# planning_lab/algorithms/ida_star.py
# This code implements the IDA* search algorithm, which is an iterative deepening version of A* that uses a depth-first search strategy.
# It combines the benefits of A*'s heuristic guidance with the space efficiency of depth-first search.
from __future__ import annotations
import math
from typing import List, Optional

from .bounding import DepthFirstBoundingSearch
from ..core.logger import get_logger
from ..core.metrics import SearchResult, measure
from ..core.node import Option
from ..core.problem import Problem
from ..core.search import Heuristic, HeuristicAlgorithm

logger = get_logger(__name__)


class IterativeDeepeningAStar(HeuristicAlgorithm, DepthFirstBoundingSearch):
    """
    IDA*: Iterative Deepening A* (tree-like).
    - Bounded by f = g + h; increases the bound to the smallest f that exceeded the previous bound.
    - Uses little memory but may revisit nodes many times.
    """
    name = "IDA*"

    def __init__(self, heuristic: Optional[Heuristic] = None, max_iterations: Optional[int] = None):
        DepthFirstBoundingSearch.__init__(self, math.inf, continued_when_found=False)
        HeuristicAlgorithm.__init__(self, heuristic)
        self.max_iterations = max_iterations
        self.next_bound = math.inf
        self.bound_history: List[float] = []

    def _solve(self, problem: Problem) -> Optional[Option]:
        self.bound_history = []
        self.bound = self.evaluation(Option(problem.initial_state()))
        while self.max_iterations is None or len(self.bound_history) < self.max_iterations:
            self.next_bound = math.inf
            self.bound_history.append(self.bound)
            logger.debug("%s: sweep %d with bound %g", self.name, len(self.bound_history), self.bound)
            solution = self.search(self.create_traversal(problem))
            if solution is not None:
                return solution
            if self.next_bound == math.inf:
                # nothing finite was pruned: the space below every bound is exhausted
                return None
            self.bound = self.next_bound
        logger.debug("%s: gave up after %d sweeps", self.name, len(self.bound_history))
        return None

    def on_pruned(self, option: Option) -> None:
        value = self.evaluation(option)
        if value < self.next_bound:
            self.next_bound = value

    def is_optimal(self) -> bool:
        return True

    def complexity(self) -> str:
        return "O(b^d)"


def ida_star_search(problem: Problem, h: Optional[Heuristic] = None, max_iters: int = 10_000) -> SearchResult:
    return measure("IDA*", IterativeDeepeningAStar(h, max_iters), problem)
