from __future__ import annotations
import math
from typing import Optional

from .bounding import DepthFirstBoundingSearch
from ..core.logger import get_logger
from ..core.metrics import SearchResult, measure
from ..core.node import Option
from ..core.problem import Problem
from ..core.search import Evaluation

logger = get_logger(__name__)


class IterativeDeepening(DepthFirstBoundingSearch):
    """
    Iterative Deepening Search (tree-like). Repeats a cost-bounded DFS with bounds 0, step, 2*step, ...
    Bound is on the accumulated cost g, so with unit costs it is a depth limit.
    Stops at the first solution; a sweep that pruned nothing means there is nothing deeper.
    """
    name = "IDS"

    def __init__(self, step: float = 1, max_bound: float = math.inf):
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}")
        super().__init__(0, continued_when_found=False)
        self.step = step
        self.max_bound = max_bound
        self.have_pruned = False

    @property
    def evaluation(self) -> Evaluation:
        return lambda n: n.cost

    def _solve(self, problem: Problem) -> Optional[Option]:
        self.bound = 0
        while self.bound <= self.max_bound:
            self.have_pruned = False
            logger.debug("%s: sweep with bound %g", self.name, self.bound)
            solution = self.search(self.create_traversal(problem))
            if solution is not None:
                return solution
            if not self.have_pruned:
                return None
            self.bound += self.step
        return None

    def on_pruned(self, option: Option) -> None:
        self.have_pruned = True

    def is_optimal(self) -> bool:
        return True

    def complexity(self) -> str:
        return "O(b^d)"


def iterative_deepening_search(problem: Problem, max_depth: int = 64) -> SearchResult:
    return measure("IDS", IterativeDeepening(1, max_depth), problem)
