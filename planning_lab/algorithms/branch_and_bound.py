# planning_lab/algorithms/branch_and_bound.py
# Depth-first Branch-and-Bound: each solution found tightens the bound to its cost.
from __future__ import annotations
import math
from typing import Optional

from .bounding import DepthFirstBoundingSearch
from ..core.logger import get_logger
from ..core.node import Option
from ..core.problem import Problem
from ..core.search import Heuristic, HeuristicAlgorithm

logger = get_logger(__name__)


class BranchAndBound(HeuristicAlgorithm, DepthFirstBoundingSearch):
    """
    B&B over f = g + h, starting from max_bound.
    Optimal and complete (on finite trees) for admissible h; the bound left
    after solve() equals the cost of the returned solution.
    """
    name = "BranchAndBound"

    def __init__(self, heuristic: Optional[Heuristic] = None, max_bound: float = math.inf,
                 continued_when_found: bool = True):
        DepthFirstBoundingSearch.__init__(self, max_bound, continued_when_found)
        HeuristicAlgorithm.__init__(self, heuristic)
        self.max_bound = max_bound

    def _solve(self, problem: Problem) -> Optional[Option]:
        self.bound = self.max_bound
        return super()._solve(problem)

    def process_solution(self, option: Option) -> None:
        logger.debug("%s: solution with cost %g, bound %g -> %g", self.name, option.cost, self.bound, option.cost)
        self.bound = option.cost

    def is_optimal(self) -> bool:
        return True

    def complexity(self) -> str:
        return "O(b^d)"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_bound={self.max_bound:g})"
