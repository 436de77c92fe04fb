# planning_lab/algorithms/bounding.py
# Bounded search: options whose evaluation exceeds the current bound are pruned before expansion.
from __future__ import annotations
import math
from typing import Optional

from ..core.frontiers import LIFOStack
from ..core.logger import get_logger
from ..core.node import Option
from ..core.problem import Problem
from ..core.search import Evaluation, GeneralSearch
from ..core.utils import exceeds

logger = get_logger(__name__)


class GeneralBoundingSearch(GeneralSearch):
    """
    Search loop with a bound on f:
    - an option with f(n) > bound is removed from the traversal (never expanded)
    - every solution within the bound is handed to process_solution()
    - with continued_when_found the cheapest solution seen is returned once
      the traversal is exhausted, otherwise the first one
    An infinite f never fits a bound, not even an infinite one.
    """
    def __init__(self, bound: float = math.inf, continued_when_found: bool = False):
        super().__init__()
        self.bound = bound
        self.continued_when_found = continued_when_found

    @property
    def evaluation(self) -> Evaluation:
        raise NotImplementedError

    def is_out_of_bounds(self, option: Option) -> bool:
        return exceeds(self.evaluation(option), self.bound)

    def process_solution(self, option: Option) -> None:
        """Hook called for each solution found within the bound."""

    def on_pruned(self, option: Option) -> None:
        """Hook called for each option cut off by the bound."""

    def search(self, traversal) -> Optional[Option]:
        best: Optional[Option] = None
        try:
            for node in traversal:
                if self.is_out_of_bounds(node):
                    traversal.remove()
                    self.on_pruned(node)
                    continue
                if self.problem.is_solution(node.state):
                    self.process_solution(node)
                    if best is None or node.cost < best.cost:
                        best = node
                    if not self.continued_when_found:
                        return best
            return best
        finally:
            self.nodes_expanded += traversal.expanded


class DepthFirstBoundingSearch(GeneralBoundingSearch):
    """Bounded search in depth-first order (linear memory)."""
    def create_traversal(self, problem: Problem) -> LIFOStack:
        return LIFOStack(problem)

    def space_complexity(self) -> str:
        return "O(b*d)"
