# planning_lab/algorithms/broadening.py
# Iterative Broadening: depth-first sweeps that expand at most `bound` successors per option, widening each sweep.
from __future__ import annotations
from typing import Optional

from .bounding import DepthFirstBoundingSearch
from ..core.errors import UnsupportedOperationError
from ..core.frontiers import LIFOStack
from ..core.logger import get_logger
from ..core.node import Option
from ..core.problem import Problem
from ..core.search import Evaluation

logger = get_logger(__name__)


class BreadthLimitedCursor:
    """Passes on at most `limit` successors of the wrapped cursor and reports a cut-off."""
    def __init__(self, cursor, algorithm: "IterativeBroadening"):
        self.cursor = cursor
        self.algorithm = algorithm
        self.count = 0

    def has_next(self) -> bool:
        if self.count < self.algorithm.bound:
            return self.cursor.has_next()
        if self.cursor.has_next():
            self.algorithm.have_pruned = True
        return False

    def __iter__(self):
        return self

    def __next__(self) -> Option:
        if not self.has_next():
            raise StopIteration
        self.count += 1
        return next(self.cursor)


class BroadeningStack(LIFOStack):
    def __init__(self, problem: Problem, algorithm: "IterativeBroadening"):
        super().__init__(problem)
        self.algorithm = algorithm

    def expand(self, option: Option) -> BreadthLimitedCursor:
        return BreadthLimitedCursor(option.expand(self.problem), self.algorithm)


class IterativeBroadening(DepthFirstBoundingSearch):
    """
    The bound is a breadth: sweeps with 1, 2, 3, ... successors per option.
    Each sweep keeps the cheapest solution it finds; stops with None once a
    sweep cut off no successor. Not optimal (a narrow sweep may find an
    expensive solution first).
    """
    name = "IterativeBroadening"

    def __init__(self, max_breadth: Optional[int] = None):
        super().__init__(1, continued_when_found=True)
        self.max_breadth = max_breadth
        self.have_pruned = False

    @property
    def evaluation(self) -> Evaluation:
        raise UnsupportedOperationError("iterative broadening bounds the breadth, it has no evaluation function")

    def is_out_of_bounds(self, option: Option) -> bool:
        # the breadth limit is applied while expanding
        return False

    def create_traversal(self, problem: Problem) -> BroadeningStack:
        return BroadeningStack(problem, self)

    def _solve(self, problem: Problem) -> Optional[Option]:
        self.bound = 1
        while self.max_breadth is None or self.bound <= self.max_breadth:
            self.have_pruned = False
            logger.debug("%s: sweep with breadth %d", self.name, self.bound)
            solution = self.search(self.create_traversal(problem))
            if solution is not None:
                return solution
            if not self.have_pruned:
                return None
            self.bound += 1
        return None

    def is_optimal(self) -> bool:
        return False

    def complexity(self) -> str:
        return "unbounded"
