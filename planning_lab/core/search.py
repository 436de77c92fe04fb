# planning_lab/core/search.py
# The general search driver and the mixins the algorithm families share.
from __future__ import annotations
from typing import Callable, Optional

import numpy as np

from .errors import InvariantError, UnsupportedOperationError
from .logger import get_logger
from .node import Option
from .problem import Problem, State

logger = get_logger(__name__)

Heuristic = Callable[[State], float]
Evaluation = Callable[[Option], float]


class GeneralSearch:
    """Template for search algorithms.

    solve() asks the algorithm for a traversal tailored to the problem and
    pulls options from it until one is a solution or the traversal runs dry.
    Subclasses choose the traversal (create_traversal) and may replace the
    whole strategy (_solve) or the loop (search).
    """
    name = "GeneralSearch"

    def __init__(self) -> None:
        self.problem: Optional[Problem] = None
        self.nodes_expanded = 0

    def solve(self, problem: Problem) -> Optional[Option]:
        self.problem = problem
        self.nodes_expanded = 0
        logger.debug("%s: solving %r", self.name, problem)
        if isinstance(self, HeuristicAlgorithm):
            self.bind_heuristic(problem)
        solution = self._solve(problem)
        checked = not (isinstance(self, ProbabilisticAlgorithm) and not self.is_correct())
        if checked and solution is not None and not problem.is_solution(solution.state):
            raise InvariantError(f"{self.name} returned {solution!r}, which is not a solution")
        logger.debug("%s: %s after %d expansions", self.name,
                     "found %r" % (solution,) if solution is not None else "no solution",
                     self.nodes_expanded)
        return solution

    # central primitive operations
    def _solve(self, problem: Problem) -> Optional[Option]:
        return self.search(self.create_traversal(problem))

    def create_traversal(self, problem: Problem):
        raise NotImplementedError

    def search(self, traversal) -> Optional[Option]:
        try:
            for node in traversal:
                if self.problem.is_solution(node.state):
                    return node
            # fail
            return None
        finally:
            self.nodes_expanded += traversal.expanded

    # algorithm properties
    def is_optimal(self) -> bool:
        raise NotImplementedError

    def complexity(self) -> str:
        raise UnsupportedOperationError(f"no time complexity estimate for {self.name}")

    def space_complexity(self) -> str:
        raise UnsupportedOperationError(f"no space complexity estimate for {self.name}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def heuristic_from_problem(problem) -> Optional[Heuristic]:
    if hasattr(problem, "heuristic"):
        def h(state: State) -> float:
            val = problem.heuristic(state)
            return 0.0 if val is None else float(val)
        return h
    return None


class HeuristicAlgorithm:
    """Algorithms guided by a heuristic h; the default evaluation is f = g + h.

    Without an explicit heuristic, the problem's own heuristic(state) is used
    when solve() is called.
    """
    def __init__(self, heuristic: Optional[Heuristic] = None):
        self._heuristic = heuristic
        self._problem_heuristic: Optional[Heuristic] = None

    @property
    def heuristic(self) -> Heuristic:
        h = self._heuristic if self._heuristic is not None else self._problem_heuristic
        if h is None:
            raise TypeError(f"{type(self).__name__} needs a heuristic (none given and the problem has none)")
        return h

    @heuristic.setter
    def heuristic(self, heuristic: Heuristic) -> None:
        if heuristic is None:
            raise TypeError("None is not a heuristic")
        self._heuristic = heuristic

    def bind_heuristic(self, problem) -> None:
        if self._heuristic is None:
            self._problem_heuristic = heuristic_from_problem(problem)
            if self._problem_heuristic is None:
                raise TypeError(f"{type(self).__name__} needs a heuristic (none given and {problem!r} has none)")

    @property
    def evaluation(self) -> Evaluation:
        h = self.heuristic
        return lambda n: n.cost + h(n.state)


class ProbabilisticAlgorithm:
    """Algorithms that draw from a random source.

    Monte Carlo algorithms (is_correct() is False) may return wrong answers;
    Las Vegas algorithms are always correct when they answer.
    """
    def __init__(self, seed: Optional[int] = None):
        self.random = np.random.default_rng(seed)

    def is_correct(self) -> bool:
        raise NotImplementedError
