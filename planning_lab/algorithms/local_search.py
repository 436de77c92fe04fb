# planning_lab/algorithms/local_search.py
# Shared machinery of the local optimizers: restricted views of a problem, the
# selection modes built from them, and the single-state traversal they run on.
from __future__ import annotations
import math
from enum import Enum
from typing import Callable, Optional, Sequence

import numpy as np

from ..core.errors import UnsupportedOperationError
from ..core.frontiers import OptionIterator
from ..core.logger import get_logger
from ..core.node import Option, root_option
from ..core.problem import Action, DelegateProblem, Problem, State
from ..core.search import (Evaluation, GeneralSearch, Heuristic, HeuristicAlgorithm,
                           ProbabilisticAlgorithm)

logger = get_logger(__name__)


class RandomRestriction(DelegateProblem):
    """Only a uniform random sample of (at most) k applicable actions is offered."""
    def __init__(self, problem: Problem, k: int, random: np.random.Generator):
        if k < 1:
            raise ValueError(f"sample size must be at least 1, got {k}")
        super().__init__(problem)
        self.k = k
        self.random = random

    def applicable_actions(self, state: State) -> Sequence[Action]:
        actions = tuple(self.problem.applicable_actions(state))
        if len(actions) <= self.k:
            return actions
        picked = self.random.choice(len(actions), size=self.k, replace=False)
        return tuple(actions[i] for i in sorted(picked))


class BestRestriction(DelegateProblem):
    """Only the actions whose resulting state has minimal evaluation are offered (all ties kept)."""
    def __init__(self, problem: Problem, evaluation: Callable[[State], float]):
        super().__init__(problem)
        self.evaluation = evaluation

    def applicable_actions(self, state: State) -> Sequence[Action]:
        best, best_value = [], math.inf
        for a in self.problem.applicable_actions(state):
            value = min(self.evaluation(s2) for s2 in self.problem.resulting_states(a, state))
            if value < best_value:
                best, best_value = [a], value
            elif value == best_value:
                best.append(a)
        return tuple(best)


class LocalSelection(Enum):
    """How a local optimizer picks the successor it considers next."""
    FIRST = "first"                 # one successor, at random
    BEST = "best"                   # a best successor, at random among ties
    BEST_ORDERED = "best-ordered"   # the first of the best successors

    @property
    def randomized(self) -> bool:
        return self is not LocalSelection.BEST_ORDERED

    def create_local_restriction(self, problem: Problem, algorithm: HeuristicAlgorithm) -> Problem:
        if self is LocalSelection.FIRST:
            return problem
        return BestRestriction(problem, algorithm.heuristic)


class LocalOptionIterator(OptionIterator):
    """
    Traversal of a single current option.

    Yields the initial option first. Each further next() draws candidates
    among the successors of the current option until the acceptance rule
    takes one, which becomes (and is returned as) the new current option.
    Exhausted when the acceptance rule stops, the current option has no
    successors, or max_iterations candidates have been tried.
    """
    def __init__(self, problem: Problem, evaluation: Evaluation, acceptance,
                 random: np.random.Generator, randomized: bool = True,
                 max_iterations: Optional[int] = None):
        super().__init__(problem)
        self.evaluation = evaluation
        self.acceptance = acceptance
        self.random = random
        self.randomized = randomized
        self.max_iterations = max_iterations
        self.iterations = 0
        self.current: Optional[Option] = None
        self._peeked: Optional[Option] = None
        self._done = False

    def has_next(self) -> bool:
        if self._peeked is None and not self._done:
            self._peeked = self._advance()
        return self._peeked is not None

    def __next__(self) -> Option:
        if not self.has_next():
            raise StopIteration
        option, self._peeked = self._peeked, None
        return option

    def remove(self) -> None:
        raise UnsupportedOperationError("local search keeps a single current option, nothing can be removed")

    def _advance(self) -> Optional[Option]:
        if self.current is None:
            self.current = root_option(self.problem)
            return self.current
        current_value = self.evaluation(self.current)
        while self.acceptance.has_next():
            if self.max_iterations is not None and self.iterations >= self.max_iterations:
                logger.debug("local search: iteration cap %d reached", self.max_iterations)
                break
            candidates = list(self.current.expand(self.problem))
            self.expanded += 1
            if not candidates:
                break
            candidate = self.pick(candidates, current_value)
            self.iterations += 1
            candidate_value = self.evaluation(candidate)
            if self.acceptance.accept(current_value, candidate_value):
                logger.debug("local search: step %d moves to %r (%g -> %g)",
                             self.iterations, candidate.state, current_value, candidate_value)
                self.current = candidate
                return candidate
        self._done = True
        return None

    def pick(self, candidates: Sequence[Option], current_value: float) -> Option:
        """The candidate offered to the acceptance rule next."""
        if self.randomized:
            return candidates[self.random.integers(len(candidates))]
        return candidates[0]


class LocalOptimizerSearch(HeuristicAlgorithm, ProbabilisticAlgorithm, GeneralSearch):
    """
    Template of the local optimizers: evaluation is h(state) alone, the
    traversal follows a single current option, and the last option reached
    (a local optimum) is returned when no solution turns up.
    Subclasses provide the acceptance rule.
    """
    selection = LocalSelection.FIRST
    traversal_class = LocalOptionIterator

    def __init__(self, heuristic: Optional[Heuristic] = None, sample_size: Optional[int] = None,
                 max_iterations: Optional[int] = None, seed: Optional[int] = None):
        GeneralSearch.__init__(self)
        HeuristicAlgorithm.__init__(self, heuristic)
        ProbabilisticAlgorithm.__init__(self, seed)
        self.sample_size = sample_size
        self.max_iterations = max_iterations
        self.last_traversal: Optional[LocalOptionIterator] = None

    @property
    def evaluation(self) -> Evaluation:
        h = self.heuristic
        return lambda n: h(n.state)

    def create_acceptance(self):
        raise NotImplementedError

    def create_traversal(self, problem: Problem) -> LocalOptionIterator:
        restricted = problem
        if self.sample_size is not None:
            restricted = RandomRestriction(restricted, self.sample_size, self.random)
        restricted = self.selection.create_local_restriction(restricted, self)
        self.last_traversal = self.traversal_class(restricted, self.evaluation, self.create_acceptance(),
                                                   self.random, self.selection.randomized, self.max_iterations)
        return self.last_traversal

    def search(self, traversal) -> Optional[Option]:
        last = None
        try:
            for node in traversal:
                if self.problem.is_solution(node.state):
                    return node
                last = node
            return last
        finally:
            self.nodes_expanded += traversal.expanded

    def is_correct(self) -> bool:
        return False

    def is_optimal(self) -> bool:
        return False

    def complexity(self) -> str:
        return "unbounded"

    def space_complexity(self) -> str:
        return "O(b)"
