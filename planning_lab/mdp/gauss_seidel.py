# planning_lab/mdp/gauss_seidel.py
# Value iteration in place (Gauss-Seidel): each sweep backs up every state, reusing values updated earlier in the same sweep.
from __future__ import annotations
from typing import Iterable, List, Optional

from .dynamic_programming import DynamicProgramming, GreedyPolicy
from ..core.errors import UnsupportedOperationError
from ..core.logger import get_logger
from ..core.problem import MarkovDecisionProblem, State
from ..core.search import Heuristic

logger = get_logger(__name__)


def _change(old: float, new: float) -> float:
    if old == new:
        return 0.0
    return abs(new - old)


class GaussSeidelDynamicProgramming(DynamicProgramming):
    """
    Sweeps the given states (in their given order) until the largest change
    of a sweep drops below tolerance. Without explicit states the problem's
    states() are used.
    """
    name = "GaussSeidel"

    def __init__(self, heuristic: Optional[Heuristic] = None, states: Optional[Iterable[State]] = None,
                 tolerance: float = 1e-6, discount: float = 1.0, max_sweeps: Optional[int] = None):
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")
        super().__init__(heuristic, discount)
        self.states = None if states is None else list(states)
        self.tolerance = tolerance
        self.max_sweeps = max_sweeps
        self.sweeps = 0
        self.deltas: List[float] = []

    def _solve(self, problem: MarkovDecisionProblem) -> GreedyPolicy:
        states = self.states
        if states is None:
            if not hasattr(problem, "states"):
                raise TypeError(f"{self.name} needs the states to sweep ({problem!r} has no states())")
            states = list(problem.states())
        utility = self.create_map()
        q = self.action_value(utility)
        self.utility = utility
        self.sweeps = 0
        self.deltas = []
        while True:
            delta = 0.0
            for s in states:
                old = utility[s]
                delta = max(delta, _change(old, self.backup(utility, q, s)))
            self.sweeps += 1
            self.deltas.append(delta)
            logger.debug("%s: sweep %d, max change %g", self.name, self.sweeps, delta)
            if delta < self.tolerance:
                break
            if self.max_sweeps is not None and self.sweeps >= self.max_sweeps:
                logger.warning("%s: no convergence after %d sweeps (last change %g)", self.name, self.sweeps, delta)
                break
        return self.greedy_policy(q)

    def complexity(self) -> str:
        return "unbounded"

    def space_complexity(self) -> str:
        raise UnsupportedOperationError("no space complexity estimate for Gauss-Seidel dynamic programming")
