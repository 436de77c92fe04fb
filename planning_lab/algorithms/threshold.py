# planning_lab/algorithms/threshold.py
# Threshold accepting: deterministic relative of simulated annealing, worse moves are taken up to a shrinking threshold.
from __future__ import annotations
import math
from typing import Optional, Sequence

from .local_search import LocalOptimizerSearch, LocalOptionIterator, LocalSelection
from ..core.config import Schedule
from ..core.node import Option
from ..core.search import Heuristic


class ThresholdAcceptance:
    """Accept iff delta <= T = schedule(t). Once T is 0 it keeps going only while moves are accepted."""
    def __init__(self, schedule: Schedule):
        self.schedule = schedule
        self.t = 0
        self.T = math.inf
        self.accepted = True

    def threshold(self) -> float:
        """T for the next decision."""
        return self.schedule(self.t)

    def accept(self, current: float, candidate: float) -> bool:
        self.T = self.schedule(self.t)
        self.t += 1
        self.accepted = candidate - current <= self.T
        return self.accepted

    def has_next(self) -> bool:
        return self.T != 0 or self.accepted


class ThresholdOptionIterator(LocalOptionIterator):
    """
    At threshold 0 only successors with delta <= 0 are drawn, so the run ends
    (on the first rejection) exactly when none is left: hill climbing's stop.
    """
    def pick(self, candidates: Sequence[Option], current_value: float) -> Option:
        if self.acceptance.threshold() == 0:
            acceptable = [c for c in candidates if self.evaluation(c) - current_value <= 0]
            if acceptable:
                candidates = acceptable
        return super().pick(candidates, current_value)


class ThresholdAccepting(LocalOptimizerSearch):
    name = "ThresholdAccepting"
    selection = LocalSelection.FIRST
    traversal_class = ThresholdOptionIterator

    def __init__(self, heuristic: Optional[Heuristic] = None, schedule: Optional[Schedule] = None,
                 sample_size: Optional[int] = None, max_iterations: Optional[int] = 10_000,
                 seed: Optional[int] = None):
        if schedule is None:
            raise TypeError("ThresholdAccepting needs a schedule (iteration -> threshold)")
        super().__init__(heuristic, sample_size, max_iterations, seed)
        self.schedule = schedule

    def create_acceptance(self) -> ThresholdAcceptance:
        return ThresholdAcceptance(self.schedule)
