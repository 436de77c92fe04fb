# planning_lab/algorithms/annealing.py
# Simulated annealing: random successor; worse moves are taken with probability exp(-delta/T), T cooling over time.
from __future__ import annotations
import math
from typing import Optional

import numpy as np

from .local_search import LocalOptimizerSearch, LocalSelection
from ..core.config import Schedule
from ..core.search import Heuristic


class AnnealingAcceptance:
    """
    T = schedule(t) for the t-th decision (t = 0, 1, ...).
    Accept if delta <= 0, else with probability exp(-delta/T).
    Stops once T has reached exactly 0.
    """
    def __init__(self, schedule: Schedule, random: Optional[np.random.Generator] = None):
        self.schedule = schedule
        self.random = random if random is not None else np.random.default_rng()
        self.t = 0
        self.T = math.inf

    def accept(self, current: float, candidate: float) -> bool:
        self.T = self.schedule(self.t)
        self.t += 1
        delta = candidate - current
        if delta <= 0:
            return True
        if self.T <= 0:
            return False
        return self.random.random() < math.exp(-delta / self.T)

    def has_next(self) -> bool:
        return self.T != 0


class SimulatedAnnealing(LocalOptimizerSearch):
    name = "SimulatedAnnealing"
    selection = LocalSelection.FIRST

    def __init__(self, heuristic: Optional[Heuristic] = None, schedule: Optional[Schedule] = None,
                 sample_size: Optional[int] = None, max_iterations: Optional[int] = None,
                 seed: Optional[int] = None):
        if schedule is None:
            raise TypeError("SimulatedAnnealing needs a schedule (iteration -> temperature)")
        super().__init__(heuristic, sample_size, max_iterations, seed)
        self.schedule = schedule

    def create_acceptance(self) -> AnnealingAcceptance:
        return AnnealingAcceptance(self.schedule, self.random)
