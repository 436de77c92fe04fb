# planning_lab/algorithms/hill_climbing.py
# Hill climbing (steepest descent on h): move to a best successor as long as it does not make h worse.
from __future__ import annotations
from typing import Optional

from .local_search import LocalOptimizerSearch, LocalSelection
from ..core.search import Heuristic


class ImprovingAcceptance:
    """Accept iff delta = f(candidate) - f(current) <= 0; stop at the first rejection."""
    def __init__(self) -> None:
        self.accepted = True

    def accept(self, current: float, candidate: float) -> bool:
        self.accepted = candidate - current <= 0
        return self.accepted

    def has_next(self) -> bool:
        return self.accepted


class HillClimbing(LocalOptimizerSearch):
    """
    Amnesiac steepest descent on h.
    Sideways moves are allowed, so plateaus are only left through max_iterations.
    randomized=False always takes the first best successor.
    """
    name = "HillClimbing"

    def __init__(self, heuristic: Optional[Heuristic] = None, randomized: bool = True,
                 sample_size: Optional[int] = None, max_iterations: Optional[int] = 10_000,
                 seed: Optional[int] = None):
        super().__init__(heuristic, sample_size, max_iterations, seed)
        self.selection = LocalSelection.BEST if randomized else LocalSelection.BEST_ORDERED

    def create_acceptance(self) -> ImprovingAcceptance:
        return ImprovingAcceptance()
