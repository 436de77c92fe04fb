# planning_lab/algorithms/heuristics.py
from __future__ import annotations
from typing import Callable, Dict, Hashable, Iterable, Optional

from ..core.logger import get_logger
from ..core.problem import State

logger = get_logger(__name__)


def zero_heuristic(state: State) -> float:
    """h = 0: admissible for every problem, turns A* into uniform-cost search."""
    return 0.0


class PatternDatabaseHeuristic:
    """
    Heuristic backed by a table of precomputed values (e.g. exact costs of an abstracted problem).

    States missing from the table fall back to the backing heuristic; with
    auto_update the fallback value is stored for the next lookup.
    """
    def __init__(self, backing: Optional[Callable[[State], float]] = None,
                 database: Optional[Dict[Hashable, float]] = None, auto_update: bool = False):
        self.backing = backing or zero_heuristic
        self.database: Dict[Hashable, float] = {} if database is None else database
        self.auto_update = auto_update
        self.hits = 0
        self.misses = 0

    def __call__(self, state: State) -> float:
        try:
            value = self.database[state]
        except KeyError:
            self.misses += 1
            value = float(self.backing(state))
            if self.auto_update:
                self.database[state] = value
            return value
        self.hits += 1
        return value

    def update(self, values: Iterable) -> None:
        """Add (state, value) pairs, overwriting existing entries."""
        n = len(self.database)
        self.database.update(values)
        logger.debug("pattern database: %d -> %d entries", n, len(self.database))

    def __len__(self) -> int:
        return len(self.database)

    def __contains__(self, state) -> bool:
        return state in self.database
