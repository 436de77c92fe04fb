# planning_lab/core/metrics.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import time, tracemalloc

from .errors import PlanningError, error_kind
from .logger import get_logger
from .utils import reconstruct_path

logger = get_logger(__name__)


@dataclass
class SearchResult:
    algo: str
    success: bool
    actions: List = field(default_factory=list)
    cost: float = float("inf")
    nodes_expanded: int = 0
    time_s: float = 0.0
    peak_kb: int = 0
    error: Optional[str] = None

    def as_row(self) -> dict:
        return {
            "algo": self.algo,
            "success": self.success,
            "cost": self.cost if self.success else None,
            "nodes_expanded": self.nodes_expanded,
            "time_s": self.time_s,
            "peak_kb": self.peak_kb,
            "error": self.error,
        }


class MeasuredRun:
    """
    Context manager for timing and (approximate) peak memory.
    Safe to query .elapsed and .peak_kb *inside* the with-block.
    """
    def __init__(self) -> None:
        self.t0: Optional[float] = None
        self.t1: Optional[float] = None
        self._peak_kb: int = 0
        self._tracing: bool = False

    def __enter__(self) -> "MeasuredRun":
        self._tracing = not tracemalloc.is_tracing()
        if self._tracing:
            tracemalloc.start()
        else:
            tracemalloc.reset_peak()
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.t1 = time.perf_counter()
        _, peak = tracemalloc.get_traced_memory()
        if self._tracing:
            tracemalloc.stop()
            self._tracing = False
        self._peak_kb = max(self._peak_kb, peak // 1024)
        return False  # don't suppress exceptions

    @property
    def elapsed(self) -> float:
        """Seconds elapsed. Works before and after __exit__."""
        if self.t0 is None:
            return 0.0
        if self.t1 is None:
            return time.perf_counter() - self.t0
        return self.t1 - self.t0

    @property
    def peak_kb(self) -> int:
        if self.t1 is None and tracemalloc.is_tracing():
            _, peak = tracemalloc.get_traced_memory()
            return max(self._peak_kb, peak // 1024)
        return self._peak_kb


def measure(name: str, algorithm, problem) -> SearchResult:
    """Run algorithm.solve(problem) once and report outcome, effort, time and memory.

    Library errors (PlanningError and its kinds) are reported in the result;
    anything else propagates.
    """
    run = MeasuredRun()
    try:
        with run:
            solution = algorithm.solve(problem)
    except PlanningError as e:
        logger.warning("%s failed (%s): %s", name, error_kind(e), e)
        return SearchResult(name, False, [], float("inf"), getattr(algorithm, "nodes_expanded", 0),
                            run.elapsed, run.peak_kb, f"{error_kind(e)}: {e}")
    # local optimizers may hand back a local optimum that is not a solution
    success = solution is not None and problem.is_solution(solution.state)
    actions, cost = reconstruct_path(solution)
    return SearchResult(name, success, actions, cost,
                        getattr(algorithm, "nodes_expanded", 0), run.elapsed, run.peak_kb)
