# planning_lab/core/config.py
# Tunables for the algorithm registry, with environment overrides and the annealing schedules.
from __future__ import annotations
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Callable, Iterable, Optional

from .problem import State

Schedule = Callable[[int], float]


@dataclass
class AlgorithmConfig:
    heuristic: Optional[Callable[[State], float]] = None
    weight: float = 1.5
    max_bound: float = math.inf
    schedule: Optional[Schedule] = None
    discount: float = 1.0
    tolerance: float = 1e-6
    states: Optional[Iterable[State]] = None
    sample_size: Optional[int] = None
    randomized: bool = True
    max_iterations: Optional[int] = None
    max_workers: Optional[int] = None
    depth_step: int = 1
    continued_when_found: Optional[bool] = None
    seed: Optional[int] = None

    # ---- environment ---------------------------------------------------------
    # name -> (environment variable, parser)
    ENV = {
        "weight": ("PLANNING_LAB_WEIGHT", float),
        "max_bound": ("PLANNING_LAB_MAX_BOUND", float),
        "tolerance": ("PLANNING_LAB_TOLERANCE", float),
        "discount": ("PLANNING_LAB_DISCOUNT", float),
        "seed": ("PLANNING_LAB_SEED", int),
        "max_iterations": ("PLANNING_LAB_MAX_ITERATIONS", int),
        "max_workers": ("PLANNING_LAB_WORKERS", int),
    }

    @classmethod
    def from_env(cls, **overrides) -> "AlgorithmConfig":
        """Config from PLANNING_LAB_* environment variables; keyword overrides win."""
        values = {}
        for name, (var, parse) in cls.ENV.items():
            raw = os.getenv(var)
            if raw is None or raw == "":
                continue
            try:
                values[name] = parse(raw)
            except ValueError as e:
                raise ValueError(f"{var}={raw!r} is not a valid {parse.__name__}") from e
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"unknown config fields: {sorted(unknown)}")
        values.update(overrides)
        return cls(**values)

    def with_(self, **changes) -> "AlgorithmConfig":
        return replace(self, **changes)


def linear_schedule(start: float, steps: int) -> Schedule:
    """T(t) = start * (1 - t/steps), reaching exactly 0 at t = steps."""
    if steps <= 0:
        raise ValueError("steps must be positive")

    def schedule(t: int) -> float:
        if t >= steps:
            return 0.0
        return start * (1.0 - t / steps)
    return schedule


def geometric_schedule(start: float, alpha: float = 0.95, floor: float = 1e-3) -> Schedule:
    """T(t) = start * alpha**t, cut to 0 once it drops below floor."""
    if not 0.0 < alpha < 1.0:
        raise ValueError("alpha must be in (0, 1)")

    def schedule(t: int) -> float:
        T = start * alpha ** t
        return T if T >= floor else 0.0
    return schedule
