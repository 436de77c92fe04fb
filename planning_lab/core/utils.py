# planning_lab/core/utils.py
# Small helpers shared by the algorithms: path reconstruction, arg-min over choices, bound comparison.
from __future__ import annotations
import math
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from .node import Option

T = TypeVar("T")


def reconstruct_path(node: Optional[Option]) -> Tuple[List, float]:
    if node is None:
        return [], float("inf")
    return node.path(), float(node.cost)


def argmin(choices: Iterable[T], f: Callable[[T], float]) -> Tuple[T, float]:
    """First choice with minimal f-value (ties keep enumeration order)."""
    it = iter(choices)
    try:
        best = next(it)
    except StopIteration:
        raise ValueError("argmin() of an empty sequence") from None
    best_value = f(best)
    for choice in it:
        value = f(choice)
        if value < best_value:
            best, best_value = choice, value
    return best, best_value


def exceeds(value: float, bound: float) -> bool:
    """value > bound, except that +inf never fits any bound (not even +inf).

    Keeps iterative deepening from looping forever on unsolvable problems.
    """
    return value > bound or value == math.inf
