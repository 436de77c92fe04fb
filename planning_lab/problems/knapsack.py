# planning_lab/problems/knapsack.py
# 0/1 knapsack as a cost-minimizing search problem: decide item by item, the cost of skipping an item is its value.
from __future__ import annotations
import itertools
from typing import List, Sequence, Tuple

from ..core.problem import Problem, Transition

Item = Tuple[float, float]          # (weight, value)
KnapsackState = Tuple[int, float, float]   # (next item index, packed weight, packed value)

TAKE = "take"
SKIP = "skip"


class KnapsackProblem(Problem):
    """
    The search tree has depth len(items); every leaf is a solution.
    Minimizing the total skipped value maximizes the packed value, so the
    cheapest solution is an optimal packing: cost == total_value - best_value().
    heuristic(s) = remaining value - fractional-knapsack optimum of the
    remaining items, a lower bound on the value still to be lost.
    """
    def __init__(self, items: Sequence[Item], capacity: float):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        for w, v in items:
            if w < 0 or v < 0:
                raise ValueError(f"item ({w}, {v}) has a negative weight or value")
        self.items: List[Item] = [(float(w), float(v)) for w, v in items]
        self.capacity = float(capacity)
        self.total_value = sum(v for _, v in self.items)

    @property
    def max_bound(self) -> float:
        """No packing loses more than everything."""
        return self.total_value

    def initial_state(self) -> KnapsackState:
        return (0, 0.0, 0.0)

    def is_solution(self, state: KnapsackState) -> bool:
        return state[0] == len(self.items)

    def applicable_actions(self, state: KnapsackState) -> List[str]:
        i, weight, _ = state
        if i >= len(self.items):
            return []
        if weight + self.items[i][0] <= self.capacity:
            return [TAKE, SKIP]
        return [SKIP]

    def resulting_states(self, action: str, state: KnapsackState) -> Sequence[KnapsackState]:
        self.require_applicable(action, state)
        i, weight, value = state
        w, v = self.items[i]
        if action == TAKE:
            return [(i + 1, weight + w, value + v)]
        return [(i + 1, weight, value)]

    def transition(self, action: str, state: KnapsackState, next_state: KnapsackState) -> Transition:
        self.require_applicable(action, state)
        return Transition(action, 0.0 if action == TAKE else self.items[state[0]][1])

    def heuristic(self, state: KnapsackState) -> float:
        i, weight, _ = state
        rest = self.items[i:]
        remaining = sum(v for _, v in rest)
        room = self.capacity - weight
        packable = 0.0
        for w, v in sorted(rest, key=lambda it: it[1] / it[0] if it[0] else float("inf"), reverse=True):
            if room <= 0:
                break
            if w <= room:
                packable += v
                room -= w
            else:
                packable += v * room / w
                room = 0
        return max(0.0, remaining - packable)

    def best_value(self) -> float:
        """Exhaustive optimum (2^n packings); for checking small instances."""
        best = 0.0
        for choice in itertools.product((0, 1), repeat=len(self.items)):
            weight = sum(w for (w, _), c in zip(self.items, choice) if c)
            if weight <= self.capacity:
                best = max(best, sum(v for (_, v), c in zip(self.items, choice) if c))
        return best

    def __repr__(self) -> str:
        return f"KnapsackProblem({len(self.items)} items, capacity={self.capacity:g})"
