"""Shared problems and fixtures for the planning_lab tests."""

from __future__ import annotations

import itertools
import logging
from collections import Counter
from typing import List, Optional, Sequence, Tuple

import pytest

from planning_lab.core.logger import LOGGER_NAME
from planning_lab.core.problem import Problem, Transition
from planning_lab.problems.grid import GridProblem
from planning_lab.problems.gridworld import SlipperyGrid
from planning_lab.problems.knapsack import KnapsackProblem
from planning_lab.problems.romania import RomaniaProblem


class TreeProblem(Problem):
    """Uniform tree: states are tuples of child indices, unit step costs, no heuristic."""

    def __init__(self, branching: int, depth: int, goal: Optional[Tuple[int, ...]] = None) -> None:
        self.branching = branching
        self.depth = depth
        self.goal = goal
        self.expansions: Counter = Counter()

    def initial_state(self) -> Tuple[int, ...]:
        return ()

    def is_solution(self, state) -> bool:
        return state == self.goal

    def applicable_actions(self, state) -> List[int]:
        self.expansions[state] += 1
        if len(state) >= self.depth:
            return []
        return list(range(self.branching))

    def resulting_states(self, action, state) -> Sequence:
        return [state + (action,)]

    def transition(self, action, state, next_state) -> Transition:
        return Transition(action, 1.0)


class CycleProblem(Problem):
    """0 -> 1 -> 2 -> 0 with no solution; counts how often each state is asked for its actions."""

    def __init__(self) -> None:
        self.calls: Counter = Counter()

    def initial_state(self) -> int:
        return 0

    def is_solution(self, state) -> bool:
        return False

    def applicable_actions(self, state) -> List[str]:
        self.calls[state] += 1
        return ["next"]

    def resulting_states(self, action, state) -> Sequence[int]:
        return [(state + 1) % 3]

    def transition(self, action, state, next_state) -> Transition:
        return Transition(action, 1.0)


def all_states_of(tree: TreeProblem) -> List[Tuple[int, ...]]:
    states = []
    for d in range(tree.depth + 1):
        states.extend(itertools.product(range(tree.branching), repeat=d))
    return states


@pytest.fixture
def grid3() -> GridProblem:
    """Open 3x3 grid, corner to corner: optimal cost 4."""
    return GridProblem(rows=3, cols=3, start=(0, 0), goal=(2, 2))


@pytest.fixture
def open_grid() -> GridProblem:
    return GridProblem(rows=5, cols=5, start=(0, 0), goal=(4, 4))


@pytest.fixture
def romania() -> RomaniaProblem:
    return RomaniaProblem("Arad", "Bucharest")


@pytest.fixture
def knapsack() -> KnapsackProblem:
    # best packing: items 0 and 1, value 7 of 18
    return KnapsackProblem([(2, 3), (3, 4), (4, 5), (5, 6)], capacity=5)


@pytest.fixture
def knapsack10() -> KnapsackProblem:
    items = [(12, 4), (2, 2), (1, 1), (4, 10), (1, 2), (3, 7), (6, 6), (5, 8), (7, 3), (2, 5)]
    return KnapsackProblem(items, capacity=15)


@pytest.fixture
def tree() -> TreeProblem:
    return TreeProblem(branching=2, depth=2, goal=(1, 1))


@pytest.fixture
def cycle() -> CycleProblem:
    return CycleProblem()


@pytest.fixture
def deterministic_world() -> SlipperyGrid:
    return SlipperyGrid(rows=3, cols=3, goal=(2, 2), slip=0.0)


@pytest.fixture
def slippery_corridor() -> SlipperyGrid:
    # expected cost from (0, c) is 2 * (3 - c)
    return SlipperyGrid(rows=1, cols=4, goal=(0, 3), slip=0.5)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers added by configure_logging so later tests do not write to a closed capture stream."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if getattr(h, "_planning_lab", False)]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
