"""Tests for the thread-pool branch-and-bound."""

from __future__ import annotations

import pytest

from conftest import TreeProblem
from planning_lab.algorithms.branch_and_bound import BranchAndBound
from planning_lab.algorithms.parallel_bnb import ParallelBranchAndBound
from planning_lab.core.errors import UnsupportedOperationError


class ExplodingTree(TreeProblem):
    def applicable_actions(self, state):
        if len(state) == 1:
            raise RuntimeError("boom")
        return super().applicable_actions(state)


class TestParallelBranchAndBound:
    @pytest.mark.parametrize("workers", [1, 4])
    def test_matches_sequential(self, knapsack10, workers):
        solution = ParallelBranchAndBound(max_workers=workers).solve(knapsack10)
        expected = BranchAndBound().solve(knapsack10)
        assert solution.cost == expected.cost == knapsack10.total_value - knapsack10.best_value()

    def test_bound_equals_cost(self, knapsack):
        bnb = ParallelBranchAndBound(max_workers=4)
        solution = bnb.solve(knapsack)
        assert solution.cost == 11.0
        assert bnb.bound == solution.cost
        assert bnb.nodes_expanded > 0

    def test_grid(self, grid3):
        assert ParallelBranchAndBound(max_bound=6.0, max_workers=4).solve(grid3).cost == 4.0

    def test_max_bound_below_optimum(self, knapsack):
        assert ParallelBranchAndBound(max_bound=10.0).solve(knapsack) is None

    def test_worker_errors_reach_the_caller(self):
        bnb = ParallelBranchAndBound(lambda s: 0.0, max_workers=2)
        with pytest.raises(RuntimeError, match="boom"):
            bnb.solve(ExplodingTree(2, 3, goal=(1, 1, 1)))

    def test_can_be_reused(self, knapsack):
        bnb = ParallelBranchAndBound(max_workers=2)
        first = bnb.solve(knapsack)
        assert bnb.solve(knapsack).cost == first.cost

    def test_has_no_traversal(self, knapsack):
        with pytest.raises(UnsupportedOperationError):
            ParallelBranchAndBound().create_traversal(knapsack)
