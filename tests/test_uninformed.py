"""Tests for the blind searches: BFS, DFS, UCS, iterative deepening and iterative broadening."""

from __future__ import annotations

import pytest

from conftest import TreeProblem
from planning_lab.algorithms.best_first import UniformCostSearch, uniform_cost_search
from planning_lab.algorithms.bfs import BreadthFirstSearch, breadth_first_search
from planning_lab.algorithms.broadening import IterativeBroadening
from planning_lab.algorithms.dfs import DepthFirstSearch, depth_first_search
from planning_lab.algorithms.ids import IterativeDeepening, iterative_deepening_search
from planning_lab.core.errors import InvariantError, UnsupportedOperationError
from planning_lab.core.open_closed import OpenClosedProblem


class TestBreadthFirst:
    def test_finds_shallowest_solution(self, romania):
        solution = BreadthFirstSearch().solve(romania)
        assert solution.depth == 3
        assert solution.path() == ["Sibiu", "Fagaras", "Bucharest"]
        assert solution.cost == 450.0

    def test_grid(self, grid3):
        solution = BreadthFirstSearch().solve(grid3)
        assert solution.state == (2, 2)
        assert solution.cost == 4.0

    def test_no_solution(self):
        assert BreadthFirstSearch().solve(TreeProblem(2, 3)) is None

    def test_counts_expansions(self, tree):
        bfs = BreadthFirstSearch()
        bfs.solve(tree)
        assert bfs.nodes_expanded == 6  # every option before (1, 1)

    def test_result_wrapper(self, grid3):
        r = breadth_first_search(grid3)
        assert r.success and r.cost == 4.0 and len(r.actions) == 4
        assert r.error is None

    def test_complexity(self):
        assert BreadthFirstSearch().complexity() == "O(b^d)"


class TestDepthFirst:
    def test_tree(self):
        problem = TreeProblem(3, 3, goal=(2, 0, 1))
        solution = DepthFirstSearch().solve(problem)
        assert solution.state == (2, 0, 1)

    def test_graph_search_on_cyclic_grid(self, grid3):
        solution = DepthFirstSearch().solve(OpenClosedProblem(grid3))
        assert solution.state == (2, 2)
        assert grid3.is_solution(solution.state)

    def test_result_wrapper(self, open_grid):
        r = depth_first_search(open_grid)
        assert r.success
        assert r.cost >= 8.0

    def test_not_optimal(self):
        assert DepthFirstSearch().is_optimal() is False


class TestUniformCost:
    def test_romania(self, romania):
        solution = UniformCostSearch().solve(romania)
        assert solution.cost == 418.0
        assert solution.path() == ["Sibiu", "Rimnicu Vilcea", "Pitesti", "Bucharest"]

    def test_result_wrapper(self, romania):
        assert uniform_cost_search(romania).cost == 418.0


class TestIterativeDeepening:
    def test_grid(self, grid3):
        ids = IterativeDeepening()
        solution = ids.solve(grid3)
        assert solution.cost == 4.0
        assert ids.bound == 4

    def test_stops_when_nothing_was_cut_off(self):
        ids = IterativeDeepening()
        assert ids.solve(TreeProblem(2, 2)) is None
        assert ids.bound == 2
        assert not ids.have_pruned

    def test_step(self, grid3):
        ids = IterativeDeepening(step=3)
        solution = ids.solve(grid3)
        # bounds 0, 3, 6: the first solution within 6 need not be the cheapest
        assert solution.cost in (4.0, 6.0)
        assert ids.bound == 6

    def test_max_bound(self, grid3):
        assert IterativeDeepening(max_bound=3).solve(grid3) is None

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            IterativeDeepening(step=0)

    def test_result_wrapper(self, grid3):
        r = iterative_deepening_search(grid3)
        assert r.success and r.cost == 4.0


class TestIterativeBroadening:
    def test_widens_until_solution(self):
        problem = TreeProblem(3, 2, goal=(2, 2))
        broadening = IterativeBroadening()
        solution = broadening.solve(problem)
        assert solution.state == (2, 2)
        assert broadening.bound == 3

    def test_first_breadth_suffices(self):
        problem = TreeProblem(3, 2, goal=(0, 0))
        broadening = IterativeBroadening()
        assert broadening.solve(problem).state == (0, 0)
        assert broadening.bound == 1

    def test_no_solution(self):
        broadening = IterativeBroadening()
        assert broadening.solve(TreeProblem(2, 2)) is None
        assert broadening.bound == 2

    def test_max_breadth(self):
        problem = TreeProblem(3, 2, goal=(2, 2))
        assert IterativeBroadening(max_breadth=2).solve(problem) is None

    def test_has_no_evaluation(self):
        with pytest.raises(UnsupportedOperationError):
            IterativeBroadening().evaluation

    def test_not_optimal(self):
        assert IterativeBroadening().is_optimal() is False


class TestPostcondition:
    def test_wrong_answer_is_reported(self, grid3):
        class Liar(BreadthFirstSearch):
            def _solve(self, problem):
                return super()._solve(problem).parent

        with pytest.raises(InvariantError):
            Liar().solve(grid3)
