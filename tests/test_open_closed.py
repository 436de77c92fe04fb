"""Tests for the closed-set problem view."""

from __future__ import annotations

from itertools import islice

from planning_lab.algorithms.astar import AStar
from planning_lab.algorithms.bfs import BreadthFirstSearch
from planning_lab.algorithms.dfs import DepthFirstSearch
from planning_lab.core.frontiers import LIFOStack
from planning_lab.core.open_closed import OpenClosedProblem


class TestOpenClosedProblem:
    def test_cycle_terminates(self, cycle):
        view = OpenClosedProblem(cycle)
        assert DepthFirstSearch().solve(view) is None
        # every state is asked for its actions exactly once
        assert cycle.calls == {0: 1, 1: 1, 2: 1}

    def test_unwrapped_stack_revisits_the_cycle(self, cycle):
        traversal = LIFOStack(cycle)
        states = [option.state for option in islice(traversal, 30)]
        assert states[:6] == [0, 1, 2, 0, 1, 2]
        assert cycle.calls == {0: 10, 1: 10, 2: 9}

    def test_closed_state_has_no_actions(self, grid3):
        view = OpenClosedProblem(grid3)
        view.initial_state()
        assert set(view.applicable_actions((0, 0))) == {"Down", "Right"}
        assert view.applicable_actions((0, 0)) == ()

    def test_actions_into_closed_states_are_hidden(self, grid3):
        view = OpenClosedProblem(grid3)
        view.initial_state()
        view.applicable_actions((0, 0))
        assert "Up" not in view.applicable_actions((1, 0))

    def test_initial_state_starts_over(self, grid3):
        view = OpenClosedProblem(grid3)
        view.initial_state()
        view.applicable_actions((0, 0))
        view.initial_state()
        assert view.closed == set()
        assert view.applicable_actions((0, 0))

    def test_view_can_be_solved_twice(self, grid3):
        view = OpenClosedProblem(grid3)
        bfs = BreadthFirstSearch()
        assert bfs.solve(view).cost == 4.0
        assert bfs.solve(view).cost == 4.0

    def test_forwards_extras(self, grid3):
        view = OpenClosedProblem(grid3)
        assert view.heuristic((0, 0)) == 4.0
        assert AStar().solve(view).cost == 4.0

    def test_bfs_expands_each_state_once(self, open_grid):
        bfs = BreadthFirstSearch()
        bfs.solve(OpenClosedProblem(open_grid))
        assert bfs.nodes_expanded <= 25
