"""Tests for the local optimizers and their acceptance rules."""

from __future__ import annotations

import math

import numpy as np
import pytest

from planning_lab.algorithms.annealing import AnnealingAcceptance, SimulatedAnnealing
from planning_lab.algorithms.hill_climbing import HillClimbing, ImprovingAcceptance
from planning_lab.algorithms.local_search import BestRestriction, LocalSelection, RandomRestriction
from planning_lab.algorithms.threshold import ThresholdAcceptance, ThresholdAccepting
from planning_lab.core.config import linear_schedule
from planning_lab.core.errors import UnsupportedOperationError
from planning_lab.problems.grid import GridProblem


@pytest.fixture
def trap() -> GridProblem:
    # the only way to the goal first moves away from it
    return GridProblem(3, 3, start=(0, 0), goal=(2, 0), walls={(1, 0), (1, 1)})


class TestHillClimbing:
    def test_values_never_increase(self, open_grid):
        climber = HillClimbing(open_grid.heuristic, seed=0)
        climber.problem = open_grid
        values = [open_grid.heuristic(o.state) for o in climber.create_traversal(open_grid)]
        assert values == sorted(values, reverse=True)
        assert values[-1] == 0.0

    def test_solves_open_grid(self, open_grid):
        solution = HillClimbing(seed=1).solve(open_grid)
        assert solution.state == (4, 4)
        assert solution.cost == 8.0

    def test_stops_in_local_optimum(self, trap):
        climber = HillClimbing(seed=0)
        result = climber.solve(trap)
        # returned without complaint although it is not a solution
        assert result.state == (0, 0)
        assert not trap.is_solution(result.state)

    def test_ordered_selection_is_deterministic(self, open_grid):
        paths = [HillClimbing(randomized=False, seed=s).solve(open_grid).path() for s in (1, 2)]
        assert paths[0] == paths[1]
        assert paths[0][:4] == ["Down"] * 4

    def test_remove_is_unsupported(self, open_grid):
        climber = HillClimbing(open_grid.heuristic, seed=0)
        traversal = climber.create_traversal(open_grid)
        next(traversal)
        with pytest.raises(UnsupportedOperationError):
            traversal.remove()

    def test_iteration_cap(self, open_grid):
        climber = HillClimbing(seed=0, max_iterations=3)
        result = climber.solve(open_grid)
        assert climber.last_traversal.iterations == 3
        assert result.depth == 3

    def test_sample_size_restricts_before_selection(self, open_grid):
        climber = HillClimbing(seed=0, sample_size=1)
        climber.solve(open_grid)
        restricted = climber.last_traversal.problem
        assert isinstance(restricted, BestRestriction)
        assert isinstance(restricted.problem, RandomRestriction)
        assert len(restricted.applicable_actions((2, 2))) == 1

    def test_properties(self):
        climber = HillClimbing()
        assert not climber.is_correct()
        assert not climber.is_optimal()
        assert climber.space_complexity() == "O(b)"

    def test_improving_acceptance(self):
        acceptance = ImprovingAcceptance()
        assert acceptance.accept(3.0, 3.0)
        assert acceptance.has_next()
        assert not acceptance.accept(3.0, 4.0)
        assert not acceptance.has_next()


class TestSimulatedAnnealing:
    def test_worse_moves_follow_boltzmann(self):
        acceptance = AnnealingAcceptance(lambda t: 2.0, np.random.default_rng(7))
        n = 20_000
        taken = sum(acceptance.accept(0.0, 1.0) for _ in range(n))
        assert taken / n == pytest.approx(math.exp(-0.5), abs=0.02)

    def test_improvements_always_taken(self):
        acceptance = AnnealingAcceptance(lambda t: 0.0, np.random.default_rng(0))
        assert acceptance.accept(5.0, 4.0)

    def test_frozen_rejects_and_stops(self):
        acceptance = AnnealingAcceptance(lambda t: 0.0, np.random.default_rng(0))
        assert acceptance.has_next()  # not started yet
        assert not acceptance.accept(0.0, 1.0)
        assert not acceptance.has_next()

    def test_schedule_ends_the_run(self, open_grid):
        annealer = SimulatedAnnealing(schedule=linear_schedule(1.0, 5), seed=3)
        annealer.solve(open_grid)
        assert annealer.last_traversal.iterations <= 6

    def test_needs_schedule(self):
        with pytest.raises(TypeError):
            SimulatedAnnealing()

    def test_seeded_runs_repeat(self, open_grid):
        runs = [SimulatedAnnealing(schedule=linear_schedule(1.0, 50), seed=11).solve(open_grid).path()
                for _ in range(2)]
        assert runs[0] == runs[1]


class TestThresholdAccepting:
    def test_acceptance(self):
        acceptance = ThresholdAcceptance(lambda t: 1.0)
        assert acceptance.accept(0.0, 1.0)
        assert not acceptance.accept(0.0, 2.0)
        assert acceptance.has_next()

    def test_zero_threshold_continues_while_accepting(self):
        acceptance = ThresholdAcceptance(lambda t: 0.0)
        assert acceptance.accept(1.0, 0.0)
        assert acceptance.has_next()
        assert not acceptance.accept(0.0, 1.0)
        assert not acceptance.has_next()

    @pytest.mark.parametrize("seed", range(10))
    def test_zero_threshold_climbs_while_a_move_improves(self, seed):
        grid = GridProblem(6, 6, start=(0, 0), goal=(5, 5))
        accepting = ThresholdAccepting(schedule=lambda t: 0.0, seed=seed)
        result = accepting.solve(grid)
        assert result.state == (5, 5)
        assert result.cost == 10.0

    def test_zero_threshold_stops_at_local_optimum(self, trap):
        accepting = ThresholdAccepting(schedule=lambda t: 0.0, seed=0)
        result = accepting.solve(trap)
        assert result.state == (0, 0)
        assert accepting.last_traversal.iterations == 1

    def test_runs_on_grid(self, open_grid):
        accepting = ThresholdAccepting(schedule=linear_schedule(2.0, 20), seed=5)
        result = accepting.solve(open_grid)
        assert result is not None
        assert accepting.last_traversal.iterations <= 10_000

    def test_needs_schedule(self):
        with pytest.raises(TypeError):
            ThresholdAccepting()


class TestRestrictions:
    def test_random_restriction_samples_k(self, grid3):
        restricted = RandomRestriction(grid3, 2, np.random.default_rng(0))
        actions = restricted.applicable_actions((1, 1))
        assert len(actions) == 2 and len(set(actions)) == 2
        full = grid3.applicable_actions((1, 1))
        # sampled actions keep their original order
        assert list(actions) == [a for a in full if a in actions]

    def test_random_restriction_small_sets_pass(self, grid3):
        restricted = RandomRestriction(grid3, 10, np.random.default_rng(0))
        assert list(restricted.applicable_actions((1, 1))) == grid3.applicable_actions((1, 1))

    def test_random_restriction_needs_k(self, grid3):
        with pytest.raises(ValueError):
            RandomRestriction(grid3, 0, np.random.default_rng(0))

    def test_best_restriction_keeps_ties(self, grid3):
        restricted = BestRestriction(grid3, grid3.heuristic)
        assert restricted.applicable_actions((0, 0)) == ("Down", "Right")
        assert restricted.applicable_actions((2, 1)) == ("Right",)

    def test_selection_modes(self, grid3):
        climber = HillClimbing(grid3.heuristic)
        assert LocalSelection.FIRST.create_local_restriction(grid3, climber) is grid3
        assert isinstance(LocalSelection.BEST.create_local_restriction(grid3, climber), BestRestriction)
        assert LocalSelection.BEST.randomized
        assert not LocalSelection.BEST_ORDERED.randomized
