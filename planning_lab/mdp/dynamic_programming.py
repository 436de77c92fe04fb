# planning_lab/mdp/dynamic_programming.py
# Dynamic programming over Markov decision problems: utility tables, Bellman backups and greedy policies.
# Costs are minimized: Q(s,a) = c(s,a) + gamma * sum_s' P(s'|s,a) * U(s').
from __future__ import annotations
import math
from typing import Callable, Dict, Optional, Tuple

from ..core.errors import InvariantError
from ..core.logger import get_logger
from ..core.problem import Action, MarkovDecisionProblem, State
from ..core.search import Heuristic, HeuristicAlgorithm

logger = get_logger(__name__)

ActionValue = Callable[[State, Action], float]


class UtilityTable(dict):
    """U: State -> float, filled from the heuristic on first lookup and refined by backups."""
    def __init__(self, heuristic: Heuristic, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.heuristic = heuristic

    def __missing__(self, state: State) -> float:
        value = float(self.heuristic(state))
        self[state] = value
        return value


class MarkovDecisionProcess:
    """Solvers whose answer is a policy (State -> Action) rather than a single path."""
    name = "MDP"

    def __init__(self) -> None:
        self.problem: Optional[MarkovDecisionProblem] = None

    def solve(self, problem: MarkovDecisionProblem) -> Callable[[State], Optional[Action]]:
        self.problem = problem
        if isinstance(self, HeuristicAlgorithm):
            self.bind_heuristic(problem)
        logger.debug("%s: solving %r", self.name, problem)
        return self._solve(problem)

    def _solve(self, problem: MarkovDecisionProblem):
        raise NotImplementedError

    def is_optimal(self) -> bool:
        raise NotImplementedError


class GreedyPolicy:
    """pi(s) = argmin_a Q(s, a); None for solution states and dead ends."""
    def __init__(self, algorithm: "DynamicProgramming", q: ActionValue):
        self.algorithm = algorithm
        self.problem = algorithm.problem
        self.q = q

    def __call__(self, state: State) -> Optional[Action]:
        problem = self.problem
        if problem.is_solution(state) or not problem.applicable_actions(state):
            return None
        action, _ = self.algorithm.maximum_expected_utility(self.q, state, problem)
        return action


class DynamicProgramming(HeuristicAlgorithm, MarkovDecisionProcess):
    """
    Shared machinery of the DP solvers.
    - discount must lie in [0, 1]
    - the heuristic initializes the utility of states not seen yet
    """
    name = "DynamicProgramming"

    def __init__(self, heuristic: Optional[Heuristic] = None, discount: float = 1.0):
        MarkovDecisionProcess.__init__(self)
        HeuristicAlgorithm.__init__(self, heuristic)
        self.discount = discount
        self.utility: Dict[State, float] = {}

    @property
    def discount(self) -> float:
        return self._discount

    @discount.setter
    def discount(self, value: float) -> None:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"discount must be in [0, 1], got {value}")
        self._discount = float(value)

    def create_map(self) -> UtilityTable:
        return UtilityTable(self.heuristic)

    def action_value(self, utility: Dict[State, float]) -> ActionValue:
        """Q(s, a) for the current utility table (read at call time, so later backups are seen)."""
        problem = self.problem
        gamma = self.discount

        def q(state: State, action: Action) -> float:
            cost = None
            total_p = 0.0
            expected = 0.0
            for s2 in problem.resulting_states(action, state):
                t = problem.transition(action, state, s2)
                if cost is None:
                    cost = float(t.cost)
                elif not math.isclose(cost, t.cost, rel_tol=1e-9, abs_tol=1e-12):
                    raise InvariantError(
                        f"cost of {action!r} in {state!r} depends on the outcome: {cost} vs {t.cost} for {s2!r}"
                    )
                total_p += t.probability
                if t.probability:
                    expected += t.probability * utility[s2]
            if not math.isclose(total_p, 1.0, rel_tol=0.0, abs_tol=1e-9):
                raise InvariantError(f"probabilities of {action!r} in {state!r} sum to {total_p}, not 1")
            return cost + gamma * expected
        return q

    def maximum_expected_utility(self, q: ActionValue, state: State,
                                 problem: Optional[MarkovDecisionProblem] = None) -> Tuple[Action, float]:
        """(argmin_a Q(s, a), min_a Q(s, a)); ties go to the first action in order."""
        if problem is None:
            problem = self.problem
        best, best_value = None, math.inf
        found = False
        for a in problem.applicable_actions(state):
            value = q(state, a)
            if not found or value < best_value:
                best, best_value, found = a, value, True
        if not found:
            raise ValueError(f"no applicable actions in {state!r}")
        return best, best_value

    def greedy_policy(self, q: ActionValue) -> GreedyPolicy:
        return GreedyPolicy(self, q)

    def backup(self, utility: Dict[State, float], q: ActionValue, state: State) -> float:
        """U(s) := min_a Q(s, a); solution states are worth 0, dead ends keep their value."""
        if self.problem.is_solution(state):
            utility[state] = 0.0
        elif self.problem.applicable_actions(state):
            _, utility[state] = self.maximum_expected_utility(q, state)
        return utility[state]

    def is_optimal(self) -> bool:
        return True
