# planning_lab/mdp/rtdp.py
# Real-time dynamic programming: the policy itself backs up the utility of every state it is asked about.
from __future__ import annotations
from typing import Dict, Optional

from .dynamic_programming import ActionValue, DynamicProgramming, GreedyPolicy
from ..core.logger import get_logger
from ..core.problem import Action, MarkovDecisionProblem, State

logger = get_logger(__name__)


class BackupPolicy(GreedyPolicy):
    """Greedy policy that refines U(s) each time it is consulted, so following it trains it.

    Reads and writes the utility table it was created with; a later solve()
    starts a fresh table and leaves this policy's one alone.
    """
    def __init__(self, algorithm: DynamicProgramming, q: ActionValue, utility: Dict[State, float]):
        super().__init__(algorithm, q)
        self.utility = utility

    def __call__(self, state: State) -> Optional[Action]:
        problem = self.problem
        if problem.is_solution(state):
            self.utility[state] = 0.0
            return None
        if not problem.applicable_actions(state):
            return None
        action, value = self.algorithm.maximum_expected_utility(self.q, state, problem)
        logger.debug("RTDP: U(%r) := %g, action %r", state, value, action)
        self.utility[state] = value
        return action


class RealTimeDynamicProgramming(DynamicProgramming):
    name = "RTDP"

    def _solve(self, problem: MarkovDecisionProblem) -> BackupPolicy:
        self.utility = self.create_map()
        return BackupPolicy(self, self.action_value(self.utility), self.utility)

    def complexity(self) -> str:
        return "unbounded"
