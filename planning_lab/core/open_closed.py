# planning_lab/core/open_closed.py
# Graph-search view of a problem: each state is expanded at most once per traversal.
from __future__ import annotations
from typing import Sequence, Set

from .logger import get_logger
from .problem import Action, DelegateProblem, Problem, State

logger = get_logger(__name__)


class OpenClosedProblem(DelegateProblem):
    """Closed-set decorator.

    applicable_actions(s) closes s and hides the actions leading into states
    that are already closed. A state asked for a second time has no actions.
    Requesting the initial state starts a fresh traversal and forgets the
    closed set.
    """
    def __init__(self, problem: Problem):
        super().__init__(problem)
        self.closed: Set[State] = set()

    def initial_state(self) -> State:
        self.closed.clear()
        return self.problem.initial_state()

    def applicable_actions(self, state: State) -> Sequence[Action]:
        if state in self.closed:
            logger.debug("state %r already closed", state)
            return ()
        self.closed.add(state)
        return tuple(
            a for a in self.problem.applicable_actions(state)
            if not all(s2 in self.closed for s2 in self.problem.resulting_states(a, state))
        )
