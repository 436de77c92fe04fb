# planning_lab/mdp/simulate.py
# Sampling runs through a stochastic problem: fixed action sequences and policy rollouts.
from __future__ import annotations
from typing import Callable, Iterable, List, Optional

import numpy as np

from ..core.errors import InapplicableActionError, InvariantError
from ..core.logger import get_logger
from ..core.problem import Action, MarkovDecisionProblem, State

logger = get_logger(__name__)


def sample_successor(model: MarkovDecisionProblem, action: Action, state: State,
                     random: np.random.Generator) -> State:
    """Draw s' ~ P(.|s, a)."""
    outcomes = list(model.resulting_states(action, state))
    if not outcomes:
        raise InvariantError(f"{action!r} in {state!r} has no resulting states")
    r = random.random()
    cumulative = 0.0
    for s2 in outcomes:
        cumulative += model.transition(action, state, s2).probability
        if r < cumulative:
            return s2
    # rounding left r just above the total
    return outcomes[-1]


class TransitionPath:
    """Iterates over the states visited when the actions are applied in order from initial."""
    def __init__(self, model: MarkovDecisionProblem, actions: Iterable[Action], initial: State,
                 random: Optional[np.random.Generator] = None):
        self.model = model
        self.actions = list(actions)
        self.initial = initial
        self.random = random if random is not None else np.random.default_rng()

    def __iter__(self):
        state = self.initial
        for action in self.actions:
            if action not in self.model.applicable_actions(state):
                raise InapplicableActionError(action, state)
            state = sample_successor(self.model, action, state, self.random)
            yield state


def follow_policy(problem: MarkovDecisionProblem, policy: Callable[[State], Optional[Action]], start: State,
                  random: Optional[np.random.Generator] = None, max_steps: int = 1_000) -> List[State]:
    """One trial: apply policy(s) and sample s' until a solution, a None action, or max_steps."""
    rng = random if random is not None else np.random.default_rng()
    trajectory = [start]
    state = start
    for _ in range(max_steps):
        if problem.is_solution(state):
            break
        action = policy(state)
        if action is None:
            break
        state = sample_successor(problem, action, state, rng)
        trajectory.append(state)
    logger.debug("trial from %r: %d steps, ended in %r", start, len(trajectory) - 1, state)
    return trajectory
