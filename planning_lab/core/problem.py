# Defines the standard interface for any search or planning problem (states, actions, transitions, costs).
# planning_lab/core/problem.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable, MutableMapping, Protocol, Sequence

from .errors import InapplicableActionError

Action = Hashable
State = Hashable


@dataclass(frozen=True)
class Transition:
    """Result of applying an action: its cost and, for stochastic problems, its probability."""
    action: Action
    cost: float
    probability: float = 1.0


class Problem(Protocol):
    """Canonical state-space search problem (deterministic or stochastic transitions).

    - ACTIONS(s): applicable_actions(s)
    - RESULTS(a, s): resulting_states(a, s), exactly one state for deterministic problems
    - c(s, a, s'): transition(a, s, s').cost
    - g: accumulated_cost_function(), written only by the traversal engine;
      structural implementations without it get a table kept on the instance
    """
    def initial_state(self) -> State: ...
    def is_solution(self, state: State) -> bool: ...
    def applicable_actions(self, state: State) -> Sequence[Action]: ...
    def resulting_states(self, action: Action, state: State) -> Sequence[State]: ...
    def transition(self, action: Action, state: State, next_state: State) -> Transition: ...

    def accumulated_cost_function(self) -> MutableMapping[State, float]:
        return self.__dict__.setdefault("_accumulated_cost", {})

    def require_applicable(self, action: Action, state: State) -> None:
        if action not in self.applicable_actions(state):
            raise InapplicableActionError(action, state)


def accumulated_costs(problem) -> MutableMapping[State, float]:
    """g table of any problem. Duck-typed problems without accumulated_cost_function() get one kept on the instance."""
    g = getattr(problem, "accumulated_cost_function", None)
    if g is not None:
        return g()
    return vars(problem).setdefault("_accumulated_cost", {})


class MarkovDecisionProblem(Protocol):
    """Stochastic planning problem: transitions carry probabilities that sum to 1 per (s, a)."""
    def is_solution(self, state: State) -> bool: ...
    def applicable_actions(self, state: State) -> Sequence[Action]: ...
    def resulting_states(self, action: Action, state: State) -> Sequence[State]: ...
    def transition(self, action: Action, state: State, next_state: State) -> Transition: ...

    def require_applicable(self, action: Action, state: State) -> None:
        if action not in self.applicable_actions(state):
            raise InapplicableActionError(action, state)


class DelegateProblem(Problem):
    """Forwards the whole problem contract to a wrapped problem.

    Decorators override only the operations they change.
    """
    def __init__(self, problem: Problem):
        self.problem = problem

    def initial_state(self) -> State:
        return self.problem.initial_state()

    def is_solution(self, state: State) -> bool:
        return self.problem.is_solution(state)

    def applicable_actions(self, state: State) -> Sequence[Action]:
        return self.problem.applicable_actions(state)

    def resulting_states(self, action: Action, state: State) -> Sequence[State]:
        return self.problem.resulting_states(action, state)

    def transition(self, action: Action, state: State, next_state: State) -> Transition:
        return self.problem.transition(action, state, next_state)

    def accumulated_cost_function(self) -> MutableMapping[State, float]:
        return accumulated_costs(self.problem)

    def __getattr__(self, name):
        # heuristic(), states() and other extras of the wrapped problem
        if name == "problem":
            raise AttributeError(name)
        return getattr(self.problem, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.problem!r})"
