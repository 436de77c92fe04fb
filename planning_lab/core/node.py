# planning_lab/core/node.py
# Option: a state reached via an action with its accumulated cost, plus the cursors that generate successors.
from __future__ import annotations
import math
from typing import Iterable, List, Optional, Sequence

from .errors import InvariantError
from .problem import Action, Problem, State, accumulated_costs


class Option:
    """A node of the search: <state, action taken, accumulated cost g>.

    Options are immutable once created; the parent link is kept only so that the
    path to a solution can be read back.
    """
    __slots__ = ("state", "action", "cost", "parent", "depth")

    def __init__(self, state: State, action: Optional[Action] = None, cost: float = 0.0,
                 parent: Optional[Option] = None):
        self.state = state
        self.action = action
        self.cost = float(cost)
        self.parent = parent
        self.depth = 0 if parent is None else parent.depth + 1

    def expand(self, problem: Problem) -> Expansion:
        """Cursor over the children of this option (computed lazily, one per next())."""
        return Expansion(problem, self)

    def path(self) -> List[Action]:
        actions = []
        cur = self
        while cur.parent is not None:
            actions.append(cur.action)
            cur = cur.parent
        actions.reverse()
        return actions

    def states(self) -> List[State]:
        states = []
        cur = self
        while cur is not None:
            states.append(cur.state)
            cur = cur.parent
        states.reverse()
        return states

    def __eq__(self, other) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return (self.state == other.state and self.action == other.action
                and math.isclose(self.cost, other.cost, rel_tol=0.0, abs_tol=1e-9))

    def __hash__(self) -> int:
        return hash((self.state, self.action))

    def __lt__(self, other: Option) -> bool:
        return self.cost < other.cost

    def __repr__(self) -> str:
        return f"Option({self.state!r}, {self.action!r}, cost={self.cost:g})"


class OptionList:
    """Eager cursor over already built options."""
    def __init__(self, options: Iterable[Option]):
        self._options = list(options)
        self._index = 0

    def has_next(self) -> bool:
        return self._index < len(self._options)

    def __iter__(self):
        return self

    def __next__(self) -> Option:
        if not self.has_next():
            raise StopIteration
        option = self._options[self._index]
        self._index += 1
        return option

    def __len__(self) -> int:
        return len(self._options) - self._index


class Expansion:
    """Lazy cursor over the successors of one option.

    The applicable actions are fetched once; each next() applies one action,
    computes its transition cost and records the child's g in the problem's
    accumulated cost function.
    """
    def __init__(self, problem: Problem, parent: Option):
        self.problem = problem
        self.parent = parent
        self.actions: Sequence[Action] = tuple(problem.applicable_actions(parent.state))
        self._index = 0
        self._g = accumulated_costs(problem)

    def has_next(self) -> bool:
        return self._index < len(self.actions)

    def __iter__(self):
        return self

    def __next__(self) -> Option:
        if not self.has_next():
            raise StopIteration
        action = self.actions[self._index]
        self._index += 1
        s = self.parent.state
        states = self.problem.resulting_states(action, s)
        if len(states) != 1:
            raise InvariantError(
                f"deterministic search needs exactly one resulting state for (a={action!r}, s={s!r}), "
                f"got {len(states)}"
            )
        s2 = states[0]
        t = self.problem.transition(action, s, s2)
        if t is None or t.cost is None:
            raise InvariantError(
                f"transition cost is None for (s={s!r}, a={action!r}, s'={s2!r}). "
                "Check your problem's ACTIONS/RESULT/cost mapping."
            )
        child = Option(s2, action, self.parent.cost + float(t.cost), self.parent)
        self._g[s2] = child.cost
        return child

    def __len__(self) -> int:
        return len(self.actions) - self._index


def root_option(problem: Problem) -> Option:
    """Option for the initial state; resets g(initial) = 0."""
    s0 = problem.initial_state()
    accumulated_costs(problem)[s0] = 0.0
    return Option(s0)
