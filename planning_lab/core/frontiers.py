# planning_lab/core/frontiers.py
# Open-set traversals: resumable iterators over options, parameterized by selection/insertion order.
from __future__ import annotations
import heapq
from collections import deque
from operator import itemgetter
from typing import Callable, List, Optional, Tuple

from .errors import InvariantError
from .node import Option, OptionList, root_option
from .problem import Problem


class OptionIterator:
    """Template for traversals.

    Subclasses provide the open set via is_empty(), select() and add(cursor).
    next() first expands the option it returned last time (once, on demand)
    and then selects the next one; remove() prunes the last returned option
    so that it is never expanded.
    """
    def __init__(self, problem: Problem):
        self.problem = problem
        self.expanded = 0
        self._last: Optional[Option] = None
        self._has_expanded = False

    # central template methods
    def is_empty(self) -> bool:
        raise NotImplementedError

    def select(self) -> Option:
        raise NotImplementedError

    def add(self, new_options) -> bool:
        """Merge a cursor of new options into the open set; True if that changed anything."""
        raise NotImplementedError

    # iterator protocol
    def __iter__(self):
        return self

    def has_next(self) -> bool:
        if not self.is_empty():
            return True
        if self._last is None:
            return False
        # nothing left, unless expanding the last option produces something
        return self._expand()

    def __next__(self) -> Option:
        if self._last is not None:
            self._expand()
        if self.is_empty():
            raise StopIteration
        self._has_expanded = False
        self._last = self.select()
        return self._last

    def remove(self) -> None:
        if self._last is None:
            raise RuntimeError("no option to remove: next() has not returned one since the last remove()")
        self._last = None

    def _expand(self) -> bool:
        if self._last is None:
            raise RuntimeError("cannot expand without an option returned last")
        if self._has_expanded:
            return False
        children = self.expand(self._last)
        self._has_expanded = True
        self.expanded += 1
        return self.add(children)

    def expand(self, option: Option):
        """Cursor of successors for option; overridden by traversals that filter children."""
        return option.expand(self.problem)


class _CursorQueue(OptionIterator):
    """Open set kept as a sequence of successor cursors."""
    def __init__(self, problem: Problem, root: Optional[Option] = None):
        super().__init__(problem)
        if root is None:
            root = root_option(problem)
        self._cursors = deque([OptionList([root])])

    def is_empty(self) -> bool:
        while self._cursors and not self._cursors[0].has_next():
            self._cursors.popleft()
        return not self._cursors

    def select(self) -> Option:
        return next(self._cursors[0])


class FIFOQueue(_CursorQueue):
    """Breadth-first order: new successors are queued behind everything known."""
    def add(self, new_options) -> bool:
        self._cursors.append(new_options)
        return new_options.has_next()


class LIFOStack(_CursorQueue):
    """Depth-first order: new successors are explored before their older siblings."""
    def add(self, new_options) -> bool:
        self._cursors.appendleft(new_options)
        return new_options.has_next()


class SortedMerge(OptionIterator):
    """Best-first order: open list sorted by an evaluation function f(option).

    New options are evaluated once, sorted (stable) and merged into the open
    list; on ties the options already in the list come first.
    """
    def __init__(self, problem: Problem, evaluation: Callable[[Option], float], root: Optional[Option] = None):
        super().__init__(problem)
        self.evaluation = evaluation
        if root is None:
            root = root_option(problem)
        self._nodes: List[Tuple[float, Option]] = [(float(evaluation(root)), root)]
        self._head = 0

    def is_empty(self) -> bool:
        return self._head >= len(self._nodes)

    def select(self) -> Option:
        _, option = self._nodes[self._head]
        self._head += 1
        return option

    def add(self, new_options) -> bool:
        fresh = [(float(self.evaluation(o)), o) for o in new_options]
        if not fresh:
            return False
        fresh.sort(key=itemgetter(0))
        merged = list(heapq.merge(self._nodes[self._head:], fresh, key=itemgetter(0)))
        for (a, _), (b, _) in zip(merged, merged[1:]):
            if a > b:
                raise InvariantError(f"open list out of order: f={a} before f={b}")
        self._nodes = merged
        self._head = 0
        return True

    def __len__(self) -> int:
        return len(self._nodes) - self._head
