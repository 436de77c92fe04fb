# planning_lab/algorithms/parallel_bnb.py
# Branch-and-Bound with the branches of each option explored by a bounded pool of worker threads.
from __future__ import annotations
import math
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .branch_and_bound import BranchAndBound
from ..core.errors import UnsupportedOperationError
from ..core.logger import get_logger
from ..core.node import Option, root_option
from ..core.problem import Problem
from ..core.search import Heuristic

logger = get_logger(__name__)


class ParallelBranchAndBound(BranchAndBound):
    """
    Same pruning and bound tightening as BranchAndBound, but at every branch
    point all children except the last are handed to the thread pool while
    the current worker carries on with the last child.

    The best solution is a single cell shared by all workers. A candidate is
    compared against it once without the lock and once more under the lock;
    a stale read can only let a useless candidate reach the lock, since the
    cell only ever improves. The bound is read without the lock as well.
    """
    name = "ParallelBranchAndBound"

    def __init__(self, heuristic: Optional[Heuristic] = None, max_bound: float = math.inf,
                 max_workers: Optional[int] = None):
        super().__init__(heuristic, max_bound, continued_when_found=True)
        self.max_workers = max_workers
        self._lock = threading.Lock()
        self._done = threading.Condition()
        self._best: Optional[Option] = None
        self._pending = 0
        self._error: Optional[BaseException] = None
        self._pool: Optional[ThreadPoolExecutor] = None

    def create_traversal(self, problem: Problem):
        raise UnsupportedOperationError("parallel branch-and-bound has no single traversal")

    def _solve(self, problem: Problem) -> Optional[Option]:
        self.bound = self.max_bound
        self._best = None
        self._pending = 0
        self._error = None
        root = root_option(problem)
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="bnb") as pool:
            self._pool = pool
            self._spawn(root)
            with self._done:
                while self._pending > 0:
                    self._done.wait()
        self._pool = None
        if self._error is not None:
            raise self._error
        return self._best

    def _spawn(self, node: Option) -> None:
        with self._done:
            self._pending += 1
        logger.debug("%s: spawning worker for %r", self.name, node)
        self._pool.submit(self._run, node)

    def _run(self, node: Option) -> None:
        try:
            if self._error is None:
                self._explore(node)
        except Exception as e:
            with self._lock:
                if self._error is None:
                    self._error = e
        finally:
            with self._done:
                self._pending -= 1
                self._done.notify_all()

    def _explore(self, node: Optional[Option]) -> None:
        while node is not None and self._error is None:
            if self.is_out_of_bounds(node):
                return
            if self.problem.is_solution(node.state):
                self._offer(node)
            with self._lock:
                self.nodes_expanded += 1
            last = None
            for child in node.expand(self.problem):
                if last is not None:
                    self._spawn(last)
                last = child
            # the last child reuses this worker
            node = last

    def _offer(self, node: Option) -> None:
        best = self._best
        if best is not None and node.cost >= best.cost:
            return
        with self._lock:
            if self._best is None or node.cost < self._best.cost:
                self._best = node
                self.process_solution(node)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_bound={self.max_bound:g}, max_workers={self.max_workers})"
