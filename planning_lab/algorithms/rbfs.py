# planning_lab/algorithms/rbfs.py
# Recursive Best-First Search (iterative expansion): best-first order in linear memory.
# Only the current path and the f-values of its siblings are kept; when the best child's f
# exceeds the best alternative elsewhere, the subtree is forgotten and its backed-up f remembered.
from __future__ import annotations
import math
from typing import List, Optional, Tuple

from ..core.errors import UnsupportedOperationError
from ..core.metrics import SearchResult, measure
from ..core.node import Option, root_option
from ..core.problem import Problem
from ..core.search import GeneralSearch, Heuristic, HeuristicAlgorithm
from ..core.utils import exceeds


class IterativeExpansion(HeuristicAlgorithm, GeneralSearch):
    """
    RBFS: Recursive Best-First Search (linear memory).
    Mimics best-first with an f-limit; backs up best-alternative f-values on unwind.
    Dead ends back up +inf, which never fits a limit.
    """
    name = "RBFS"

    def __init__(self, heuristic: Optional[Heuristic] = None):
        GeneralSearch.__init__(self)
        HeuristicAlgorithm.__init__(self, heuristic)

    def create_traversal(self, problem: Problem):
        raise UnsupportedOperationError("recursive best-first search does not run on a traversal")

    def _solve(self, problem: Problem) -> Optional[Option]:
        root = root_option(problem)
        solution, _ = self._rbfs(root, self.evaluation(root), math.inf)
        return solution

    def _rbfs(self, node: Option, f_node: float, f_limit: float) -> Tuple[Optional[Option], float]:
        if self.problem.is_solution(node.state):
            return node, f_node

        children: List[Option] = list(node.expand(self.problem))
        self.nodes_expanded += 1
        if not children:
            return None, math.inf

        f = self.evaluation
        # a child is never better than what its parent already backed up
        fs = [max(f(c), f_node) for c in children]

        while True:
            best = min(range(len(fs)), key=fs.__getitem__)
            if exceeds(fs[best], f_limit):
                return None, fs[best]
            alternative = min((v for i, v in enumerate(fs) if i != best), default=math.inf)
            result, fs[best] = self._rbfs(children[best], fs[best], min(f_limit, alternative))
            if result is not None:
                return result, fs[best]

    def is_optimal(self) -> bool:
        return True

    def complexity(self) -> str:
        return "O(b^d)"

    def space_complexity(self) -> str:
        raise UnsupportedOperationError("no space complexity estimate for recursive best-first search")


def recursive_best_first_search(problem: Problem, h: Optional[Heuristic] = None) -> SearchResult:
    return measure("RBFS", IterativeExpansion(h), problem)
