# planning_lab/algorithms/dfs.py
# Depth-First Search: a LIFO stack of successor cursors, newest successors explored first.
# Tree search; wrap cyclic problems in OpenClosedProblem or it may not terminate.
from __future__ import annotations
from ..core.frontiers import LIFOStack
from ..core.metrics import SearchResult, measure
from ..core.open_closed import OpenClosedProblem
from ..core.problem import Problem
from ..core.search import GeneralSearch


class DepthFirstSearch(GeneralSearch):
    name = "DFS"

    def create_traversal(self, problem: Problem) -> LIFOStack:
        return LIFOStack(problem)

    def is_optimal(self) -> bool:
        return False

    def complexity(self) -> str:
        return "O(b^m)"

    def space_complexity(self) -> str:
        return "O(b*m)"


def depth_first_search(problem: Problem, graph_search: bool = True) -> SearchResult:
    if graph_search:
        problem = OpenClosedProblem(problem)
    return measure("DFS", DepthFirstSearch(), problem)
