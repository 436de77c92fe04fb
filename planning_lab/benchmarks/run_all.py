# planning_lab/benchmarks/run_all.py
from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..algorithms.registry import create_algorithm
from ..core.config import AlgorithmConfig
from ..core.logger import configure_logging, get_logger
from ..core.metrics import SearchResult, measure
from ..core.open_closed import OpenClosedProblem
from ..problems.grid import make_grid_problem
from ..problems.romania import romania_problem

logger = get_logger(__name__)

# Algorithms run by default, in order. Tunables come from PLANNING_LAB_* environment variables.
DEFAULT_ALGORITHMS = [
    "bfs", "ucs", "dfs", "ids", "greedy", "astar", "wastar", "ida-star", "rbfs",
    "branch-and-bound", "broadening", "hill-climbing", "simulated-annealing",
]

# Run as graph searches (closed set): on cyclic maps the tree versions revisit
# states exponentially often or do not terminate at all
GRAPH_SEARCH = {"bfs", "ucs", "dfs", "broadening"}

# Per-problem defaults when the environment does not set them: depth-first bounded
# searches over cyclic maps need a finite bound to terminate
PROBLEM_DEFAULTS = {
    "grid": {"max_bound": 16.0},
    "romania": {"max_bound": 600.0, "depth_step": 25},
}

PROBLEMS = {
    "grid": make_grid_problem,
    "romania": romania_problem,
}


# ---- Helpers ----------------------------------------------------------------
def _fmt_time(x):
    try:
        return f"{float(x):.4f}"
    except (TypeError, ValueError):
        return "n/a"


def run(problem_name: str, names: Sequence[str], config: AlgorithmConfig) -> List[SearchResult]:
    rows = []
    for name in names:
        problem = PROBLEMS[problem_name]()
        if name in GRAPH_SEARCH:
            problem = OpenClosedProblem(problem)
        algorithm = create_algorithm(name, config)
        print(f"→ Running {name} ...")
        r = measure(getattr(algorithm, "name", name), algorithm, problem)
        print(
            f"  {r.algo}: "
            f"{'OK' if r.success else 'FAIL'} "
            f"cost={r.cost} "
            f"expanded={r.nodes_expanded}, "
            f"time={_fmt_time(r.time_s)}s"
        )
        rows.append(r)
    return rows


def write_results(rows: Sequence[SearchResult], out_path: Path, problem_name: str) -> Dict[str, Any]:
    out = {"problem": problem_name, "results": [r.as_row() for r in rows], "ts": time.time()}
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(out, indent=2))
    logger.info("wrote %s", out_path)
    return out


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run the search algorithms on a sample problem and record the results.")
    p.add_argument("--problem", choices=sorted(PROBLEMS), default="grid")
    p.add_argument("--algorithms", nargs="+", default=DEFAULT_ALGORITHMS, metavar="NAME",
                   help="registry names (default: %(default)s)")
    p.add_argument("--out", type=Path, default=Path(__file__).with_name("results.json"))
    p.add_argument("--log-level", default="INFO")
    p.add_argument("--log-file", type=Path, default=None)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    config = AlgorithmConfig.from_env()
    defaults = PROBLEM_DEFAULTS[args.problem]
    if config.max_bound == float("inf"):
        config = config.with_(max_bound=defaults["max_bound"])
    config = config.with_(depth_step=defaults.get("depth_step", config.depth_step))
    if config.seed is None:
        config = config.with_(seed=0)

    rows = run(args.problem, args.algorithms, config)
    write_results(rows, args.out, args.problem)
    failed = [r.algo for r in rows if r.error]
    if failed:
        logger.warning("errors in: %s", ", ".join(failed))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
