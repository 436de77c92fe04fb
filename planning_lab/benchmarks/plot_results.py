# planning_lab/benchmarks/plot_results.py
from __future__ import annotations
import argparse
import io
import json
import math
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..core.logger import configure_logging, get_logger

logger = get_logger(__name__)

HERE = Path(__file__).parent

# metric -> (title, y label)
CHARTS = {
    "nodes_expanded": ("Nodes Expanded (lower is better)", "nodes"),
    "time_s": ("Wall Time (lower is better)", "seconds"),
    "cost": ("Path Cost (lower is better)", "cost"),
}


def load_rows(results_json: Path) -> List[dict]:
    if not results_json.exists():
        raise SystemExit(f"Missing {results_json}. Run: python -m planning_lab.benchmarks.run_all")
    data = json.loads(results_json.read_text())
    # Keep only successful runs
    rows = [r for r in data.get("results", []) if r.get("success")]
    if not rows:
        raise SystemExit("No successful rows to plot.")
    return rows


def _sorted(rows, key):
    def key_fn(r):
        v = r.get(key)
        if v is None:
            return math.inf
        return v
    return sorted(rows, key=key_fn)


def _bar(ax, rows, metric, title, ylabel):
    algos = [r["algo"] for r in rows]
    vals = [r.get(metric) for r in rows]
    top = max((v for v in vals if v is not None), default=0) or 1

    x = list(range(len(algos)))
    ax.bar(x, [0 if v is None else v for v in vals])
    ax.set_title(title)
    ax.set_ylabel(ylabel)
    ax.set_xticks(x)
    ax.set_xticklabels(algos, rotation=20, ha="right")

    # value labels on top of bars
    for xi, v in zip(x, vals):
        if v is None:
            label, y = "n/a", 0
        elif isinstance(v, float) and v < 0.01:
            label, y = f"{v:.4f}", v
        elif isinstance(v, float):
            label, y = f"{v:.3f}", v
        else:
            label, y = f"{v}", v
        ax.text(xi, y + 0.01 * top, label, ha="center", va="bottom", fontsize=8)


def format_table(rows: Sequence[dict]) -> str:
    # Markdown table
    lines = [
        "| Algorithm | Cost | Nodes Expanded | Time (s) | Peak KB |",
        "|---|---:|---:|---:|---:|",
    ]

    def fnum(x):
        if isinstance(x, bool):
            return "n/a"
        if isinstance(x, float):
            return f"{x:.6f}"
        if isinstance(x, int):
            return f"{x}"
        return "n/a"

    for r in rows:
        lines.append(
            f"| {r['algo']} | {fnum(r.get('cost'))} | {fnum(r.get('nodes_expanded'))} | "
            f"{fnum(r.get('time_s'))} | {fnum(r.get('peak_kb'))} |"
        )
    return "\n".join(lines)


def fig_to_png_bytes(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=160)
    return buf.getvalue()


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Plot benchmark results as bar charts and a markdown table.")
    p.add_argument("--results", type=Path, default=HERE / "results.json")
    p.add_argument("--out-dir", type=Path, default=HERE)
    args = p.parse_args(argv)
    configure_logging()

    rows = load_rows(args.results)
    args.out_dir.mkdir(parents=True, exist_ok=True)

    md_path = args.out_dir / "results.md"
    md_path.write_text(format_table(rows))
    logger.info("Wrote %s", md_path)

    # one bar chart per metric, sorted for readability
    for metric, (title, ylabel) in CHARTS.items():
        fig, ax = plt.subplots(figsize=(6, 4))
        _bar(ax, _sorted(rows, metric), metric, title, ylabel)
        fig.tight_layout()
        path = args.out_dir / f"{'time' if metric == 'time_s' else metric}.png"
        path.write_bytes(fig_to_png_bytes(fig))
        plt.close(fig)
        logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
