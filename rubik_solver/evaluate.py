"""Solver benchmark over scramble depths."""

from __future__ import annotations

import argparse
import csv
import json
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

from .ida_star import DEFAULT_MAX_DEPTH, SolverConfig, ida_star
from .scramble import scramble

matplotlib.use("Agg")


@dataclass
class DepthMetrics:
    scramble_depth: int
    scrambles: int
    solved_count: int
    unsolved_count: int
    success_rate: float
    length_min: float | None
    length_mean: float | None
    length_max: float | None
    nodes_mean: float
    nodes_max: int
    eval_time_sec: float
    solves_per_sec: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "scramble_depth": self.scramble_depth,
            "scrambles": self.scrambles,
            "solved_count": self.solved_count,
            "unsolved_count": self.unsolved_count,
            "success_rate": self.success_rate,
            "length_min": self.length_min,
            "length_mean": self.length_mean,
            "length_max": self.length_max,
            "nodes_mean": self.nodes_mean,
            "nodes_max": self.nodes_max,
            "eval_time_sec": self.eval_time_sec,
            "solves_per_sec": self.solves_per_sec,
        }


def _aggregate_metrics(
    scramble_depth: int,
    solved: np.ndarray,
    lengths: np.ndarray,
    nodes: np.ndarray,
    eval_time_sec: float,
) -> DepthMetrics:
    solved = np.asarray(solved, dtype=bool)
    lengths = np.asarray(lengths, dtype=np.int64)
    nodes = np.asarray(nodes, dtype=np.int64)
    scrambles = int(solved.size)
    solved_count = int(solved.sum())
    success_rate = float(solved_count / scrambles) if scrambles > 0 else 0.0

    if solved_count > 0:
        solved_lengths = lengths[solved]
        length_min = float(np.min(solved_lengths))
        length_mean = float(np.mean(solved_lengths))
        length_max = float(np.max(solved_lengths))
    else:
        length_min = None
        length_mean = None
        length_max = None

    return DepthMetrics(
        scramble_depth=scramble_depth,
        scrambles=scrambles,
        solved_count=solved_count,
        unsolved_count=scrambles - solved_count,
        success_rate=success_rate,
        length_min=length_min,
        length_mean=length_mean,
        length_max=length_max,
        nodes_mean=float(np.mean(nodes)) if scrambles > 0 else 0.0,
        nodes_max=int(np.max(nodes)) if scrambles > 0 else 0,
        eval_time_sec=float(eval_time_sec),
        solves_per_sec=float(scrambles / max(eval_time_sec, 1e-9)),
    )


def _log(message: str, bar: tqdm | None = None) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    text = f"[{ts}] {message}"
    if bar is not None:
        bar.write(text)
    else:
        print(text, flush=True)


def _fmt_opt(v: float | None) -> str:
    return "N/A" if v is None else f"{v:.2f}"


def _print_header() -> None:
    print("scramble | success_rate | solved/total | length(min/mean/max) | nodes(mean/max) | solves/s", flush=True)


def _print_row(m: DepthMetrics) -> None:
    lengths = f"{_fmt_opt(m.length_min)}/{_fmt_opt(m.length_mean)}/{_fmt_opt(m.length_max)}"
    nodes = f"{m.nodes_mean:.1f}/{m.nodes_max}"
    print(
        f"{m.scramble_depth:8d} | "
        f"{m.success_rate:12.4f} | "
        f"{m.solved_count:6d}/{m.scrambles:<5d} | "
        f"{lengths:20s} | "
        f"{nodes:15s} | "
        f"{m.solves_per_sec:8.2f}",
        flush=True,
    )


def _plot_metrics(metrics: list[DepthMetrics], output_dir: Path, prefix: str) -> tuple[Path, Path]:
    depths = np.array([m.scramble_depth for m in metrics], dtype=np.int64)
    length_mean = np.array([np.nan if m.length_mean is None else m.length_mean for m in metrics], dtype=np.float64)
    length_max = np.array([np.nan if m.length_max is None else m.length_max for m in metrics], dtype=np.float64)
    nodes_mean = np.array([m.nodes_mean for m in metrics], dtype=np.float64)

    fig1 = plt.figure(figsize=(10, 5))
    ax1 = fig1.add_subplot(111)
    ax1.plot(depths, depths, linestyle="--", alpha=0.6, linewidth=1.5, label="Scramble depth")
    ax1.plot(depths, length_mean, marker="o", linewidth=2.0, label="Solution mean")
    ax1.plot(depths, length_max, marker="o", linewidth=1.8, label="Solution max")
    ax1.set_title("IDA* Benchmark: Solution Length vs Scramble Depth")
    ax1.set_xlabel("Scramble depth")
    ax1.set_ylabel("Moves")
    ax1.grid(True, alpha=0.3)
    ax1.legend(loc="best")
    length_path = output_dir / f"{prefix}_solution_length.png"
    fig1.tight_layout()
    fig1.savefig(length_path, dpi=160)
    plt.close(fig1)

    fig2 = plt.figure(figsize=(10, 5))
    ax2 = fig2.add_subplot(111)
    ax2.plot(depths, np.maximum(nodes_mean, 1.0), marker="o", linewidth=2.0)
    ax2.set_yscale("log")
    ax2.set_title("IDA* Benchmark: Expanded Nodes vs Scramble Depth")
    ax2.set_xlabel("Scramble depth")
    ax2.set_ylabel("Nodes (mean, log scale)")
    ax2.grid(True, alpha=0.3)
    nodes_path = output_dir / f"{prefix}_nodes.png"
    fig2.tight_layout()
    fig2.savefig(nodes_path, dpi=160)
    plt.close(fig2)

    return length_path, nodes_path


def _save_reports(
    metrics: list[DepthMetrics],
    output_dir: Path,
    prefix: str,
    args: argparse.Namespace,
) -> tuple[Path, Path]:
    csv_path = output_dir / f"{prefix}_metrics.csv"
    json_path = output_dir / f"{prefix}_metrics.json"

    fieldnames = list(DepthMetrics.__dataclass_fields__)
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for m in metrics:
            writer.writerow(m.to_dict())

    payload = {
        "config": {
            "scrambles_per_depth": int(args.scrambles_per_depth),
            "scramble_min": int(args.scramble_min),
            "scramble_max": int(args.scramble_max),
            "max_depth": int(args.max_depth),
            "seed": args.seed,
            "progress": args.progress,
        },
        "metrics": [m.to_dict() for m in metrics],
    }
    with json_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)

    return csv_path, json_path


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Benchmark the IDA* solver over scramble depths")
    p.add_argument("--scrambles-per-depth", type=int, default=20)
    p.add_argument("--scramble-min", type=int, default=1)
    p.add_argument("--scramble-max", type=int, default=5)
    p.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--output-dir", default="bench_reports")
    p.add_argument("--output-prefix", default="ida_benchmark")
    p.add_argument("--progress", default="on", choices=["on", "off"])
    return p


def run_benchmark(args: argparse.Namespace) -> dict[str, Any]:
    if args.scramble_min < 0 or args.scramble_max < args.scramble_min:
        raise ValueError("Require 0 <= scramble_min <= scramble_max")
    if args.scrambles_per_depth < 1:
        raise ValueError("--scrambles-per-depth must be >= 1")
    if args.max_depth < 0:
        raise ValueError("--max-depth must be >= 0")

    config = SolverConfig(max_depth=int(args.max_depth))
    rng = np.random.default_rng(args.seed)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    _log(
        "benchmark_init "
        f"scrambles_per_depth={args.scrambles_per_depth} "
        f"scramble_range={args.scramble_min}..{args.scramble_max} max_depth={args.max_depth} seed={args.seed}",
    )
    _print_header()

    metrics: list[DepthMetrics] = []
    for scramble_depth in range(int(args.scramble_min), int(args.scramble_max) + 1):
        n = int(args.scrambles_per_depth)
        solved_out = np.zeros((n,), dtype=bool)
        lengths_out = np.zeros((n,), dtype=np.int64)
        nodes_out = np.zeros((n,), dtype=np.int64)

        bar = None
        case_iter = range(n)
        if args.progress == "on":
            bar = tqdm(case_iter, desc=f"scramble={scramble_depth}", unit="cube", mininterval=1.0, leave=False)
            case_iter = bar

        t0 = time.perf_counter()
        for i in case_iter:
            state, _ = scramble(scramble_depth, rng=rng)
            result = ida_star(state, config)
            solved_out[i] = result.solved
            lengths_out[i] = len(result.moves)
            nodes_out[i] = result.nodes
            if not result.solved:
                _log(
                    f"unsolved scramble={scramble_depth} case={i} status={result.status.value} "
                    f"final_bound={result.final_bound} nodes={result.nodes}",
                    bar,
                )
        elapsed = time.perf_counter() - t0

        m = _aggregate_metrics(scramble_depth, solved_out, lengths_out, nodes_out, elapsed)
        metrics.append(m)
        _print_row(m)

    length_plot, nodes_plot = _plot_metrics(metrics, output_dir, args.output_prefix)
    csv_path, json_path = _save_reports(metrics, output_dir, args.output_prefix, args)

    avg_sr = float(np.mean([m.success_rate for m in metrics]))
    _log(
        "benchmark_summary "
        f"avg_success_rate={avg_sr:.4f} length_plot={length_plot} nodes_plot={nodes_plot} "
        f"csv={csv_path} json={json_path}",
    )

    return {
        "metrics": metrics,
        "length_plot": length_plot,
        "nodes_plot": nodes_plot,
        "csv": csv_path,
        "json": json_path,
    }


def main() -> None:
    args = build_parser().parse_args()
    run_benchmark(args)


if __name__ == "__main__":
    main()
