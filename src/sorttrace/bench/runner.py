"""
Experiment runner: a full benchmarking sweep from a YAML config.

Usage (from repo root):
    sorttrace-bench experiments/configs/quick_sweep.yaml
    python -m sorttrace.bench.runner experiments/configs/quick_sweep.yaml --log-level DEBUG

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, pandas, cpu/ram)
    - results.jsonl           # one JSON line per timing sample or failure
    - summary.csv             # median + IQR time and counters per (algo, dataset, n)

Design notes:
- For each (dataset, n) we generate ONE input and give the same input to every
  algorithm.
- On timeout, error or (with `validate: true`) an invalid trace, the algorithm
  is skipped for larger sizes of that dataset.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
import platform
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from sorttrace.bench.config import BenchConfig, load_config
from sorttrace.bench.measure import time_trace_call
from sorttrace.datasets import make_dataset
from sorttrace.logging_config import enable_console_logging
from sorttrace.validate import trace_violations

__all__ = ["run_experiment", "aggregate_summary", "main"]

logger = logging.getLogger(__name__)

_console = Console()

SUMMARY_COLUMNS = [
    "algo", "dataset", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns",
    "comparisons", "swaps", "steps",
]


# ------------------------- helpers: IO & meta ------------------------- #

def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


# ------------------------- aggregation ------------------------- #

def _iqr_ns(times: pd.Series) -> int:
    return int(times.quantile(0.75) - times.quantile(0.25))


def aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    """Collapse timing samples into one row per (algo, dataset, n)."""
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    keys = ["algo", "dataset", "n"]
    out = (
        df.groupby(keys, as_index=False)
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            iqr_ns=("time_ns", _iqr_ns),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
            comparisons=("comparisons", "mean"),
            swaps=("swaps", "mean"),
            steps=("steps", "mean"),
        )
    )
    int_cols = ["median_ns", "iqr_ns", "min_ns", "max_ns", "comparisons", "swaps", "steps"]
    out[int_cols] = out[int_cols].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(keys, ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ms | comparisons | swaps)")
    table.add_column("Algorithm", style="bold")
    table.add_column("Dataset")
    picks: List[int] = []
    if sizes:
        picks = sorted({sizes[0], sizes[len(sizes) // 2], sizes[-1]})
    for npick in picks:
        table.add_column(f"n={npick}", justify="right")

    def _format_cell(row: Optional[pd.Series]) -> str:
        if row is None:
            return "-"
        return f"{row['median_ns'] / 1e6:.2f} | {int(row['comparisons'])} | {int(row['swaps'])}"

    for (algo, dataset), group in summary.groupby(["algo", "dataset"], sort=False):
        cells = [f"[bold]{algo}[/]", str(dataset)]
        for npick in picks:
            s = group[group["n"] == npick]
            cells.append(_format_cell(None if s.empty else s.iloc[0]))
        table.add_row(*cells)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def _run_sweep(cfg: BenchConfig, results_path: Path) -> Tuple[int, int]:
    """Time every (dataset, n, algorithm); return (samples written, failures)."""
    rng = np.random.default_rng(cfg.seed)
    skip = {(d["name"], a.name): False for d in cfg.datasets for a in cfg.algorithms}
    samples = failures = 0

    for dataset_spec in cfg.datasets:
        dist = dataset_spec["name"]
        for n in tqdm(cfg.sizes, desc=dist, unit="n"):
            base_a = make_dataset(int(n), dataset_spec, rng)

            for a_spec in cfg.algorithms:
                if skip[(dist, a_spec.name)]:
                    continue

                res = time_trace_call(
                    algo_name=a_spec.name,
                    algo_fn=a_spec.sort_fn,
                    a=base_a,
                    config=a_spec.config,
                    repeats=cfg.repeats,
                    warmup=cfg.warmup,
                    disable_gc=cfg.disable_gc,
                    timeout_seconds=cfg.timeout_seconds,
                )

                record = {"algo": a_spec.name, "dataset": dist, "n": int(n), "config": a_spec.config}
                for trial_idx, t_ns in enumerate(res["samples_ns"]):
                    _append_jsonl(
                        {
                            **record,
                            "trial": int(trial_idx),
                            "time_ns": int(t_ns),
                            "comparisons": res["comparisons"],
                            "swaps": res["swaps"],
                            "steps": res["steps"],
                        },
                        results_path,
                    )
                    samples += 1

                status = res["status"]
                detail: Dict[str, Any] = {}
                if status == "timeout":
                    detail = {"timed_out_on_repeat": res["timed_out_on_repeat"]}
                elif status == "error":
                    detail = {"error": res["error"]}
                elif cfg.validate and res["trace"] is not None:
                    violations = trace_violations(base_a, res["trace"])
                    if violations:
                        logger.error("%s produced an invalid trace at n=%d: %s", a_spec.name, n, violations)
                        status = "invalid"
                        detail = {"violations": violations}

                if status != "ok":
                    failures += 1
                    skip[(dist, a_spec.name)] = True
                    _append_jsonl({**record, "status": status, **detail}, results_path)

    return samples, failures


def run_experiment(config_path: Path) -> Path:
    cfg = load_config(config_path)

    run_dir = _ensure_run_dir(cfg.output_dir, cfg.experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg.raw, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    logger.info(
        "experiment %s: %d algorithms, %d datasets, sizes %s -> %s",
        cfg.experiment_name, len(cfg.algorithms), len(cfg.datasets), cfg.sizes, run_dir,
    )
    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in cfg.algorithms)}")

    samples, failures = _run_sweep(cfg, results_path)
    logger.info("wrote %d samples, %d failures", samples, failures)

    summary_df = aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _print_rich_summary(summary_df, cfg.sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for path in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {path}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sort-trace benchmark sweep from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("--log-level", default="WARNING", help="sorttrace log level (default WARNING)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    enable_console_logging(level=args.log_level.upper())
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
