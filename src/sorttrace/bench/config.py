"""
Experiment configuration for benchmark sweeps.

A sweep is described by a YAML file:

    experiment_name: quick_sweep
    output_dir: experiments/runs
    seed: 12345
    repeats: 5
    warmup: true
    disable_gc: true
    timeout_seconds: 2.0
    validate: true                 # optional, default false
    sizes: [10, 25, 50, 100]
    datasets:
      - {dist: random, params: {range: [1, 1000]}}
      - {dist: reversed}
      - {name: tiny_range, dist: random, params: {range: [0, 9]}}   # name defaults to dist
    algorithms:                    # or the string "all"
      - {name: quick}
      - {name: tim, config: {run_size: 16}}

`load_config` validates it and returns a `BenchConfig`; anything malformed
raises ValueError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from sorttrace.algorithms import ALGORITHM_KEYS, SortFn, get_algorithm
from sorttrace.datasets import SUPPORTED_DISTS

__all__ = ["REQUIRED_KEYS", "AlgoSpec", "BenchConfig", "load_config", "parse_config"]

REQUIRED_KEYS = (
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "datasets",
    "sizes",
    "algorithms",
)


@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: SortFn
    config: Dict[str, Any]


@dataclass(frozen=True)
class BenchConfig:
    experiment_name: str
    output_dir: Path
    seed: int
    repeats: int
    warmup: bool
    disable_gc: bool
    timeout_seconds: float
    datasets: List[Dict[str, Any]]
    sizes: List[int]
    algorithms: List[AlgoSpec]
    validate: bool = False
    raw: Dict[str, Any] = field(default_factory=dict)


def load_config(path: Path) -> BenchConfig:
    with Path(path).open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return parse_config(raw)


def parse_config(raw: Any) -> BenchConfig:
    if not isinstance(raw, dict):
        raise ValueError("Experiment config must be a mapping")

    missing = [k for k in REQUIRED_KEYS if k not in raw]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    sizes = list(raw["sizes"] or [])
    if not sizes or not all(isinstance(n, int) and n >= 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")

    repeats = int(raw["repeats"])
    if repeats < 1:
        raise ValueError("Config 'repeats' must be >= 1")

    timeout_seconds = float(raw["timeout_seconds"])
    if timeout_seconds <= 0:
        raise ValueError("Config 'timeout_seconds' must be positive")

    return BenchConfig(
        experiment_name=str(raw["experiment_name"]),
        output_dir=Path(raw["output_dir"]),
        seed=int(raw["seed"]),
        repeats=repeats,
        warmup=bool(raw["warmup"]),
        disable_gc=bool(raw["disable_gc"]),
        timeout_seconds=timeout_seconds,
        datasets=_parse_datasets(raw["datasets"]),
        sizes=sizes,
        algorithms=_resolve_algorithms(raw["algorithms"]),
        validate=bool(raw.get("validate", False)),
        raw=raw,
    )


def _parse_datasets(entries: Any) -> List[Dict[str, Any]]:
    if not isinstance(entries, list) or not entries:
        raise ValueError("Config 'datasets' must be a non-empty list of dataset specs")
    out = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("dist") not in SUPPORTED_DISTS:
            raise ValueError(
                f"Invalid dataset spec {entry!r}. Supported dists: {sorted(SUPPORTED_DISTS)}"
            )
        name = str(entry.get("name", entry["dist"]))
        if name in seen:
            raise ValueError(f"Duplicate dataset name in config: {name} (set 'name' to tell them apart)")
        seen.add(name)
        out.append({"name": name, "dist": entry["dist"], "params": dict(entry.get("params") or {})})
    return out


def _resolve_algorithms(entries: Any) -> List[AlgoSpec]:
    if entries == "all":
        entries = [{"name": k} for k in ALGORITHM_KEYS]
    if not isinstance(entries, list) or not entries:
        raise ValueError("Config 'algorithms' must be a non-empty list or \"all\"")

    specs: List[AlgoSpec] = []
    seen = set()
    for entry in entries:
        name = entry.get("name", None) if isinstance(entry, dict) else None
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=name, sort_fn=get_algorithm(name), config=config))
    return specs
