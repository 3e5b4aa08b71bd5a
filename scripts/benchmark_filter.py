#!/usr/bin/env python
"""Local benchmark for the smart filter and similarity grouping."""

from __future__ import annotations

import argparse
import json
import math
from datetime import datetime, timezone
from pathlib import Path
from random import Random
from time import perf_counter
from typing import List

from quicktrace.filtering import apply_smart_filter
from quicktrace.formatting import format_duration
from quicktrace.schemas import FilterConfig, Measurement


def percentile(values: List[float], pct: float) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    if len(ordered) == 1:
        return ordered[0]
    position = pct * (len(ordered) - 1)
    lower = math.floor(position)
    upper = math.ceil(position)
    if lower == upper:
        return ordered[int(position)]
    weight = position - lower
    return ordered[lower] * (1 - weight) + ordered[upper] * weight


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark quicktrace smart filtering locally.")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[100, 1000, 5000],
        help="Session sizes (number of spans) to benchmark.",
    )
    parser.add_argument("--repeat", type=int, default=20, help="Filter passes per session size.")
    parser.add_argument("--slow-only", type=float, default=None, help="Slow-only threshold (ms).")
    parser.add_argument("--hide-ultra-fast", type=float, default=1.0, help="Hide-ultra-fast threshold (ms).")
    parser.add_argument("--group-similar", type=float, default=5.0, help="Grouping threshold (ms).")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("outputs/benchmarks/filter_benchmark.json"),
        help="Path where benchmark metrics JSON will be written.",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for synthetic spans.")
    return parser.parse_args()


def synthetic_session(size: int, rng: Random) -> list[Measurement]:
    """Log-uniform durations between 10μs and 2s, like a mixed request trace."""

    return [
        Measurement(label=f"op {index}", duration_ms=10 ** rng.uniform(-2, 3.3))
        for index in range(size)
    ]


def main() -> None:
    args = parse_args()
    rng = Random(args.seed)
    filters = FilterConfig(
        slow_only_ms=args.slow_only,
        hide_ultra_fast_ms=args.hide_ultra_fast,
        group_similar_ms=args.group_similar,
    )
    output_path = args.output
    output_path.parent.mkdir(parents=True, exist_ok=True)

    results = []
    for size in args.sizes:
        measurements = synthetic_session(size, rng)
        timings: list[float] = []
        entries = 0
        for _ in range(args.repeat):
            start = perf_counter()
            entries = len(apply_smart_filter(measurements, filters))
            timings.append((perf_counter() - start) * 1000)

        avg_ms = sum(timings) / len(timings) if timings else 0.0
        p50 = percentile(timings, 0.5)
        p95 = percentile(timings, 0.95)
        results.append(
            {
                "spans": size,
                "entries": entries,
                "filter_ms": {"avg": avg_ms, "p50": p50, "p95": p95},
            }
        )
        print(
            f"spans={size} entries={entries} avg={format_duration(avg_ms)} "
            f"p50={format_duration(p50)} p95={format_duration(p95)}"
        )

    payload = {
        "filters": filters.model_dump(),
        "repeat": args.repeat,
        "seed": args.seed,
        "results": results,
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    print(f"Benchmark complete → {output_path}")


if __name__ == "__main__":
    main()
