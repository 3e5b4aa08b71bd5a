"""Helpers for generating deterministic demo workloads."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from random import Random

from .tracer import Tracer

Step = tuple[str, float]
"""A simulated operation: label and duration in milliseconds."""

_BASIC: list[Step] = [
    ("Initialize database", 30),
    ("Load user data", 50),
    ("Process data", 20),
    ("Generate response", 10),
]

_FILTERING: list[Step] = [
    ("Ultra fast operation 1", 0.5),
    ("Ultra fast operation 2", 0.8),
    ("Fast validation", 5),
    ("Quick lookup", 8),
    ("Medium processing", 45),
    ("Similar processing", 48),
    ("Another similar task", 44),
    ("Slow database query", 150),
    ("Complex computation", 200),
    ("Very slow external API call", 800),
]

_QUERIES = ["SELECT users", "SELECT orders", "UPDATE inventory"]
_SERVICES = ["payments", "shipping", "recommendations"]
_COMPLEXITY = {"simple": (5, 15), "moderate": (20, 60), "complex": (80, 200)}

SCENARIOS = ("basic", "filtering", "styles", "runtime", "real-world")


def generate_workload(scenario: str, *, seed: int = 42) -> list[Step]:
    """Return the simulated steps for ``scenario``; randomized steps use ``seed``."""

    if scenario in {"basic", "styles", "runtime"}:
        return list(_BASIC)
    if scenario == "filtering":
        return list(_FILTERING)
    if scenario == "real-world":
        return _real_world(Random(seed))
    raise ValueError(f"Unknown demo scenario {scenario!r}; expected one of: {', '.join(SCENARIOS)}.")


def run_workload(
    tracer: Tracer,
    steps: Sequence[Step],
    *,
    scale: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Simulate each step, then checkpoint it on ``tracer``."""

    for label, duration_ms in steps:
        if scale > 0:
            sleep(duration_ms * scale / 1000)
        tracer.checkpoint(label)


def _real_world(rng: Random) -> list[Step]:
    steps: list[Step] = [("Request validation", 5)]
    for key in ("session", "profile"):
        steps.append((f"Cache lookup: {key}", float(rng.randint(1, 5))))
    for query in _QUERIES:
        steps.append((f"Database: {query}", float(rng.randint(20, 80))))
    for service in _SERVICES:
        steps.append((f"External API: {service}", float(rng.randint(40, 160))))
    complexity = rng.choice(sorted(_COMPLEXITY))
    low, high = _COMPLEXITY[complexity]
    steps.append((f"Business logic: {complexity}", float(rng.randint(low, high))))
    for index in range(1, 4):
        steps.append((f"Generate report {index}", float(30 + rng.randint(0, 39))))
    steps.append(("Cache store", 2))
    steps.append(("Response serialization", 3))
    return steps
