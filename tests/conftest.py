from __future__ import annotations

import io
from collections.abc import Callable

import pytest

from quicktrace.config import TracerSettings
from quicktrace.schemas import Measurement


class FakeClock:
    """Manually advanced clock returning seconds, like ``time.perf_counter``."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def settings() -> TracerSettings:
    return TracerSettings(
        enabled=True,
        silent=False,
        style="default",
        min_total_ms=100.0,
        color="never",
        validate_reports=True,
    )


@pytest.fixture()
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def make_spans() -> Callable[..., list[Measurement]]:
    def factory(*durations: float, prefix: str = "step") -> list[Measurement]:
        return [Measurement(label=f"{prefix} {i}", duration_ms=d) for i, d in enumerate(durations, start=1)]

    return factory


@pytest.fixture()
def sample_measurements() -> list[Measurement]:
    return [
        Measurement(label="Initialize database", duration_ms=30),
        Measurement(label="Load user data", duration_ms=50),
        Measurement(label="Process data", duration_ms=20),
    ]
