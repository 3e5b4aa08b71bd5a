"""Runtime configuration and environment helpers for tracer defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .renderers import OutputStyle

_DEFAULT_STYLE = "default"
_DEFAULT_MIN_TOTAL_MS = 100.0
_COLOR_MODES = {"auto", "always", "never"}


@dataclass(frozen=True)
class TracerSettings:
    """Immutable defaults applied to every new tracer."""

    enabled: bool
    silent: bool
    style: str
    min_total_ms: float
    color: str
    validate_reports: bool


def _parse_bool(value: str | None, fallback: bool) -> bool:
    if value is None:
        return fallback
    return value.lower() in {"1", "true", "yes", "on"}


def _parse_float(value: str | None, fallback: float, *, minimum: float | None = None) -> float:
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        return fallback
    if minimum is not None and parsed < minimum:
        return fallback
    return parsed


def _parse_choice(value: str | None, fallback: str, choices: set[str]) -> str:
    if value is None:
        return fallback
    normalized = value.strip().lower()
    return normalized if normalized in choices else fallback


def load_config() -> TracerSettings:
    """Load tracer defaults from environment variables, applying fallbacks."""

    styles = {style.value for style in OutputStyle} | {"json"}
    style = _parse_choice(os.getenv("QUICKTRACE_STYLE"), _DEFAULT_STYLE, styles)

    return TracerSettings(
        enabled=_parse_bool(os.getenv("QUICKTRACE_ENABLED"), True),
        silent=_parse_bool(os.getenv("QUICKTRACE_SILENT"), False),
        style=OutputStyle.parse(style).value,
        min_total_ms=_parse_float(os.getenv("QUICKTRACE_MIN_TOTAL_MS"), _DEFAULT_MIN_TOTAL_MS, minimum=0.0),
        color=_parse_choice(os.getenv("QUICKTRACE_COLOR"), "auto", _COLOR_MODES),
        validate_reports=_parse_bool(os.getenv("QUICKTRACE_VALIDATE_REPORTS"), False),
    )


config = load_config()
"""Singleton settings loaded at import time for convenience."""
