"""Ready-made tracer option bundles.

Each preset returns keyword arguments for :class:`~quicktrace.tracer.Tracer`::

    tracer = Tracer("checkout", **production_mode())
"""

from __future__ import annotations

from typing import Any

from .conditions import always, min_total_duration
from .renderers import OutputStyle
from .schemas import FilterConfig


def performance_mode() -> dict[str, Any]:
    """Detailed view of spans slower than 100ms, hiding sub-millisecond noise."""

    return {
        "style": OutputStyle.DETAILED,
        "filters": FilterConfig(slow_only_ms=100, hide_ultra_fast_ms=1),
    }


def debug_mode() -> dict[str, Any]:
    """Always print everything in the detailed style."""

    return {
        "enabled": True,
        "silent": False,
        "style": OutputStyle.DETAILED,
        "print_condition": always(),
    }


def production_mode() -> dict[str, Any]:
    return {
        "enabled": True,
        "silent": False,
        "style": OutputStyle.MINIMAL,
        "filters": FilterConfig(slow_only_ms=500),
        "print_condition": min_total_duration(1000),
    }


def development_mode() -> dict[str, Any]:
    return {
        "enabled": True,
        "silent": False,
        "style": OutputStyle.COLORFUL,
        "print_condition": min_total_duration(50),
    }
