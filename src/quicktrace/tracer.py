"""Checkpoint tracer recording elapsed time between named spans."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from threading import Lock
from time import perf_counter
from types import TracebackType
from typing import Any, TextIO

from pydantic import ValidationError

from .colors import palette_for
from .conditions import PrintCondition, min_span_duration, min_total_duration
from .config import TracerSettings
from .config import config as default_config
from .contracts import validate_report
from .errors import TraceConfigError
from .filtering import describe_filters
from .renderers import OutputStyle, RenderContext, build_context, build_report, get_renderer
from .schemas import CallerInfo, FilterConfig, Measurement, TraceReport

logger = logging.getLogger("quicktrace.tracer")

END_LABEL = "End"
"""Label of the synthetic span appended by ``Tracer.end``."""

Clock = Callable[[], float]

# Serializes emission across every tracer.
_EMIT_LOCK = Lock()


class Tracer:
    """Records how long each step of a call sequence takes and prints a summary.

    Call :meth:`checkpoint` after each step; every call stores the time elapsed
    since the previous one. :meth:`end` closes the session, checks the print
    condition and, when it passes, writes the rendered summary in one write.
    A tracer belongs to a single call sequence and does no locking of its own.
    """

    def __init__(
        self,
        name: str,
        *,
        enabled: bool | None = None,
        silent: bool | None = None,
        style: OutputStyle | str | None = None,
        print_condition: PrintCondition | None = None,
        filters: FilterConfig | None = None,
        caller: CallerInfo | tuple[str, int | None] | None = None,
        stream: TextIO | None = None,
        color: bool | None = None,
        clock: Clock | None = None,
        settings: TracerSettings | None = None,
    ) -> None:
        cfg = settings or default_config
        self._settings = cfg
        self._name = name
        self._clock = clock or perf_counter
        self._start = self._clock()
        self._last = self._start
        self._measurements: list[Measurement] = []
        self._tail_index: int | None = None

        self._enabled = cfg.enabled if enabled is None else enabled
        self._silent = cfg.silent if silent is None else silent
        self._style = OutputStyle.parse(cfg.style if style is None else style)
        self._print_condition = print_condition or min_total_duration(cfg.min_total_ms)
        self._filters = filters or FilterConfig()
        self._caller = _coerce_caller(caller)
        self._stream = stream
        self._color = color

    def __repr__(self) -> str:
        return (
            f"Tracer(name={self._name!r}, spans={len(self._measurements)}, "
            f"enabled={self._enabled}, style={self._style.value!r})"
        )

    def __enter__(self) -> Tracer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.end()

    # -- recording ---------------------------------------------------------

    def checkpoint(self, label: str) -> None:
        """Record the time elapsed since the previous checkpoint under ``label``."""

        if not self._enabled:
            return
        now = self._clock()
        self._measurements.append(Measurement(label=label, duration_ms=max(0.0, (now - self._last) * 1000)))
        self._last = now

    span = checkpoint

    def end(self) -> None:
        """Close the session and print its summary when the print condition allows."""

        if not self._enabled:
            logger.debug("tracer=%s end skipped reason=disabled", self._name)
            return

        self.checkpoint(END_LABEL)
        self._tail_index = len(self._measurements) - 1

        if self._silent:
            logger.debug("tracer=%s end skipped reason=silent", self._name)
            return
        if not self._print_condition(self):
            logger.debug(
                "tracer=%s end skipped reason=condition total_ms=%.2f",
                self._name,
                self.total_duration_ms,
            )
            return

        output = self.render()
        self._emit(output)
        logger.debug(
            "tracer=%s style=%s spans=%d total_ms=%.2f",
            self._name,
            self._style.value,
            len(self._measurements) - 1,
            self.total_duration_ms,
        )

    # -- rendering ---------------------------------------------------------

    def render(self) -> str:
        """Return the summary text for the current style without writing it."""

        ctx = self._context()
        if self._style is OutputStyle.STRUCTURED and self._settings.validate_reports:
            validate_report(build_report(ctx).model_dump(mode="json"))
        return get_renderer(self._style)(ctx)

    def report(self) -> TraceReport:
        """Return the structured summary regardless of the selected style."""

        return build_report(self._context())

    def _context(self) -> RenderContext:
        return build_context(
            self.real_measurements(),
            name=self._name,
            total_ms=self.total_duration_ms,
            filters=self._filters,
            caller=self._caller,
            palette=palette_for(self._wants_color()),
        )

    def _wants_color(self) -> bool:
        if self._style is OutputStyle.STRUCTURED:
            return False
        if self._color is not None:
            return self._color
        if self._settings.color == "always":
            return True
        if self._settings.color == "never":
            return False
        isatty = getattr(self._target_stream(), "isatty", None)
        return bool(isatty and isatty())

    def _target_stream(self) -> TextIO:
        return self._stream or sys.stdout

    def _emit(self, output: str) -> None:
        stream = self._target_stream()
        with _EMIT_LOCK:
            stream.write(output)
            stream.flush()

    # -- accessors ---------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def measurements(self) -> tuple[Measurement, ...]:
        """Snapshot of every recorded span, including synthetic ``End`` entries."""

        return tuple(self._measurements)

    def real_measurements(self) -> list[Measurement]:
        """Recorded spans without the tail entry appended by the latest ``end()``.

        The tail is tracked by position, not by label or by being last: a
        checkpoint recorded after ``end()`` stays visible and the ``End`` entry
        before it stays hidden until the next ``end()`` replaces it.
        """

        return [m for index, m in enumerate(self._measurements) if index != self._tail_index]

    @property
    def total_duration_ms(self) -> float:
        """Milliseconds since the tracer was created, evaluated now."""

        return (self._clock() - self._start) * 1000

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def silent(self) -> bool:
        return self._silent

    @property
    def style(self) -> OutputStyle:
        return self._style

    @property
    def filters(self) -> FilterConfig:
        return self._filters

    @property
    def caller(self) -> CallerInfo | None:
        return self._caller

    @property
    def has_active_filters(self) -> bool:
        return self._filters.active

    @property
    def active_filters_info(self) -> str:
        return describe_filters(self._filters)

    # -- runtime control ---------------------------------------------------

    def set_enabled(self, enabled: bool) -> Tracer:
        self._enabled = enabled
        return self

    def set_silent(self, silent: bool) -> Tracer:
        self._silent = silent
        return self

    def set_style(self, style: OutputStyle | str) -> Tracer:
        self._style = OutputStyle.parse(style)
        return self

    def set_print_condition(self, condition: PrintCondition) -> Tracer:
        self._print_condition = condition
        return self

    def min_total_duration(self, threshold_ms: float) -> Tracer:
        return self.set_print_condition(min_total_duration(threshold_ms))

    def min_span_duration(self, threshold_ms: float) -> Tracer:
        return self.set_print_condition(min_span_duration(threshold_ms))

    def custom_condition(self, condition: PrintCondition) -> Tracer:
        return self.set_print_condition(condition)

    def show_slow_only(self, threshold_ms: float) -> Tracer:
        return self._update_filters(slow_only_ms=threshold_ms)

    def hide_ultra_fast(self, threshold_ms: float) -> Tracer:
        return self._update_filters(hide_ultra_fast_ms=threshold_ms)

    def group_similar(self, threshold_ms: float) -> Tracer:
        return self._update_filters(group_similar_ms=threshold_ms)

    def smart_filter(
        self,
        slow_ms: float | None = None,
        ultra_fast_ms: float | None = None,
        similar_ms: float | None = None,
    ) -> Tracer:
        """Enable every stage given a non-zero threshold; other stages keep their setting."""

        changes: dict[str, Any] = {}
        if slow_ms:
            changes["slow_only_ms"] = slow_ms
        if ultra_fast_ms:
            changes["hide_ultra_fast_ms"] = ultra_fast_ms
        if similar_ms:
            changes["group_similar_ms"] = similar_ms
        return self._update_filters(**changes)

    def _update_filters(self, **changes: Any) -> Tracer:
        try:
            self._filters = FilterConfig.model_validate({**self._filters.model_dump(), **changes})
        except ValidationError as exc:
            raise TraceConfigError(f"Invalid filter threshold: {exc.errors()[0]['msg']}") from exc
        return self


def _coerce_caller(caller: CallerInfo | tuple[str, int | None] | None) -> CallerInfo | None:
    if caller is None or isinstance(caller, CallerInfo):
        return caller
    file, line = caller
    return CallerInfo(file=file, line=line)
