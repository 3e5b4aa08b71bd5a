"""QuickTrace: checkpoint timing with smart filtering and terminal summaries."""

from .conditions import always, min_span_duration, min_total_duration, never
from .errors import ReportValidationError, TraceConfigError
from .filtering import apply_smart_filter, group_similar
from .renderers import OutputStyle, register_renderer, render_trace
from .schemas import CallerInfo, FilterConfig, GroupedMeasurement, Measurement
from .tracer import END_LABEL, Tracer

__all__ = [
    "END_LABEL",
    "CallerInfo",
    "FilterConfig",
    "GroupedMeasurement",
    "Measurement",
    "OutputStyle",
    "ReportValidationError",
    "TraceConfigError",
    "Tracer",
    "always",
    "apply_smart_filter",
    "group_similar",
    "min_span_duration",
    "min_total_duration",
    "never",
    "register_renderer",
    "render_trace",
]
