"""Exceptions raised by the tracer, renderers, and CLI."""

from __future__ import annotations


class TraceConfigError(ValueError):
    """Raised for unknown styles or invalid tracer options."""


class ReportValidationError(ValueError):
    """Raised when a structured trace report does not match its JSON schema."""
