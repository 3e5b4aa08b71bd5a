"""JSON schema helpers for validating structured trace reports."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from .errors import ReportValidationError

_SCHEMA_FILENAME = "trace_report.schema.json"


def validate_report(report: dict[str, Any]) -> None:
    """Validate a structured report payload against the bundled JSON schema."""

    try:
        jsonschema.validate(instance=report, schema=_load_report_schema())
    except jsonschema.ValidationError as exc:
        raise ReportValidationError(f"Trace report failed validation: {exc.message}") from exc


@lru_cache(maxsize=1)
def _load_report_schema() -> dict[str, Any]:
    schema_path = Path(__file__).resolve().parent / "data" / _SCHEMA_FILENAME
    if not schema_path.exists():  # pragma: no cover - packaging guard
        raise FileNotFoundError(f"Trace report schema not found at {schema_path}")
    return json.loads(schema_path.read_text(encoding="utf-8"))
