"""Typer CLI for running trace demos and rendering recorded sessions."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from .colors import palette_for
from .conditions import always
from .contracts import validate_report
from .demo_utils import SCENARIOS, generate_workload, run_workload
from .errors import ReportValidationError, TraceConfigError
from .renderers import OutputStyle, build_context, build_report, get_renderer, registered_styles
from .schemas import CallerInfo, FilterConfig, Measurement
from .tracer import Tracer

app = typer.Typer(help="Trace call sequences and render timing summaries from the command line.")

_JSON_SUFFIXES = {".json", ".jsonl"}


@app.command()
def demo(
    scenario: str = typer.Option("basic", "--scenario", "-s", help=f"One of: {', '.join(SCENARIOS)}."),
    style: str | None = typer.Option(None, "--style", help="Output style; defaults to the scenario's choice."),
    scale: float = typer.Option(1.0, "--scale", min=0.0, help="Multiplier for simulated step durations (0 = instant)."),
    seed: int = typer.Option(42, "--seed", help="Random seed for randomized scenarios."),
    color: bool | None = typer.Option(None, "--color/--no-color", help="Force ANSI colors on or off."),
) -> None:
    """Run a simulated workload and print its trace."""

    try:
        steps = generate_workload(scenario, seed=seed)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--scenario") from exc

    tracer = _build_tracer(f"Demo: {scenario}", style, color)
    if scenario == "filtering":
        tracer.smart_filter(slow_ms=10, ultra_fast_ms=1, similar_ms=5)

    if scenario == "runtime":
        half = len(steps) // 2
        run_workload(tracer, steps[:half], scale=scale)
        tracer.set_enabled(False)
        run_workload(tracer, steps[half:], scale=scale)
        tracer.set_enabled(True)
        typer.echo(f"Recorded {len(tracer.measurements)} of {len(steps)} step(s) while toggling.")
    else:
        run_workload(tracer, steps, scale=scale)

    if scenario == "styles":
        tracer.set_silent(True)
        tracer.end()
        for output_style in registered_styles():
            tracer.set_style(output_style)
            typer.echo(f"--- {output_style.value} ---")
            typer.echo(tracer.render(), nl=False)
        return

    tracer.end()


@app.command()
def render(
    input_path: Path = typer.Argument(..., help="Recorded spans (.json list or .jsonl lines of label/duration_ms)."),
    style: str = typer.Option("detailed", "--style", help="Output style to render with."),
    name: str = typer.Option("Recorded trace", "--name", help="Session name shown in the header."),
    total_ms: float | None = typer.Option(None, "--total-ms", min=0.0, help="Session total; defaults to the span sum."),
    slow_only: float | None = typer.Option(None, "--slow-only", min=0.0, help="Keep spans at or above this (ms)."),
    hide_ultra_fast: float | None = typer.Option(None, "--hide-ultra-fast", min=0.0, help="Drop spans below this (ms)."),
    group_similar: float | None = typer.Option(None, "--group-similar", min=0.0, help="Group spans within this (ms)."),
    caller: str | None = typer.Option(None, "--caller", help="Source location to display, as file[:line]."),
    color: bool = typer.Option(False, "--color/--no-color", help="Emit ANSI colors."),
    validate: bool = typer.Option(False, "--validate", help="Validate the structured report against its schema."),
) -> None:
    """Render a previously recorded session in any output style."""

    measurements = _load_measurements(input_path)
    try:
        output_style = OutputStyle.parse(style)
    except TraceConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--style") from exc

    ctx = build_context(
        measurements,
        name=name,
        total_ms=total_ms if total_ms is not None else sum(m.duration_ms for m in measurements),
        filters=FilterConfig(
            slow_only_ms=slow_only,
            hide_ultra_fast_ms=hide_ultra_fast,
            group_similar_ms=group_similar,
        ),
        caller=_parse_caller(caller),
        palette=palette_for(color and output_style is not OutputStyle.STRUCTURED),
    )

    if validate:
        try:
            validate_report(build_report(ctx).model_dump(mode="json"))
        except ReportValidationError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc

    typer.echo(get_renderer(output_style)(ctx), nl=False)


@app.command()
def styles() -> None:
    """List the available output styles."""

    for output_style in registered_styles():
        typer.echo(output_style.value)


def _build_tracer(name: str, style: str | None, color: bool | None) -> Tracer:
    try:
        return Tracer(
            name,
            enabled=True,
            silent=False,
            style=style,
            print_condition=always(),
            color=color,
        )
    except TraceConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--style") from exc


def _load_measurements(path: Path) -> list[Measurement]:
    suffix = path.suffix.lower()
    if suffix not in _JSON_SUFFIXES:
        raise typer.BadParameter(f"Unsupported file format for {path}. Use .json or .jsonl inputs.")
    if not path.exists():
        raise typer.BadParameter(f"Input file {path} does not exist.")

    try:
        text = path.read_text(encoding="utf-8")
        if suffix == ".json":
            payload: Any = json.loads(text)
            if not isinstance(payload, list):
                raise typer.BadParameter("JSON file must contain a list of spans.")
        else:
            payload = [json.loads(line) for line in text.splitlines() if line.strip()]
        return [Measurement.model_validate(item) for item in payload]
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON in {path}: {exc}") from exc
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid span payload: {exc}") from exc


def _parse_caller(value: str | None) -> CallerInfo | None:
    if not value:
        return None
    file, _, line = value.rpartition(":")
    if file and line.isdigit():
        return CallerInfo(file=file, line=int(line))
    return CallerInfo(file=value)


if __name__ == "__main__":
    app()
