"""CLI — inspect, check, and dump trace and test-case archives."""

from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="pwtrace", help="Playwright trace archive loader")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show loader logs on stderr"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
) -> None:
    """Load Playwright trace archives and test-result bundles."""
    from pwtrace.config import get_log_level
    from pwtrace.logging_config import setup_logging

    try:
        level = "INFO" if verbose else get_log_level()
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
    setup_logging(level, json_format=json_logs)


@app.command()
def inspect(
    archive: Path = typer.Argument(..., help="Path to a trace, report, or test-case ZIP"),
    max_depth: int = typer.Option(None, "--max-depth", min=1, help="Maximum report nesting depth"),
) -> None:
    """Summarize the contexts and actions (or test cases) in an archive."""
    from pwtrace.loader import load_archive

    result = _run_load(lambda data: load_archive(data, max_depth=_max_depth(max_depth)), archive)

    typer.echo(f"Archive: {archive.name} ({result.kind.value})")
    if result.trace is not None:
        for i, ctx in enumerate(result.trace.contexts):
            _echo_context(i, ctx)
    if result.test_cases is not None:
        collection = result.test_cases
        typer.echo(
            f"Test cases: {len(collection.test_cases)} "
            f"({len(collection.passed)} passed, {len(collection.failed)} failed)"
        )
        for case in collection.test_cases:
            typer.echo(f"  [{case.status.value}] {case.name}")
            if case.error_message:
                typer.echo(f"      {case.error_message}")
    _echo_diagnostics(result.diagnostics)


@app.command()
def check(
    archive: Path = typer.Argument(..., help="Path to a trace or report ZIP"),
    max_depth: int = typer.Option(None, "--max-depth", min=1, help="Maximum report nesting depth"),
) -> None:
    """Load a trace archive and verify the reconstructed model's invariants."""
    from pwtrace.engine.invariants import check_model
    from pwtrace.loader import load_trace

    result = _run_load(lambda data: load_trace(data, max_depth=_max_depth(max_depth)), archive)
    _echo_diagnostics(result.diagnostics)

    errors = check_model(result.model)
    if errors:
        typer.echo("Invariant violations:", err=True)
        for e in errors:
            typer.echo(f"  - {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"OK — {len(result.model.contexts)} context(s), {result.model.action_count} action(s)"
    )


@app.command()
def dump(
    archive: Path = typer.Argument(..., help="Path to a trace, report, or test-case ZIP"),
    output_file: Path = typer.Option(None, "-o", "--output", help="Write to a file instead of stdout"),
    fmt: str = typer.Option("json", "--format", "-f", help="json or yaml"),
    events: bool = typer.Option(False, "--events", help="Include the raw event list"),
    max_depth: int = typer.Option(None, "--max-depth", min=1, help="Maximum report nesting depth"),
) -> None:
    """Write the loaded model as JSON or YAML."""
    from pwtrace.loader import load_archive
    from pwtrace.utils.yaml_io import FORMATS, dump_model, save_model

    if fmt not in FORMATS:
        typer.echo(f"Error: unsupported format {fmt!r}, expected one of {FORMATS}", err=True)
        raise typer.Exit(1)

    result = _run_load(lambda data: load_archive(data, max_depth=_max_depth(max_depth)), archive)
    model = result.trace if result.trace is not None else result.test_cases

    if output_file:
        save_model(model, output_file, fmt, include_events=events)
        typer.echo(f"Model written to {output_file}")
    else:
        typer.echo(dump_model(model, fmt, include_events=events))
    _echo_diagnostics(result.diagnostics)


def _run_load(load, archive: Path):
    """Read *archive* and load it; fatal errors become a single message and exit 1."""
    from pwtrace.errors import TraceLoadError

    try:
        data = archive.read_bytes()
    except OSError as exc:
        typer.echo(f"Error: cannot read {archive}: {exc}", err=True)
        raise typer.Exit(1)

    try:
        return load(data)
    except TraceLoadError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


def _max_depth(option: int | None) -> int:
    from pwtrace.config import get_max_depth

    if option is not None:
        return option
    try:
        return get_max_depth()
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


def _echo_context(index: int, ctx) -> None:
    label = ctx.title or ctx.browser_name or "context"
    typer.echo(
        f"Context {index}: {label} — {len(ctx.actions)} actions, "
        f"{len(ctx.pages)} pages, {ctx.duration:.0f}ms"
    )
    for action in ctx.actions:
        duration = f"{action.duration:.0f}ms" if action.duration is not None else "running"
        marker = " ✗" if action.error else ""
        typer.echo(f"  {action.start_time - ctx.start_time:>8.0f}  {action.api_name} ({duration}){marker}")
    for error in ctx.errors:
        typer.echo(f"  error: {error.message}")


def _echo_diagnostics(diagnostics) -> None:
    if not diagnostics:
        return
    typer.echo(f"{len(diagnostics)} warning(s):", err=True)
    for d in diagnostics:
        typer.echo(f"  - {d}", err=True)


if __name__ == "__main__":
    app()
