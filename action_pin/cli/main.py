"""
Main CLI application.

Entry point for action-pin command.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Annotated

import typer

import action_pin
from action_pin.cli.context import CliContext, ExitCode, resolve_workflow_dir
from action_pin.cli.output import OutputFormat, get_output_adapter
from action_pin.core.diagnostics import Diagnostic
from action_pin.core.pipeline import ResolveMode

# Create main app
app = typer.Typer(
    name="action-pin",
    help="Pin GitHub Actions references to immutable commit hashes",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"action-pin {action_pin.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Pin GitHub Actions references to immutable commit hashes."""
    pass


def _echo_error(code: str, message: str) -> None:
    """Echo a setup error diagnostic to stderr."""
    typer.echo(f"Error: {Diagnostic.error(code, message).format()}", err=True)


def _select_files(ctx: CliContext) -> list[Path]:
    """Named files, or every workflow under the workflow directory."""
    from action_pin.core.scanner import discover_workflows

    if ctx.files:
        missing = ctx.missing_files()
        if missing:
            for path in missing:
                _echo_error("PIN-CLI-002", f"File not found: {path}")
            raise typer.Exit(ExitCode.USAGE)
        return list(dict.fromkeys(ctx.files))

    files = discover_workflows(ctx.workflow_dir)
    if not files:
        _echo_error("PIN-CLI-003", f"No workflow files found in {ctx.workflow_dir}")
        raise typer.Exit(ExitCode.ERROR)
    return files


def _output_format(format: str) -> OutputFormat:
    try:
        return OutputFormat(format)
    except ValueError:
        typer.echo(f"Unknown format: {format}", err=True)
        typer.echo("Available formats: terminal, json", err=True)
        raise typer.Exit(ExitCode.USAGE) from None


# =============================================================================
# Update Command
# =============================================================================


@app.command()
def update(
    files: Annotated[
        list[Path] | None,
        typer.Option("--file", "-f", help="Workflow file to update (repeatable)"),
    ] = None,
    actions: Annotated[
        list[str] | None,
        typer.Option("--action", "-a", help="Only update this action, e.g. actions/checkout (repeatable)"),
    ] = None,
    migrate: Annotated[
        bool,
        typer.Option("--migrate", help="Convert tag pins to commit hashes instead of advancing hash pins"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Report changes without writing files"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show error details and dry-run diffs"),
    ] = False,
    workflow_dir: Annotated[
        Path | None,
        typer.Option(
            "--workflow-dir",
            help="Directory searched for workflows. Defaults to ACTION_PIN_WORKFLOW_DIR or .github/workflows.",
        ),
    ] = None,
    gh_bin: Annotated[
        str | None,
        typer.Option("--gh-bin", help="GitHub CLI executable. Defaults to ACTION_PIN_GH_BIN or gh."),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", help="Output format: terminal, json"),
    ] = "terminal",
    color: Annotated[
        bool,
        typer.Option("--color/--no-color", help="Enable/disable colored output"),
    ] = True,
) -> None:
    """Update pinned action versions in workflow files."""
    from action_pin.core.errors import ApiClientUnavailable
    from action_pin.core.pipeline import run_pipeline
    from action_pin.core.resolver import GhApiClient, VersionResolver

    ctx = CliContext(
        files=files or [],
        targets=actions or [],
        workflow_dir=resolve_workflow_dir(workflow_dir),
        mode=ResolveMode.MIGRATE if migrate else ResolveMode.ADVANCE,
        dry_run=dry_run,
        format=format,
        color=color,
        verbose=verbose,
    )
    output_format = _output_format(ctx.format)

    try:
        client = GhApiClient.create(gh_bin)
    except ApiClientUnavailable as e:
        _echo_error("PIN-CLI-001", str(e))
        raise typer.Exit(ExitCode.FATAL) from None

    workflow_files = _select_files(ctx)

    try:
        result = run_pipeline(
            workflow_files,
            mode=ctx.mode,
            resolver=VersionResolver(client),
            targets=ctx.target_set,
            dry_run=ctx.dry_run,
        )
    except OSError as e:
        typer.echo(f"Error writing workflow files: {e}", err=True)
        raise typer.Exit(ExitCode.FATAL) from None

    adapter = get_output_adapter(output_format, color=ctx.color, verbose=ctx.verbose)
    typer.echo(adapter.render_run(result))

    raise typer.Exit(ExitCode.SUCCESS)


# =============================================================================
# Scan Command
# =============================================================================


@app.command()
def scan(
    files: Annotated[
        list[Path] | None,
        typer.Option("--file", "-f", help="Workflow file to scan (repeatable)"),
    ] = None,
    actions: Annotated[
        list[str] | None,
        typer.Option("--action", "-a", help="Only list this action (repeatable)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show error details"),
    ] = False,
    workflow_dir: Annotated[
        Path | None,
        typer.Option(
            "--workflow-dir",
            help="Directory searched for workflows. Defaults to ACTION_PIN_WORKFLOW_DIR or .github/workflows.",
        ),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", help="Output format: terminal, json"),
    ] = "terminal",
    color: Annotated[
        bool,
        typer.Option("--color/--no-color", help="Enable/disable colored output"),
    ] = True,
) -> None:
    """List action references without contacting the API."""
    from action_pin.core.scanner import scan_files

    ctx = CliContext(
        files=files or [],
        targets=actions or [],
        workflow_dir=resolve_workflow_dir(workflow_dir),
        format=format,
        color=color,
        verbose=verbose,
    )
    output_format = _output_format(ctx.format)
    workflow_files = _select_files(ctx)

    result = scan_files(workflow_files, targets=ctx.target_set)

    adapter = get_output_adapter(output_format, color=ctx.color, verbose=ctx.verbose)
    typer.echo(adapter.render_scan(result))


# =============================================================================
# CLI Entry Point
# =============================================================================


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
