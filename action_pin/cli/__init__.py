"""
CLI for action-pin.

Command-line interface for scanning and updating pinned workflow actions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from action_pin.cli.context import CliContext, ExitCode

if TYPE_CHECKING:
    from typer import Typer

    app: Typer


def __getattr__(name: str) -> Any:
    if name == "app":
        from action_pin.cli.main import app as _app

        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "CliContext",
    "ExitCode",
    "app",
]
