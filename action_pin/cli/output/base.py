"""
Output adapter base classes.

Defines the interface for output adapters.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from action_pin.core.pipeline import RunResult
    from action_pin.core.scanner import ScanResult


class OutputFormat(Enum):
    """Supported output formats."""

    TERMINAL = "terminal"
    JSON = "json"


class OutputAdapter(ABC):
    """Base class for output adapters."""

    format: OutputFormat

    def __init__(self, stream: TextIO | None = None, color: bool = True, verbose: bool = False):
        self.stream = stream or sys.stdout
        self.color = color
        self.verbose = verbose

    @abstractmethod
    def render_scan(self, scan: ScanResult) -> str:
        """Render a reference inventory to string."""
        pass

    @abstractmethod
    def render_run(self, result: RunResult) -> str:
        """Render an update run to string."""
        pass


def get_output_adapter(
    format: OutputFormat | str,
    stream: TextIO | None = None,
    color: bool = True,
    verbose: bool = False,
) -> OutputAdapter:
    """Get an output adapter by format."""
    if isinstance(format, str):
        format = OutputFormat(format)

    if format == OutputFormat.TERMINAL:
        from action_pin.cli.output.terminal import TerminalOutput

        return TerminalOutput(stream=stream, color=color, verbose=verbose)
    elif format == OutputFormat.JSON:
        from action_pin.cli.output.json import JsonOutput

        return JsonOutput(stream=stream, color=color, verbose=verbose)
    else:
        raise ValueError(f"Unknown output format: {format}")
