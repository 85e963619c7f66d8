"""
Output adapters for CLI.

Provides different output formats: terminal, JSON.
"""

from action_pin.cli.output.base import OutputAdapter, OutputFormat, get_output_adapter
from action_pin.cli.output.json import JsonOutput
from action_pin.cli.output.terminal import TerminalOutput

__all__ = [
    "JsonOutput",
    "OutputAdapter",
    "OutputFormat",
    "TerminalOutput",
    "get_output_adapter",
]
