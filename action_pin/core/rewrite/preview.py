"""
Preview generation for the rewrite engine.

Generates human-readable per-line diffs of a file outcome. Rewrites only
replace spans within a line, so old and new content have the same line count.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from action_pin.core.rewrite.models import FileOutcome


@dataclass
class DiffLine:
    """Single changed line."""

    line_no: int
    old_value: str
    new_value: str


@dataclass
class DiffOutput:
    """Complete diff for one file."""

    file_path: str
    lines: list[DiffLine]

    @property
    def total_changes(self) -> int:
        """Total number of changed lines."""
        return len(self.lines)

    def has_changes(self) -> bool:
        """Check if there are any changes."""
        return len(self.lines) > 0


class DiffGenerator:
    """Generates diff previews from file outcomes."""

    def __init__(self, colorize: bool = True):
        self.colorize = colorize

    def generate(self, outcome: FileOutcome) -> DiffOutput:
        """Generate diff from a file outcome."""
        old_lines = outcome.original.splitlines()
        new_lines = outcome.updated.splitlines()

        lines = [
            DiffLine(line_no=i, old_value=old, new_value=new)
            for i, (old, new) in enumerate(zip(old_lines, new_lines, strict=False), start=1)
            if old != new
        ]
        return DiffOutput(file_path=outcome.path, lines=lines)

    def format(self, diff: DiffOutput) -> str:
        """Format diff for display."""
        lines: list[str] = [
            f"--- {diff.file_path} (original)",
            f"+++ {diff.file_path} (pinned)",
        ]

        if not diff.has_changes():
            lines.append("No changes.")
            return "\n".join(lines)

        for line in diff.lines:
            lines.append(f"@@ Line {line.line_no} @@")
            lines.append(self._format_value(f"- {line.old_value}", is_old=True))
            lines.append(self._format_value(f"+ {line.new_value}", is_old=False))

        return "\n".join(lines)

    def _format_value(self, value: str, is_old: bool) -> str:
        if self.colorize:
            color = "\033[31m" if is_old else "\033[32m"
            return f"{color}{value}\033[0m"
        return value


def preview_changes(outcome: FileOutcome, colorize: bool = True) -> str:
    """
    Generate a preview diff for a file outcome.

    Args:
        outcome: The rewrite outcome to preview
        colorize: Whether to add ANSI colors

    Returns:
        Formatted diff string
    """
    generator = DiffGenerator(colorize=colorize)
    return generator.format(generator.generate(outcome))
