"""
Terminal output adapter.

Renders scan inventories and run reports as status lines.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from action_pin.cli.output.base import OutputAdapter, OutputFormat
from action_pin.core.pipeline import ResolveMode
from action_pin.core.rewrite import preview_changes

if TYPE_CHECKING:
    from action_pin.core.diagnostics import Diagnostic
    from action_pin.core.pipeline import RunResult
    from action_pin.core.scanner import ScanResult


# Check if Unicode is supported
def _supports_unicode() -> bool:
    """Check if terminal supports Unicode."""
    try:
        "✓".encode(sys.stdout.encoding or "utf-8")
        return True
    except (UnicodeEncodeError, LookupError):
        return False


SUCCESS_SYMBOL_UNICODE = "✓"
SUCCESS_SYMBOL_ASCII = "OK"
WARN_SYMBOL_UNICODE = "⚠"
WARN_SYMBOL_ASCII = "!"


class TerminalOutput(OutputAdapter):
    """Terminal output with ANSI colors."""

    format = OutputFormat.TERMINAL

    def __init__(self, stream: TextIO | None = None, color: bool = True, verbose: bool = False):
        super().__init__(stream=stream, color=color, verbose=verbose)
        self._use_color = color and self._is_tty()
        use_unicode = _supports_unicode()
        self._success_symbol = SUCCESS_SYMBOL_UNICODE if use_unicode else SUCCESS_SYMBOL_ASCII
        self._warn_symbol = WARN_SYMBOL_UNICODE if use_unicode else WARN_SYMBOL_ASCII

    def _is_tty(self) -> bool:
        """Check if output is a TTY."""
        return hasattr(self.stream, "isatty") and self.stream.isatty()

    def render_scan(self, scan: ScanResult) -> str:
        """Render references grouped by pin kind."""
        lines: list[str] = [f"Scanned {len(scan.files)} workflow file(s)"]

        for label, index in (("Pinned by hash", scan.hashes), ("Pinned by tag", scan.tags)):
            lines.append("")
            lines.append(self._style(f"{label}: {len(index)} action(s)", "bold"))
            for action in sorted(index):
                lines.append(f"  {action}")
                for version in sorted(index[action]):
                    lines.append(f"    @{version}")

        lines.extend(self._format_diagnostics(scan.diagnostics))
        return "\n".join(lines)

    def render_run(self, result: RunResult) -> str:
        """Render an update run."""
        lines: list[str] = []
        kind = "hash" if result.mode == ResolveMode.ADVANCE else "tag"

        lines.append(f"Found {len(result.scan.files)} workflow file(s)")
        lines.append(f"Found {len(result.candidates)} action(s) pinned by {kind}")

        if result.resolved:
            lines.append("")
            lines.append(self._style("Resolved:", "bold"))
            for key in sorted(result.resolved):
                lines.append(f"  {key} -> {result.resolved[key]}")

        lines.extend(self._format_diagnostics(result.diagnostics))

        report = result.report
        if report.outcomes:
            lines.append("")
            lines.append(self._style("Files:", "bold"))
            for outcome in report.outcomes:
                if not outcome.changed:
                    status = "unchanged"
                elif report.dry_run:
                    status = self._style("would modify", "yellow")
                else:
                    status = self._style("modified", "green")
                lines.append(f"  {status}: {outcome.path}")

            if self.verbose and report.dry_run:
                for outcome in report.outcomes:
                    if outcome.changed:
                        lines.append("")
                        lines.append(preview_changes(outcome, colorize=self._use_color))

        if report.action_counts:
            lines.append("")
            lines.append(self._style("Updated references:", "bold"))
            for action in sorted(report.action_counts):
                lines.append(f"  {action}: {report.action_counts[action]} occurrence(s)")

        lines.append("")
        lines.append(self._format_summary(result))
        return "\n".join(lines)

    def _format_diagnostics(self, diagnostics: list[Diagnostic]) -> list[str]:
        if not diagnostics:
            return []

        lines = [""]
        for diagnostic in diagnostics:
            symbol = self._style(self._warn_symbol, "yellow")
            lines.append(f"{symbol} {diagnostic.format(verbose=self.verbose)}")
        return lines

    def _format_summary(self, result: RunResult) -> str:
        report = result.report
        changed = len(report.changed_files)

        if changed == 0:
            return self._style(f"{self._success_symbol} No references need updating.", "green")

        prefix = "(dry-run) Would update" if report.dry_run else "Updated"
        summary = f"{prefix} {report.total_replacements} reference(s) in {changed} file(s)."
        if result.warning_count:
            summary += f" {result.warning_count} warning(s)."
        return summary

    def _style(self, text: str, style: str) -> str:
        """Apply style to text if colors are enabled."""
        if not self._use_color:
            return text

        codes = {
            "bold": "\033[1m",
            "red": "\033[31m",
            "green": "\033[32m",
            "yellow": "\033[33m",
        }
        reset = "\033[0m"

        code = codes.get(style, "")
        if code:
            return f"{code}{text}{reset}"
        return text
