"""
JSON output adapter.

Renders scan inventories and run reports as JSON for machine processing.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

from action_pin.cli.output.base import OutputAdapter, OutputFormat
from action_pin.core.diagnostics import get_diagnostic_description

if TYPE_CHECKING:
    from action_pin.core.diagnostics import Diagnostic
    from action_pin.core.pipeline import RunResult
    from action_pin.core.scanner import ActionVersionIndex, ScanResult


class JsonOutput(OutputAdapter):
    """JSON output adapter."""

    format = OutputFormat.JSON

    def __init__(
        self,
        stream: TextIO | None = None,
        color: bool = False,
        verbose: bool = False,
        indent: int = 2,
    ):
        super().__init__(stream=stream, color=False, verbose=verbose)  # Never colorize JSON
        self.indent = indent

    def render_scan(self, scan: ScanResult) -> str:
        """Render reference inventory as JSON."""
        output: dict[str, Any] = {
            "files": scan.files,
            "hashes": self._index_to_dict(scan.hashes),
            "tags": self._index_to_dict(scan.tags),
            "references": [
                {
                    "action": ref.action,
                    "version": ref.version,
                    "kind": ref.kind.value,
                    "file": ref.file,
                    "line_no": ref.line_no,
                }
                for ref in scan.references
            ],
            "diagnostics": [self._diagnostic_to_dict(d) for d in scan.diagnostics],
        }
        return json.dumps(output, indent=self.indent)

    def render_run(self, result: RunResult) -> str:
        """Render an update run as JSON."""
        report = result.report
        output: dict[str, Any] = {
            "mode": result.mode.value,
            "dry_run": report.dry_run,
            "files": result.scan.files,
            "resolved": dict(sorted(result.resolved.items())),
            "changed_files": report.changed_files,
            "files_written": report.files_written,
            "action_counts": dict(sorted(report.action_counts.items())),
            "diagnostics": [self._diagnostic_to_dict(d) for d in result.diagnostics],
            "summary": {
                "files_scanned": len(result.scan.files),
                "files_changed": len(report.changed_files),
                "references_updated": report.total_replacements,
                "warnings": result.warning_count,
                "duration_ms": result.duration_ms,
            },
        }
        return json.dumps(output, indent=self.indent)

    def _index_to_dict(self, index: ActionVersionIndex) -> dict[str, list[str]]:
        return {action: sorted(index[action]) for action in sorted(index)}

    def _diagnostic_to_dict(self, diagnostic: Diagnostic) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": diagnostic.code,
            "severity": diagnostic.severity.value,
            "message": diagnostic.message,
            "description": get_diagnostic_description(diagnostic.code),
            "subject": diagnostic.subject,
        }
        if self.verbose:
            data["detail"] = diagnostic.detail
        return data
