"""
Update Pipeline.

Orchestrates scan -> resolve -> rewrite for one run.
"""

from __future__ import annotations

import time
from collections import Counter
from enum import Enum
from typing import TYPE_CHECKING

from action_pin.core.diagnostics import Severity
from action_pin.core.resolver.cache import tag_key
from action_pin.core.rewrite import (
    RewriteReport,
    build_advance_rules,
    build_migrate_rules,
    rewrite_files,
)
from action_pin.core.scanner import scan_files

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable
    from pathlib import Path

    from action_pin.core.diagnostics import Diagnostic
    from action_pin.core.resolver import VersionResolver
    from action_pin.core.scanner import ScanResult


class ResolveMode(Enum):
    """What the run rewrites."""

    ADVANCE = "advance"  # hash pins -> hash of latest release
    MIGRATE = "migrate"  # tag pins -> hash of that tag


class RunResult:
    """Result of one update run."""

    def __init__(
        self,
        mode: ResolveMode,
        scan: ScanResult,
        resolved: dict[str, str],
        report: RewriteReport,
        diagnostics: list[Diagnostic],
        duration_ms: int = 0,
    ) -> None:
        self.mode = mode
        self.scan = scan
        self.resolved = resolved
        self.report = report
        self.diagnostics = diagnostics
        self.duration_ms = duration_ms

    @property
    def dry_run(self) -> bool:
        return self.report.dry_run

    @property
    def candidates(self) -> dict[str, set[str]]:
        """Actions and versions considered for this mode."""
        return self.scan.hashes if self.mode == ResolveMode.ADVANCE else self.scan.tags

    @property
    def warning_count(self) -> int:
        counts = Counter(d.severity for d in self.diagnostics)
        return counts.get(Severity.WARN, 0) + counts.get(Severity.ERROR, 0)


def run_pipeline(
    files: Iterable[Path | str],
    *,
    mode: ResolveMode,
    resolver: VersionResolver,
    targets: Collection[str] | None = None,
    dry_run: bool = False,
) -> RunResult:
    """
    Run one update over a set of workflow files.

    Args:
        files: Workflow files to scan and rewrite
        mode: ADVANCE for hash pins, MIGRATE for tag pins
        resolver: Resolver (with its cache) used for every remote lookup
        targets: If given, only these actions are resolved and rewritten
        dry_run: Compute and report changes without writing

    Returns:
        RunResult with scan, resolved pins, rewrite report and diagnostics
    """
    start_time = time.perf_counter()

    scan = scan_files(files, targets=targets)

    if mode == ResolveMode.ADVANCE:
        latest: dict[str, str] = {}
        for action in sorted(scan.hashes):
            pin = resolver.resolve_latest(action)
            if pin is not None:
                latest[action] = pin
        rules = build_advance_rules(scan.hashes, latest)
        resolved = latest
    else:
        tagged: dict[tuple[str, str], str] = {}
        for action in sorted(scan.tags):
            for tag in sorted(scan.tags[action]):
                pin = resolver.resolve_tag(action, tag)
                if pin is not None:
                    tagged[(action, tag)] = pin
        rules = build_migrate_rules(tagged)
        resolved = {tag_key(action, tag): pin for (action, tag), pin in tagged.items()}

    report = rewrite_files(scan.files, rules, dry_run=dry_run)

    return RunResult(
        mode=mode,
        scan=scan,
        resolved=resolved,
        report=report,
        diagnostics=[*scan.diagnostics, *resolver.diagnostics],
        duration_ms=int((time.perf_counter() - start_time) * 1000),
    )
