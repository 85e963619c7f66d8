"""
Rewrite engine.

Applies rewrite rules to workflow text. Only the matched span (version plus any
trailing comment) of a reference is replaced; every other byte is kept. A
replacement is counted only when it changes the text, which makes a second run
with the same resolved pins a no-op.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING

from action_pin.core.rewrite.models import FileOutcome, RewriteReport, RewriteRule
from action_pin.core.rewrite.writer import write_text_atomic
from action_pin.core.scanner import USES_RE, read_workflow

if TYPE_CHECKING:
    import re
    from collections.abc import Iterable, Mapping


def rewrite_text(text: str, rules: Iterable[RewriteRule]) -> tuple[str, dict[str, int]]:
    """
    Apply rules to text in a single pass.

    Each reference is looked up by its (action, version) in the original text,
    so a pin written by one rule is never matched again by another.

    Args:
        text: Original content
        rules: Rules to apply; a later rule for the same reference wins

    Returns:
        Tuple of (new text, changed occurrences per action)
    """
    by_reference = {(rule.action, rule.old_version): rule for rule in rules}
    if not by_reference:
        return text, {}

    counts: dict[str, int] = defaultdict(int)

    def substitute(match: re.Match[str]) -> str:
        rule = by_reference.get((match.group("action"), match.group("version")))
        if rule is None:
            return match.group(0)

        replaced = f"uses:{match.group('space')}{rule.action}@{rule.new_pin}"
        if replaced != match.group(0):
            counts[rule.action] += 1
        return replaced

    return USES_RE.sub(substitute, text), dict(counts)


def build_advance_rules(hashes: Mapping[str, set[str]], resolved: Mapping[str, str]) -> list[RewriteRule]:
    """One rule per observed old hash of every resolved action."""
    rules: list[RewriteRule] = []
    for action in sorted(hashes):
        pin = resolved.get(action)
        if pin is None:
            continue
        for old in sorted(hashes[action]):
            rules.append(RewriteRule(action=action, old_version=old, new_pin=pin))
    return rules


def build_migrate_rules(resolved: Mapping[tuple[str, str], str]) -> list[RewriteRule]:
    """One rule per resolved action+tag pair."""
    return [
        RewriteRule(action=action, old_version=tag, new_pin=pin)
        for (action, tag), pin in sorted(resolved.items())
    ]


def rewrite_file(path: Path | str, rules: list[RewriteRule], *, dry_run: bool = False) -> FileOutcome:
    """
    Rewrite one file in place.

    The new content is computed in memory before anything is written.

    Raises:
        OSError: If the file cannot be read or written
    """
    workflow = read_workflow(path)
    updated, counts = rewrite_text(workflow.text, rules)

    written = False
    if updated != workflow.text and not dry_run:
        write_text_atomic(Path(workflow.path), updated, workflow.encoding)
        written = True

    return FileOutcome(
        path=workflow.path,
        encoding=workflow.encoding,
        original=workflow.text,
        updated=updated,
        written=written,
        replacements=counts,
    )


def rewrite_files(
    paths: Iterable[Path | str],
    rules: list[RewriteRule],
    *,
    dry_run: bool = False,
) -> RewriteReport:
    """
    Rewrite every file and accumulate the outcomes.

    A write failure propagates; files already written stay written.
    """
    report = RewriteReport(dry_run=dry_run)
    if not rules:
        return report

    for path in dict.fromkeys(str(p) for p in paths):
        report.add(rewrite_file(path, rules, dry_run=dry_run))

    return report
