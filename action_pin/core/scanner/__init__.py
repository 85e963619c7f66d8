"""
Reference Scanner.

Public API for extracting ``uses: owner/repo@version`` references from
workflow text.

Usage:
    from action_pin.core.scanner import scan_files

    result = scan_files(discover_workflows())
    for action, versions in result.hashes.items():
        print(action, sorted(versions))

API Functions:
    scan_text(text, file=None, targets=None) -> list[ActionReference]
    build_index(references) -> tuple[ActionVersionIndex, ActionVersionIndex]
    read_workflow(path) -> WorkflowText
    scan_files(paths, targets=None) -> ScanResult
    discover_workflows(directory) -> list[Path]
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from action_pin.core.diagnostics import Diagnostic

from .discovery import DEFAULT_WORKFLOW_DIR, discover_workflows
from .encoding import UndecodableError, decode, detect_encoding
from .models import (
    ActionReference,
    ActionVersionIndex,
    PinKind,
    ScanResult,
    WorkflowText,
    classify_version,
)
from .patterns import HASH_RE, MAJOR_TAG_RE, USES_RE, repository_of

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable


def scan_text(
    text: str,
    *,
    file: str | None = None,
    targets: Collection[str] | None = None,
) -> list[ActionReference]:
    """
    Extract all action references from raw workflow text.

    Args:
        text: Full file content, no prior parsing assumed
        file: Optional file name recorded on each reference
        targets: If given, only references to these actions are returned

    Returns:
        References in order of appearance
    """
    references: list[ActionReference] = []

    line_no = 1
    last_pos = 0

    for match in USES_RE.finditer(text):
        line_no += text.count("\n", last_pos, match.start())
        last_pos = match.start()

        action = match.group("action")
        if targets and action not in targets:
            continue

        comment = match.group("comment")
        references.append(
            ActionReference(
                action=action,
                version=match.group("version"),
                trailing_comment=comment.strip() if comment is not None else None,
                file=file,
                line_no=line_no,
            )
        )

    return references


def build_index(
    references: Iterable[ActionReference],
) -> tuple[ActionVersionIndex, ActionVersionIndex]:
    """
    Group references into hash and tag indices in one pass.

    Returns:
        Tuple of (hashes, tags), each mapping action -> set of versions
    """
    hashes: ActionVersionIndex = {}
    tags: ActionVersionIndex = {}

    for ref in references:
        index = hashes if ref.kind == PinKind.HASH else tags
        index.setdefault(ref.action, set()).add(ref.version)

    return hashes, tags


def read_workflow(path: Path | str) -> WorkflowText:
    """
    Read and decode a workflow file.

    Raises:
        OSError: If the file cannot be read
        UndecodableError: If the content cannot be decoded
    """
    path = Path(path)
    text, encoding = decode(path.read_bytes())
    return WorkflowText(path=str(path), text=text, encoding=encoding)


def scan_files(
    paths: Iterable[Path | str],
    *,
    targets: Collection[str] | None = None,
) -> ScanResult:
    """
    Scan workflow files for action references.

    Unreadable or undecodable files are skipped with a diagnostic; scanning
    continues over the remaining files.
    """
    result = ScanResult()

    for path in paths:
        try:
            workflow = read_workflow(path)
        except OSError as e:
            result.diagnostics.append(
                Diagnostic.warn(
                    "PIN-SCAN-001",
                    "Cannot read file, skipped",
                    subject=str(path),
                    detail=str(e),
                )
            )
            continue
        except UndecodableError as e:
            result.diagnostics.append(
                Diagnostic.warn(
                    "PIN-SCAN-002",
                    "Cannot decode file, skipped",
                    subject=str(path),
                    detail=str(e),
                )
            )
            continue

        result.files.append(workflow.path)
        result.references.extend(scan_text(workflow.text, file=workflow.path, targets=targets))

    result.hashes, result.tags = build_index(result.references)
    return result


__all__ = [
    "DEFAULT_WORKFLOW_DIR",
    "HASH_RE",
    "MAJOR_TAG_RE",
    "USES_RE",
    "ActionReference",
    "ActionVersionIndex",
    "PinKind",
    "ScanResult",
    "UndecodableError",
    "WorkflowText",
    "build_index",
    "classify_version",
    "decode",
    "detect_encoding",
    "discover_workflows",
    "read_workflow",
    "repository_of",
    "scan_files",
    "scan_text",
]
