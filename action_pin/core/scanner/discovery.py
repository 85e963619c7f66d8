"""Workflow file discovery."""

from __future__ import annotations

from pathlib import Path

DEFAULT_WORKFLOW_DIR = Path(".github/workflows")
WORKFLOW_SUFFIXES = (".yml", ".yaml")


def discover_workflows(directory: Path = DEFAULT_WORKFLOW_DIR) -> list[Path]:
    """Return all ``*.yml`` and ``*.yaml`` files under a directory, sorted."""
    if not directory.is_dir():
        return []

    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix in WORKFLOW_SUFFIXES
    )
