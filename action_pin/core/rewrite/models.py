"""
Rewrite Engine data models.

Core models for rewrite rules and the run report accumulator.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RewriteRule(BaseModel, frozen=True):
    """Replace ``uses: action@old_version`` with ``uses: action@new_pin``."""

    action: str = Field(description="Action identifier")
    old_version: str = Field(min_length=1, description="Version currently pinned")
    new_pin: str = Field(min_length=1, description="Resolved pin, may embed '# <tag>'")


class FileOutcome(BaseModel, frozen=True):
    """Rewrite outcome for one file."""

    path: str
    encoding: str = Field(default="utf-8")
    original: str = Field(description="Content before rewrite")
    updated: str = Field(description="Content after rewrite")
    written: bool = Field(default=False, description="True if written to disk")
    replacements: dict[str, int] = Field(
        default_factory=dict, description="Changed occurrences per action"
    )

    @property
    def changed(self) -> bool:
        """Whether the content differs after the rewrite."""
        return self.original != self.updated

    @property
    def total_replacements(self) -> int:
        """Changed occurrences in this file."""
        return sum(self.replacements.values())


class RewriteReport(BaseModel):
    """Accumulated rewrite outcomes across all files."""

    dry_run: bool = Field(default=False)
    outcomes: list[FileOutcome] = Field(default_factory=list)
    action_counts: dict[str, int] = Field(
        default_factory=dict, description="Changed occurrences per action, all files"
    )

    @property
    def changed_files(self) -> list[str]:
        """Files modified, or that would be modified under dry-run."""
        return [o.path for o in self.outcomes if o.changed]

    @property
    def files_written(self) -> list[str]:
        """Files actually written to disk."""
        return [o.path for o in self.outcomes if o.written]

    @property
    def total_replacements(self) -> int:
        """Changed occurrences across all files."""
        return sum(self.action_counts.values())

    def add(self, outcome: FileOutcome) -> None:
        """Record one file outcome and merge its counts."""
        self.outcomes.append(outcome)
        for action, count in outcome.replacements.items():
            self.action_counts[action] = self.action_counts.get(action, 0) + count
