"""
Rewrite Engine.

Public API for rewriting pinned action references in place.
"""

from __future__ import annotations

from action_pin.core.rewrite.engine import (
    build_advance_rules,
    build_migrate_rules,
    rewrite_file,
    rewrite_files,
    rewrite_text,
)
from action_pin.core.rewrite.models import FileOutcome, RewriteReport, RewriteRule
from action_pin.core.rewrite.preview import DiffGenerator, DiffOutput, preview_changes
from action_pin.core.rewrite.writer import write_text_atomic

__all__ = [
    "DiffGenerator",
    "DiffOutput",
    "FileOutcome",
    "RewriteReport",
    "RewriteRule",
    "build_advance_rules",
    "build_migrate_rules",
    "preview_changes",
    "rewrite_file",
    "rewrite_files",
    "rewrite_text",
    "write_text_atomic",
]
