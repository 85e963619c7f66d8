"""
CLI context and configuration.

Manages CLI state, exit codes, and environment configuration.
"""

from __future__ import annotations

import os
from enum import IntEnum
from pathlib import Path

from pydantic import BaseModel, Field

from action_pin.core.pipeline import ResolveMode
from action_pin.core.scanner import DEFAULT_WORKFLOW_DIR

WORKFLOW_DIR_ENV = "ACTION_PIN_WORKFLOW_DIR"


class ExitCode(IntEnum):
    """CLI exit codes following Unix conventions."""

    SUCCESS = 0  # Run completed, with or without updates
    ERROR = 1  # No workflow files found
    FATAL = 2  # Required tooling missing
    USAGE = 64  # Command line usage error


class CliContext(BaseModel):
    """Shared context for CLI commands."""

    # Inputs
    files: list[Path] = Field(default_factory=list)
    targets: list[str] = Field(default_factory=list)
    workflow_dir: Path = Field(default=DEFAULT_WORKFLOW_DIR)

    # Run settings
    mode: ResolveMode = Field(default=ResolveMode.ADVANCE)
    dry_run: bool = Field(default=False)

    # Output settings
    format: str = Field(default="terminal")
    color: bool = Field(default=True)
    verbose: bool = Field(default=False)

    model_config = {"frozen": False}

    @property
    def target_set(self) -> set[str] | None:
        """Action filter, None when every action is in scope."""
        return set(self.targets) or None

    def missing_files(self) -> list[Path]:
        """Explicitly named files that do not exist."""
        return [f for f in self.files if not f.is_file()]


def resolve_workflow_dir(workflow_dir: Path | None) -> Path:
    """Workflow directory from the option, ACTION_PIN_WORKFLOW_DIR, or the default."""
    if workflow_dir is not None:
        return workflow_dir

    env_value = os.environ.get(WORKFLOW_DIR_ENV)
    if env_value:
        return Path(env_value)

    return DEFAULT_WORKFLOW_DIR
