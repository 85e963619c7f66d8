"""
Diagnostic models.

This module defines structured diagnostics reported during a run.
All diagnostics use codes from the PIN-XXX-NNN taxonomy.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Severity(Enum):
    """Diagnostic severity levels."""

    ERROR = "error"  # Run cannot continue
    WARN = "warn"  # Item skipped, run continues
    INFO = "info"  # Informational


class Diagnostic(BaseModel, frozen=True):
    """
    Structured diagnostic.

    Error domains:
    - PIN-SCAN-*: File reading and scanning
    - PIN-RES-*: Remote version resolution
    - PIN-CLI-*: Command line setup
    """

    code: str = Field(
        pattern=r"^PIN-[A-Z]{2,5}-\d{3}$",
        description="Diagnostic code, e.g., 'PIN-RES-001'",
    )
    severity: Severity
    message: str = Field(description="Human-readable message")
    subject: str | None = Field(
        default=None,
        description="File path, action or action@tag the diagnostic is about",
    )
    detail: str | None = Field(
        default=None,
        description="Underlying error text, shown in verbose mode only",
    )

    @classmethod
    def warn(
        cls,
        code: str,
        message: str,
        *,
        subject: str | None = None,
        detail: str | None = None,
    ) -> Diagnostic:
        """Create a WARN severity diagnostic."""
        return cls(
            code=code,
            severity=Severity.WARN,
            message=message,
            subject=subject,
            detail=detail,
        )

    @classmethod
    def error(
        cls,
        code: str,
        message: str,
        *,
        subject: str | None = None,
        detail: str | None = None,
    ) -> Diagnostic:
        """Create an ERROR severity diagnostic."""
        return cls(
            code=code,
            severity=Severity.ERROR,
            message=message,
            subject=subject,
            detail=detail,
        )

    def format(self, verbose: bool = False) -> str:
        """Format for display, appending the detail text in verbose mode."""
        text = f"[{self.code}] {self.message}"
        if self.subject:
            text = f"{self.subject}: {text}"
        if verbose and self.detail:
            text += f" ({self.detail})"
        return text

    def __str__(self) -> str:
        return self.format(verbose=False)


# =============================================================================
# Diagnostic Codes Registry
# =============================================================================

DIAGNOSTIC_CODES: dict[str, str] = {
    # Scan
    "PIN-SCAN-001": "Workflow file could not be read",
    "PIN-SCAN-002": "Workflow file could not be decoded",
    # Resolution
    "PIN-RES-001": "No latest release available",
    "PIN-RES-002": "Tag could not be resolved to a commit",
    "PIN-RES-003": "Tag reference lookup failed, using bare tag",
    "PIN-RES-004": "No release matches major version",
    # CLI
    "PIN-CLI-001": "GitHub CLI not available",
    "PIN-CLI-002": "Named workflow file does not exist",
    "PIN-CLI-003": "No workflow files found",
}


def get_diagnostic_description(code: str) -> str | None:
    """Get the description for a diagnostic code."""
    return DIAGNOSTIC_CODES.get(code)
