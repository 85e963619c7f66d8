"""
Scanner data models.

Core data models for reference scanning.

CRITICAL DESIGN DECISIONS:
- References are transient scan results, never persisted
- Versions are grouped per action into sets (uniqueness, not order)
- Hash and tag pins are indexed separately in one pass
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from action_pin.core.diagnostics import Diagnostic

from .patterns import HASH_RE

# Action identifier -> distinct pinned versions
ActionVersionIndex = dict[str, set[str]]


# =============================================================================
# Enums
# =============================================================================


class PinKind(Enum):
    """How a reference is pinned."""

    HASH = "hash"  # 40 lowercase hex characters
    TAG = "tag"  # Anything else


def classify_version(version: str) -> PinKind:
    """Classify a version token as a hash pin or a tag pin."""
    if HASH_RE.fullmatch(version):
        return PinKind.HASH
    return PinKind.TAG


# =============================================================================
# Scan Models
# =============================================================================


class ActionReference(BaseModel, frozen=True):
    """Single ``uses: owner/repo@version`` occurrence."""

    action: str = Field(description="Action identifier, e.g., 'actions/checkout'")
    version: str = Field(min_length=1, description="Pinned hash or tag")
    trailing_comment: str | None = Field(
        default=None,
        description="Same-line comment after '#', never re-emitted",
    )

    # Position information
    file: str | None = None
    line_no: int | None = Field(default=None, ge=1)

    @property
    def kind(self) -> PinKind:
        """Pin kind of the version token."""
        return classify_version(self.version)

    @property
    def pin(self) -> str:
        """The ``action@version`` form."""
        return f"{self.action}@{self.version}"


class WorkflowText(BaseModel, frozen=True):
    """Decoded content of one workflow file."""

    path: str
    text: str
    encoding: str = Field(default="utf-8")


class ScanResult(BaseModel):
    """Result of scanning a set of workflow files."""

    files: list[str] = Field(default_factory=list, description="Files successfully scanned")
    references: list[ActionReference] = Field(default_factory=list)

    # Built in one pass over references
    hashes: ActionVersionIndex = Field(default_factory=dict)
    tags: ActionVersionIndex = Field(default_factory=dict)

    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def actions(self) -> set[str]:
        """All distinct actions seen."""
        return set(self.hashes) | set(self.tags)

    def index_for(self, kind: PinKind) -> ActionVersionIndex:
        """Get the index for one pin kind."""
        return self.hashes if kind == PinKind.HASH else self.tags
