"""
Version resolver.

Maps an action to the immutable commit hash its pin should resolve to, either
the latest published release (advance mode) or a specific tag (migrate mode).
Every failure is local to one action or action+tag pair: it is recorded as a
warning diagnostic and the pair is left out of the rewrite.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from action_pin.core.diagnostics import Diagnostic
from action_pin.core.errors import ApiError, ApiResponseError
from action_pin.core.resolver.cache import ResolutionCache, tag_key
from action_pin.core.scanner.patterns import MAJOR_TAG_RE, repository_of

if TYPE_CHECKING:
    from action_pin.core.resolver.client import RepositoryApi

# Errors that skip one action instead of aborting the run
RESOLUTION_ERRORS = (ApiError, ApiResponseError)


def format_pin(sha: str, tag: str) -> str:
    """Resolved pin carrying the tag as an inline comment."""
    return f"{sha} # {tag}"


def select_latest_in_major(tags: list[str], major: int) -> str | None:
    """
    Pick the highest ``v<major>.<minor>.<patch>`` tag.

    (minor, patch) are compared as integers, so v1.2.10 ranks above v1.2.3.
    Tags that are not exactly of that form are ignored.
    """
    pattern = re.compile(rf"^v{major}\.(\d+)\.(\d+)$")

    best: tuple[int, int] | None = None
    best_tag: str | None = None
    for tag in tags:
        match = pattern.match(tag)
        if match is None:
            continue
        key = (int(match.group(1)), int(match.group(2)))
        if best is None or key > best:
            best = key
            best_tag = tag

    return best_tag


class VersionResolver:
    """Resolves actions to pins through a per-run cache."""

    def __init__(self, client: RepositoryApi, cache: ResolutionCache | None = None):
        self.client = client
        self.cache = cache if cache is not None else ResolutionCache()
        self.diagnostics: list[Diagnostic] = []

    # -------------------------------------------------------------------------
    # Advance mode
    # -------------------------------------------------------------------------

    def resolve_latest(self, action: str) -> str | None:
        """
        Resolve an action to the hash of its latest release.

        Returns:
            ``"<hash> # <tag>"``, the bare tag if the tag cannot be resolved to
            a hash, or None if there is no latest release
        """
        return self.cache.latest(action, lambda: self._resolve_latest(action))

    def _resolve_latest(self, action: str) -> str | None:
        repo = repository_of(action)
        try:
            tag = self.client.latest_release_tag(repo)
        except RESOLUTION_ERRORS as e:
            self._warn("PIN-RES-001", "No latest release found, skipped", action, e)
            return None

        return self._pin_for_tag(repo, tag, label=tag, subject=action)

    # -------------------------------------------------------------------------
    # Migrate mode
    # -------------------------------------------------------------------------

    def resolve_tag(self, action: str, tag: str) -> str | None:
        """
        Resolve one tag of an action to a commit hash.

        Returns:
            ``"<hash> # <tag>"`` with the literal requested tag, a bare release
            tag for the major-version fallback, or None if unresolvable
        """
        return self.cache.tagged(action, tag, lambda: self._resolve_tag(action, tag))

    def _resolve_tag(self, action: str, tag: str) -> str | None:
        repo = repository_of(action)

        major = MAJOR_TAG_RE.match(tag)
        if major is not None:
            return self._resolve_major(action, repo, tag, int(major.group("major")))

        try:
            return format_pin(self.client.tag_commit(repo, tag), tag)
        except RESOLUTION_ERRORS as tag_error:
            try:
                return format_pin(self.client.commit_sha(repo, tag), tag)
            except RESOLUTION_ERRORS as commit_error:
                self._warn(
                    "PIN-RES-002",
                    "Cannot resolve tag to a commit, skipped",
                    tag_key(action, tag),
                    f"{tag_error}; {commit_error}",
                )
                return None

    def _resolve_major(self, action: str, repo: str, tag: str, major: int) -> str | None:
        try:
            tags = self.client.release_tags(repo)
        except RESOLUTION_ERRORS as e:
            self._warn("PIN-RES-004", "Cannot list releases, skipped", tag_key(action, tag), e)
            return None

        selected = select_latest_in_major(tags, major)
        if selected is None:
            self._warn(
                "PIN-RES-004",
                f"No release matches v{major}.<minor>.<patch>, skipped",
                tag_key(action, tag),
            )
            return None

        return self._pin_for_tag(repo, selected, label=tag, subject=tag_key(action, tag))

    # -------------------------------------------------------------------------
    # Shared
    # -------------------------------------------------------------------------

    def _pin_for_tag(self, repo: str, tag: str, label: str, subject: str) -> str:
        """Hash pin for a release tag, falling back to the bare tag."""
        try:
            return format_pin(self.client.tag_commit(repo, tag), label)
        except RESOLUTION_ERRORS as e:
            self._warn("PIN-RES-003", f"Cannot resolve {tag} to a hash, using bare tag", subject, e)
            return tag

    def _warn(
        self,
        code: str,
        message: str,
        subject: str,
        error: Exception | str | None = None,
    ) -> None:
        self.diagnostics.append(
            Diagnostic.warn(
                code,
                message,
                subject=subject,
                detail=str(error) if error is not None else None,
            )
        )
