"""
Repository API clients.

The resolver only needs four read-only queries per repository. Authentication
and session handling are delegated to the preinstalled GitHub CLI, which is
invoked as ``gh api <path>``.
"""

from __future__ import annotations

import json
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Any

from action_pin.core.errors import ApiClientUnavailable, ApiError, ApiResponseError
from action_pin.core.scanner.patterns import HASH_RE

DEFAULT_GH_BIN = "gh"

# Page size when listing releases for major-version disambiguation
RELEASES_PER_PAGE = 100


# =============================================================================
# Client Interface
# =============================================================================


class RepositoryApi(ABC):
    """Base class for repository-hosting API clients."""

    @abstractmethod
    def get_json(self, path: str) -> Any:
        """
        Fetch one API path and return the decoded JSON body.

        Raises:
            ApiError: If the request failed or the resource does not exist
            ApiResponseError: If the body is not valid JSON
        """
        pass

    def latest_release_tag(self, repo: str) -> str:
        """Tag name of the latest published release."""
        path = f"repos/{repo}/releases/latest"
        payload = self.get_json(path)
        return _require_str(payload, "tag_name", path)

    def tag_commit(self, repo: str, tag: str) -> str:
        """Commit hash a tag reference points to."""
        path = f"repos/{repo}/git/ref/tags/{tag}"
        payload = self.get_json(path)
        obj = payload.get("object") if isinstance(payload, dict) else None
        if not isinstance(obj, dict):
            raise ApiResponseError(path, "missing 'object' in tag reference")

        sha = _require_str(obj, "sha", path)
        if obj.get("type") == "tag":
            # Annotated tag: the reference points at a tag object
            tag_path = f"repos/{repo}/git/tags/{sha}"
            tag_payload = self.get_json(tag_path)
            tag_obj = tag_payload.get("object") if isinstance(tag_payload, dict) else None
            if not isinstance(tag_obj, dict):
                raise ApiResponseError(tag_path, "missing 'object' in tag")
            sha = _require_str(tag_obj, "sha", tag_path)

        return _require_sha(sha, path)

    def commit_sha(self, repo: str, ref: str) -> str:
        """Commit hash of an arbitrary ref resolved as a commit."""
        path = f"repos/{repo}/commits/{ref}"
        payload = self.get_json(path)
        return _require_sha(_require_str(payload, "sha", path), path)

    def release_tags(self, repo: str) -> list[str]:
        """Tag names of all listed releases, following pagination."""
        tags: list[str] = []
        page = 1
        while True:
            path = f"repos/{repo}/releases?per_page={RELEASES_PER_PAGE}&page={page}"
            payload = self.get_json(path)
            if not isinstance(payload, list):
                raise ApiResponseError(path, "expected a list of releases")

            tags.extend(
                release["tag_name"]
                for release in payload
                if isinstance(release, dict) and isinstance(release.get("tag_name"), str)
            )
            # A short page is the last one
            if len(payload) < RELEASES_PER_PAGE:
                return tags
            page += 1


def _require_str(payload: Any, key: str, path: str) -> str:
    value = payload.get(key) if isinstance(payload, dict) else None
    if not isinstance(value, str) or not value:
        raise ApiResponseError(path, f"missing '{key}'")
    return value


def _require_sha(value: str, path: str) -> str:
    if not HASH_RE.fullmatch(value):
        raise ApiResponseError(path, f"not a commit hash: {value!r}")
    return value


# =============================================================================
# GitHub CLI Client
# =============================================================================


class GhApiClient(RepositoryApi):
    """Client backed by the authenticated GitHub CLI."""

    def __init__(self, executable: str):
        self.executable = executable

    @classmethod
    def create(cls, gh_bin: str | None = None) -> GhApiClient:
        """
        Locate the GitHub CLI and create a client.

        Args:
            gh_bin: Executable name or path (defaults to ACTION_PIN_GH_BIN or 'gh')

        Raises:
            ApiClientUnavailable: If the executable is not found
        """
        name = gh_bin or os.environ.get("ACTION_PIN_GH_BIN") or DEFAULT_GH_BIN
        executable = shutil.which(name)
        if executable is None:
            raise ApiClientUnavailable(
                f"GitHub CLI '{name}' not found. Install it and run 'gh auth login'."
            )
        return cls(executable)

    def get_json(self, path: str) -> Any:
        try:
            completed = subprocess.run(  # noqa: S603
                [self.executable, "api", path],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ApiError(path, str(e)) from e

        if completed.returncode != 0:
            message = completed.stderr.strip() or completed.stdout.strip() or "request failed"
            raise ApiError(path, message, returncode=completed.returncode)

        try:
            return json.loads(completed.stdout)
        except json.JSONDecodeError as e:
            raise ApiResponseError(path, f"invalid JSON: {e}") from e
