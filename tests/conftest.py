"""
Pytest configuration and fixtures for action-pin tests.

Provides fixtures for:
- Sample workflow files
- A fake repository API standing in for the GitHub CLI
- Common hash constants
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from action_pin.core.errors import ApiError
from action_pin.core.resolver import RepositoryApi
from action_pin.core.resolver.client import RELEASES_PER_PAGE

# =============================================================================
# Constants
# =============================================================================

OLD_SHA = "a" * 40
OTHER_OLD_SHA = "b" * 40
NEW_SHA = "c" * 40
TAG_SHA = "d" * 40
COMMIT_SHA = "e" * 40
TAG_OBJECT_SHA = "f" * 40


# =============================================================================
# Fake API
# =============================================================================


class FakeApi(RepositoryApi):
    """Repository API answering from a path -> payload mapping."""

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[str] = []

    def get_json(self, path: str) -> Any:
        self.calls.append(path)
        if path not in self.responses:
            raise ApiError(path, "HTTP 404: Not Found", returncode=1)
        return self.responses[path]

    # Response builders

    def add_latest(self, repo: str, tag: str) -> FakeApi:
        self.responses[f"repos/{repo}/releases/latest"] = {"tag_name": tag}
        return self

    def add_tag(self, repo: str, tag: str, sha: str) -> FakeApi:
        self.responses[f"repos/{repo}/git/ref/tags/{tag}"] = {
            "ref": f"refs/tags/{tag}",
            "object": {"sha": sha, "type": "commit"},
        }
        return self

    def add_commit(self, repo: str, ref: str, sha: str) -> FakeApi:
        self.responses[f"repos/{repo}/commits/{ref}"] = {"sha": sha}
        return self

    def add_releases(self, repo: str, tags: list[str]) -> FakeApi:
        """Serve tags as release pages of RELEASES_PER_PAGE, ending with a short page."""
        page = 1
        while True:
            chunk = tags[(page - 1) * RELEASES_PER_PAGE : page * RELEASES_PER_PAGE]
            self.responses[f"repos/{repo}/releases?per_page={RELEASES_PER_PAGE}&page={page}"] = [
                {"tag_name": t} for t in chunk
            ]
            if len(chunk) < RELEASES_PER_PAGE:
                return self
            page += 1


@pytest.fixture
def fake_api() -> FakeApi:
    """Return an empty fake API."""
    return FakeApi()


# =============================================================================
# Workflow Fixtures
# =============================================================================


SAMPLE_WORKFLOW = f"""\
name: CI

on:
  push:
    branches: [main]

jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      # Check out the repository
      - uses: actions/checkout@{OLD_SHA} # v4.1.0
      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"
      - uses: ./local-action
      - uses: docker://alpine:3.19
"""


@pytest.fixture
def workflow_dir(tmp_path: Path) -> Path:
    """Create a .github/workflows directory with one sample workflow."""
    directory = tmp_path / ".github" / "workflows"
    directory.mkdir(parents=True)
    (directory / "ci.yml").write_text(SAMPLE_WORKFLOW, encoding="utf-8")
    return directory


@pytest.fixture
def sample_workflow(workflow_dir: Path) -> Path:
    """Return the sample workflow file path."""
    return workflow_dir / "ci.yml"
