"""
Reference patterns.

Line-level patterns for ``uses:`` declarations. Files are never parsed as YAML;
matches are position-tagged spans over the raw text.
"""

from __future__ import annotations

import re

# Exactly 40 lowercase hex characters
HASH_RE = re.compile(r"^[0-9a-f]{40}$")

# Major-version shorthand, e.g. "v4"
MAJOR_TAG_RE = re.compile(r"^v(?P<major>\d+)$")

# Key prefix: "uses:" not preceded by another key character
_USES_KEY = r"(?<![\w-])uses:(?P<space>[ \t]*)"

# owner/repo[/sub/path], segments start with an alphanumeric so that local
# ("./path") and docker ("docker://...") references never match
_ACTION = r"[A-Za-z0-9][A-Za-z0-9_.-]*/[A-Za-z0-9][A-Za-z0-9_.-]*(?:/[A-Za-z0-9_.-]+)*"

# Optional same-line trailing comment
_COMMENT = r"(?:[ \t]*#(?P<comment>[^\r\n]*))?"

USES_RE = re.compile(
    _USES_KEY + r"(?P<action>" + _ACTION + r")@(?P<version>[^\s#]+)" + _COMMENT,
)


def repository_of(action: str) -> str:
    """Return the ``owner/repo`` part of an action that may carry a sub-path."""
    return "/".join(action.split("/")[:2])
