"""
Version Resolver.

Public API for resolving actions to immutable commit hashes.

Usage:
    from action_pin.core.resolver import GhApiClient, VersionResolver

    resolver = VersionResolver(GhApiClient.create())
    pin = resolver.resolve_tag("actions/checkout", "v4")
"""

from __future__ import annotations

from .cache import ResolutionCache, tag_key
from .client import GhApiClient, RepositoryApi
from .resolver import VersionResolver, format_pin, select_latest_in_major

__all__ = [
    "GhApiClient",
    "RepositoryApi",
    "ResolutionCache",
    "VersionResolver",
    "format_pin",
    "select_latest_in_major",
    "tag_key",
]
