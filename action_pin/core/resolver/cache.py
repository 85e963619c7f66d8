"""
Resolution cache.

Process-lifetime memoization of resolver results. Latest-release results are
keyed by action, tag migrations by (action, tag); the two live in separate
mappings so the modes never collide. Failures are cached as None.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def tag_key(action: str, tag: str) -> str:
    """Display form of a migration key."""
    return f"{action}@{tag}"


class ResolutionCache:
    """Memoizes resolved pins for one run."""

    def __init__(self) -> None:
        self._latest: dict[str, str | None] = {}
        self._tagged: dict[tuple[str, str], str | None] = {}
        self.hits = 0
        self.misses = 0

    def latest(self, action: str, resolve: Callable[[], str | None]) -> str | None:
        """Get the latest pin for an action, resolving it on first use."""
        if action in self._latest:
            self.hits += 1
        else:
            self.misses += 1
            self._latest[action] = resolve()
        return self._latest[action]

    def tagged(self, action: str, tag: str, resolve: Callable[[], str | None]) -> str | None:
        """Get the pin for one action+tag, resolving it on first use."""
        key = (action, tag)
        if key in self._tagged:
            self.hits += 1
        else:
            self.misses += 1
            self._tagged[key] = resolve()
        return self._tagged[key]

    def resolved(self) -> dict[str, str]:
        """All successful entries keyed by their display form."""
        entries = {action: pin for action, pin in self._latest.items() if pin is not None}
        entries.update(
            (tag_key(action, tag), pin)
            for (action, tag), pin in self._tagged.items()
            if pin is not None
        )
        return entries

    def __len__(self) -> int:
        return len(self._latest) + len(self._tagged)
