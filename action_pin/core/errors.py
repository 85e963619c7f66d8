"""Exception hierarchy for action-pin."""

from __future__ import annotations


class ActionPinError(Exception):
    """Base class for all action-pin errors."""


class ApiClientUnavailable(ActionPinError):
    """The GitHub CLI executable is missing. Fatal for a run."""


class ApiError(ActionPinError):
    """A remote API call failed (non-zero exit, not found, network)."""

    def __init__(self, path: str, message: str, returncode: int | None = None):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.returncode = returncode


class ApiResponseError(ActionPinError):
    """A remote API call returned a body that is not the expected JSON shape."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
