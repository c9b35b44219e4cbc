"""Custom exception types used by treecast."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "EnvironmentFault",
    "InputValidationError",
    "SpecDecodeError",
    "SpecEditError",
    "SpecSourceError",
    "TreecastError",
    "VersionGateError",
    "WalkError",
]


class TreecastError(RuntimeError):
    """Base class for every error reported to the user as a single line."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InputValidationError(TreecastError):
    """Raised when a template path, spec path or output directory is unusable."""


class SpecSourceError(TreecastError):
    """Raised when the raw spec bytes cannot be read."""


class SpecDecodeError(TreecastError):
    """Raised when the spec bytes do not decode into a string-keyed mapping."""


class SpecEditError(TreecastError):
    """Raised when the interactive edit of the spec does not complete."""


class VersionGateError(TreecastError):
    """Raised when the spec requires a newer build than the one running."""


class WalkError(TreecastError):
    """Raised when processing a template entry fails.

    The underlying exception is chained through ``__cause__``.
    """

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(message)
        self.path = Path(path)


class EnvironmentFault(RuntimeError):
    """Raised when the execution environment itself is broken.

    Not a :class:`TreecastError`: the CLI lets it escape with a traceback
    instead of reporting it as bad input.
    """
