"""Exception types for the project."""

from __future__ import annotations


class FrontbuildError(Exception):
    """Base exception for build errors."""


class TransformError(FrontbuildError):
    """Raised when an external tool rejects its input.

    Carries the offending source path (if known) so pipelines can report it.
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class CleanError(FrontbuildError):
    """Raised when the output directory cannot be removed."""
