"""Error taxonomy for the build orchestrator.

Components raise these; the orchestrator turns them into exit code 1.
"""

from __future__ import annotations


class BuildToolingError(Exception):
    """Base error. Carries an optional hint printed after the message."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        msg = super().__str__()
        if self.hint:
            return f"{msg}\n   {self.hint}"
        return msg


class InvalidArguments(BuildToolingError):
    """Bad or missing flags, or an unknown build type."""


class FileNotFound(BuildToolingError):
    """Missing input archive or missing Makefile."""

    def __init__(self, path, *, what: str = "File", hint: str | None = None) -> None:
        super().__init__(f"{what} not found: {path}", hint=hint)
        self.path = path


class ExtractionFailed(BuildToolingError):
    """Archive could not be read or contains unsafe members."""


class ExtractionEmpty(BuildToolingError):
    """Archive produced no top-level directory."""


class AmbiguousArchiveLayout(BuildToolingError):
    """Archive produced more than one top-level directory."""


class BackendUnavailable(BuildToolingError):
    """Docker missing, daemon not running, or buildx not usable."""


class BuildFailed(BuildToolingError):
    """Make or buildx failed, or the binary was not produced."""

    def __init__(
        self,
        message: str,
        *,
        platform: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.platform = platform


__all__ = [
    "AmbiguousArchiveLayout",
    "BackendUnavailable",
    "BuildFailed",
    "BuildToolingError",
    "ExtractionEmpty",
    "ExtractionFailed",
    "FileNotFound",
    "InvalidArguments",
]
