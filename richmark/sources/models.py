"""Errors raised by source readers."""

from __future__ import annotations

from pathlib import Path


class SourceError(Exception):
    """A source file could not be turned into a styled buffer."""

    def __init__(self, path: str | Path, reason: str, cause: Exception | None = None) -> None:
        self.path = str(path)
        self.reason = reason
        message = f"{self.path}: {reason}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)
        self.__cause__ = cause
