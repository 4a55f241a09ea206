"""
Exception hierarchy for archive export.

    ExportError               umbrella; carries archive name and path
     +-- InvalidPath          a missing or unusable path was submitted
     +-- DuplicateEntryConflict
     |                        the container already holds an entry name
     +-- StreamFailure        reading an asset or writing the container failed

Every export failure reaching a caller is an ExportError, so callers
can catch the umbrella or a specific subclass.
"""

from __future__ import annotations

from typing import Any, Optional


class ExportError(Exception):
    """
    Failure while exporting an archive.

    Parameters
    ----------
    message :
        Human readable description.
    archive_name :
        Name of the archive being exported, when known.
    path :
        Archive path that triggered the failure, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        archive_name: Optional[str] = None,
        path: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.archive_name = archive_name
        self.path = path

    def __str__(self) -> str:
        details = []
        if self.archive_name is not None:
            details.append(f"archive={self.archive_name}")
        if self.path is not None:
            details.append(f"path={self.path}")
        if not details:
            return self.message
        return f"{self.message} ({', '.join(details)})"


class InvalidPath(ExportError, ValueError):
    """A null path, or a path that cannot become an entry, was submitted."""


class DuplicateEntryConflict(ExportError):
    """The container already holds an entry under the same name."""


class StreamFailure(ExportError):
    """I/O failure reading an asset stream or writing the container."""


__all__ = [
    "ExportError",
    "InvalidPath",
    "DuplicateEntryConflict",
    "StreamFailure",
]
