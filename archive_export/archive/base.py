"""
Archive collaborator interface.

Exporters never build or mutate archives. They only need:

    archive.name           -> str, used in diagnostics
    archive.get_content()  -> ordered mapping ArchivePath -> Asset

get_content() must return a snapshot that stays stable for the whole
export call (insertion order preserved), so that concurrent exports of
the same archive each work on their own view.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from ..utils.paths import ArchivePath
from .assets import Asset


@runtime_checkable
class Archive(Protocol):
    """
    Structural protocol for anything that can be exported.
    """

    name: str

    def get_content(self) -> Mapping[ArchivePath, Asset]:
        """Return an insertion-ordered snapshot of path -> asset."""
        ...


def ensure_archive(archive: Any) -> Archive:
    """
    Validate that an object behaves like an Archive.

    Raises:
        TypeError if required attributes are missing.
    """
    if not isinstance(archive, Archive):
        missing = [
            attr for attr in ("name", "get_content") if not hasattr(archive, attr)
        ]
        if missing:
            raise TypeError(
                f"Invalid archive {archive!r}: missing attributes {missing}"
            )

    return archive  # type: ignore[return-value]


__all__ = [
    "Archive",
    "ensure_archive",
]
