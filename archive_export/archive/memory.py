"""
In-memory archive.

MemoryArchive is the simplest Archive implementation: an
insertion-ordered dict of ArchivePath -> Asset. It stores exactly the
paths it is given; parent directories are not created implicitly, that
is left to the exporters.

Example:
    archive = MemoryArchive("app.zip")
    archive.add("/META-INF/MANIFEST.MF", StringAsset("Manifest-Version: 1.0\\n"))
    archive.add_directory("/lib")
"""

from __future__ import annotations

from typing import Dict, Optional

from ..utils.paths import ArchivePath, PathLike, as_path
from .assets import DIRECTORY, Asset
from .base import Archive


class MemoryArchive(Archive):
    """
    Ordered in-memory Archive.

    Re-adding an existing path replaces its asset but keeps its original
    position in the iteration order.
    """

    def __init__(self, name: str = "archive.zip") -> None:
        self.name = name
        self._content: Dict[ArchivePath, Asset] = {}

    def add(self, path: PathLike, asset: Asset) -> "MemoryArchive":
        if asset is None:
            raise ValueError("Asset must be specified")
        self._content[as_path(path)] = asset
        return self

    def add_directory(self, path: PathLike) -> "MemoryArchive":
        return self.add(path, DIRECTORY)

    def contains(self, path: PathLike) -> bool:
        return as_path(path) in self._content

    def get(self, path: PathLike) -> Optional[Asset]:
        return self._content.get(as_path(path))

    def get_content(self) -> Dict[ArchivePath, Asset]:
        return dict(self._content)

    def __len__(self) -> int:
        return len(self._content)

    def __repr__(self) -> str:
        return f"MemoryArchive(name={self.name!r}, entries={len(self._content)})"


__all__ = [
    "MemoryArchive",
]
