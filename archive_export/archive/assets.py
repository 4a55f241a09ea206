"""
Asset types stored in a virtual archive.

An asset is the content attached to an ArchivePath. It is a tagged
variant with two cases:

    AssetKind.DIRECTORY  : a directory marker, carries no bytes
    AssetKind.CONTENT    : content-bearing, opens a fresh binary stream
                           on every open_stream() call

Writers branch on `asset.kind` rather than on the concrete class.
"""

from __future__ import annotations

import enum
import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Union


class AssetKind(enum.Enum):
    DIRECTORY = "directory"
    CONTENT = "content"


class Asset:
    """
    Base class for assets.

    Subclasses set `kind` and, for content assets, implement
    open_stream().
    """

    kind: AssetKind = AssetKind.CONTENT

    @property
    def is_directory(self) -> bool:
        return self.kind is AssetKind.DIRECTORY

    def open_stream(self) -> BinaryIO:
        """Open the asset content as a readable, single-use binary stream."""
        raise NotImplementedError


class DirectoryAsset(Asset):
    """
    Marker for an explicit directory entry.

    All instances are interchangeable; DIRECTORY is the shared instance.
    """

    kind = AssetKind.DIRECTORY

    def open_stream(self) -> BinaryIO:
        raise TypeError("Directory assets carry no content")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DirectoryAsset)

    def __hash__(self) -> int:
        return hash(DirectoryAsset)

    def __repr__(self) -> str:
        return "DirectoryAsset()"


DIRECTORY = DirectoryAsset()


@dataclass(frozen=True)
class ByteArrayAsset(Asset):
    """In-memory bytes."""

    data: bytes

    def open_stream(self) -> BinaryIO:
        return io.BytesIO(self.data)


@dataclass(frozen=True)
class StringAsset(Asset):
    """Text content, encoded when the stream is opened."""

    text: str
    encoding: str = "utf-8"

    def open_stream(self) -> BinaryIO:
        return io.BytesIO(self.text.encode(self.encoding))


@dataclass(frozen=True)
class FileAsset(Asset):
    """
    A file on the local filesystem.

    The file is opened lazily, so it must still exist when the archive
    is exported.
    """

    source: Union[str, Path]

    def open_stream(self) -> BinaryIO:
        return open(self.source, "rb")


@dataclass(frozen=True)
class StreamAsset(Asset):
    """
    Content produced by a zero-argument callable returning a binary
    stream. The callable is invoked once per open_stream() call.
    """

    opener: Callable[[], BinaryIO]

    def open_stream(self) -> BinaryIO:
        return self.opener()


__all__ = [
    "AssetKind",
    "Asset",
    "DirectoryAsset",
    "DIRECTORY",
    "ByteArrayAsset",
    "StringAsset",
    "FileAsset",
    "StreamAsset",
]
