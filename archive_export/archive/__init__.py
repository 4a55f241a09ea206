"""
archive_export.archive

The read-only side of export: what an archive looks like to an exporter.

    - Archive / ensure_archive : collaborator protocol
    - Asset and its variants   : directory markers and content assets
    - MemoryArchive            : ordered in-memory implementation
"""

from .assets import (
    AssetKind,
    Asset,
    DirectoryAsset,
    DIRECTORY,
    ByteArrayAsset,
    StringAsset,
    FileAsset,
    StreamAsset,
)
from .base import Archive, ensure_archive
from .memory import MemoryArchive

__all__ = [
    "AssetKind",
    "Asset",
    "DirectoryAsset",
    "DIRECTORY",
    "ByteArrayAsset",
    "StringAsset",
    "FileAsset",
    "StreamAsset",
    "Archive",
    "ensure_archive",
    "MemoryArchive",
]
