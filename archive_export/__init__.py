"""
archive_export

Materializes in-memory virtual archives as portable ZIP containers.

Submodules include:
    - archive/   (archive protocol, assets, MemoryArchive)
    - export/    (exporter template, ZIP writer, entrypoints)
    - utils/     (paths, scoped resource helpers)
    - errors     (ExportError hierarchy)
    - config     (ExportConfig / load_config)

The most common names are re-exported here.
"""

from .config import ExportConfig, load_config
from .errors import (
    ExportError,
    InvalidPath,
    DuplicateEntryConflict,
    StreamFailure,
)
from .archive import (
    Archive,
    Asset,
    AssetKind,
    DirectoryAsset,
    ByteArrayAsset,
    StringAsset,
    FileAsset,
    StreamAsset,
    MemoryArchive,
)
from .export import ZipExporter, export_zip, export_zip_to_fileobj, export_zip_to_path
from .utils.paths import ArchivePath

__all__ = [
    "ExportConfig",
    "load_config",
    "ExportError",
    "InvalidPath",
    "DuplicateEntryConflict",
    "StreamFailure",
    "Archive",
    "Asset",
    "AssetKind",
    "DirectoryAsset",
    "ByteArrayAsset",
    "StringAsset",
    "FileAsset",
    "StreamAsset",
    "MemoryArchive",
    "ArchivePath",
    "ZipExporter",
    "export_zip",
    "export_zip_to_fileobj",
    "export_zip_to_path",
]
