"""
archive_export.export

Exporters turning a virtual archive into a binary container.

This package provides:

    - ArchiveExporter   : format-agnostic traversal template

    - ZipExporter       : ZIP writer with ancestor-directory synthesis
    - ExportStats       : per-export counters
    - WriterState       : writer lifecycle states

    - export_zip / export_zip_to_fileobj / export_zip_to_path:
          one-call entrypoints building a fresh ZipExporter per call
"""

from .base import ArchiveExporter
from .zip_stream import ZipExporter, ExportStats, ExportedPathSet, WriterState
from .exporter import export_zip, export_zip_to_fileobj, export_zip_to_path

__all__ = [
    # Template
    "ArchiveExporter",

    # ZIP writer
    "ZipExporter",
    "ExportStats",
    "ExportedPathSet",
    "WriterState",

    # Entrypoints
    "export_zip",
    "export_zip_to_fileobj",
    "export_zip_to_path",
]
