"""
High-level ZIP export entrypoints.

    export_zip(archive)                   -> BytesIO over the container
    export_zip_to_fileobj(archive, fp)    -> bytes written into fp
    export_zip_to_path(archive, target)   -> Path of the written file

Each call builds its own ZipExporter, so no writer state is shared
between calls and the same archive may be exported concurrently.

The container is always fully built in memory first. Nothing is written
to a caller's file or path unless the export succeeded.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..archive.base import Archive
from ..config import ExportConfig, load_config
from .zip_stream import ZipExporter


logger = logging.getLogger(__name__)


def _resolve_config(config: Optional[ExportConfig]) -> ExportConfig:
    cfg = config or load_config()
    if cfg.enable_logging:
        logging.basicConfig(level=logging.INFO)
    return cfg


def export_zip(archive: Archive, config: Optional[ExportConfig] = None) -> BinaryIO:
    """
    Export an archive as a ZIP container.

    Returns
    -------
    BinaryIO
        Readable stream positioned at the start of the container.

    Raises
    ------
    ExportError
        (or a subclass) if any entry could not be written.
    """
    cfg = _resolve_config(config)
    return ZipExporter(archive, cfg).export()


def export_zip_to_fileobj(
    archive: Archive,
    fp: BinaryIO,
    config: Optional[ExportConfig] = None,
) -> int:
    """
    Export an archive and write the container into an open binary file.

    The caller is responsible for opening and closing the file.

    Returns the number of bytes written.
    """
    content = export_zip(archive, config).read()
    fp.write(content)
    return len(content)


def export_zip_to_path(
    archive: Archive,
    target: Union[str, Path],
    overwrite: bool = False,
    config: Optional[ExportConfig] = None,
) -> Path:
    """
    Export an archive to a ZIP file on disk.

    The file is written to a sibling temp file first and then moved into
    place with os.replace(), so a failed export never leaves a truncated
    file behind.

    Raises
    ------
    FileExistsError
        If target exists and overwrite is False.
    ExportError
        If the export itself fails.
    """
    target = Path(target)
    if target.exists() and not overwrite:
        raise FileExistsError(f"Target exists and overwrite is not allowed: {target}")
    if target.is_dir():
        raise IsADirectoryError(f"Target is a directory: {target}")

    result = export_zip(archive, config)

    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_path_str = tempfile.mkstemp(
        dir=target.parent, prefix=".tmp_", suffix=".zip"
    )
    try:
        with os.fdopen(tmp_fd, "wb") as f:
            shutil.copyfileobj(result, f)
        os.replace(tmp_path_str, target)
    except Exception:
        try:
            os.unlink(tmp_path_str)
        except OSError:
            pass
        raise

    logger.info("Exported %s to %s", archive.name, target)
    return target


__all__ = [
    "export_zip",
    "export_zip_to_fileobj",
    "export_zip_to_path",
]
