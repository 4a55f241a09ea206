"""Shared fixtures for export tests."""

from __future__ import annotations

import io
import zipfile
from typing import BinaryIO, Callable, List, Tuple

import pytest

from archive_export.archive import MemoryArchive
from archive_export.config import ExportConfig


Entry = Tuple[str, bool, bytes]


# ---------------------------------------------------------------------------
# Archive / config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def config() -> ExportConfig:
    """Default settings, independent of ARCHIVE_EXPORT_* env vars."""
    return ExportConfig()


@pytest.fixture
def archive() -> MemoryArchive:
    """An empty in-memory archive."""
    return MemoryArchive("test.zip")


# ---------------------------------------------------------------------------
# Result helpers
# ---------------------------------------------------------------------------


def _read_entries(result: BinaryIO) -> List[Entry]:
    data = result.read() if hasattr(result, "read") else result
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert zf.testzip() is None
        return [(info.filename, info.is_dir(), zf.read(info)) for info in zf.infolist()]


@pytest.fixture
def read_entries() -> Callable[[BinaryIO], List[Entry]]:
    """Return a helper listing (name, is_dir, content) for every entry, in order."""
    return _read_entries
