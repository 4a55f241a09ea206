"""
ZIP writer for virtual archives.

ZipExporter turns an archive into a ZIP container held in memory.
Archives only store the paths they were given, so the writer
synthesizes a directory entry for every missing ancestor of a path
before writing the path itself:

    archive:   /a/b/file.txt -> "hi"
    container: a/  a/b/  a/b/file.txt

Guarantees:

    - every path is written at most once
    - ancestors (excluding the root) are written before descendants
    - the root path is never written
    - directory names end with "/" and carry no bytes
    - a failed export never returns a container

A writer is single-use:

    NOT_STARTED -> WRITING -> FINALIZED
                      |
                      +----> FAILED   (terminal)

Once failed, every further call raises a new error of the same class
as the original failure, chained to it.
"""

from __future__ import annotations

import enum
import io
import logging
import time
import zipfile
from dataclasses import dataclass
from typing import BinaryIO, FrozenSet, Iterator, Optional, Set

from ..archive.assets import Asset, AssetKind
from ..errors import DuplicateEntryConflict, ExportError, InvalidPath, StreamFailure
from ..utils.io import close_quietly, copy_stream, with_resource
from ..utils.paths import ArchivePath, ancestors, as_path, normalize_name
from .base import ArchiveExporter


logger = logging.getLogger(__name__)

# Earliest timestamp a ZIP entry can carry
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

DIR_MODE = 0o40755
FILE_MODE = 0o100644
MSDOS_DIR_FLAG = 0x10


class WriterState(enum.Enum):
    NOT_STARTED = "not_started"
    WRITING = "writing"
    FINALIZED = "finalized"
    FAILED = "failed"


@dataclass
class ExportStats:
    """
    Counters for a single export.

    Attributes
    ----------
    entries:
        Total entries written (directories + files).
    directories:
        Directory entries written, synthesized or explicit.
    synthesized:
        Directory entries created for ancestors missing from the archive.
    files:
        Content entries written.
    bytes_copied:
        Uncompressed bytes copied from asset streams.
    size:
        Size of the finalized container in bytes.
    """

    entries: int = 0
    directories: int = 0
    synthesized: int = 0
    files: int = 0
    bytes_copied: int = 0
    size: int = 0


class ExportedPathSet:
    """
    Paths already committed to the container.

    Besides the committed paths themselves, every ancestor of a
    committed path is tracked, so asking "is this path a parent of
    anything already written" is a single set lookup.
    """

    def __init__(self) -> None:
        self._paths: Set[ArchivePath] = set()
        self._covered: Set[ArchivePath] = set()

    def add(self, path: ArchivePath) -> None:
        self._paths.add(path)
        self._covered.add(path)
        for ancestor in ancestors(path):
            if ancestor in self._covered:
                # everything above is already recorded
                break
            self._covered.add(ancestor)

    def covers(self, path: ArchivePath) -> bool:
        """
        True if path was committed, or is an ancestor of a committed path.
        """
        return path in self._covered

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[ArchivePath]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)


class ZipExporter(ArchiveExporter[BinaryIO]):
    """
    Exports an archive as an in-memory ZIP container.

    Use a fresh instance per export. export() returns a BytesIO
    positioned at the start of the finished container.
    """

    def __init__(self, archive, config=None) -> None:
        super().__init__(archive, config)
        self._state = WriterState.NOT_STARTED
        self._failure: Optional[ExportError] = None
        self._output: Optional[io.BytesIO] = None
        self._zip: Optional[zipfile.ZipFile] = None
        self._exported = ExportedPathSet()
        self.stats = ExportStats()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def failure(self) -> Optional[ExportError]:
        return self._failure

    @property
    def exported_paths(self) -> FrozenSet[ArchivePath]:
        return frozenset(self._exported)

    @property
    def _encoder_open(self) -> bool:
        return self._zip is not None and self._zip.fp is not None

    def _mark_failed(self, exc: ExportError) -> None:
        if self._state is not WriterState.FAILED:
            self._state = WriterState.FAILED
            self._failure = exc

    def _raise_after_failure(self, path: Optional[ArchivePath] = None) -> None:
        original = self._failure
        error = type(original)(
            f"Zip writer already failed: {original.message}",
            archive_name=original.archive_name,
            path=path if path is not None else original.path,
        )
        raise error from original

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def begin(self) -> None:
        """
        Open the ZIP encoder over a fresh in-memory buffer.
        """
        if self._state is WriterState.FAILED:
            self._raise_after_failure()
        if self._state is not WriterState.NOT_STARTED:
            raise ExportError(
                f"Zip writer is {self._state.value}; use a new exporter",
                archive_name=self.archive.name,
            )

        self._output = io.BytesIO()
        self._zip = zipfile.ZipFile(self._output, "w", self.config.compress_type)
        self._state = WriterState.WRITING

    def write_entries(self) -> None:
        self.begin()
        # Enclose every entry so the encoder is closed on every exit path
        write_all = super().write_entries
        with_resource(self._zip, lambda _: write_all(), self._on_encoder_error)

    def finalize(self) -> BinaryIO:
        """
        Close the encoder and return the container as a readable stream.
        """
        if self._state is WriterState.FAILED:
            close_quietly(self._zip)
            self._raise_after_failure()
        if self._state is not WriterState.WRITING:
            raise ExportError(
                f"Cannot finalize a Zip writer that is {self._state.value}",
                archive_name=self.archive.name,
            )

        if self._encoder_open:
            with_resource(self._zip, lambda _: None, self._on_encoder_error)

        content = self._output.getvalue()
        self.stats.size = len(content)
        self._state = WriterState.FINALIZED

        logger.info(
            "Created Zip of size: %d bytes (%d entries, %d synthesized directories) - %s",
            self.stats.size,
            self.stats.entries,
            self.stats.synthesized,
            self.archive.name,
        )
        return io.BytesIO(content)

    def _on_encoder_error(self, exc: BaseException) -> None:
        if isinstance(exc, ExportError):
            self._mark_failed(exc)
            return
        error_cls = StreamFailure if isinstance(exc, OSError) else ExportError
        failure = error_cls(
            f"Failed to export Zip: {self.archive.name}",
            archive_name=self.archive.name,
        )
        self._mark_failed(failure)
        raise failure from exc

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def process_entry(self, path, asset: Optional[Asset]) -> None:
        """
        Write path (and any missing ancestor directories) to the container.

        A None asset, or a directory asset, produces a directory entry.
        """
        if self._state is WriterState.FAILED:
            try:
                failed_path = as_path(path) if path is not None else None
            except (TypeError, ValueError):
                failed_path = None
            self._raise_after_failure(failed_path)

        if path is None:
            self._fail(InvalidPath("Path must be specified", archive_name=self.archive.name))
        try:
            path = as_path(path)
        except (TypeError, ValueError) as exc:
            self._fail(
                InvalidPath(str(exc), archive_name=self.archive.name, path=path),
                cause=exc,
            )

        if self._state is not WriterState.WRITING:
            raise ExportError(
                f"Zip writer is {self._state.value}; call begin() before writing",
                archive_name=self.archive.name,
                path=path,
            )

        try:
            self._process(path, asset)
        except ExportError as exc:
            if exc.archive_name is None:
                exc.archive_name = self.archive.name
            self._mark_failed(exc)
            raise
        except Exception as exc:
            self._fail(
                ExportError(
                    f"Failed to process entry: {path}",
                    archive_name=self.archive.name,
                    path=path,
                ),
                cause=exc,
            )

    def _fail(self, error: ExportError, cause: Optional[BaseException] = None) -> None:
        self._mark_failed(error)
        raise error from cause

    def _process(self, path: ArchivePath, asset: Optional[Asset]) -> None:
        if self._exported.covers(path):
            logger.debug("Skipping %s; already written as a directory", path)
            return

        if path.is_root:
            if asset is None or asset.kind is AssetKind.DIRECTORY:
                return
            raise InvalidPath("Content cannot be written at the archive root", path=path)

        # Walk up until an already written ancestor, then write top-down
        missing = []
        for ancestor in ancestors(path):
            if ancestor in self._exported:
                break
            missing.append(ancestor)
        for ancestor in reversed(missing):
            logger.debug("Synthesizing directory %s for %s", ancestor, path)
            self._write_entry(ancestor, None)
            self.stats.synthesized += 1

        self._write_entry(path, asset)

    def _write_entry(self, path: ArchivePath, asset: Optional[Asset]) -> None:
        is_directory = asset is None or asset.kind is AssetKind.DIRECTORY
        name = normalize_name(path, is_directory)

        if path in self._exported:
            return

        stream = None
        if not is_directory:
            try:
                stream = asset.open_stream()
            except Exception as exc:
                raise StreamFailure(
                    f"Failed to open asset stream: {name}", path=path
                ) from exc

        with_resource(
            stream,
            lambda s: self._write_zip_entry(path, name, s),
            lambda exc: self._on_entry_error(path, name, exc),
        )

    def _on_entry_error(self, path: ArchivePath, name: str, exc: BaseException) -> None:
        if isinstance(exc, ExportError):
            return
        raise StreamFailure(
            f"Failed to write asset to Zip: {name}",
            archive_name=self.archive.name,
            path=path,
        ) from exc

    def _write_zip_entry(
        self,
        path: ArchivePath,
        name: str,
        stream: Optional[BinaryIO],
    ) -> None:
        info = self._entry_info(name, is_directory=stream is None)
        # ZipInfo may rewrite the name, so check the one actually stored
        if info.filename in self._zip.NameToInfo:
            logger.error(
                "Duplicate entry %s; already written: %s", info.filename, sorted(self._exported)
            )
            raise DuplicateEntryConflict(
                f"Duplicate entry in Zip: {info.filename}", path=path
            )

        if stream is None:
            self._zip.writestr(info, b"")
            self._exported.add(path)
            self.stats.directories += 1
        else:
            # content size is unknown up front
            with self._zip.open(info, mode="w", force_zip64=True) as dest:
                # header is committed once the entry is open
                self._exported.add(path)
                self.stats.bytes_copied += copy_stream(stream, dest, self.config.chunk_size)
            self.stats.files += 1

        self.stats.entries += 1
        logger.debug("Wrote entry %s", name)

    def _entry_info(self, name: str, is_directory: bool) -> zipfile.ZipInfo:
        if self.config.reproducible:
            date_time = ZIP_EPOCH
        else:
            date_time = time.localtime(time.time())[:6]

        info = zipfile.ZipInfo(name, date_time=date_time)
        if is_directory:
            info.compress_type = zipfile.ZIP_STORED
            info.external_attr = (DIR_MODE << 16) | MSDOS_DIR_FLAG
        else:
            info.compress_type = self.config.compress_type
            info.external_attr = FILE_MODE << 16
        return info


__all__ = [
    "ZIP_EPOCH",
    "WriterState",
    "ExportStats",
    "ExportedPathSet",
    "ZipExporter",
]
