"""
Template for archive exporters.

ArchiveExporter walks the content of an archive and hands every
(path, asset) pair to the format-specific process_entry(). Once every
entry has been processed, finalize() produces the exporter's result.

Entries are visited in reverse insertion order. Deeper, later-added
paths are processed first, so by the time a literal directory entry is
reached its directory has usually been synthesized already and is not
written twice. Writers must still guarantee ancestors precede their
descendants on their own; the ordering only avoids redundant work.

Any failure in process_entry() or finalize() aborts the export. No
partial result is returned.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, List, Mapping, Optional, Tuple, TypeVar

from ..archive.assets import Asset
from ..archive.base import Archive, ensure_archive
from ..config import ExportConfig, load_config
from ..errors import ExportError
from ..utils.paths import ArchivePath


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ArchiveExporter(ABC, Generic[T]):
    """
    Base class for exporters producing a result of type T.

    Parameters
    ----------
    archive :
        The archive to export. Treated as read-only.
    config :
        Export settings; loaded from the environment when omitted.
    """

    def __init__(self, archive: Archive, config: Optional[ExportConfig] = None) -> None:
        self._archive = ensure_archive(archive)
        self.config = config or load_config()

    @property
    def archive(self) -> Archive:
        return self._archive

    # ------------------------------------------------------------------
    # Template
    # ------------------------------------------------------------------

    def export(self) -> T:
        """
        Export the archive and return the finalized result.

        Raises
        ------
        ExportError
            Any failure, tagged with the archive name. Unexpected
            exceptions are wrapped and chained.
        """
        archive = self.archive
        logger.debug("Exporting archive - %s", archive.name)

        try:
            self.write_entries()
            return self.finalize()
        except ExportError as exc:
            if exc.archive_name is None:
                exc.archive_name = archive.name
            raise
        except Exception as exc:
            raise ExportError(
                f"Failed to export archive: {archive.name}",
                archive_name=archive.name,
            ) from exc

    def write_entries(self) -> None:
        """
        Process every entry of an archive snapshot, in reverse order.
        """
        for path, asset in self.ordered_entries(self.archive.get_content()):
            self.process_entry(path, asset)

    @staticmethod
    def ordered_entries(
        content: Mapping[ArchivePath, Asset],
    ) -> List[Tuple[ArchivePath, Asset]]:
        # Reverse so that children are seen before their literal directories
        entries = list(content.items())
        entries.reverse()
        return entries

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------

    @abstractmethod
    def process_entry(self, path: Optional[ArchivePath], asset: Optional[Asset]) -> None:
        """
        Write a single entry. A None asset denotes an implicit directory.
        """
        raise NotImplementedError

    @abstractmethod
    def finalize(self) -> T:
        """
        Complete the export and return its result.
        """
        raise NotImplementedError


__all__ = [
    "ArchiveExporter",
]
