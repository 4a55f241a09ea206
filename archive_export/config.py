"""
Global configuration settings for archive export.

This module centralizes configuration for:

    - entry compression method
    - stream copy buffer size
    - reproducible entry timestamps
    - feature flags (logging, etc.)

It provides:
    ExportConfig   – structured config object
    load_config()  – load from environment variables or defaults
"""

from __future__ import annotations

import logging
import os
import zipfile
from dataclasses import dataclass
from typing import Dict


logger = logging.getLogger(__name__)

COMPRESSION_METHODS: Dict[str, int] = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}

DEFAULT_COMPRESSION = "deflated"
DEFAULT_CHUNK_SIZE = 8192


@dataclass
class ExportConfig:
    """
    Canonical configuration for exporters.

    Attributes
    ----------
    compression:
        Entry encoding, "deflated" or "stored".

    chunk_size:
        Buffer size used when copying asset streams into the container.

    reproducible:
        Stamp every entry with 1980-01-01 00:00:00 so exporting the same
        archive twice yields identical bytes.

    enable_logging:
        Whether to enable basic INFO logging on export.
    """

    compression: str = DEFAULT_COMPRESSION
    chunk_size: int = DEFAULT_CHUNK_SIZE
    reproducible: bool = True

    enable_logging: bool = False

    def __post_init__(self) -> None:
        self.compression = self.compression.strip().lower()
        if self.compression not in COMPRESSION_METHODS:
            raise ValueError(
                f"Unsupported compression {self.compression!r}; "
                f"expected one of {sorted(COMPRESSION_METHODS)}"
            )
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @property
    def compress_type(self) -> int:
        return COMPRESSION_METHODS[self.compression]


def load_config() -> ExportConfig:
    """
    Load ExportConfig from environment variables, falling back to defaults.

    Recognized variables:
        ARCHIVE_EXPORT_COMPRESSION     (deflated|stored)
        ARCHIVE_EXPORT_CHUNK_SIZE      (positive integer)
        ARCHIVE_EXPORT_REPRODUCIBLE    ("true" / "false" / "1" / "0")
        ARCHIVE_EXPORT_ENABLE_LOGGING  ("true" / "false" / "1" / "0")

    Invalid values are logged and replaced by the default.

    Returns
    -------
    ExportConfig
    """

    def _env_flag(name: str, default: bool) -> bool:
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in ("1", "true", "yes", "on")

    def _env_compression(name: str) -> str:
        raw = os.getenv(name, DEFAULT_COMPRESSION).strip().lower()
        if raw not in COMPRESSION_METHODS:
            logger.warning(
                "Unknown %s=%r, falling back to %r. Valid values are: %s",
                name,
                raw,
                DEFAULT_COMPRESSION,
                ", ".join(sorted(COMPRESSION_METHODS)),
            )
            return DEFAULT_COMPRESSION
        return raw

    def _env_chunk_size(name: str) -> int:
        raw = os.getenv(name)
        if raw is None:
            return DEFAULT_CHUNK_SIZE
        try:
            value = int(raw)
        except ValueError:
            value = 0
        if value <= 0:
            logger.warning(
                "Invalid %s=%r, falling back to %d", name, raw, DEFAULT_CHUNK_SIZE
            )
            return DEFAULT_CHUNK_SIZE
        return value

    return ExportConfig(
        compression=_env_compression("ARCHIVE_EXPORT_COMPRESSION"),
        chunk_size=_env_chunk_size("ARCHIVE_EXPORT_CHUNK_SIZE"),

        reproducible=_env_flag(
            "ARCHIVE_EXPORT_REPRODUCIBLE",
            default=True
        ),

        enable_logging=_env_flag(
            "ARCHIVE_EXPORT_ENABLE_LOGGING",
            default=False
        ),
    )


__all__ = [
    "COMPRESSION_METHODS",
    "ExportConfig",
    "load_config",
]
