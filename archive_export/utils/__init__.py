"""
archive_export.utils

Lightweight helpers shared across the export stack.

This package aggregates:

    - paths: ArchivePath and the parent / root / entry-name helpers
    - io:    scoped resource handling and stream copying

All public symbols from these modules are re-exported for convenience.
"""

from . import paths
from . import io

# Re-export all public symbols from the submodules
from .paths import *  # noqa: F401,F403
from .io import *     # noqa: F401,F403

__all__ = (
    paths.__all__
    + io.__all__
)
