"""
Stream helpers shared by the exporters.

with_resource() runs a task against an open resource and guarantees the
resource is closed exactly once on every exit path. Failures raised by
the task (or by closing the resource) are handed to an error handler
that is expected to raise a domain-specific exception. If the handler
returns instead, the original failure is re-raised unchanged.

Release errors on a failure path are logged and never replace the
failure that caused the unwind.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Callable, Optional, TypeVar


logger = logging.getLogger(__name__)

R = TypeVar("R")
T = TypeVar("T")

ErrorHandler = Callable[[BaseException], None]

DEFAULT_CHUNK_SIZE = 8192


def close_quietly(resource: Any) -> None:
    """
    Close resource, logging (not raising) any error.

    None is accepted and ignored.
    """
    if resource is None:
        return
    try:
        resource.close()
    except Exception:
        logger.exception("Error closing %r during cleanup", resource)


def with_resource(
    resource: Optional[R],
    task: Callable[[Optional[R]], T],
    on_error: Optional[ErrorHandler] = None,
) -> T:
    """
    Execute task(resource) and release resource afterwards.

    Parameters
    ----------
    resource :
        Any object with a close() method, or None (nothing to release).
    task :
        Callable receiving the resource. Its return value is returned.
    on_error :
        Called with the failure raised by task or by close(). Normally
        raises a domain error chained to the failure.

    Returns
    -------
    The value returned by task.
    """
    try:
        result = task(resource)
    except Exception as exc:
        close_quietly(resource)
        if on_error is not None:
            on_error(exc)
        raise

    if resource is not None:
        try:
            resource.close()
        except Exception as exc:
            if on_error is not None:
                on_error(exc)
            raise

    return result


def copy_stream(
    src: BinaryIO,
    dst: BinaryIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Copy all bytes from src to dst in chunk_size blocks.

    Returns the number of bytes copied.
    """
    total = 0
    while True:
        chunk = src.read(chunk_size)
        if not chunk:
            break
        dst.write(chunk)
        total += len(chunk)
    return total


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ErrorHandler",
    "close_quietly",
    "with_resource",
    "copy_stream",
]
