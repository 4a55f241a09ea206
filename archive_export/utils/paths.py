"""
Hierarchical path helpers for virtual archives.

Every entry inside an archive is addressed by an ArchivePath: an
immutable, slash-delimited sequence of segments. Two paths are equal
when their segments are equal, independent of how the original string
was written ("a/b", "/a/b/" and "\\a\\b" all name the same entry).

The root path ("/") has no segments and no parent.

This module provides:

    ArchivePath     : the path value type
    as_path         : coerce str / ArchivePath into ArchivePath
    parent          : parent of a path (None for the root)
    is_root         : True iff the path has no parent
    ancestors       : parents of a path, nearest first, root excluded
    normalize_name  : container entry name for a path
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple, Union


SEPARATOR = "/"

PathLike = Union[str, "ArchivePath"]


# ----------------------------------------------------------------------
# Functional helpers
# ----------------------------------------------------------------------

def _split(value: str) -> Tuple[str, ...]:
    if "\x00" in value:
        raise ValueError(f"Path must not contain NUL characters: {value!r}")
    segments = []
    for seg in value.replace("\\", SEPARATOR).split(SEPARATOR):
        if not seg or seg == ".":
            continue
        if seg == "..":
            raise ValueError(f"Path must not contain '..' segments: {value!r}")
        segments.append(seg)
    return tuple(segments)


class ArchivePath:
    """
    Immutable hierarchical identifier inside an archive.

    Parameters
    ----------
    value :
        A slash-delimited string or another ArchivePath. Backslashes are
        treated as separators, empty and "." segments are dropped.

    Raises
    ------
    TypeError
        If value is neither a string nor an ArchivePath.
    ValueError
        If value contains a ".." segment or a NUL character.
    """

    __slots__ = ("_segments",)

    def __init__(self, value: PathLike = SEPARATOR) -> None:
        if isinstance(value, ArchivePath):
            segments = value._segments
        elif isinstance(value, str):
            segments = _split(value)
        else:
            raise TypeError(f"Cannot build an ArchivePath from {value!r}")
        object.__setattr__(self, "_segments", segments)

    def __setattr__(self, name, value):
        raise AttributeError("ArchivePath is immutable")

    # - - - Structure - - -

    @property
    def segments(self) -> Tuple[str, ...]:
        return self._segments

    @property
    def parent(self) -> Optional["ArchivePath"]:
        if not self._segments:
            return None
        p = ArchivePath.__new__(ArchivePath)
        object.__setattr__(p, "_segments", self._segments[:-1])
        return p

    @property
    def is_root(self) -> bool:
        return not self._segments

    def get(self) -> str:
        """
        Absolute string form: "/a/b" for a nested path, "/" for the root.
        """
        return SEPARATOR + SEPARATOR.join(self._segments)

    # - - - Value semantics - - -

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArchivePath):
            return self._segments == other._segments
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._segments)

    def __lt__(self, other: "ArchivePath") -> bool:
        if not isinstance(other, ArchivePath):
            return NotImplemented
        return self._segments < other._segments

    def __str__(self) -> str:
        return self.get()

    def __repr__(self) -> str:
        return f"ArchivePath({self.get()!r})"


def as_path(value: PathLike) -> ArchivePath:
    if isinstance(value, ArchivePath):
        return value
    return ArchivePath(value)


def parent(path: PathLike) -> Optional[ArchivePath]:
    """
    Return the path with its final segment removed, or None for the root.

    Example:
        parent("/a/b/c.txt") -> ArchivePath("/a/b")
        parent("/a")         -> ArchivePath("/")
        parent("/")          -> None
    """
    return as_path(path).parent


def is_root(path: PathLike) -> bool:
    return parent(path) is None


def ancestors(path: PathLike) -> Iterator[ArchivePath]:
    """
    Yield the ancestors of path, nearest first, stopping before the root.

    Example:
        list(ancestors("/a/b/c")) -> [ArchivePath("/a/b"), ArchivePath("/a")]
    """
    current = as_path(path).parent
    while current is not None and not current.is_root:
        yield current
        current = current.parent


def normalize_name(path: PathLike, is_directory: bool) -> str:
    """
    Build a container entry name for path.

    The name never starts with a separator. Directory names end with
    exactly one separator, file names never end with one.

    Example:
        normalize_name("/a/b", True)       -> "a/b/"
        normalize_name("/a/b.txt", False)  -> "a/b.txt"
    """
    if isinstance(path, ArchivePath):
        name = SEPARATOR.join(path.segments)
    else:
        name = path.replace("\\", SEPARATOR).strip(SEPARATOR)
    if is_directory:
        return name + SEPARATOR
    return name


__all__ = [
    "SEPARATOR",
    "PathLike",
    "ArchivePath",
    "as_path",
    "parent",
    "is_root",
    "ancestors",
    "normalize_name",
]
