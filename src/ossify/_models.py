"""Immutable entry and usage models."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING

from ossify._path import name_of

if TYPE_CHECKING:
    from datetime import datetime


class EntryKind(enum.Enum):
    """Kind of a listed backend item."""

    FILE = "file"
    DIRECTORY = "dir"


@dataclasses.dataclass(frozen=True)
class Entry:
    """One item returned by a backend listing.

    :param path: Backend key relative to the backend root. Directory keys
        end with ``/``.
    :param kind: Authoritative item kind.
    :param size: Size in bytes. Always ``0`` for directories.
    :param modified: Last modification time, or ``None`` if the backend
        cannot report it.
    """

    path: str
    kind: EntryKind
    size: int = 0
    modified: datetime | None = None

    def __post_init__(self) -> None:
        if self.kind is EntryKind.DIRECTORY and self.size:
            object.__setattr__(self, "size", 0)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def name(self) -> str:
        """Final path segment without a trailing slash."""
        return name_of(self.path)


@dataclasses.dataclass(frozen=True)
class Usage:
    """Aggregate disk usage of a subtree.

    :param total_bytes: Sum of file sizes in bytes.
    :param file_count: Number of files counted.
    """

    total_bytes: int = 0
    file_count: int = 0

    def __add__(self, other: object) -> Usage:
        if isinstance(other, Usage):
            return Usage(self.total_bytes + other.total_bytes, self.file_count + other.file_count)
        return NotImplemented
