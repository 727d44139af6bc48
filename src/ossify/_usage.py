"""Usage Aggregator: disk usage of a backend subtree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ossify._format import format_size
from ossify._models import Usage

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ossify._backend import Backend
    from ossify._models import Entry

log = logging.getLogger(__name__)


def total_usage(backend: Backend, path: str) -> Usage:
    """Sum file sizes and count files in the whole subtree under ``path``.

    Directories contribute nothing themselves but are descended into.
    """
    usage = Usage()
    for entry in backend.list(path):
        if entry.is_dir:
            usage = usage + total_usage(backend, entry.path)
        else:
            usage = usage + Usage(entry.size, 1)
    log.debug("Usage of %r: %d bytes in %d files", path, usage.total_bytes, usage.file_count)
    return usage


def detailed_usage(backend: Backend, path: str) -> Iterator[tuple[Entry, int]]:
    """Yield each immediate child of ``path`` with its size in bytes.

    A directory child reports the aggregate size of its whole subtree; a
    file child reports its own size.
    """
    for entry in backend.list(path):
        if entry.is_dir:
            yield entry, total_usage(backend, entry.path).total_bytes
        else:
            yield entry, entry.size


def summary_lines(path: str, usage: Usage) -> list[str]:
    """Lines printed for a summarized usage report."""
    return [f"{format_size(usage.total_bytes)} {path}", f"Total files: {usage.file_count}"]


def usage_line(entry: Entry, size: int) -> str:
    """Line printed for one child in a detailed usage report."""
    return f"{format_size(size)} {entry.path}"
