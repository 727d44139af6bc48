"""Lister: one-level or depth-first pre-order listing of a backend path."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ossify._errors import NotFound
from ossify._format import format_entry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ossify._backend import Backend
    from ossify._models import Entry

log = logging.getLogger(__name__)


def _list_level(backend: Backend, path: str) -> Iterator[Entry]:
    """One level under ``path``; a missing path is an empty level."""
    try:
        yield from backend.list(path)
    except NotFound:
        log.debug("Nothing to list at %r", path)


def iter_entries(backend: Backend, path: str, *, recursive: bool = False) -> Iterator[Entry]:
    """Yield entries under ``path`` in backend order.

    With ``recursive`` the walk is depth-first pre-order: each directory is
    yielded before its descendants, and its whole subtree is yielded before
    its next sibling.
    """
    for entry in _list_level(backend, path):
        yield entry
        if recursive and entry.is_dir:
            yield from iter_entries(backend, entry.path, recursive=True)


def list_lines(backend: Backend, path: str, *, long: bool = False, recursive: bool = False) -> Iterator[str]:
    """Yield one display line per entry under ``path``."""
    for entry in iter_entries(backend, path, recursive=recursive):
        yield format_entry(entry, long=long)
