"""Path algebra between the remote key namespace and local directory trees.

All functions here are pure string manipulation. None of them touch the
filesystem or a backend, and none of them raise on paths whose prefixes do
not line up; a mismatch degrades to a usable fallback instead.
"""

from __future__ import annotations

import re

_SEP = "/"
_REPEATED_SEP = re.compile(r"/{2,}")


def normalize(path: str) -> str:
    """Strip a single leading separator, if present.

    Example: ``normalize("/a/b")`` returns ``"a/b"``; ``normalize("//a")``
    returns ``"/a"``.
    """
    if path.startswith(_SEP):
        return path[1:]
    return path


def name_of(path: str) -> str:
    """Final segment of ``path``, ignoring one trailing separator.

    Returns an empty string for ``""`` and ``"/"``.
    """
    return path.rstrip(_SEP).rsplit(_SEP, 1)[-1]


def join(base: str, name: str) -> str:
    """Join ``name`` onto ``base`` with exactly one separator between them.

    Runs of separators collapse to one. An empty ``base`` yields ``name``
    unchanged, and a trailing separator on ``name`` is kept so directory
    keys stay recognizable.
    """
    if not base:
        return name
    if not name:
        return base
    return _REPEATED_SEP.sub(_SEP, f"{base}{_SEP}{name}")


def relative(full_path: str, base_path: str) -> str:
    """Path of ``full_path`` relative to ``base_path``.

    * ``full_path == base_path`` returns the final segment of ``full_path``,
      so a single listed file maps onto its own name rather than ``""``.
    * A string-prefixed descendant returns the remainder without leading
      separators: ``relative("/a/b/c.txt", "/a/")`` is ``"b/c.txt"``.
    * Anything else returns ``full_path`` unmodified.
    """
    if full_path == base_path:
        return name_of(full_path)
    if not full_path.startswith(base_path):
        return full_path
    return full_path[len(base_path) :].lstrip(_SEP)


def _segments(path: str) -> list[str]:
    return [s for s in path.split(_SEP) if s and s != "."]


def relative_to_root(full_path: str, base_path: str) -> str:
    """Like :func:`relative`, for namespaces rooted differently.

    A single leading separator is stripped from both inputs and the
    comparison is done segment by segment, so ``"/a/b"`` and ``"a/b/"``
    are the same directory. On a prefix mismatch the final segment of
    ``full_path`` is returned instead of the whole path.
    """
    full = _segments(normalize(full_path))
    base = _segments(normalize(base_path))
    if full == base:
        return full[-1] if full else ""
    if full[: len(base)] == base:
        return _SEP.join(full[len(base) :])
    return full[-1] if full else ""
