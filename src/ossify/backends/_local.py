"""Local filesystem backend rooted at one directory, standard library only."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from ossify._backend import Backend
from ossify._errors import InvalidPath, NotFound, OssifyError, PermissionDenied
from ossify._models import Entry, EntryKind
from ossify._path import join

if TYPE_CHECKING:
    from collections.abc import Iterator

log = logging.getLogger(__name__)


class _LocalWriter:
    """Streaming writer over a plain file handle."""

    def __init__(self, handle: BinaryIO, path: str) -> None:
        self._handle = handle
        self._path = path

    def write(self, data: bytes) -> int:
        return self._handle.write(data)

    def close(self) -> None:
        self._handle.close()

    def discard(self) -> None:
        # Partial content stays on disk; there is no rollback.
        self._handle.close()

    def __repr__(self) -> str:
        return f"_LocalWriter(path={self._path!r})"


class LocalBackend(Backend):
    """Local filesystem backend using only the Python standard library.

    :param root: Directory on the local filesystem that backend keys are
        resolved against. Created if missing.
    """

    def __init__(self, root: str) -> None:
        self._root = Path(root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        log.debug("LocalBackend rooted at %s", self._root)

    @property
    def name(self) -> str:
        return "fs"

    @property
    def root(self) -> Path:
        return self._root

    # region: path safety
    def _resolve(self, path: str) -> Path:
        """Resolve a backend key to an absolute path within root.

        ``.resolve()`` follows symlinks to their real target, and
        ``relative_to(self._root)`` then rejects any path that escapes the
        root, including symlinks pointing outside it.

        :raises InvalidPath: If the resolved path escapes the root.
        """
        resolved = (self._root / path.lstrip("/")).resolve()
        try:
            resolved.relative_to(self._root)
        except ValueError:
            raise InvalidPath(f"Path escapes root directory: {path}", path=path, backend=self.name) from None
        return resolved

    # endregion

    # region: helpers
    @contextmanager
    def _errors(self, path: str) -> Iterator[None]:
        """Map ``OSError`` subclasses to ossify errors."""
        try:
            yield
        except OssifyError:
            raise
        except FileNotFoundError:
            raise NotFound(f"Not found: {path}", path=path, backend=self.name) from None
        except PermissionError:
            raise PermissionDenied(f"Permission denied: {path}", path=path, backend=self.name) from None
        except OSError as exc:
            raise OssifyError(f"{exc.strerror or exc}: {path}", path=path, backend=self.name) from exc

    @staticmethod
    def _to_entry(key: str, full: Path) -> Entry:
        st = full.stat()
        modified = datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
        if full.is_dir():
            dir_key = key.rstrip("/") + "/" if key.strip("/") else ""
            return Entry(path=dir_key, kind=EntryKind.DIRECTORY, modified=modified)
        return Entry(path=key, kind=EntryKind.FILE, size=st.st_size, modified=modified)

    # endregion

    def list(self, path: str) -> Iterator[Entry]:
        full = self._resolve(path)
        with self._errors(path):
            if full.is_file():
                yield self._to_entry(path, full)
                return
            if not full.is_dir():
                return
            children = sorted(full.iterdir(), key=lambda p: p.name)
        for item in children:
            with self._errors(path):
                yield self._to_entry(join(path, item.name), item)

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read(self, path: str) -> bytes:
        full = self._resolve(path)
        with self._errors(path):
            return full.read_bytes()

    def open_writer(self, path: str) -> _LocalWriter:
        full = self._resolve(path)
        with self._errors(path):
            full.parent.mkdir(parents=True, exist_ok=True)
            return _LocalWriter(full.open("wb"), path)

    def create_dir(self, path: str) -> None:
        full = self._resolve(path)
        with self._errors(path):
            full.mkdir(parents=True, exist_ok=True)

    def stat(self, path: str) -> Entry:
        full = self._resolve(path)
        with self._errors(path):
            return self._to_entry(path, full)
