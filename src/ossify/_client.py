"""StorageClient: the ls / get / put / du operations over one backend."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from ossify._download import download_tree
from ossify._events import ConsoleReporter
from ossify._lister import list_lines
from ossify._path import normalize
from ossify._registry import create_backend
from ossify._upload import upload
from ossify._usage import detailed_usage, summary_lines, total_usage, usage_line

if TYPE_CHECKING:
    from types import TracebackType

    from ossify._backend import Backend
    from ossify._config import StorageConfig
    from ossify._events import EventSink
    from ossify._models import Usage
    from ossify._types import PathLike


class StorageClient:
    """Hadoop-filesystem-style commands against one storage backend.

    Remote paths have a leading ``/`` stripped before use. Listing and usage
    lines are written to ``out``; transfer progress goes to ``sink``.

    :param backend: The backend to delegate I/O to.
    :param sink: Transfer event sink. Defaults to a :class:`ConsoleReporter`.
    :param out: Stream for result lines. Defaults to ``sys.stdout``.
    """

    def __init__(self, backend: Backend, *, sink: EventSink | None = None, out: TextIO | None = None) -> None:
        self._backend = backend
        self._sink = sink if sink is not None else ConsoleReporter(out)
        self._out = out

    @classmethod
    def from_config(
        cls, config: StorageConfig, *, sink: EventSink | None = None, out: TextIO | None = None
    ) -> StorageClient:
        """Build the backend for ``config`` once and wrap it.

        :raises ValueError: If the config is malformed.
        """
        return cls(create_backend(config), sink=sink, out=out)

    def __repr__(self) -> str:
        return f"StorageClient(backend={self._backend.name!r})"

    @property
    def backend(self) -> Backend:
        return self._backend

    def close(self) -> None:
        """Close the underlying backend, releasing any held resources."""
        self._backend.close()

    def __enter__(self) -> StorageClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _emit(self, line: str) -> None:
        if isinstance(self._sink, ConsoleReporter):
            self._sink.end_line()
        print(line, file=self._out if self._out is not None else sys.stdout)

    def list_directory(self, path: str, *, long: bool = False, recursive: bool = False) -> list[str]:
        """List ``path`` (``hdfs dfs -ls``). A missing path lists nothing.

        :returns: The printed lines.
        """
        lines = []
        for line in list_lines(self._backend, normalize(path), long=long, recursive=recursive):
            self._emit(line)
            lines.append(line)
        return lines

    def download_files(self, remote_path: str, local_path: PathLike) -> None:
        """Mirror ``remote_path`` into ``local_path`` (``hdfs dfs -get``)."""
        download_tree(self._backend, normalize(remote_path), local_path, sink=self._sink)

    def upload_files(self, local_path: PathLike, remote_path: str, *, recursive: bool = False) -> None:
        """Upload a file, or a directory with ``recursive``, under ``remote_path`` (``hdfs dfs -put``).

        :raises InvalidLocalPath: If the local path is missing or does not match ``recursive``.
        :raises RemotePathMissing: If ``remote_path`` does not exist.
        """
        try:
            upload(self._backend, local_path, normalize(remote_path), recursive=recursive, sink=self._sink)
        finally:
            if isinstance(self._sink, ConsoleReporter):
                self._sink.end_line()

    def disk_usage(self, path: str, *, summary: bool = False) -> list[str]:
        """Report disk usage of ``path`` (``hdfs dfs -du``).

        With ``summary`` one total line and a file count are printed;
        otherwise one line per immediate child.

        :returns: The printed lines.
        """
        key = normalize(path)
        if summary:
            lines = summary_lines(path, total_usage(self._backend, key))
            for line in lines:
                self._emit(line)
            return lines
        lines = []
        for entry, size in detailed_usage(self._backend, key):
            line = usage_line(entry, size)
            self._emit(line)
            lines.append(line)
        return lines

    def total_usage(self, path: str) -> Usage:
        """Aggregate usage of the whole subtree under ``path``."""
        return total_usage(self._backend, normalize(path))
