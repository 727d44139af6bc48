"""Mirror-Uploader: replicate a local file or tree into the remote namespace."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ossify._errors import InvalidLocalPath, RemotePathMissing
from ossify._events import FileUploaded, UploadProgress, discard_events
from ossify._path import join

if TYPE_CHECKING:
    from ossify._backend import Backend
    from ossify._events import EventSink
    from ossify._types import PathLike

log = logging.getLogger(__name__)

CHUNK_SIZE = 8192
# Chunks between two progress events.
PROGRESS_INTERVAL = 100


def upload(
    backend: Backend,
    local_path: PathLike,
    remote_path: str,
    *,
    recursive: bool = False,
    sink: EventSink | None = None,
) -> None:
    """Upload a local file, or a local directory tree, under ``remote_path``.

    A single file (``recursive=False``) becomes ``remote_path/<file name>``.
    A directory (``recursive=True``) is copied as a whole: its files land at
    ``remote_path/<directory name>/<relative path>``.

    All pre-conditions are checked before anything is transferred. The
    first failure during the transfer aborts the upload, and files already
    uploaded stay on the backend.

    :raises InvalidLocalPath: If ``local_path`` does not exist, or its kind
        does not match ``recursive``.
    :raises RemotePathMissing: If ``remote_path`` does not exist on the backend.
    """
    local = Path(local_path)
    if not local.exists():
        raise InvalidLocalPath("local path does not exist", path=str(local))
    if not backend.exists(remote_path):
        raise RemotePathMissing("remote path does not exist", path=remote_path, backend=backend.name)

    emit = sink or discard_events
    if local.is_file() and not recursive:
        stream_file(backend, local, join(remote_path, local.name), sink=emit)
    elif local.is_dir() and recursive:
        # "." and ".." have no name of their own to nest under.
        top = local if local.name not in ("", ".", "..") else local.resolve()
        _upload_tree(backend, top, remote_path, emit)
    else:
        raise InvalidLocalPath("local path is illegal", path=str(local))


def _upload_tree(backend: Backend, local_dir: Path, remote_parent: str, sink: EventSink) -> None:
    remote_dir = join(remote_parent, local_dir.name)
    for child in sorted(local_dir.iterdir(), key=lambda p: p.name):
        if child.is_dir():
            _upload_tree(backend, child, remote_dir, sink)
        else:
            stream_file(backend, child, join(remote_dir, child.name), sink=sink)


def stream_file(
    backend: Backend,
    local_file: PathLike,
    remote_path: str,
    *,
    sink: EventSink | None = None,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """Stream one local file to ``remote_path`` in fixed-size chunks.

    Memory use is bounded by one reusable ``chunk_size`` buffer. Progress is
    reported every ``PROGRESS_INTERVAL`` chunks and never for empty files.
    The remote object is finalized only after the last chunk; if reading or
    writing fails the writer is discarded and the error propagates.

    :returns: Number of bytes uploaded.
    """
    emit = sink or discard_events
    source = Path(local_file)
    with source.open("rb") as reader:
        total = source.stat().st_size
        writer = backend.open_writer(remote_path)
        buffer = bytearray(chunk_size)
        view = memoryview(buffer)
        written = 0
        chunks = 0
        try:
            while True:
                n = reader.readinto(buffer)
                if not n:
                    break
                writer.write(bytes(view[:n]))
                written += n
                chunks += 1
                if total > 0 and chunks % PROGRESS_INTERVAL == 0:
                    emit(UploadProgress(local=str(source), remote=remote_path, bytes_written=written, total=total))
        except BaseException:
            try:
                writer.discard()
            except Exception:
                log.warning("Discarding writer for %s failed", remote_path, exc_info=True)
            raise
        writer.close()
    log.info("Uploaded %s -> %s (%d bytes)", source, remote_path, written)
    emit(FileUploaded(local=str(source), remote=remote_path, size=written))
    return written
