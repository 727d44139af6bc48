"""Mirror-Downloader: replicate a remote subtree into a local directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ossify._errors import InvalidPath
from ossify._events import FileDownloaded, discard_events
from ossify._path import relative

if TYPE_CHECKING:
    from ossify._backend import Backend
    from ossify._events import EventSink
    from ossify._types import PathLike

log = logging.getLogger(__name__)


def download_tree(
    backend: Backend,
    remote_path: str,
    local_path: PathLike,
    *,
    sink: EventSink | None = None,
) -> None:
    """Mirror everything under ``remote_path`` into ``local_path``.

    ``local_path`` is created if missing. A remote file ``remote_path/x/y``
    lands at ``local_path/x/y``; listing a single file puts it at
    ``local_path/<file name>``. The first error aborts the walk and files
    already written stay on disk.

    :raises InvalidPath: If a remote key would land outside ``local_path``.
    :raises OSError: If a local directory or file cannot be written.
    """
    root = Path(local_path)
    root.mkdir(parents=True, exist_ok=True)
    _download_level(backend, remote_path, remote_path, root, sink or discard_events)


def _download_level(backend: Backend, current: str, remote_root: str, local_root: Path, sink: EventSink) -> None:
    # Relative paths are always taken against the top-level remote root.
    for entry in backend.list(current):
        target = _mirror_target(backend, entry.path, remote_root, local_root)
        if entry.is_dir:
            log.debug("Creating local directory %s", target)
            target.mkdir(parents=True, exist_ok=True)
            _download_level(backend, entry.path, remote_root, local_root, sink)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        data = backend.read(entry.path)
        target.write_bytes(data)
        log.info("Downloaded %s -> %s (%d bytes)", entry.path, target, len(data))
        sink(FileDownloaded(remote=entry.path, local=str(target), size=len(data)))


def _mirror_target(backend: Backend, remote: str, remote_root: str, local_root: Path) -> Path:
    """Local mirror path of ``remote``, confined to ``local_root``.

    :raises InvalidPath: If the key resolves outside ``local_root`` (e.g. via ``..`` segments).
    """
    target = local_root / relative(remote, remote_root)
    if not target.resolve().is_relative_to(local_root.resolve()):
        raise InvalidPath(f"Remote key escapes local directory: {remote}", path=remote, backend=backend.name)
    return target
