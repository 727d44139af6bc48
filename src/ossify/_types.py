"""Type aliases used throughout ossify."""

from __future__ import annotations

import os  # noqa: TC003
from typing import Protocol, Union

PathLike = Union[str, "os.PathLike[str]"]  # noqa: UP007


class Writer(Protocol):
    """Streaming handle returned by ``Backend.open_writer``."""

    def write(self, data: bytes) -> object: ...

    def close(self) -> None:
        """Finalize the remote object."""

    def discard(self) -> None:
        """Release the handle without finalizing the remote object."""
