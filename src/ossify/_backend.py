"""Backend abstract base class: the capability contract the traversals use."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from ossify._models import Entry
    from ossify._types import Writer


class Backend(abc.ABC):
    """Abstract base class for all storage backends.

    Paths are backend keys relative to the backend root, ``/``-separated.
    Backend-native exceptions must never leak; they are mapped to
    ``ossify`` errors (``NotFound``, ``PermissionDenied``,
    ``BackendUnavailable`` or the base ``OssifyError``).
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Unique identifier for this backend type (e.g. ``'fs'``, ``'s3'``)."""

    @abc.abstractmethod
    def list(self, path: str) -> Iterator[Entry]:
        """List one level under ``path``.

        Yields nothing for a missing path. Listing a file yields that single
        file. The listed directory itself is never yielded.
        """

    @abc.abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a file or directory exists. Never raises ``NotFound``."""

    @abc.abstractmethod
    def read(self, path: str) -> bytes:
        """Read the whole content of a file.

        :raises NotFound: If the file does not exist.
        """

    @abc.abstractmethod
    def open_writer(self, path: str) -> Writer:
        """Open a streaming writer; the object is finalized on ``close()``."""

    @abc.abstractmethod
    def create_dir(self, path: str) -> None:
        """Create a directory (marker). Succeeds if it already exists."""

    @abc.abstractmethod
    def stat(self, path: str) -> Entry:
        """Get metadata for a file or directory.

        :raises NotFound: If nothing exists at ``path``.
        """

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""

    def __enter__(self) -> Backend:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
