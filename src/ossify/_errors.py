"""Normalized error hierarchy for ossify."""

from __future__ import annotations

from typing import Optional


class OssifyError(Exception):
    """Base class for all ossify errors.

    Raised as-is for backend failures that fit no narrower category.
    ``str()`` appends the path and backend: ``"Not found | path='a.txt' | backend='s3'"``.

    :param message: Human-readable error description.
    :param path: The remote key or local path involved, if any.
    :param backend: Name of the backend that raised, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, backend: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.backend = backend

    def _context(self) -> list[str]:
        pairs = (("path", self.path), ("backend", self.backend))
        return [f"{name}={value!r}" for name, value in pairs if value is not None]

    def __str__(self) -> str:
        return " | ".join([self.message, *self._context()])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join([repr(self.message), *self._context()])})"


class NotFound(OssifyError):
    """Raised when a file or directory does not exist on the backend."""


class PermissionDenied(OssifyError):
    """Raised when access is denied by the storage backend."""


class BackendUnavailable(OssifyError):
    """Raised when the backend cannot be reached (network, DNS, timeouts)."""


class InvalidPath(OssifyError):
    """Raised for remote keys that are malformed or escape the backend root."""


class InvalidLocalPath(OssifyError):
    """Raised when the local side of a transfer is missing or unusable."""


class RemotePathMissing(OssifyError):
    """Raised when an upload targets a remote anchor that does not exist."""
