"""Hadoop-filesystem-style ls / get / put / du over object stores and local disk."""

from ossify._backend import Backend
from ossify._client import StorageClient
from ossify._config import Credentials, Provider, StorageConfig
from ossify._errors import (
    BackendUnavailable,
    InvalidLocalPath,
    InvalidPath,
    NotFound,
    OssifyError,
    PermissionDenied,
    RemotePathMissing,
)
from ossify._events import ConsoleReporter, FileDownloaded, FileUploaded, UploadProgress
from ossify._format import format_size
from ossify._models import Entry, EntryKind, Usage
from ossify._path import join, normalize, relative, relative_to_root
from ossify._registry import create_backend, register_backend

__version__ = "0.1.0"

__all__ = [
    # Core
    "StorageClient",
    "Backend",
    "create_backend",
    "register_backend",
    # Models
    "Entry",
    "EntryKind",
    "Usage",
    # Config
    "Provider",
    "Credentials",
    "StorageConfig",
    # Events
    "ConsoleReporter",
    "FileDownloaded",
    "FileUploaded",
    "UploadProgress",
    # Path algebra
    "join",
    "normalize",
    "relative",
    "relative_to_root",
    "format_size",
    # Errors
    "OssifyError",
    "NotFound",
    "PermissionDenied",
    "BackendUnavailable",
    "InvalidPath",
    "InvalidLocalPath",
    "RemotePathMissing",
    # Version
    "__version__",
]
