"""S3-compatible object storage backends (Amazon S3, MinIO, Alibaba OSS) using s3fs."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from ossify._backend import Backend
from ossify._errors import BackendUnavailable, NotFound, OssifyError, PermissionDenied
from ossify._models import Entry, EntryKind

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")

log = logging.getLogger(__name__)

# botocore / aiohttp connection failures that do not subclass the builtins
_TRANSIENT_ERROR_NAMES = frozenset(
    {
        "EndpointConnectionError",
        "ConnectTimeoutError",
        "ReadTimeoutError",
        "ClientConnectorError",
        "ServerDisconnectedError",
    }
)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return True
    return type(exc).__name__ in _TRANSIENT_ERROR_NAMES


class _S3Writer:
    """Wraps an s3fs file opened for writing so its errors are mapped."""

    def __init__(self, backend: S3Backend, handle: Any, path: str) -> None:
        self._backend = backend
        self._handle = handle
        self._path = path

    def write(self, data: bytes) -> int:
        with self._backend._errors(self._path):
            return int(self._handle.write(data))

    def close(self) -> None:
        with self._backend._errors(self._path):
            self._handle.close()

    def discard(self) -> None:
        with self._backend._errors(self._path):
            self._handle.discard()
            # Keeps fsspec's __del__ from flushing the partial buffer.
            self._handle.closed = True

    def __repr__(self) -> str:
        return f"_S3Writer(backend={self._backend.name!r}, path={self._path!r})"


class S3Backend(Backend):
    """S3-compatible object storage backend using s3fs.

    No connection is made until the first operation.

    :param bucket: S3 bucket name (required, non-empty).
    :param endpoint_url: Custom endpoint URL (e.g. for MinIO).
    :param key: Access key ID.
    :param secret: Secret access key.
    :param region_name: Region name.
    :param client_options: Additional options passed to ``s3fs.S3FileSystem``.
    :param max_attempts: Attempts for idempotent calls failing on connection errors.
    """

    def __init__(
        self,
        bucket: str,
        *,
        endpoint_url: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        region_name: str | None = None,
        client_options: dict[str, Any] | None = None,
        max_attempts: int = 3,
    ) -> None:
        if not bucket or not bucket.strip():
            raise ValueError("bucket must be a non-empty string")
        self._bucket = bucket
        self._endpoint_url = endpoint_url
        self._key = key
        self._secret = secret
        self._region_name = region_name
        self._client_options = client_options or {}
        self._max_attempts = max_attempts
        self._fs_instance: Any = None

    @property
    def name(self) -> str:
        return "s3"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(bucket={self._bucket!r}, endpoint_url={self._endpoint_url!r})"

    # region: lazy filesystem

    @property
    def _fs(self) -> Any:
        if self._fs_instance is None:
            import s3fs  # type: ignore[import-untyped]

            opts: dict[str, Any] = dict(self._client_options)
            if self._endpoint_url is not None:
                opts["endpoint_url"] = self._endpoint_url
            if self._key is not None:
                opts["key"] = self._key
            if self._secret is not None:
                opts["secret"] = self._secret
            if self._region_name is not None:
                client_kwargs: dict[str, Any] = opts.setdefault("client_kwargs", {})
                client_kwargs["region_name"] = self._region_name
            opts.setdefault("anon", False)
            log.info("Opening %s filesystem for bucket %s", self.name, self._bucket)
            self._fs_instance = s3fs.S3FileSystem(**opts)
        return self._fs_instance

    def _call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run an idempotent s3fs call, retrying on connection failures."""
        from tenacity import (
            Retrying,
            before_sleep_log,
            retry_if_exception,
            stop_after_attempt,
            wait_exponential,
        )

        retrying = Retrying(
            retry=retry_if_exception(_is_transient),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            before_sleep=before_sleep_log(log, logging.WARNING),  # type: ignore[arg-type,unused-ignore]
            reraise=True,
        )
        return retrying(fn, *args, **kwargs)

    # endregion

    # region: path helpers

    def _s3_path(self, path: str) -> str:
        key = path.strip("/")
        if key:
            return f"{self._bucket}/{key}"
        return self._bucket

    def _rel_path(self, s3_path: str) -> str:
        prefix = f"{self._bucket}/"
        if s3_path.startswith(prefix):
            return s3_path[len(prefix) :]
        return s3_path

    # endregion

    # region: error mapping

    @contextmanager
    def _errors(self, path: str = "") -> Iterator[None]:
        """Map s3fs/botocore exceptions to ossify errors."""
        try:
            yield
        except OssifyError:
            raise
        except FileNotFoundError:
            raise NotFound(f"Not found: {path}", path=path, backend=self.name) from None
        except PermissionError:  # pragma: no cover -- moto doesn't raise PermissionError
            raise PermissionDenied(f"Permission denied: {path}", path=path, backend=self.name) from None
        except Exception as exc:
            raise self._classify_error(exc, path) from exc

    def _classify_error(self, exc: Exception, path: str) -> OssifyError:
        """Classify an unknown exception into an ossify error type."""
        if _is_transient(exc):
            return BackendUnavailable(str(exc), path=path, backend=self.name)
        msg = str(exc).lower()
        if "404" in msg or "nosuchkey" in msg or "nosuchbucket" in msg or "not found" in msg:
            return NotFound(f"Not found: {path}", path=path, backend=self.name)
        if "403" in msg or "accessdenied" in msg or "access denied" in msg:
            return PermissionDenied(f"Permission denied: {path}", path=path, backend=self.name)
        if any(kw in msg for kw in ("endpoint", "connect", "timeout", "dns", "name or service")):
            return BackendUnavailable(str(exc), path=path, backend=self.name)
        return OssifyError(str(exc), path=path, backend=self.name)

    # endregion

    # region: helpers

    @staticmethod
    def _is_marker(info: dict[str, Any]) -> bool:
        """Zero-byte ``dir/`` objects that only exist to mark a directory."""
        return str(info.get("name", "")).endswith("/") or str(info.get("Key", "")).endswith("/")

    def _info_to_entry(self, info: dict[str, Any], path: str) -> Entry:
        """Convert an s3fs info dict to an Entry."""
        if info.get("type") == "directory":
            key = path.strip("/")
            return Entry(path=f"{key}/" if key else "", kind=EntryKind.DIRECTORY)
        size = info.get("size", info.get("Size", 0)) or 0
        modified = info.get("LastModified", info.get("last_modified"))
        if isinstance(modified, str):
            modified = datetime.fromisoformat(modified)
        if modified is not None and modified.tzinfo is None:
            modified = modified.replace(tzinfo=timezone.utc)
        return Entry(path=path, kind=EntryKind.FILE, size=int(size), modified=modified)

    # endregion

    # region: listing and metadata

    def list(self, path: str) -> Iterator[Entry]:
        s3_path = self._s3_path(path)
        with self._errors(path):
            try:
                infos: list[dict[str, Any]] = self._call(self._fs.ls, s3_path, detail=True)
            except FileNotFoundError:
                return
        for info in infos:
            if self._is_marker(info):
                continue
            name = str(info["name"])
            if info.get("type") == "directory" and name.rstrip("/") == s3_path:
                continue
            yield self._info_to_entry(info, self._rel_path(name))

    def exists(self, path: str) -> bool:
        with self._errors(path):
            return bool(self._call(self._fs.exists, self._s3_path(path)))

    def stat(self, path: str) -> Entry:
        with self._errors(path):
            info = self._call(self._fs.info, self._s3_path(path))
            return self._info_to_entry(info, path.strip("/"))

    # endregion

    # region: read and write

    def read(self, path: str) -> bytes:
        with self._errors(path):
            return bytes(self._call(self._fs.cat_file, self._s3_path(path)))

    def open_writer(self, path: str) -> _S3Writer:
        with self._errors(path):
            handle = self._fs.open(self._s3_path(path), "wb")
        return _S3Writer(self, handle, path)

    def create_dir(self, path: str) -> None:
        key = path.strip("/")
        if not key:
            return
        with self._errors(path):
            self._call(self._fs.call_s3, "put_object", Bucket=self._bucket, Key=f"{key}/", Body=b"")
            self._fs.invalidate_cache(self._s3_path(path))

    # endregion

    # region: lifecycle

    def close(self) -> None:
        if self._fs_instance is not None:
            self._fs_instance.clear_instance_cache()
            self._fs_instance = None

    # endregion


class OSSBackend(S3Backend):
    """Alibaba Cloud OSS through its S3-compatible API.

    OSS only accepts virtual-hosted style requests. Without an explicit
    ``endpoint_url`` the public endpoint of ``region_name`` is used.

    :raises ValueError: If neither ``endpoint_url`` nor ``region_name`` is given.
    """

    def __init__(
        self,
        bucket: str,
        *,
        endpoint_url: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        region_name: str | None = None,
        client_options: dict[str, Any] | None = None,
        max_attempts: int = 3,
    ) -> None:
        if endpoint_url is None:
            if not region_name:
                raise ValueError("OSS requires endpoint_url or region_name")
            endpoint_url = oss_endpoint(region_name)
        options: dict[str, Any] = dict(client_options or {})
        config_kwargs: dict[str, Any] = options.setdefault("config_kwargs", {})
        config_kwargs.setdefault("s3", {"addressing_style": "virtual"})
        super().__init__(
            bucket,
            endpoint_url=endpoint_url,
            key=key,
            secret=secret,
            region_name=region_name,
            client_options=options,
            max_attempts=max_attempts,
        )

    @property
    def name(self) -> str:
        return "oss"


def oss_endpoint(region: str) -> str:
    """Public OSS endpoint for a region (``"cn-hangzhou"`` or ``"oss-cn-hangzhou"``)."""
    region = region.strip()
    if not region.startswith("oss-"):
        region = f"oss-{region}"
    return f"https://{region}.aliyuncs.com"
