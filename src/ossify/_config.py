"""Configuration model: immutable descriptions of how to reach a backend."""

from __future__ import annotations

import dataclasses
import enum


class Provider(enum.Enum):
    """Supported storage providers."""

    OSS = "oss"
    S3 = "s3"
    FS = "fs"

    @classmethod
    def parse(cls, name: str) -> Provider:
        """Parse a provider name (case-insensitive; ``"minio"`` means S3).

        :raises ValueError: If the name is not a known provider.
        """
        key = name.strip().lower()
        if key == "minio":
            return cls.S3
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unsupported storage provider: {name!r}. Supported: {sorted(p.value for p in cls)} (or 'minio')"
            ) from None


@dataclasses.dataclass(frozen=True)
class Credentials:
    """Access key pair for a cloud provider.

    :param access_key_id: Access key ID.
    :param access_key_secret: Secret access key. Masked in ``repr``.
    """

    access_key_id: str
    access_key_secret: str = dataclasses.field(repr=False)


@dataclasses.dataclass(frozen=True)
class StorageConfig:
    """Describes how to reach one storage backend.

    Construction never validates reachability; that happens on the first
    backend call. :meth:`validate` only checks that the fields fit the
    provider.

    :param provider: Storage provider.
    :param bucket: Bucket/container name. A placeholder for ``FS``.
    :param credentials: Key pair, for cloud providers only.
    :param endpoint: Custom endpoint URL (e.g. MinIO, OSS region endpoint).
    :param region: Provider region.
    :param root_path: Filesystem root, for ``FS`` only.
    """

    provider: Provider
    bucket: str
    credentials: Credentials | None = None
    endpoint: str | None = None
    region: str | None = None
    root_path: str | None = None

    @classmethod
    def oss(
        cls,
        bucket: str,
        access_key_id: str,
        access_key_secret: str,
        region: str | None = None,
        endpoint: str | None = None,
    ) -> StorageConfig:
        """Alibaba Cloud OSS configuration."""
        return cls(
            provider=Provider.OSS,
            bucket=bucket,
            credentials=Credentials(access_key_id, access_key_secret),
            endpoint=endpoint,
            region=region,
        )

    @classmethod
    def s3(
        cls,
        bucket: str,
        access_key_id: str,
        secret_access_key: str,
        region: str | None = None,
        endpoint: str | None = None,
    ) -> StorageConfig:
        """Amazon S3 (or S3-compatible) configuration."""
        return cls(
            provider=Provider.S3,
            bucket=bucket,
            credentials=Credentials(access_key_id, secret_access_key),
            endpoint=endpoint,
            region=region,
        )

    @classmethod
    def fs(cls, root_path: str) -> StorageConfig:
        """Local filesystem configuration rooted at ``root_path``."""
        return cls(provider=Provider.FS, bucket="local", root_path=root_path)

    def validate(self) -> None:
        """Check that the fields are well-formed for the provider.

        :raises ValueError: If a required field is missing or a field does
            not belong to the provider.
        """
        if self.provider is Provider.FS:
            if not self.root_path:
                raise ValueError("Provider 'fs' requires root_path")
            if self.credentials is not None:
                raise ValueError("Provider 'fs' does not take credentials")
            return
        if not self.bucket or not self.bucket.strip():
            raise ValueError(f"Provider {self.provider.value!r} requires a non-empty bucket")
        if self.credentials is None:
            raise ValueError(f"Provider {self.provider.value!r} requires credentials")
        if self.root_path is not None:
            raise ValueError(f"root_path is only meaningful for provider 'fs', not {self.provider.value!r}")

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> StorageConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        Recognized keys: ``provider`` (required), ``bucket``,
        ``access_key_id``, ``access_key_secret``, ``endpoint``, ``region``,
        ``root_path``.

        :raises KeyError: If ``provider`` is missing.
        :raises ValueError: If ``provider`` is unknown.
        """
        provider = Provider.parse(str(data["provider"]))
        key_id = data.get("access_key_id")
        secret = data.get("access_key_secret")
        if (key_id is None) != (secret is None):
            msg = "access_key_id and access_key_secret must be given together"
            raise ValueError(msg)
        credentials = Credentials(str(key_id), str(secret)) if key_id is not None else None
        default_bucket = "local" if provider is Provider.FS else ""
        return cls(
            provider=provider,
            bucket=str(data.get("bucket", default_bucket)),
            credentials=credentials,
            endpoint=_optional_str(data.get("endpoint")),
            region=_optional_str(data.get("region")),
            root_path=_optional_str(data.get("root_path")),
        )


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
