"""Provider dispatch: builds the concrete backend for a ``StorageConfig``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from ossify._config import Provider, StorageConfig

if TYPE_CHECKING:
    from ossify._backend import Backend

log = logging.getLogger(__name__)

BackendFactory = Callable[[StorageConfig], "Backend"]

# Global factory registry: maps providers to backend builders.
_BACKEND_FACTORIES: dict[Provider, BackendFactory] = {}


def register_backend(provider: Provider, factory: BackendFactory) -> None:
    """Register (or replace) the backend builder for a provider.

    :param provider: The provider the factory serves.
    :param factory: Callable turning a validated config into a backend.
    """
    _BACKEND_FACTORIES[provider] = factory


def _build_local(config: StorageConfig) -> Backend:
    from ossify.backends._local import LocalBackend

    assert config.root_path is not None
    return LocalBackend(root=config.root_path)


def _build_s3(config: StorageConfig) -> Backend:
    from ossify.backends._s3 import S3Backend

    assert config.credentials is not None
    return S3Backend(
        bucket=config.bucket,
        endpoint_url=config.endpoint,
        key=config.credentials.access_key_id,
        secret=config.credentials.access_key_secret,
        region_name=config.region,
    )


def _build_oss(config: StorageConfig) -> Backend:
    from ossify.backends._s3 import OSSBackend

    assert config.credentials is not None
    return OSSBackend(
        bucket=config.bucket,
        endpoint_url=config.endpoint,
        key=config.credentials.access_key_id,
        secret=config.credentials.access_key_secret,
        region_name=config.region,
    )


def _register_builtin_backends() -> None:
    """Register the built-in backends without overriding custom ones."""
    for provider, factory in (
        (Provider.FS, _build_local),
        (Provider.S3, _build_s3),
        (Provider.OSS, _build_oss),
    ):
        _BACKEND_FACTORIES.setdefault(provider, factory)


def create_backend(config: StorageConfig) -> Backend:
    """Validate ``config`` and build its backend.

    No network call is made here; cloud backends connect lazily.

    :raises ValueError: If the config is malformed or no factory is registered.
    """
    _register_builtin_backends()
    config.validate()
    factory = _BACKEND_FACTORIES.get(config.provider)
    if factory is None:  # pragma: no cover -- all enum members have builtins
        raise ValueError(f"No backend registered for provider {config.provider.value!r}")
    backend = factory(config)
    log.debug("Created %s backend for bucket %r", backend.name, config.bucket)
    return backend
