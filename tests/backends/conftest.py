"""Backend test fixtures, parameterized over every provider that can run locally.

Backends are built through ``create_backend`` so the provider dispatch is
exercised the same way ``StorageClient.from_config`` uses it.
"""

from __future__ import annotations

import importlib.util
import socket
import tempfile
import uuid
from typing import TYPE_CHECKING

import pytest

from ossify._config import StorageConfig
from ossify._registry import create_backend

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ossify._backend import Backend

REGION = "us-east-1"
ACCESS_KEY = "testing"

_S3_STACK = ("boto3", "moto", "s3fs", "tenacity")
S3_STACK_INSTALLED = all(importlib.util.find_spec(name) is not None for name in _S3_STACK)


def _unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])


@pytest.fixture(scope="session")
def moto_server() -> Iterator[str | None]:
    """Endpoint of a moto S3 server shared by the whole session.

    Server mode keeps s3fs talking real HTTP, which in-process
    ``mock_aws()`` patching does not support for aiobotocore.
    """
    if not S3_STACK_INSTALLED:
        yield None
        return
    from moto.moto_server.threaded_moto_server import ThreadedMotoServer

    port = _unused_port()
    server = ThreadedMotoServer(ip_address="127.0.0.1", port=port, verbose=False)
    server.start()
    yield f"http://127.0.0.1:{port}"
    server.stop()


@pytest.fixture
def s3_bucket(moto_server: str | None) -> str:
    """Create an empty, uniquely named bucket and return its name."""
    import boto3

    if moto_server is None:
        pytest.skip("moto/s3fs not installed")
    name = f"ossify-{uuid.uuid4().hex[:10]}"
    boto3.client(
        "s3",
        endpoint_url=moto_server,
        aws_access_key_id=ACCESS_KEY,
        aws_secret_access_key=ACCESS_KEY,
        region_name=REGION,
    ).create_bucket(Bucket=name)
    return name


@pytest.fixture(
    params=[
        "fs",
        pytest.param("s3", marks=pytest.mark.skipif(not S3_STACK_INSTALLED, reason="moto/s3fs not installed")),
    ]
)
def backend(request: pytest.FixtureRequest) -> Iterator[Backend]:
    """One backend per provider, empty at the start of each test."""
    if request.param == "fs":
        with tempfile.TemporaryDirectory() as tmp:
            with create_backend(StorageConfig.fs(tmp)) as local:
                yield local
        return
    endpoint = request.getfixturevalue("moto_server")
    config = StorageConfig.s3(
        request.getfixturevalue("s3_bucket"),
        ACCESS_KEY,
        ACCESS_KEY,
        region=REGION,
        endpoint=endpoint,
    )
    with create_backend(config) as remote:
        yield remote
