"""Configuration: config-as-code, from_dict(), and the cloud providers.

Demonstrates the ways to build a StorageConfig for OSS, S3/MinIO and the
local filesystem. Cloud backends connect lazily, so building them makes
no network call.
"""

from __future__ import annotations

import os
import tempfile

from ossify import Provider, StorageClient, StorageConfig, create_backend

if __name__ == "__main__":
    # --- Option 1: Config-as-code with the provider constructors ---
    oss = StorageConfig.oss(
        bucket="my-bucket",
        access_key_id=os.environ.get("OSS_ACCESS_KEY_ID", "example-id"),
        access_key_secret=os.environ.get("OSS_ACCESS_KEY_SECRET", "example-secret"),
        region="cn-hangzhou",
    )
    print(f"OSS config:   {oss}")
    print(f"OSS backend:  {create_backend(oss)!r}")

    minio = StorageConfig.s3(
        "my-bucket",
        "minioadmin",
        "minioadmin",
        endpoint="http://localhost:9000",
    )
    print(f"MinIO config: {minio}")

    # --- Option 2: from_dict(), e.g. loaded from TOML or JSON ---
    with tempfile.TemporaryDirectory() as tmp:
        raw = {"provider": "fs", "root_path": tmp}
        config = StorageConfig.from_dict(raw)
        assert config.provider is Provider.FS

        with StorageClient.from_config(config) as client:
            client.list_directory("/")
            print(f"\nfrom_dict() backend: {client.backend.name}")

    # --- Invalid configs are rejected before any backend is built ---
    try:
        StorageConfig.from_dict({"provider": "s3", "bucket": "b", "access_key_id": "only-half"})
    except ValueError as exc:
        print(f"Rejected: {exc}")
