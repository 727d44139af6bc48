"""Backend implementations.

The S3 and OSS backends import ``s3fs`` lazily, on first use; install the
``s3`` extra to use them.
"""

from ossify.backends._local import LocalBackend
from ossify.backends._s3 import OSSBackend, S3Backend

__all__ = ["LocalBackend", "S3Backend", "OSSBackend"]
