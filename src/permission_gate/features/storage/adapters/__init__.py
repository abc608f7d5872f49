"""Object storage adapters."""

from .s3_adapter import S3ObjectStorage, create_object_storage

__all__ = ["S3ObjectStorage", "create_object_storage"]
