"""Object storage feature.

Protocol and adapters for fetching the permission document.
"""

from .protocols import ObjectStorageProtocol, build_object_key
from .adapters import S3ObjectStorage, create_object_storage

__all__ = [
    "ObjectStorageProtocol",
    "build_object_key",
    "S3ObjectStorage",
    "create_object_storage",
]
