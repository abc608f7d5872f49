"""Object storage protocols for permission-gate."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ObjectStorageProtocol(Protocol):
    """Anything that can fetch a named object from a named bucket."""

    async def fetch(self, bucket: str, key: str) -> bytes:
        """Fetch the raw bytes of an object.

        Raises:
            FetchError: If the object cannot be retrieved
        """
        ...


def build_object_key(prefix: str, file_name: str) -> str:
    """Join a key prefix and file name with '/', collapsing runs of slashes."""
    key = f"{prefix}/{file_name}"
    while "//" in key:
        key = key.replace("//", "/")
    return key
