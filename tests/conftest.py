"""Pytest configuration and fixtures for permission-gate tests."""

import asyncio
import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from permission_gate.core.exceptions import FetchError
from permission_gate.features.permissions import PermissionStore


def make_document(*records: Dict[str, Any]) -> bytes:
    """Encode permission records as a permission document."""
    return json.dumps(list(records)).encode("utf-8")


def make_record(
    name: str,
    app: str = "any",
    default_value: bool = True,
    overrides: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """Build one permission record in wire format."""
    record: Dict[str, Any] = {
        "permission": {"name": name, "app": app, "defaultValue": default_value}
    }
    if overrides is not None:
        record["overrides"] = overrides
    return record


class FakeStorage:
    """In-memory object storage returning queued payloads.

    Each fetch pops the next response; the last one is repeated. A response
    may be bytes, an exception to raise, or a (delay, bytes) tuple.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: List[tuple] = []
        self.started = asyncio.Event()

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def fetch(self, bucket: str, key: str) -> bytes:
        self.calls.append((bucket, key))
        self.started.set()

        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, tuple):
            delay, response = response
            await asyncio.sleep(delay)
        if isinstance(response, BaseException):
            raise response
        return response


class BlockingStorage:
    """Object storage whose fetch waits until released."""

    def __init__(self, payload: bytes):
        self.payload = payload
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def fetch(self, bucket: str, key: str) -> bytes:
        self.started.set()
        await self.release.wait()
        return self.payload


@pytest.fixture
def mock_logger():
    """Logger double recording error/warning/info calls."""
    return MagicMock()


@pytest.fixture
def sample_document():
    """Document with one permission of app 'A' and one of another app."""
    return make_document(
        make_record("one", app="A", default_value=True, overrides=[{"userId": "u1", "active": False}]),
        make_record("one", app="B", default_value=False),
        make_record("other-app-only", app="B", default_value=True),
    )


@pytest.fixture
def store_factory(mock_logger):
    """Build permission stores and uninstall them after the test."""
    stores: List[PermissionStore] = []

    def _create(storage, app: str = "A", **kwargs) -> PermissionStore:
        kwargs.setdefault("logger", mock_logger)
        store = PermissionStore(
            app=app,
            bucket="bucket",
            object_key="STAGE/file.json",
            storage=storage,
            **kwargs
        )
        stores.append(store)
        return store

    yield _create

    for store in stores:
        store.uninstall()


def fetch_error(message: str = "Access Denied") -> FetchError:
    """FetchError as raised by the S3 adapter."""
    return FetchError(message, bucket="bucket", key="STAGE/file.json")
