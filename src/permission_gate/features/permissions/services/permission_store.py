"""
Polling permission store.

Keeps an in-memory snapshot of one application's permissions, refreshed
from object storage on a fixed interval, and answers allow/deny queries
against it without awaiting anything.

Refreshes are not serialized: when the interval is shorter than the fetch
latency several fetches can be in flight at once. Each dispatched refresh
takes a sequence number and a completion older than the last applied one
is discarded, so a slow early fetch never overwrites a newer snapshot.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Optional, Set, Tuple

from ....config.constants import DEFAULT_UPDATE_INTERVAL_SECONDS
from ....core.exceptions import FetchError, ParseError
from ...storage.protocols import ObjectStorageProtocol
from ..entities import EMPTY_SNAPSHOT, PermissionSnapshot
from .document_parser import load_snapshot


class PermissionStore:
    """
    Eventually consistent permission snapshot for a single application.

    The snapshot is an immutable mapping replaced by a single reference
    assignment on every successful refresh. Readers see either the old or
    the new snapshot, never a mix.
    """

    def __init__(
        self,
        app: str,
        bucket: str,
        object_key: str,
        storage: ObjectStorageProtocol,
        update_interval: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        on_update: Optional[Callable[[], Any]] = None
    ):
        """
        Initialize permission store.

        Args:
            app: Application whose permissions are cached
            bucket: Bucket holding the permission document
            object_key: Key of the permission document
            storage: Object storage used to fetch the document
            update_interval: Seconds between refreshes, falsy or negative means 60
            logger: Logger receiving error/warning/info records
            on_update: Callable (or coroutine function) scheduled after each applied refresh
        """
        self.app = app
        self.bucket = bucket
        self.object_key = object_key
        self.storage = storage
        if not update_interval or update_interval <= 0:
            update_interval = DEFAULT_UPDATE_INTERVAL_SECONDS
        self.update_interval = update_interval
        self.logger = logger or logging.getLogger(__name__)
        self.on_update = on_update

        self._snapshot: PermissionSnapshot = EMPTY_SNAPSHOT

        # Lifecycle
        self._poll_task: Optional[asyncio.Task] = None
        self._immediate_refresh: Optional[asyncio.Handle] = None
        self._installation = 0

        # Ordering of overlapping refreshes
        self._dispatched_sequence = 0
        self._applied_sequence = 0

        # Strong references to fire-and-forget tasks
        self._background_tasks: Set[asyncio.Task] = set()

    @property
    def installed(self) -> bool:
        """Check if the polling loop is running."""
        return self._poll_task is not None

    @property
    def snapshot(self) -> PermissionSnapshot:
        """Current immutable snapshot."""
        return self._snapshot

    def install(self) -> None:
        """
        Start polling.

        Schedules an immediate refresh on the next loop iteration and a
        recurring refresh every ``update_interval`` seconds. Installing an
        installed store only logs a warning.

        Raises:
            RuntimeError: If no event loop is running
        """
        if self.installed:
            self.logger.warning("Permission client installed twice, ignoring")
            return

        loop = asyncio.get_running_loop()
        self._installation += 1
        self._immediate_refresh = loop.call_soon(self._dispatch_refresh)
        self._poll_task = loop.create_task(self._poll())
        self.logger.debug(
            f"Installed permission store for app '{self.app}' "
            f"polling s3://{self.bucket}/{self.object_key} every {self.update_interval}s"
        )

    def uninstall(self) -> None:
        """
        Stop polling.

        Fetches already in flight are not cancelled, but their results are
        discarded. Safe to call when not installed.
        """
        if self._immediate_refresh is not None:
            self._immediate_refresh.cancel()
            self._immediate_refresh = None

        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None
            self._installation += 1
            self.logger.debug(f"Uninstalled permission store for app '{self.app}'")

    def value(self, permission_name: str, user_id: Optional[str] = None) -> bool:
        """
        Check a permission for a user against the current snapshot.

        Args:
            permission_name: Permission name
            user_id: User identifier (email)

        Returns:
            The user's override if present, otherwise the permission's
            default value. Unknown permissions are denied.
        """
        entry = self._snapshot.get(permission_name)
        if entry is None:
            self.logger.error(
                f"Permission '{permission_name}' does not exist for app '{self.app}'",
                extra={"details": {"permission": permission_name, "app": self.app}}
            )
            return False
        return entry.resolve(user_id)

    def get_stored(self) -> Dict[str, Dict[str, Any]]:
        """Current snapshot as plain data."""
        return {name: entry.to_dict() for name, entry in self._snapshot.items()}

    async def refresh(self) -> bool:
        """
        Fetch, parse and apply the permission document once.

        Failures are logged and leave the current snapshot untouched.

        Returns:
            True if a new snapshot was applied
        """
        return await self._refresh(*self._claim_refresh())

    def _claim_refresh(self) -> Tuple[int, int]:
        self._dispatched_sequence += 1
        return self._dispatched_sequence, self._installation

    async def _refresh(self, sequence: int, installation: int) -> bool:
        try:
            payload = await self.storage.fetch(self.bucket, self.object_key)
        except FetchError as e:
            self.logger.error(f"Error from S3.getObject: {e}")
            return False
        except Exception as e:
            self.logger.error(
                f"Error fetching s3://{self.bucket}/{self.object_key}: "
                f"{type(e).__name__}: {e}"
            )
            return False

        try:
            snapshot = load_snapshot(payload, self.app)
        except ParseError as e:
            self.logger.error("Invalid JSON from permission bucket")
            self.logger.debug(f"Permission document rejected: {e.details.get('reason')}")
            return False

        if installation != self._installation:
            self.logger.debug(f"Discarding refresh #{sequence} completed after uninstall")
            return False

        if sequence < self._applied_sequence:
            self.logger.debug(
                f"Discarding stale refresh #{sequence}, "
                f"refresh #{self._applied_sequence} already applied"
            )
            return False

        self._snapshot = snapshot
        self._applied_sequence = sequence
        self.logger.debug(f"Applied {len(snapshot)} permissions for app '{self.app}'")

        self._schedule_update_callback()
        return True

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self.update_interval)
            self._dispatch_refresh()

    def _dispatch_refresh(self) -> None:
        self._immediate_refresh = None
        self._spawn(self._refresh(*self._claim_refresh()))

    def _spawn(self, coroutine) -> None:
        task = asyncio.get_running_loop().create_task(coroutine)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    def _schedule_update_callback(self) -> None:
        if self.on_update is None:
            return
        asyncio.get_running_loop().call_soon(self._run_update_callback)

    def _run_update_callback(self) -> None:
        try:
            result = self.on_update()
            if inspect.isawaitable(result):
                self._spawn(self._await_update_callback(result))
        except Exception as e:
            self.logger.warning(f"Permission update callback failed: {e}")

    async def _await_update_callback(self, awaitable) -> None:
        try:
            await awaitable
        except Exception as e:
            self.logger.warning(f"Permission update callback failed: {e}")
