"""
Permission gate for FastAPI applications.

A gate owns one PermissionStore and hands out route dependencies, one per
required permission name::

    permissions = create_permission_gate(get_settings())
    app = FastAPI(lifespan=permissions.lifespan)

    @app.get("/reports", dependencies=[Depends(permissions("reports:view"))])
    async def list_reports(): ...

A dependency returns normally when the request's user holds the
permission. Otherwise it raises ``HTTPException(403)`` (``send_status``
mode, the default) or ``Unauthorized`` for the host's exception handlers.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, Dict, Mapping, NoReturn, Optional

from fastapi import HTTPException, Request, status
from pydantic import ValidationError

from ...config.constants import (
    INVALID_S3_MESSAGE,
    INVALID_SETTINGS_MESSAGE,
    INVALID_STORAGE_MESSAGE,
    MISSING_APP_MESSAGE,
    MISSING_USER_MESSAGE,
    NOT_AUTHORIZED_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
)
from ...config.settings import PermissionGateSettings, get_settings
from ...core.exceptions import ConfigurationError, Unauthorized
from ...features.permissions import PermissionStore
from ...features.storage import build_object_key, create_object_storage


PermissionDependency = Callable[[Request], Awaitable[None]]
IdentityGetter = Callable[[Request], Optional[str]]


def get_request_identity(request: Request) -> Optional[str]:
    """
    Read the user's email from ``request.state.user``.

    The user set by an authentication middleware may be a mapping or an
    object with an ``email`` attribute. Missing or empty values mean no
    identity.
    """
    user = getattr(request.state, "user", None)
    if user is None:
        return None
    if isinstance(user, Mapping):
        email = user.get("email")
    else:
        email = getattr(user, "email", None)
    return email or None


def _has_running_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class PermissionGate:
    """
    Factory of permission dependencies backed by one PermissionStore.

    Built outside a running event loop (module level, before the app
    starts), the gate starts polling from its lifespan or on the first
    checked request. Until the first refresh lands every check is denied.
    """

    def __init__(
        self,
        store: PermissionStore,
        send_status: bool = True,
        logger: Optional[logging.Logger] = None,
        identity_getter: Optional[IdentityGetter] = None
    ):
        """
        Initialize permission gate.

        Args:
            store: Permission store answering the checks
            send_status: Deny with a 403 response instead of raising Unauthorized
            logger: Logger receiving warning/info records
            identity_getter: Extracts the user identity from a request
        """
        self.store = store
        self.send_status = send_status
        self.logger = logger or logging.getLogger(__name__)
        self.identity_getter = identity_getter or get_request_identity
        self._disposed = False

    def __call__(self, permission: str) -> PermissionDependency:
        """Create the dependency that requires ``permission``."""

        async def check_permission(request: Request) -> None:
            self._ensure_installed()

            identity = self.identity_getter(request)
            if not identity:
                self.logger.warning(MISSING_USER_MESSAGE)
                self._deny(MISSING_USER_MESSAGE, permission)

            if self.store.value(permission, identity):
                return

            self.logger.info(f"User is not authorized to access permission {permission}")
            self._deny(NOT_AUTHORIZED_MESSAGE, permission)

        check_permission.__name__ = f"require_{permission}"
        return check_permission

    def install(self) -> None:
        """Start polling if the store is not already running."""
        self._disposed = False
        if not self.store.installed:
            self.store.install()

    def dispose(self) -> None:
        """Stop polling. Safe to call repeatedly."""
        self._disposed = True
        self.store.uninstall()

    def get_stored(self) -> Dict[str, Dict[str, Any]]:
        """Permissions currently cached by the store."""
        return self.store.get_stored()

    @asynccontextmanager
    async def lifespan(self, app: Any = None):
        """FastAPI lifespan: poll while the application is running."""
        self.install()
        try:
            yield
        finally:
            self.dispose()

    def _ensure_installed(self) -> None:
        if not self._disposed and not self.store.installed:
            self.store.install()

    def _deny(self, message: str, permission: str) -> NoReturn:
        if self.send_status:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        raise Unauthorized(message, permission=permission)


class InvalidPermissionGate:
    """
    Gate returned for an incomplete configuration.

    Every dependency it creates raises ConfigurationError, so a
    misconfigured service denies everything instead of allowing it.
    """

    def __init__(self, reason: str):
        self.reason = reason

    def __call__(self, permission: str) -> PermissionDependency:
        reason = self.reason

        async def reject_request(request: Request) -> None:
            raise ConfigurationError(
                NOT_CONFIGURED_MESSAGE,
                details={"reason": reason, "permission": permission}
            )

        return reject_request

    def install(self) -> None:
        pass

    def dispose(self) -> None:
        pass

    def get_stored(self) -> Dict[str, Dict[str, Any]]:
        return {}

    @asynccontextmanager
    async def lifespan(self, app: Any = None):
        yield


def create_permission_gate(
    settings: Optional[PermissionGateSettings] = None,
    *,
    storage_client: Optional[Any] = None,
    logger: Optional[logging.Logger] = None,
    on_update: Optional[Callable[[], Any]] = None,
    identity_getter: Optional[IdentityGetter] = None,
    **overrides: Any
):
    """
    Create a permission gate from settings.

    Args:
        settings: Gate settings, read from the environment when omitted
        storage_client: Object storage or boto3-style S3 client to use
        logger: Logger for the gate and its store
        on_update: Called after every applied refresh
        identity_getter: Extracts the user identity from a request
        **overrides: Settings fields overriding ``settings``

    Returns:
        A live PermissionGate, or an InvalidPermissionGate when the
        settings are invalid, the application name or S3 location is
        missing, or the storage client is unusable
    """
    log = logger or logging.getLogger(__name__)

    try:
        if settings is None:
            settings = get_settings()
        if overrides:
            settings = type(settings).model_validate({**settings.model_dump(), **overrides})
    except ValidationError as e:
        log.error(f"{INVALID_SETTINGS_MESSAGE}: {e}")
        return InvalidPermissionGate(INVALID_SETTINGS_MESSAGE)

    if not settings.app:
        log.error(MISSING_APP_MESSAGE)
        return InvalidPermissionGate(MISSING_APP_MESSAGE)

    if not settings.has_s3_location:
        log.error(INVALID_S3_MESSAGE)
        return InvalidPermissionGate(INVALID_S3_MESSAGE)

    try:
        storage = create_object_storage(
            storage_client,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url
        )
    except TypeError as e:
        log.error(f"{INVALID_STORAGE_MESSAGE}: {e}")
        return InvalidPermissionGate(INVALID_STORAGE_MESSAGE)

    store = PermissionStore(
        app=settings.app,
        bucket=settings.s3_bucket,
        object_key=build_object_key(settings.s3_bucket_prefix, settings.s3_permissions_file),
        storage=storage,
        update_interval=settings.update_interval,
        logger=logger,
        on_update=on_update
    )
    gate = PermissionGate(
        store,
        send_status=settings.send_status,
        logger=logger,
        identity_getter=identity_getter
    )

    if _has_running_loop():
        store.install()
    else:
        log.debug(f"No running event loop, permission polling for '{settings.app}' starts with the app")

    return gate
