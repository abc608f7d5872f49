"""Exception handlers for permission-gate errors in FastAPI applications."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ...core.exceptions import (
    AuthorizationError,
    PermissionGateError,
    create_error_response,
    get_http_status_code,
)

logger = logging.getLogger(__name__)


async def permission_error_handler(request: Request, exc: PermissionGateError) -> JSONResponse:
    """Render a permission-gate exception as a JSON error response."""
    status_code = get_http_status_code(exc)

    if isinstance(exc, AuthorizationError):
        logger.warning(f"{exc.__class__.__name__} for {request.url.path}: {exc.message}")
    else:
        logger.error(f"{exc.__class__.__name__} for {request.url.path}: {exc.message}")

    return JSONResponse(status_code=status_code, content=create_error_response(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Register JSON handlers for permission-gate exceptions on ``app``."""
    app.add_exception_handler(PermissionGateError, permission_error_handler)
