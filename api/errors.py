"""
Exception handlers translating service errors into JSON envelopes.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.exceptions import ServiceError, UnauthorizedError
from utils.schemas import ApiResponse

logger = logging.getLogger(__name__)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ``ServiceError`` with its own status code and message."""
    logger.debug(
        "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse(success=False, message=exc.message).model_dump(mode="json"),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
