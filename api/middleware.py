"""
Global middleware and exception handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from utils.errors import ServiceError, StoreError

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Time every request and report it in ``X-Process-Time``."""

    @app.middleware("http")
    async def timed_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        took = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{took:.4f}"
        logger.debug("%s %s %s in %.3fs", request.method, request.url.path, response.status_code, took)
        return response


def register_exception_handlers(app: FastAPI) -> None:
    """Render ``ServiceError`` subclasses as JSON or plain text."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> Response:
        if isinstance(exc, StoreError):
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc.__cause__,
            )
        if exc.as_json:
            return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
        return PlainTextResponse(exc.message, status_code=exc.status_code)
