"""
Custom exception handlers for FastAPI.

Security:
- Request IDs are logged server-side for tracing but NOT exposed to clients
- Generic error messages for 500 errors to prevent information disclosure
"""

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm.exc import StaleDataError

from devconnector.exceptions import (
    ConcurrentUpdateError,
    DevConnectorError,
    RequestValidationFailed,
)
from devconnector.logging import get_logger

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    """
    Get the current request ID from context.

    Used for server-side logging only - NOT exposed to clients.
    """
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _response_payload(detail: str, status_code: int) -> dict:
    """
    Create error response payload.

    Security: Does NOT include request_id to prevent information disclosure.
    """
    return {
        "detail": detail,
        "status_code": status_code,
    }


def _request_error_items(exc: RequestValidationError) -> list[dict]:
    """Flatten FastAPI's validation errors into {msg, param, location} items."""
    items = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        items.append({
            "msg": error.get("msg", "Invalid value"),
            "param": loc[-1] if len(loc) > 1 else None,
            "location": loc[0] if loc else None,
        })
    return items


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationFailed)
    async def validation_failed_handler(request: Request, exc: RequestValidationFailed):
        logger.info(
            "validation_failed",
            errors=[error["msg"] for error in exc.errors],
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                **_response_payload(exc.detail, exc.status_code),
                "errors": exc.errors,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = _request_error_items(exc)
        logger.info("request_malformed", errors=errors, request_id=_get_request_id())
        return JSONResponse(
            status_code=400,
            content={
                **_response_payload("Validation error", 400),
                "errors": errors,
            },
        )

    @app.exception_handler(DevConnectorError)
    async def domain_exception_handler(request: Request, exc: DevConnectorError):
        logger.warning(
            "domain_error",
            error_type=type(exc).__name__,
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(exc.detail, exc.status_code),
        )

    @app.exception_handler(StaleDataError)
    async def stale_data_handler(request: Request, exc: StaleDataError):
        conflict = ConcurrentUpdateError()
        logger.warning("concurrent_update", error=str(exc), request_id=_get_request_id())
        return JSONResponse(
            status_code=conflict.status_code,
            content=_response_payload(conflict.detail, conflict.status_code),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # Log full details server-side (including request_id for tracing)
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=500,
            content=_response_payload("Internal server error", 500),
        )
