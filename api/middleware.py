"""
Consolidated middleware and error handlers for the CountMe API
"""

import time
import logging
from datetime import datetime, timezone
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import CountMeError

logger = logging.getLogger("countme.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    elif isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj
    return str(obj)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_body(error: dict) -> dict:
    return {"success": False, "error": error, "timestamp": _timestamp()}


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log how long it took."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        logger.debug("Request started", extra=context)

        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            elapsed = time.perf_counter() - started
            logger.error(
                "Request failed after %.4fs: %s",
                elapsed,
                exc,
                extra=context,
                exc_info=True,
            )
            raise

        elapsed = time.perf_counter() - started
        logger.info(
            "%s %s -> %d (%.4fs)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
            extra=context,
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic request validation errors"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    return JSONResponse(
        status_code=422,
        content=error_body(
            {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": make_serializable(exc.errors()),
            }
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body({"code": f"HTTP_{exc.status_code}", "message": exc.detail}),
    )


async def countme_exception_handler(request: Request, exc: CountMeError):
    """Handle typed domain errors (validation, not found, tracker, API, parser)"""
    if exc.http_status >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url}: {exc.message}")
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.url}: {exc.message}")

    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(make_serializable(exc.to_dict())),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
            }
        ),
    )
