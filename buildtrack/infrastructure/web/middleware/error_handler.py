"""
Error handling for the FastAPI application.
Formats uncaught exceptions, request validation failures and HTTP errors
into the JSON bodies clients expect.
"""

import logging
import traceback
from typing import Any, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status
from fastapi.exceptions import RequestValidationError, HTTPException

from buildtrack.config import settings

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Log the failure and answer with a generic server error.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response = self.format_error_response(exc)

        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response
        )

    def format_error_response(self, exc: Exception) -> Dict[str, Any]:
        return {
            "message": "Server error",
            "error": str(exc) or type(exc).__name__
        }


def _field_name(loc) -> str:
    # First element is the request part (body, query, path)
    parts = [str(part) for part in loc[1:] if not isinstance(part, int)]
    return ".".join(parts) if parts else str(loc[0])


def format_validation_error(exc: RequestValidationError) -> str:
    """
    Reduce pydantic errors to a single client-facing message.
    The first error wins.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    error_type = error.get("type", "")
    field = _field_name(error.get("loc", ("body",)))

    if error_type == "missing":
        return f"Missing required field: {field}"
    if error_type == "json_invalid":
        return "Invalid JSON"
    if error_type == "value_error":
        ctx_error = error.get("ctx", {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
    return f"Invalid value for {field}"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are client errors with a single message."""
    message = format_validation_error(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message}
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Dict details are sent as the body; plain strings are wrapped in a message."""
    content = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None)
    )
