"""
Error handler middleware for the time tracking API.
Turns exceptions that escape a router into JSON error responses.
"""

import json
import logging
import traceback
from typing import Any, Dict, Tuple

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import settings
from app.domain.models.base import DomainException, ValidationError, EntityNotFoundError, StorageError

logger = logging.getLogger(__name__)


# Checked in order, so subclasses come before DomainException
EXCEPTION_RESPONSES: Tuple[Tuple[type, str, int], ...] = (
    (ValidationError, "Validation Error", status.HTTP_422_UNPROCESSABLE_ENTITY),
    (EntityNotFoundError, "Not Found", status.HTTP_404_NOT_FOUND),
    (StorageError, "Service Unavailable", status.HTTP_503_SERVICE_UNAVAILABLE),
    (DomainException, "Bad Request", status.HTTP_400_BAD_REQUEST),
)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Catch exceptions raised while handling a request.

    Domain exceptions keep their message and code; anything unexpected is
    logged with its traceback and answered with a generic 500.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return self.handle_exception(request, exc)

    def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        body = self.format_error_response(exc)

        if body["status_code"] >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}",
                exc_info=True,
            )
        else:
            logger.warning(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")

        if settings.debug:
            body["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n"),
            }

        return JSONResponse(status_code=body["status_code"], content=body)

    def format_error_response(self, exc: Exception) -> Dict[str, Any]:
        """Build the {error, message, status_code} body for an exception."""
        if isinstance(exc, DomainException):
            for exc_type, error, status_code in EXCEPTION_RESPONSES:
                if isinstance(exc, exc_type):
                    break
            body = {"error": error, "message": exc.message, "status_code": status_code, "code": exc.code}
            field = getattr(exc, "field", None)
            if field:
                body["field"] = field
            return body

        if isinstance(exc, json.JSONDecodeError):
            return {
                "error": "Invalid JSON",
                "message": "The request body contains invalid JSON",
                "status_code": status.HTTP_400_BAD_REQUEST,
            }

        return {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
        }
