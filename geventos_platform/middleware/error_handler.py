"""
Error handling middleware and exception handlers for the GEventos platform.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as SQLTimeoutError
from pydantic import ValidationError as PydanticValidationError

from ..utils.exceptions import (
    GeventosError,
    ErrorCode,
    ValidationError,
    NotFoundError,
    AuthenticationError,
    AuthorizationError,
    BusinessLogicError,
    ExternalServiceError,
)

logger = logging.getLogger(__name__)

STATUS_MAP = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.VENUE_IN_USE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AREA_NOT_IN_VENUE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TICKET_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONCURRENCY_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.OPTIMISTIC_LOCK_FAILURE: status.HTTP_409_CONFLICT,
    ErrorCode.EXTERNAL_SERVICE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INTEGRITY_FAULT: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _envelope(error: GeventosError, error_id: str) -> Dict[str, Any]:
    return {
        "error": error.to_dict(),
        "error_id": error_id,
        "timestamp": _timestamp()
    }


def _field_errors(errors) -> Dict[str, list]:
    field_errors: Dict[str, list] = {}
    for error in errors:
        field_path = ".".join(str(loc) for loc in error["loc"])
        field_errors.setdefault(field_path, []).append(error["msg"])
    return field_errors


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as 400 with the error envelope."""
    error_id = str(uuid4())
    validation_error = ValidationError(
        "Request validation failed",
        field_errors=_field_errors(exc.errors())
    )
    logger.warning(
        f"Client error [{error_id}]: {validation_error.message}",
        extra={
            "error_id": error_id,
            "error_code": validation_error.error_code.value,
            "path": request.url.path,
            "details": validation_error.details
        }
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(validation_error, error_id)
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware that turns escaping exceptions into structured error responses."""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        error_id = str(uuid4())

        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc, error_id)

    def _handle_exception(self, request: Request, exc: Exception, error_id: str) -> JSONResponse:
        self._log_error(request, exc, error_id)

        if isinstance(exc, GeventosError):
            return self._handle_geventos_error(exc, error_id)
        elif isinstance(exc, PydanticValidationError):
            return self._handle_validation_error(exc, error_id)
        elif isinstance(exc, IntegrityError):
            return self._handle_integrity_error(exc, error_id)
        elif isinstance(exc, (OperationalError, SQLTimeoutError)):
            return self._handle_database_error(exc, error_id)
        return self._handle_unexpected_error(exc, error_id)

    def _handle_geventos_error(self, exc: GeventosError, error_id: str) -> JSONResponse:
        headers = {}
        if exc.retry_after:
            headers["Retry-After"] = str(exc.retry_after)

        return JSONResponse(
            status_code=STATUS_MAP.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR),
            content=_envelope(exc, error_id),
            headers=headers
        )

    def _handle_validation_error(self, exc: PydanticValidationError, error_id: str) -> JSONResponse:
        validation_error = ValidationError(
            "Validation failed",
            field_errors=_field_errors(exc.errors())
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_envelope(validation_error, error_id)
        )

    def _handle_integrity_error(self, exc: IntegrityError, error_id: str) -> JSONResponse:
        error_message = str(exc.orig).lower() if exc.orig is not None else str(exc).lower()

        if "unique" in error_message:
            constraint_type = "unique"
        elif "foreign key" in error_message:
            constraint_type = "foreign_key"
        elif "not null" in error_message:
            constraint_type = "not_null"
        elif "check" in error_message:
            constraint_type = "check"
        else:
            constraint_type = "unknown"

        error = GeventosError(
            "Data integrity constraint violation",
            error_code=ErrorCode.CONCURRENCY_CONFLICT,
            details={"constraint_type": constraint_type}
        )
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=_envelope(error, error_id)
        )

    def _handle_database_error(self, exc: Exception, error_id: str) -> JSONResponse:
        error = ExternalServiceError(
            "database",
            "Database service temporarily unavailable",
            details={"error_type": type(exc).__name__}
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_envelope(error, error_id),
            headers={"Retry-After": "30"}
        )

    def _handle_unexpected_error(self, exc: Exception, error_id: str) -> JSONResponse:
        error = GeventosError(
            "An unexpected error occurred",
            error_code=ErrorCode.INTERNAL_ERROR,
            details={"error_type": type(exc).__name__} if self.debug else None
        )
        response_data = _envelope(error, error_id)

        if self.debug:
            response_data["debug"] = {
                "exception": str(exc),
                "traceback": traceback.format_exc()
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response_data
        )

    def _log_error(self, request: Request, exc: Exception, error_id: str):
        request_info = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None,
        }

        if isinstance(exc, (ValidationError, NotFoundError, AuthenticationError,
                            AuthorizationError, BusinessLogicError)):
            logger.warning(
                f"Client error [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        elif isinstance(exc, GeventosError):
            logger.error(
                f"System error [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        else:
            logger.error(
                f"Unexpected error [{error_id}]: {exc}",
                extra={
                    "error_id": error_id,
                    "error_type": type(exc).__name__,
                    "request": request_info,
                },
                exc_info=exc
            )
