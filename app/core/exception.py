from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging
import traceback
import uuid

from app.core.config import settings
from app.core.constants import ErrorCodes, ErrorMessages

logger = logging.getLogger(__name__)


# =============================================================================
# Domain exceptions
# =============================================================================

class AppError(Exception):
    """Base class for errors the service reports to clients on purpose."""

    status_code = 500
    error_code = ErrorCodes.INTERNAL_ERROR
    default_message = ErrorMessages.INTERNAL_ERROR

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = 401
    error_code = ErrorCodes.AUTHENTICATION_REQUIRED
    default_message = ErrorMessages.AUTH_REQUIRED

    def __init__(self, message: Optional[str] = None, **kwargs):
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class Forbidden(AppError):
    status_code = 403
    error_code = ErrorCodes.INSUFFICIENT_PERMISSIONS
    default_message = "Not authorized to perform this operation"


class NotFound(AppError):
    status_code = 404
    error_code = ErrorCodes.RESOURCE_NOT_FOUND
    default_message = "Resource not found"

    def __init__(self, message: Optional[str] = None, *, resource_type: Optional[str] = None,
                 resource_id: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        super().__init__(message, details=details, **kwargs)


class InvalidArgument(AppError):
    status_code = 400
    error_code = ErrorCodes.INVALID_ARGUMENT
    default_message = ErrorMessages.VALIDATION_ERROR


class MediaTooLarge(InvalidArgument):
    status_code = 413
    error_code = ErrorCodes.MEDIA_TOO_LARGE
    default_message = ErrorMessages.MEDIA_TOO_LARGE


class Conflict(AppError):
    status_code = 409
    error_code = ErrorCodes.DUPLICATE_RESOURCE
    default_message = "Resource already exists"


class StorageError(AppError):
    status_code = 500
    error_code = ErrorCodes.DATABASE_ERROR
    default_message = ErrorMessages.DATABASE_ERROR


class DeliveryError(Exception):
    """Outbound e-mail could not be delivered."""


# =============================================================================
# Exception handlers
# =============================================================================

def _request_id() -> str:
    return str(uuid.uuid4())[:8]


def _envelope(request: Request, message: str, error_code: str, request_id: str) -> Dict[str, Any]:
    return {
        "message": message,
        "error_code": error_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": str(request.url.path),
        "request_id": request_id,
    }


async def app_error_handler(request: Request, exc: AppError):
    """Render domain exceptions with the shared error envelope."""
    request_id = _request_id()
    client_ip = request.client.host if request.client else "unknown"

    if exc.status_code >= 500:
        logger.error(
            f"Server error [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Path: {request.url.path} - "
            f"Error: {exc.message}"
        )
    else:
        logger.warning(
            f"Client error [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Code: {exc.error_code} - "
            f"Path: {request.url.path} - "
            f"IP: {client_ip}"
        )

    content = {**exc.details, **_envelope(request, exc.message, exc.error_code, request_id)}
    if isinstance(exc, StorageError) and not settings.is_production and exc.__cause__ is not None:
        content["detail"] = str(exc.__cause__)

    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content), headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Request validation failures are argument errors: reported as 400
    with the individual field errors attached.
    """
    request_id = _request_id()
    client_ip = request.client.host if request.client else "unknown"

    logger.warning(
        f"Validation error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"IP: {client_ip} - "
        f"Errors: {len(exc.errors())}"
    )

    content = _envelope(request, ErrorMessages.VALIDATION_ERROR, ErrorCodes.VALIDATION_ERROR, request_id)
    content["errors"] = jsonable_encoder([
        {key: value for key, value in error.items() if key in ("loc", "msg", "type")}
        for error in exc.errors()
    ])
    return JSONResponse(status_code=400, content=content)


async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTP errors raised by the framework (unknown routes, wrong methods)."""
    request_id = _request_id()

    if exc.status_code >= 500:
        logger.error(
            f"Server error [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Path: {request.url.path} - "
            f"Detail: {exc.detail}"
        )
    else:
        logger.warning(
            f"Client error [ID: {request_id}] - "
            f"Status: {exc.status_code} - "
            f"Path: {request.url.path}"
        )

    if isinstance(exc.detail, dict):
        response_content = {
            **exc.detail,
            **_envelope(request, exc.detail.get("message", ""), exc.detail.get("error_code", ErrorCodes.HTTP_ERROR), request_id),
        }
    else:
        response_content = _envelope(request, str(exc.detail), ErrorCodes.HTTP_ERROR, request_id)

    return JSONResponse(
        status_code=exc.status_code,
        content=response_content,
        headers=getattr(exc, "headers", None),
    )


async def database_exception_handler(request: Request, exc: Exception):
    """Handler for database errors that escaped a store."""
    request_id = _request_id()

    logger.error(
        f"Database error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"Error: {str(exc)} - "
        f"Type: {type(exc).__name__}"
    )

    content = _envelope(request, ErrorMessages.DATABASE_ERROR, ErrorCodes.DATABASE_ERROR, request_id)
    content["hint"] = "Please try again later or contact support"
    if not settings.is_production:
        content["detail"] = str(exc)
    return JSONResponse(status_code=500, content=content)


async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler for unexpected errors"""
    request_id = _request_id()
    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    logger.critical(
        f"Unexpected error [ID: {request_id}] - "
        f"Path: {request.url.path} - "
        f"Error: {str(exc)} - "
        f"Type: {type(exc).__name__} - "
        f"Traceback: {tb_str}"
    )

    content = _envelope(request, ErrorMessages.INTERNAL_ERROR, ErrorCodes.INTERNAL_ERROR, request_id)
    if not settings.is_production:
        content["detail"] = str(exc)
    return JSONResponse(status_code=500, content=content)
