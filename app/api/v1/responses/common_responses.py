"""
Common reusable response definitions for FastAPI endpoints.

This module contains response configurations that are shared across multiple endpoints,
promoting consistency and reducing duplication in OpenAPI documentation.
"""

from app.schemas.error import (
    ValidationErrorResponse,
    BusinessErrorResponse,
    AuthErrorResponse,
    NotFoundErrorResponse,
    ServerErrorResponse
)

# Constants for common values
CONTENT_TYPE_JSON = "application/json"
EXAMPLE_TIMESTAMP = "2024-01-01T12:00:00Z"
EXAMPLE_API_PATH = "/api/endpoint"
EXAMPLE_REQUEST_ID = "a1b2c3d4"
VALIDATION_FAILED_MESSAGE = "Validation failed"
VALIDATION_ERROR_CODE = "VALIDATION_ERROR"


def _example(message: str, error_code: str, path: str, **extra):
    return {
        "message": message,
        "error_code": error_code,
        **extra,
        "timestamp": EXAMPLE_TIMESTAMP,
        "path": path,
        "request_id": EXAMPLE_REQUEST_ID
    }


def get_auth_error_response(path: str = EXAMPLE_API_PATH):
    """401: missing or unresolvable credential."""
    return {
        "description": "Authentication required",
        "model": AuthErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": _example("Authentication required", "AUTHENTICATION_REQUIRED", path)
            }
        }
    }


def get_forbidden_response(message: str, path: str = EXAMPLE_API_PATH):
    """403: authenticated, but not allowed to touch this resource."""
    return {
        "description": "Not authorized for this resource",
        "model": AuthErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": _example(message, "INSUFFICIENT_PERMISSIONS", path)
            }
        }
    }


def get_not_found_response(message: str, resource_type: str, path: str = EXAMPLE_API_PATH):
    return {
        "description": f"{resource_type.capitalize()} not found",
        "model": NotFoundErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": _example(
                    message, "RESOURCE_NOT_FOUND", path,
                    resource_type=resource_type,
                    resource_id="3f1c9a7e5b8d4c2a9e6f0b1d2c3a4b5c"
                )
            }
        }
    }


def get_validation_error_response(path: str = EXAMPLE_API_PATH, field: str = "title"):
    """400: request body, form or query failed validation."""
    return {
        "description": "Invalid argument",
        "model": ValidationErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": _example(
                    VALIDATION_FAILED_MESSAGE, VALIDATION_ERROR_CODE, path,
                    errors=[{"loc": ["body", field], "msg": "Field required", "type": "missing"}]
                )
            }
        }
    }


def get_business_error_response(description: str, message: str, error_code: str, path: str = EXAMPLE_API_PATH):
    return {
        "description": description,
        "model": BusinessErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": _example(message, error_code, path)
            }
        }
    }


def get_server_error_response(path: str = EXAMPLE_API_PATH):
    return {
        "description": "Internal server error",
        "model": ServerErrorResponse,
        "content": {
            CONTENT_TYPE_JSON: {
                "example": _example("Database operation failed", "DATABASE_ERROR", path)
            }
        }
    }
