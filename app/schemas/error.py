from pydantic import BaseModel
from typing import Optional, List

class ErrorDetail(BaseModel):
    """Individual error detail for validation errors"""
    loc: List[str]  # Location of the error (field path)
    msg: str        # Error message
    type: str       # Error type

class ValidationErrorResponse(BaseModel):
    """Response schema for validation errors (400)"""
    message: str = "Validation failed"
    error_code: str = "VALIDATION_ERROR"
    errors: List[ErrorDetail]
    timestamp: str
    path: str
    request_id: Optional[str] = None

class BusinessErrorResponse(BaseModel):
    """Response schema for argument and conflict errors (400, 409, 413)"""
    message: str
    error_code: str
    timestamp: str
    path: str
    request_id: Optional[str] = None

class AuthErrorResponse(BaseModel):
    """Response schema for authentication/authorization errors (401, 403)"""
    message: str = "Authentication required"
    error_code: str = "AUTHENTICATION_REQUIRED"
    timestamp: str
    path: str
    request_id: Optional[str] = None

class NotFoundErrorResponse(BaseModel):
    """Response schema for resource not found errors (404)"""
    message: str = "Resource not found"
    error_code: str = "RESOURCE_NOT_FOUND"
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    timestamp: str
    path: str
    request_id: Optional[str] = None

class ServerErrorResponse(BaseModel):
    """Response schema for internal server errors (500)"""
    message: str = "Internal server error"
    error_code: str = "INTERNAL_ERROR"
    request_id: Optional[str] = None  # For tracking
    detail: Optional[str] = None  # Only outside production
    timestamp: str
    path: str
