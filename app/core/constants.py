"""
Application Constants

Centralized location for all application constants, organized by domain.
This makes it easy to maintain and update values across the entire application.
"""

# =============================================================================
# API Configuration
# =============================================================================

class APIConfig:
    """API-level configuration constants"""

    # API Versioning
    API_PREFIX = "/api"
    API_VERSION = "1.0.0"
    API_TITLE = "CivicConnect Reports API"
    API_DESCRIPTION = """
    Civic issue reporting: citizens report problems in their area, other citizens
    vote and comment, administrators triage reports through a status workflow.

    ## Features
    - Issue reports with inline image/video media
    - Vote toggle and comment threads per report
    - Admin status workflow (posted, waitlist, in progress, completed)
    - Account registration, profile and e-mail verification
    """

    # CORS Configuration
    ALLOWED_ORIGINS = [
        "http://localhost:3000",  # React dev server
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]


# =============================================================================
# Authentication & Security
# =============================================================================

class AuthConfig:
    """Authentication and security constants"""

    # JWT Configuration
    ACCESS_TOKEN_EXPIRE_MINUTES = 60
    ALGORITHM = "HS256"
    TOKEN_TYPE = "bearer"

    # Password requirements
    MIN_PASSWORD_LENGTH = 6
    MAX_PASSWORD_LENGTH = 128
    BCRYPT_ROUNDS = 12

    # Verification tokens
    VERIFICATION_TOKEN_BYTES = 32


class BuiltinIdentity:
    """Reserved credentials that resolve without a user lookup"""

    DEMO_USER_ID = "demo-user-id"
    DEMO_USER_NAME = "Demo User"
    DEMO_USER_EMAIL = "user@example.com"
    DEMO_USER_PASSWORD = "admin123"
    DEMO_USER_PHONE = "123-456-7890"
    DEMO_USER_ADDRESS = "123 Demo Street, Demo City"

    ADMIN_USER_ID = "admin-user-id"
    ADMIN_USER_NAME = "Admin User"
    ADMIN_USER_EMAIL = "admin@example.com"
    ADMIN_USER_PASSWORD = "admin123@"
    ADMIN_USER_PHONE = "987-654-3210"
    ADMIN_USER_ADDRESS = "456 Admin Avenue, Admin City"

    # Admin-path comments are always authored as this user
    ADMIN_COMMENT_AUTHOR_ID = ADMIN_USER_ID


# =============================================================================
# Business Logic Limits
# =============================================================================

class BusinessLimits:
    """Business rules and validation constants"""

    # Post limits
    MAX_POST_TITLE_LENGTH = 200
    MAX_POST_DESCRIPTION_LENGTH = 5000
    MAX_CATEGORY_LENGTH = 100
    MAX_LOCATION_LENGTH = 300

    # Comment limits
    MAX_COMMENT_LENGTH = 2000

    # Media limits
    MAX_POST_MEDIA_BYTES = 10 * 1024 * 1024  # 10MB
    MAX_PROFILE_PICTURE_BYTES = 5 * 1024 * 1024  # 5MB
    POST_MEDIA_PREFIXES = ("image/", "video/")
    PROFILE_PICTURE_PREFIXES = ("image/",)
    MEDIA_URI_CACHE_SIZE = 128
    MEDIA_URI_CACHE_MAX_BYTES = 64 * 1024 * 1024  # 64MB of encoded text

    # User profile limits
    MAX_NAME_LENGTH = 100
    MAX_PHONE_LENGTH = 40
    MAX_ADDRESS_LENGTH = 300
    MAX_BIO_LENGTH = 1000


# =============================================================================
# Error Messages
# =============================================================================

class ErrorMessages:
    """Standardized error messages"""

    # Authentication errors
    AUTH_REQUIRED = "Authentication required"
    INVALID_AUTHENTICATION = "Invalid authentication"
    USER_NOT_FOUND_FOR_TOKEN = "User not found"
    INVALID_CREDENTIALS = "Invalid credentials"
    TOKEN_EXPIRED = "Token has expired"

    # Authorization errors
    NOT_AUTHORIZED_UPDATE = "Not authorized to update this post"
    NOT_AUTHORIZED_DELETE = "Not authorized to delete this post"
    ADMIN_REQUIRED = "Admin access required"

    # Resource errors
    POST_NOT_FOUND = "Post not found"
    USER_NOT_FOUND = "User not found"
    VERIFICATION_TOKEN_NOT_FOUND = "Invalid or expired verification token"

    # Validation errors
    DUPLICATE_EMAIL = "User already exists"
    INVALID_STATUS = "Invalid status"
    INVALID_MEDIA_TYPE = "mediaType must be one of: image, video"
    MISSING_FIELD = "Missing required field"
    COMMENT_TEXT_REQUIRED = "Comment text is required"
    UNSUPPORTED_MEDIA = "Unsupported media content type"
    MEDIA_TOO_LARGE = "Uploaded media exceeds the size limit"
    WRONG_PASSWORD = "Current password is incorrect"

    # System errors
    DATABASE_ERROR = "Database operation failed"
    INTERNAL_ERROR = "An unexpected error occurred"
    VALIDATION_ERROR = "Validation failed"


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """Standardized error codes for API responses"""

    # Authentication & Authorization
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    MEDIA_TOO_LARGE = "MEDIA_TOO_LARGE"

    # Business Logic
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # System
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    HTTP_ERROR = "HTTP_ERROR"


# =============================================================================
# Database Configuration
# =============================================================================

class DatabaseConfig:
    """Database-related constants"""

    # Connection settings (ignored for SQLite)
    POOL_SIZE = 5
    MAX_OVERFLOW = 10
    POOL_TIMEOUT = 30
    POOL_RECYCLE = 3600  # 1 hour


# =============================================================================
# Logging Configuration
# =============================================================================

class LoggingConfig:
    """Logging configuration constants"""

    DEFAULT_LOG_LEVEL = "INFO"
    DATABASE_LOG_LEVEL = "WARNING"

    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# Environment-Specific Constants
# =============================================================================

class EnvironmentConfig:
    """Environment-specific configuration"""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

