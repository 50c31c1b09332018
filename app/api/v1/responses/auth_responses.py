"""
Auth and profile response definitions for FastAPI endpoints.
"""

from app.core.constants import ErrorMessages
from .common_responses import (
    get_auth_error_response,
    get_business_error_response,
    get_not_found_response,
    get_server_error_response,
    get_validation_error_response,
)

REGISTER_PATH = "/api/auth/register"
LOGIN_PATH = "/api/auth/login"
ME_PATH = "/api/auth/me"
PROFILE_PATH = "/api/auth/update-profile"
PASSWORD_PATH = "/api/auth/update-password"
PROFILE_PIC_PATH = "/api/auth/update-profile-pic"
VERIFY_PATH = "/api/auth/verify/{token}"


def get_registration_responses():
    return {
        400: get_validation_error_response(REGISTER_PATH, field="email"),
        409: get_business_error_response(
            "Email already registered", ErrorMessages.DUPLICATE_EMAIL, "DUPLICATE_RESOURCE", REGISTER_PATH
        ),
        500: get_server_error_response(REGISTER_PATH),
    }


def get_login_responses():
    return {
        400: get_business_error_response(
            "Wrong e-mail or password", ErrorMessages.INVALID_CREDENTIALS, "INVALID_CREDENTIALS", LOGIN_PATH
        ),
        500: get_server_error_response(LOGIN_PATH),
    }


def get_user_profile_responses(path: str = ME_PATH):
    return {
        401: get_auth_error_response(path),
        404: get_not_found_response(ErrorMessages.USER_NOT_FOUND, "user", path),
        500: get_server_error_response(path),
    }


def get_profile_update_responses():
    return {
        400: get_validation_error_response(PROFILE_PATH, field="name"),
        **get_user_profile_responses(PROFILE_PATH),
    }


def get_password_update_responses():
    return {
        400: get_business_error_response(
            "Wrong current password", ErrorMessages.WRONG_PASSWORD, "INVALID_ARGUMENT", PASSWORD_PATH
        ),
        **get_user_profile_responses(PASSWORD_PATH),
    }


def get_profile_picture_responses():
    return {
        400: get_business_error_response(
            "Unsupported media", ErrorMessages.UNSUPPORTED_MEDIA, "INVALID_ARGUMENT", PROFILE_PIC_PATH
        ),
        413: get_business_error_response(
            "Picture too large", ErrorMessages.MEDIA_TOO_LARGE, "MEDIA_TOO_LARGE", PROFILE_PIC_PATH
        ),
        **get_user_profile_responses(PROFILE_PIC_PATH),
    }


def get_verify_responses():
    return {
        404: get_not_found_response(ErrorMessages.VERIFICATION_TOKEN_NOT_FOUND, "verification_token", VERIFY_PATH),
        500: get_server_error_response(VERIFY_PATH),
    }
