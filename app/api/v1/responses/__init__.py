"""
Response definitions for FastAPI endpoints.

This module provides centralized response configurations for OpenAPI documentation,
promoting reusability and maintainability across all API endpoints.
"""

from .common_responses import (
    get_auth_error_response,
    get_forbidden_response,
    get_not_found_response,
    get_validation_error_response,
    get_business_error_response,
    get_server_error_response,
)

from .post_responses import (
    get_post_create_responses,
    get_post_list_responses,
    get_my_posts_responses,
    get_single_post_responses,
    get_post_update_responses,
    get_post_delete_responses,
    get_post_status_responses,
    get_post_vote_responses,
    get_comment_create_responses,
)

from .auth_responses import (
    get_registration_responses,
    get_login_responses,
    get_user_profile_responses,
    get_profile_update_responses,
    get_password_update_responses,
    get_profile_picture_responses,
    get_verify_responses,
)

__all__ = [
    # Common responses
    "get_auth_error_response",
    "get_forbidden_response",
    "get_not_found_response",
    "get_validation_error_response",
    "get_business_error_response",
    "get_server_error_response",

    # Post-specific responses
    "get_post_create_responses",
    "get_post_list_responses",
    "get_my_posts_responses",
    "get_single_post_responses",
    "get_post_update_responses",
    "get_post_delete_responses",
    "get_post_status_responses",
    "get_post_vote_responses",
    "get_comment_create_responses",

    # Auth-specific responses
    "get_registration_responses",
    "get_login_responses",
    "get_user_profile_responses",
    "get_profile_update_responses",
    "get_password_update_responses",
    "get_profile_picture_responses",
    "get_verify_responses",
]
