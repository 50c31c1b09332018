"""
Post-specific response definitions for FastAPI endpoints.

This module contains response configurations specific to post operations,
building upon common responses for maximum reusability.
"""

from app.core.constants import ErrorMessages
from .common_responses import (
    get_auth_error_response,
    get_business_error_response,
    get_forbidden_response,
    get_not_found_response,
    get_server_error_response,
    get_validation_error_response,
)

# Constants for post paths
POSTS_BASE_PATH = "/api/posts"
POST_DETAIL_PATH = "/api/posts/{post_id}"
POST_STATUS_PATH = "/api/posts/{post_id}/status"
POST_VOTE_PATH = "/api/posts/{post_id}/vote"
POST_COMMENT_PATH = "/api/posts/{post_id}/comment"
ADMIN_POST_PATH = "/api/posts/admin/{post_id}"


def _post_not_found(path: str):
    return get_not_found_response(ErrorMessages.POST_NOT_FOUND, "post", path)


def get_post_create_responses():
    return {
        400: get_validation_error_response(POSTS_BASE_PATH),
        401: get_auth_error_response(POSTS_BASE_PATH),
        413: get_business_error_response(
            "Media too large", ErrorMessages.MEDIA_TOO_LARGE, "MEDIA_TOO_LARGE", POSTS_BASE_PATH
        ),
        500: get_server_error_response(POSTS_BASE_PATH),
    }


def get_post_list_responses():
    return {
        400: get_validation_error_response(POSTS_BASE_PATH, field="sort"),
        500: get_server_error_response(POSTS_BASE_PATH),
    }


def get_my_posts_responses():
    return {
        401: get_auth_error_response(POSTS_BASE_PATH + "/user/me"),
        500: get_server_error_response(POSTS_BASE_PATH + "/user/me"),
    }


def get_single_post_responses():
    return {
        404: _post_not_found(POST_DETAIL_PATH),
        500: get_server_error_response(POST_DETAIL_PATH),
    }


def get_post_update_responses():
    return {
        400: get_validation_error_response(POST_DETAIL_PATH),
        401: get_auth_error_response(POST_DETAIL_PATH),
        403: get_forbidden_response(ErrorMessages.NOT_AUTHORIZED_UPDATE, POST_DETAIL_PATH),
        404: _post_not_found(POST_DETAIL_PATH),
        413: get_business_error_response(
            "Media too large", ErrorMessages.MEDIA_TOO_LARGE, "MEDIA_TOO_LARGE", POST_DETAIL_PATH
        ),
        500: get_server_error_response(POST_DETAIL_PATH),
    }


def get_post_delete_responses(admin: bool = False):
    path = ADMIN_POST_PATH if admin else POST_DETAIL_PATH
    responses = {
        401: get_auth_error_response(path),
        404: _post_not_found(path),
        500: get_server_error_response(path),
    }
    if admin:
        responses[403] = get_forbidden_response(ErrorMessages.ADMIN_REQUIRED, path)
    else:
        responses[403] = get_forbidden_response(ErrorMessages.NOT_AUTHORIZED_DELETE, path)
    return responses


def get_post_status_responses():
    return {
        400: get_business_error_response(
            "Invalid status", ErrorMessages.INVALID_STATUS, "INVALID_ARGUMENT", POST_STATUS_PATH
        ),
        401: get_auth_error_response(POST_STATUS_PATH),
        403: get_forbidden_response(ErrorMessages.ADMIN_REQUIRED, POST_STATUS_PATH),
        404: _post_not_found(POST_STATUS_PATH),
        500: get_server_error_response(POST_STATUS_PATH),
    }


def get_post_vote_responses():
    return {
        401: get_auth_error_response(POST_VOTE_PATH),
        404: _post_not_found(POST_VOTE_PATH),
        500: get_server_error_response(POST_VOTE_PATH),
    }


def get_comment_create_responses(admin: bool = False):
    path = ADMIN_POST_PATH + "/comment" if admin else POST_COMMENT_PATH
    responses = {
        400: get_business_error_response(
            "Empty comment", ErrorMessages.COMMENT_TEXT_REQUIRED, "INVALID_ARGUMENT", path
        ),
        401: get_auth_error_response(path),
        404: _post_not_found(path),
        500: get_server_error_response(path),
    }
    if admin:
        responses[403] = get_forbidden_response(ErrorMessages.ADMIN_REQUIRED, path)
    return responses
