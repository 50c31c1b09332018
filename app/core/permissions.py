"""
Authorization Gate.

Pure per-operation checks of an Actor against a resource owner. Failing
checks raise Unauthenticated (no actor) or Forbidden (wrong actor).
"""

import enum
from typing import Optional

from app.core.config import settings
from app.core.constants import ErrorMessages
from app.core.exception import Forbidden, Unauthenticated
from app.core.identity import Actor


class Operation(str, enum.Enum):
    READ_POSTS = "read_posts"
    CREATE_POST = "create_post"
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    ADMIN_DELETE_POST = "admin_delete_post"
    UPDATE_STATUS = "update_status"
    VOTE = "vote"
    COMMENT = "comment"
    ADMIN_COMMENT = "admin_comment"


PUBLIC = "public"
AUTHENTICATED = "authenticated"
OWNER = "owner"
ADMIN = "admin"

RULES = {
    Operation.READ_POSTS: PUBLIC,
    Operation.CREATE_POST: AUTHENTICATED,
    Operation.UPDATE_POST: OWNER,
    Operation.DELETE_POST: AUTHENTICATED,
    Operation.ADMIN_DELETE_POST: ADMIN,
    Operation.UPDATE_STATUS: ADMIN,
    Operation.VOTE: AUTHENTICATED,
    Operation.COMMENT: AUTHENTICATED,
    Operation.ADMIN_COMMENT: ADMIN,
}

FORBIDDEN_MESSAGES = {
    Operation.UPDATE_POST: ErrorMessages.NOT_AUTHORIZED_UPDATE,
    Operation.DELETE_POST: ErrorMessages.NOT_AUTHORIZED_DELETE,
}


def rule_for(operation: Operation) -> str:
    # Open delete is the compatibility default; strict mode needs owner or admin
    if operation == Operation.DELETE_POST and settings.STRICT_DELETE_OWNERSHIP:
        return OWNER
    return RULES[operation]


def authorize(actor: Optional[Actor], operation: Operation, owner_id: Optional[str] = None) -> None:
    """Raise if actor may not perform operation on a resource owned by owner_id."""
    rule = rule_for(operation)
    if rule == PUBLIC:
        return

    if actor is None:
        raise Unauthenticated(ErrorMessages.AUTH_REQUIRED)

    if rule == AUTHENTICATED:
        return

    if rule == ADMIN:
        if not actor.is_admin:
            raise Forbidden(ErrorMessages.ADMIN_REQUIRED, details={"operation": operation.value})
        return

    # OWNER: content updates are owner-only; strict delete also admits admins
    if actor.id == owner_id:
        return
    if operation == Operation.DELETE_POST and actor.is_admin:
        return
    raise Forbidden(
        FORBIDDEN_MESSAGES.get(operation, "Not authorized to perform this operation"),
        details={"operation": operation.value},
    )
