"""
Post status workflow.

Every status is reachable from every other (including itself); moves are
admin-only but otherwise unconditional, and no status is terminal.
"""

from typing import Union

from app.core.constants import ErrorMessages
from app.core.exception import InvalidArgument
from app.models.enums import PostStatus

INITIAL_STATUS = PostStatus.POSTED

ALLOWED_TRANSITIONS = {
    source: frozenset(PostStatus) for source in PostStatus
}


def parse_status(value: Union[str, PostStatus, None]) -> PostStatus:
    """Coerce a raw value to a PostStatus or raise InvalidArgument."""
    if isinstance(value, PostStatus):
        return value
    try:
        return PostStatus(value)
    except ValueError:
        raise InvalidArgument(
            ErrorMessages.INVALID_STATUS,
            details={"allowed": [status.value for status in PostStatus], "received": value},
        )


def can_transition(current: PostStatus, target: PostStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def next_status(current: PostStatus, requested: Union[str, PostStatus, None]) -> PostStatus:
    target = parse_status(requested)
    if not can_transition(current, target):
        raise InvalidArgument(
            f"Cannot move a post from {current.value} to {target.value}",
            details={"current": current.value, "requested": target.value},
        )
    return target
