"""Comment Store."""

import logging
from typing import List

from sqlalchemy.orm import Session, joinedload

from app.core.constants import BusinessLimits, ErrorMessages
from app.core.exception import InvalidArgument
from app.crud.base import transaction
from app.crud.posts import get_post
from app.models.posts import Comment

logger = logging.getLogger(__name__)


def add_comment(db: Session, post_id: str, author_id: str, text: str) -> Comment:
    text = (text or "").strip()
    if not text:
        raise InvalidArgument(ErrorMessages.COMMENT_TEXT_REQUIRED)
    if len(text) > BusinessLimits.MAX_COMMENT_LENGTH:
        raise InvalidArgument(
            f"Comment text exceeds {BusinessLimits.MAX_COMMENT_LENGTH} characters",
            details={"max_length": BusinessLimits.MAX_COMMENT_LENGTH},
        )

    get_post(db, post_id)

    comment = Comment(post_id=post_id, author_id=author_id, text=text)
    with transaction(db, "add comment"):
        db.add(comment)

    # Reload with the author so the caller can project the author name
    comment = (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.id == comment.id)
        .one()
    )
    logger.info(f"Comment {comment.id} added to post {post_id} by {author_id}")
    return comment


def comments_for_posts(db: Session, post_ids: List[str]) -> List[Comment]:
    """Comments on any of the given posts, oldest first, with authors loaded."""
    if not post_ids:
        return []
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.post_id.in_(post_ids))
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
