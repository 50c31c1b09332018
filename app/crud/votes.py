"""
Vote Ledger.

At most one vote per (user, post), enforced by a unique constraint. The
post's ``votes`` list is recomputed from the ledger in the same
transaction as every toggle, so the two cannot diverge. Each toggle holds
a row lock on the post, so concurrent toggles on one post are applied one
after another and each recomputes the list from the committed ledger.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exception import StorageError
from app.crud.posts import get_post
from app.models.posts import Post, Vote

logger = logging.getLogger(__name__)


def voters_for_post(db: Session, post_id: str) -> List[str]:
    rows = db.query(Vote.user_id).filter(Vote.post_id == post_id).all()
    return sorted(row.user_id for row in rows)


def _sync_post_votes(db: Session, post: Post) -> None:
    # Assign a new list so the JSON column is flagged dirty
    post.votes = voters_for_post(db, post.id)


def toggle_vote(db: Session, user_id: str, post_id: str) -> Post:
    """Remove the user's vote if present, add it otherwise; return the post."""
    post = get_post(db, post_id, lock=True)

    try:
        removed = (
            db.query(Vote)
            .filter(Vote.user_id == user_id, Vote.post_id == post_id)
            .delete(synchronize_session=False)
        )
        if not removed:
            db.add(Vote(user_id=user_id, post_id=post_id))
            db.flush()
        _sync_post_votes(db, post)
        db.commit()
    except IntegrityError:
        # A concurrent toggle inserted the same (user, post) first: already voted
        db.rollback()
        logger.info(f"Concurrent vote by user {user_id} on post {post_id} treated as already voted")
        return get_post(db, post_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error toggling vote by {user_id} on post {post_id}: {e}")
        raise StorageError(details={"operation": "toggle vote"}) from e

    db.refresh(post)
    logger.info(f"Vote {'removed' if removed else 'added'}: user {user_id}, post {post_id}")
    return post
