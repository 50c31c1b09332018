"""Post Store."""

import logging
from typing import List, Optional, Union

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.constants import ErrorMessages
from app.core.exception import InvalidArgument, NotFound
from app.core.workflow import INITIAL_STATUS, next_status
from app.crud.base import commit, transaction
from app.models.enums import PostStatus
from app.models.posts import Comment, Post, Vote
from app.schemas.post import PostContentUpdate, PostCreate
from app.services.media import MediaPayload

logger = logging.getLogger(__name__)

SORT_CREATED_DESC = "created_desc"
SORT_CREATED_ASC = "created_asc"
SORT_VOTES_DESC = "votes_desc"


def validate_fields(schema, fields):
    if isinstance(fields, schema):
        return fields
    try:
        return schema.model_validate(fields)
    except ValidationError as e:
        raise InvalidArgument(
            ErrorMessages.MISSING_FIELD if any(err["type"] == "missing" for err in e.errors()) else ErrorMessages.VALIDATION_ERROR,
            details={"errors": [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]},
        )


def get_post(db: Session, post_id: str, lock: bool = False) -> Post:
    query = db.query(Post).filter(Post.id == post_id)
    if lock:
        # Row lock until commit; writers that rewrite the post row run one at a time
        query = query.with_for_update().populate_existing()
    post = query.first()
    if post is None:
        raise NotFound(ErrorMessages.POST_NOT_FOUND, resource_type="post", resource_id=post_id)
    return post


def create_post(
    db: Session,
    author_id: str,
    fields: Union[PostCreate, dict],
    media: Optional[MediaPayload] = None,
) -> Post:
    data = validate_fields(PostCreate, fields)

    db_post = Post(
        author_id=author_id,
        title=data.title,
        description=data.description,
        media_type=data.media_type,
        category=data.category,
        location=data.location,
        status=INITIAL_STATUS,
        votes=[],
    )
    if media is not None:
        db_post.media = media.data
        db_post.media_content_type = media.content_type
        db_post.media_digest = media.digest

    with transaction(db, "create post"):
        db.add(db_post)
    db.refresh(db_post)

    logger.info(f"Post created: ID {db_post.id}, author {author_id}, title '{db_post.title}'")
    return db_post


def _ordered(query, sort: str):
    if sort == SORT_CREATED_ASC:
        return query.order_by(Post.created_at.asc(), Post.id.asc())
    return query.order_by(Post.created_at.desc(), Post.id.desc())


def list_posts(
    db: Session,
    sort: str = SORT_CREATED_DESC,
    status: Optional[PostStatus] = None,
    category: Optional[str] = None,
    author_id: Optional[str] = None,
) -> List[Post]:
    query = db.query(Post)
    if status is not None:
        query = query.filter(Post.status == status)
    if category:
        query = query.filter(Post.category == category)
    if author_id:
        query = query.filter(Post.author_id == author_id)

    posts = _ordered(query, sort).all()
    if sort == SORT_VOTES_DESC:
        # Stable sort keeps newest-first among equal vote counts
        posts.sort(key=lambda post: len(post.votes or []), reverse=True)
    return posts


def list_posts_by_author(db: Session, author_id: str, sort: str = SORT_CREATED_DESC) -> List[Post]:
    return list_posts(db, sort=sort, author_id=author_id)


def update_post_content(
    db: Session,
    post: Post,
    fields: Union[PostContentUpdate, dict, None] = None,
    media: Optional[MediaPayload] = None,
) -> Post:
    """Overwrite only the supplied fields; media is replaced whole when new bytes arrive."""
    update = validate_fields(PostContentUpdate, fields or {})
    changes = update.present_fields()

    if not changes and media is None:
        return post

    for key, value in changes.items():
        setattr(post, key, value)
    if media is not None:
        post.media = media.data
        post.media_content_type = media.content_type
        post.media_digest = media.digest

    commit(db, "update post")
    db.refresh(post)

    logger.info(f"Post updated: ID {post.id}, fields {sorted(changes)}{' + media' if media else ''}")
    return post


def set_status(db: Session, post_id: str, status: Union[str, PostStatus]) -> Post:
    post = get_post(db, post_id)
    previous = post.status
    post.status = next_status(previous, status)

    commit(db, "update post status")
    db.refresh(post)

    logger.info(f"Post {post.id} status changed: {previous.value} -> {post.status.value}")
    return post


def delete_post(db: Session, post_id: str) -> None:
    """Delete the post with its comments and votes in one transaction."""
    get_post(db, post_id)

    with transaction(db, "delete post"):
        comments_deleted = (
            db.query(Comment).filter(Comment.post_id == post_id).delete(synchronize_session=False)
        )
        votes_deleted = (
            db.query(Vote).filter(Vote.post_id == post_id).delete(synchronize_session=False)
        )
        db.query(Post).filter(Post.id == post_id).delete(synchronize_session=False)

    logger.info(
        f"Post deleted: ID {post_id}, cascaded {comments_deleted} comment(s) and {votes_deleted} vote(s)"
    )
