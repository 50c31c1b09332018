from enum import Enum
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.api.v1.endpoints.dependencies import get_current_actor
from app.api.v1.responses import (
    get_comment_create_responses,
    get_my_posts_responses,
    get_post_create_responses,
    get_post_delete_responses,
    get_post_list_responses,
    get_post_status_responses,
    get_post_update_responses,
    get_post_vote_responses,
    get_single_post_responses,
)
from app.core.constants import BuiltinIdentity
from app.core.identity import Actor
from app.core.permissions import Operation, authorize
from app.crud import comments as crud_comments
from app.crud import posts as crud_posts
from app.crud import votes as crud_votes
from app.db.database import get_db
from app.models.enums import PostStatus
from app.schemas.common import PostDeletedResponse
from app.schemas.post import CommentCreate, CommentView, PostContentUpdate, PostCreate, PostView, StatusUpdate
from app.services.aggregator import assemble, assemble_many, comment_view
from app.services.media import ingest_post_media

import logging

# Set up logging
logger = logging.getLogger(__name__)


# Define sort options enum for validation
class SortOption(str, Enum):
    CREATED_DESC = crud_posts.SORT_CREATED_DESC
    CREATED_ASC = crud_posts.SORT_CREATED_ASC
    VOTES_DESC = crud_posts.SORT_VOTES_DESC


router = APIRouter(prefix="/posts", tags=["posts"])


def _supplied(**fields) -> dict:
    """Form fields the client actually sent."""
    return {key: value for key, value in fields.items() if value is not None}


@router.post(
    "",
    response_model=PostView,
    status_code=status.HTTP_201_CREATED,
    summary="Report a new issue",
    responses=get_post_create_responses()
)
def create_post(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    media_type: Optional[str] = Form(None, alias="mediaType"),
    category: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    media: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """
    Create a post owned by the authenticated actor.

    Multipart form. Required: **title**, **description**, **mediaType**
    (`image` | `video`), **category**, **location**; optional **media** file.
    Oversized media is rejected before anything is stored.
    """
    authorize(actor, Operation.CREATE_POST)
    logger.info(f"Actor {actor.id} attempting to create post: '{title}'")

    data = crud_posts.validate_fields(PostCreate, _supplied(
        title=title,
        description=description,
        media_type=media_type,
        category=category,
        location=location,
    ))
    payload = ingest_post_media(media)
    post = crud_posts.create_post(db, actor.id, data, payload)
    return assemble(db, post)


@router.get(
    "",
    response_model=List[PostView],
    summary="List all posts",
    responses=get_post_list_responses()
)
def list_posts(
    db: Session = Depends(get_db),
    status_filter: Optional[PostStatus] = Query(None, alias="status", description="Only posts in this status"),
    category: Optional[str] = Query(None, description="Only posts in this category"),
    author_id: Optional[str] = Query(None, alias="authorId", description="Only posts by this author"),
    sort: SortOption = Query(SortOption.CREATED_DESC, description="Sort order")
):
    """
    Public listing, newest first by default.

    - **status**: filter by workflow status
    - **category**: exact category match
    - **authorId**: posts by one author
    - **sort**: created_desc (default), created_asc, votes_desc
    """
    posts = crud_posts.list_posts(
        db,
        sort=sort.value,
        status=status_filter,
        category=category,
        author_id=author_id,
    )
    return assemble_many(db, posts)


@router.get(
    "/user/me",
    response_model=List[PostView],
    summary="List the caller's own posts",
    responses=get_my_posts_responses()
)
def list_my_posts(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    posts = crud_posts.list_posts_by_author(db, actor.id)
    return assemble_many(db, posts)


@router.get(
    "/{post_id}",
    response_model=PostView,
    summary="Get a post by id",
    responses=get_single_post_responses()
)
def get_post(post_id: str, db: Session = Depends(get_db)):
    authorize(None, Operation.READ_POSTS)
    return assemble(db, crud_posts.get_post(db, post_id))


@router.patch(
    "/{post_id}",
    response_model=PostView,
    summary="Update post content",
    responses=get_post_update_responses()
)
def update_post(
    post_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    media_type: Optional[str] = Form(None, alias="mediaType"),
    category: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    media: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """
    Owner-only partial update.

    Only the supplied fields change. A new **media** file replaces the stored
    media as a whole; without one the existing media is kept.
    """
    post = crud_posts.get_post(db, post_id)
    if post.author_id != actor.id:
        logger.warning(f"Actor {actor.id} attempted to update post {post_id} owned by {post.author_id}")
    authorize(actor, Operation.UPDATE_POST, owner_id=post.author_id)

    update = crud_posts.validate_fields(PostContentUpdate, _supplied(
        title=title,
        description=description,
        media_type=media_type,
        category=category,
        location=location,
    ))
    payload = ingest_post_media(media)
    post = crud_posts.update_post_content(db, post, update, payload)
    return assemble(db, post)


@router.delete(
    "/{post_id}",
    response_model=PostDeletedResponse,
    summary="Delete a post",
    responses=get_post_delete_responses()
)
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """
    Delete a post together with its comments and votes.

    Any authenticated actor may call this unless STRICT_DELETE_OWNERSHIP is
    enabled, in which case only the owner or an admin may.
    """
    post = crud_posts.get_post(db, post_id)
    authorize(actor, Operation.DELETE_POST, owner_id=post.author_id)
    if post.author_id != actor.id and not actor.is_admin:
        logger.warning(f"Actor {actor.id} deleting post {post_id} owned by {post.author_id}")

    crud_posts.delete_post(db, post_id)
    return PostDeletedResponse(message="Post deleted successfully", post_id=post_id)


@router.delete(
    "/admin/{post_id}",
    response_model=PostDeletedResponse,
    summary="Delete a post (admin)",
    responses=get_post_delete_responses(admin=True)
)
def admin_delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    authorize(actor, Operation.ADMIN_DELETE_POST)
    crud_posts.delete_post(db, post_id)
    logger.info(f"Admin {actor.id} deleted post {post_id}")
    return PostDeletedResponse(message="Post deleted successfully by admin", post_id=post_id)


@router.patch(
    "/{post_id}/status",
    response_model=PostView,
    summary="Change post status (admin)",
    responses=get_post_status_responses()
)
def update_post_status(
    post_id: str,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Move a post to any of: posted, waitlist, in_progress, completed."""
    authorize(actor, Operation.UPDATE_STATUS)
    post = crud_posts.set_status(db, post_id, body.status)
    return assemble(db, post)


@router.post(
    "/{post_id}/vote",
    response_model=PostView,
    summary="Toggle the caller's vote",
    responses=get_post_vote_responses()
)
def vote_post(
    post_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Adds the caller's vote if absent, removes it if present."""
    authorize(actor, Operation.VOTE)
    post = crud_votes.toggle_vote(db, actor.id, post_id)
    return assemble(db, post)


@router.post(
    "/{post_id}/comment",
    response_model=CommentView,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses=get_comment_create_responses()
)
def add_comment(
    post_id: str,
    body: CommentCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    authorize(actor, Operation.COMMENT)
    comment = crud_comments.add_comment(db, post_id, actor.id, body.text)
    return comment_view(comment)


@router.post(
    "/admin/{post_id}/comment",
    response_model=CommentView,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post as the administration",
    responses=get_comment_create_responses(admin=True)
)
def add_admin_comment(
    post_id: str,
    body: CommentCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Admin-only. The comment is authored by the fixed admin identity, whoever the admin is."""
    authorize(actor, Operation.ADMIN_COMMENT)
    comment = crud_comments.add_comment(db, post_id, BuiltinIdentity.ADMIN_COMMENT_AUTHOR_ID, body.text)
    logger.info(f"Admin {actor.id} commented on post {post_id} as {BuiltinIdentity.ADMIN_COMMENT_AUTHOR_ID}")
    return comment_view(comment)
