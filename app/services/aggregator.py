"""
Post Aggregator.

Every read path (create, read-by-id, list, own posts, update, vote, status)
goes through ``assemble_many`` so the response shape cannot drift between
endpoints. Comments for all requested posts are fetched with one query and
grouped in memory; author summaries are ``{id, name}`` everywhere.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from app.crud.comments import comments_for_posts
from app.models.posts import Comment, Post
from app.models.user import User
from app.schemas.post import AuthorSummary, CommentView, PostView
from app.services.media import media_url

logger = logging.getLogger(__name__)


def comment_view(comment: Comment) -> CommentView:
    author = comment.author
    return CommentView(
        id=comment.id,
        post_id=comment.post_id,
        author_id=comment.author_id,
        author_name=author.name if author is not None else None,
        text=comment.text,
        created_at=comment.created_at,
    )


def _comments_by_post(db: Session, post_ids: List[str]) -> Dict[str, List[CommentView]]:
    grouped = defaultdict(list)
    for comment in comments_for_posts(db, post_ids):
        grouped[comment.post_id].append(comment_view(comment))
    return grouped


def _authors_by_id(db: Session, author_ids: Iterable[str]) -> Dict[str, AuthorSummary]:
    ids = list(set(author_ids))
    if not ids:
        return {}
    rows = db.query(User.id, User.name).filter(User.id.in_(ids)).all()
    return {row.id: AuthorSummary(id=row.id, name=row.name) for row in rows}


def _post_view(post: Post, author: AuthorSummary, comments: List[CommentView]) -> PostView:
    return PostView(
        id=post.id,
        author_id=post.author_id,
        author=author,
        title=post.title,
        description=post.description,
        media_type=post.media_type,
        media_url=media_url(post.media, post.media_content_type, post.media_digest),
        category=post.category,
        location=post.location,
        status=post.status,
        votes=sorted(post.votes or []),
        created_at=post.created_at,
        comments=comments,
    )


def assemble_many(db: Session, posts: List[Post]) -> List[PostView]:
    """Build PostViews for posts, preserving their order."""
    if not posts:
        return []

    comments = _comments_by_post(db, [post.id for post in posts])
    authors = _authors_by_id(db, (post.author_id for post in posts))

    views = [
        _post_view(
            post,
            authors.get(post.author_id, AuthorSummary(id=post.author_id)),
            comments.get(post.id, []),
        )
        for post in posts
    ]
    logger.debug(f"Assembled {len(views)} post view(s)")
    return views


def assemble(db: Session, post: Post) -> PostView:
    return assemble_many(db, [post])[0]
