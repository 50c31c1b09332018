from sqlalchemy import Column, DateTime, Enum, ForeignKey, JSON, LargeBinary, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.database import Base
from app.models.enums import MediaType, PostStatus
from app.models.user import generate_id, utcnow


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# Define Post model
class Post(Base):
    __tablename__ = "posts"

    id = Column(String(64), primary_key=True, default=generate_id)
    author_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)

    # Optional binary media; media_type is declared by the client independently
    media = Column(LargeBinary, nullable=True)
    media_content_type = Column(String, nullable=True)
    media_digest = Column(String(64), nullable=True)
    media_type = Column(Enum(MediaType, native_enum=False, values_callable=_enum_values), nullable=False)

    category = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False)
    status = Column(
        Enum(PostStatus, native_enum=False, values_callable=_enum_values),
        default=PostStatus.POSTED,
        nullable=False,
        index=True,
    )
    # Denormalized mirror of the votes table for this post (list of user ids)
    votes = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    # Relationship to User model
    author = relationship("User", back_populates="posts")
    # Relationship to Comment model, oldest first
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Comment.created_at",
    )
    vote_entries = relationship(
        "Vote",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(64), primary_key=True, default=generate_id)
    post_id = Column(String(64), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    post = relationship("Post", back_populates="comments")
    author = relationship("User")


class Vote(Base):
    __tablename__ = "votes"

    id = Column(String(64), primary_key=True, default=generate_id)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    post_id = Column(String(64), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    post = relationship("Post", back_populates="vote_entries")
    user = relationship("User")

    # One vote per user per post; concurrent duplicate inserts fail here
    __table_args__ = (
        UniqueConstraint('user_id', 'post_id', name='unique_user_vote_per_post'),
    )
