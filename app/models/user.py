import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, LargeBinary, String, Text
from sqlalchemy.orm import relationship

from app.db.database import Base
from app.models.enums import UserRole


def generate_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Define the User model
class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    role = Column(Enum(UserRole, native_enum=False, values_callable=lambda e: [m.value for m in e]),
                  default=UserRole.USER, nullable=False)

    # Profile picture is stored inline, served as a data URI
    profile_picture = Column(LargeBinary, nullable=True)
    profile_picture_content_type = Column(String, nullable=True)
    profile_picture_digest = Column(String(64), nullable=True)

    is_verified = Column(Boolean, default=False, nullable=False)
    verification_token = Column(String, unique=True, index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationship to Post model (one user can author many posts)
    posts = relationship("Post", back_populates="author")
