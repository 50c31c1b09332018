from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.core.constants import BusinessLimits
from app.models.enums import MediaType, PostStatus
from app.schemas.common import CamelModel


def _strip_required(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{field} cannot be empty or just whitespace")
    return value.strip()


# Schema for creating a new post (form fields, media arrives separately)
class PostCreate(CamelModel):
    title: str = Field(..., max_length=BusinessLimits.MAX_POST_TITLE_LENGTH)
    description: str = Field(..., max_length=BusinessLimits.MAX_POST_DESCRIPTION_LENGTH)
    media_type: MediaType
    category: str = Field(..., max_length=BusinessLimits.MAX_CATEGORY_LENGTH)
    location: str = Field(..., max_length=BusinessLimits.MAX_LOCATION_LENGTH)

    @field_validator("title", "description", "category", "location")
    @classmethod
    def validate_required_text(cls, v, info):
        return _strip_required(v, info.field_name)


# Sparse update: only fields that are not None are applied
class PostContentUpdate(CamelModel):
    title: Optional[str] = Field(None, max_length=BusinessLimits.MAX_POST_TITLE_LENGTH)
    description: Optional[str] = Field(None, max_length=BusinessLimits.MAX_POST_DESCRIPTION_LENGTH)
    media_type: Optional[MediaType] = None
    category: Optional[str] = Field(None, max_length=BusinessLimits.MAX_CATEGORY_LENGTH)
    location: Optional[str] = Field(None, max_length=BusinessLimits.MAX_LOCATION_LENGTH)

    @field_validator("title", "description", "category", "location")
    @classmethod
    def validate_optional_text(cls, v, info):
        if v is None:
            return v
        return _strip_required(v, info.field_name)

    def present_fields(self) -> dict:
        return self.model_dump(exclude_none=True)


class StatusUpdate(CamelModel):
    # Kept as a plain string so unknown values reach the workflow check
    status: str = Field(..., description="One of: posted, waitlist, in_progress, completed")


class CommentCreate(CamelModel):
    text: str


class AuthorSummary(CamelModel):
    id: str
    name: Optional[str] = None


class CommentView(CamelModel):
    id: str
    post_id: str
    author_id: str
    author_name: Optional[str] = None
    text: str
    created_at: datetime


class PostView(CamelModel):
    id: str
    author_id: str
    author: Optional[AuthorSummary] = None
    title: str
    description: str
    media_type: MediaType
    media_url: Optional[str] = Field(None, description="data:<contentType>;base64,<payload> when media is attached")
    category: str
    location: str
    status: PostStatus
    votes: List[str] = []
    created_at: datetime
    comments: List[CommentView] = []
