"""
Common schemas shared across the API.

Wire format is camelCase; Python attributes stay snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema that reads snake_case attributes and emits camelCase JSON"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    message: str = Field(..., description="Human readable outcome")


class PostDeletedResponse(MessageResponse):
    post_id: str = Field(..., description="Identifier of the deleted post")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Post deleted successfully",
                "postId": "3f1c9a7e5b8d4c2a9e6f0b1d2c3a4b5c"
            }
        }
    )
