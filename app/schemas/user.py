from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.core.constants import AuthConfig, BusinessLimits
from app.models.enums import UserRole
from app.schemas.common import CamelModel


# Define a schema for registering a new user
class UserRegister(CamelModel):
    name: str = Field(..., min_length=1, max_length=BusinessLimits.MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(
        ...,
        min_length=AuthConfig.MIN_PASSWORD_LENGTH,
        max_length=AuthConfig.MAX_PASSWORD_LENGTH,
    )
    phone: Optional[str] = Field(None, max_length=BusinessLimits.MAX_PHONE_LENGTH)
    address: Optional[str] = Field(None, max_length=BusinessLimits.MAX_ADDRESS_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty or just whitespace")
        return v.strip()


class LoginRequest(CamelModel):
    email: str
    password: str


class AuthResult(CamelModel):
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    role: UserRole
    message: str
    access_token: str
    token_type: str = AuthConfig.TOKEN_TYPE


# Define a schema for reading user data
class UserView(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole
    is_verified: bool
    profile_picture_url: Optional[str] = None
    created_at: datetime


class ProfileUpdate(CamelModel):
    """Sparse profile update; omitted fields keep their values."""
    name: Optional[str] = Field(None, min_length=1, max_length=BusinessLimits.MAX_NAME_LENGTH)
    phone: Optional[str] = Field(None, max_length=BusinessLimits.MAX_PHONE_LENGTH)
    address: Optional[str] = Field(None, max_length=BusinessLimits.MAX_ADDRESS_LENGTH)
    bio: Optional[str] = Field(None, max_length=BusinessLimits.MAX_BIO_LENGTH)


class PasswordUpdate(CamelModel):
    current_password: str
    new_password: str = Field(
        ...,
        min_length=AuthConfig.MIN_PASSWORD_LENGTH,
        max_length=AuthConfig.MAX_PASSWORD_LENGTH,
    )
