from datetime import timedelta
from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile, status
from sqlalchemy.orm import Session
import logging

from app.db.database import get_db
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import AuthResult, LoginRequest, PasswordUpdate, ProfileUpdate, UserRegister, UserView
from app.core.config import settings
from app.core.constants import BuiltinIdentity, ErrorCodes, ErrorMessages
from app.core.exception import InvalidArgument
from app.core.security import create_access_token
from app.crud import users as crud_users
from app.services.mailer import EmailSender, deliver_verification_email, get_email_sender
from app.services.media import ingest_profile_picture, media_url
from app.api.v1.endpoints.dependencies import get_current_user
from app.api.v1.responses import (
    get_registration_responses,
    get_login_responses,
    get_user_profile_responses,
    get_profile_update_responses,
    get_password_update_responses,
    get_profile_picture_responses,
    get_verify_responses,
)

# Setup logging
logger = logging.getLogger(__name__)

# Demo logins answer with the reserved identities without a password check against the store
DEMO_LOGINS = {
    (BuiltinIdentity.DEMO_USER_EMAIL, BuiltinIdentity.DEMO_USER_PASSWORD): {
        "user_id": BuiltinIdentity.DEMO_USER_ID,
        "name": BuiltinIdentity.DEMO_USER_NAME,
        "email": BuiltinIdentity.DEMO_USER_EMAIL,
        "phone": BuiltinIdentity.DEMO_USER_PHONE,
        "address": BuiltinIdentity.DEMO_USER_ADDRESS,
        "role": UserRole.USER,
    },
    (BuiltinIdentity.ADMIN_USER_EMAIL, BuiltinIdentity.ADMIN_USER_PASSWORD): {
        "user_id": BuiltinIdentity.ADMIN_USER_ID,
        "name": BuiltinIdentity.ADMIN_USER_NAME,
        "email": BuiltinIdentity.ADMIN_USER_EMAIL,
        "phone": BuiltinIdentity.ADMIN_USER_PHONE,
        "address": BuiltinIdentity.ADMIN_USER_ADDRESS,
        "role": UserRole.ADMIN,
    },
}

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_token(user_id: str) -> str:
    return create_access_token(
        data={"sub": user_id},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def _auth_result(user: User, message: str) -> AuthResult:
    return AuthResult(
        user_id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        address=user.address,
        role=user.role,
        message=message,
        access_token=_issue_token(user.id),
    )


def _user_view(user: User) -> UserView:
    return UserView(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        address=user.address,
        bio=user.bio,
        role=user.role,
        is_verified=user.is_verified,
        profile_picture_url=media_url(
            user.profile_picture, user.profile_picture_content_type, user.profile_picture_digest
        ),
        created_at=user.created_at,
    )


@router.post("/register", response_model=AuthResult, status_code=status.HTTP_201_CREATED, responses=get_registration_responses())
def register_user(
    user: UserRegister,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender)
):
    """
    Register a new account.

    The account starts unverified; a verification link is mailed in the
    background and a failed delivery does not fail the registration.
    """
    logger.info(f"Registration attempt for email: {user.email}")

    db_user = crud_users.create_user(db, user)
    background_tasks.add_task(
        deliver_verification_email, email_sender, db_user.email, db_user.verification_token
    )

    return _auth_result(
        db_user, "User registered successfully. Please check your email to verify your account."
    )


@router.post("/login", response_model=AuthResult, responses=get_login_responses())
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Log in with email and password.

    Returns the user summary plus a signed access token to send as
    `Authorization: Bearer <token>`.
    """
    email = login_data.email.strip().lower()
    logger.info(f"Login attempt for email: {email}")

    demo = DEMO_LOGINS.get((email, login_data.password))
    if demo is not None:
        logger.info(f"Demo login for reserved identity {demo['user_id']}")
        return AuthResult(**demo, message="Login successful", access_token=_issue_token(demo["user_id"]))

    user = crud_users.authenticate(db, email, login_data.password)
    if user is None:
        logger.warning(f"Failed login attempt for email: {email}")
        raise InvalidArgument(ErrorMessages.INVALID_CREDENTIALS, error_code=ErrorCodes.INVALID_CREDENTIALS)

    logger.info(f"Login successful for user: {user.id}")
    return _auth_result(user, "Login successful")


@router.get("/me", response_model=UserView, responses=get_user_profile_responses())
def read_current_user(current_user: User = Depends(get_current_user)):
    return _user_view(current_user)


@router.patch("/update-profile", response_model=UserView, responses=get_profile_update_responses())
def update_profile(
    update: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update any of name, phone, address and bio; omitted fields are kept."""
    user = crud_users.update_profile(db, current_user, update)
    return _user_view(user)


@router.patch("/update-password", response_model=MessageResponse, responses=get_password_update_responses())
def update_password(
    update: PasswordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    crud_users.update_password(db, current_user, update)
    return MessageResponse(message="Password updated successfully")


@router.patch("/update-profile-pic", response_model=UserView, responses=get_profile_picture_responses())
def update_profile_picture(
    profile_picture: UploadFile = File(..., alias="profilePicture"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Replace the profile picture. Images only, up to MAX_PROFILE_PICTURE_BYTES."""
    payload = ingest_profile_picture(profile_picture)
    if payload is None:
        raise InvalidArgument("No file uploaded")

    user = crud_users.set_profile_picture(db, current_user, payload)
    return _user_view(user)


@router.get("/verify/{token}", response_model=MessageResponse, responses=get_verify_responses())
def verify_email(token: str, db: Session = Depends(get_db)):
    crud_users.verify_email(db, token)
    return MessageResponse(message="Email verified successfully")
