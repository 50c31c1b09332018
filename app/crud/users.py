import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import BuiltinIdentity, ErrorMessages
from app.core.exception import Conflict, InvalidArgument, NotFound, StorageError
from app.core.security import generate_verification_token, get_password_hash, verify_password
from app.crud.base import commit, transaction
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.user import PasswordUpdate, ProfileUpdate, UserRegister
from app.services.media import MediaPayload

logger = logging.getLogger(__name__)

BUILTIN_USERS = (
    {
        "id": BuiltinIdentity.DEMO_USER_ID,
        "name": BuiltinIdentity.DEMO_USER_NAME,
        "email": BuiltinIdentity.DEMO_USER_EMAIL,
        "password": BuiltinIdentity.DEMO_USER_PASSWORD,
        "phone": BuiltinIdentity.DEMO_USER_PHONE,
        "address": BuiltinIdentity.DEMO_USER_ADDRESS,
        "role": UserRole.USER,
    },
    {
        "id": BuiltinIdentity.ADMIN_USER_ID,
        "name": BuiltinIdentity.ADMIN_USER_NAME,
        "email": BuiltinIdentity.ADMIN_USER_EMAIL,
        "password": BuiltinIdentity.ADMIN_USER_PASSWORD,
        "phone": BuiltinIdentity.ADMIN_USER_PHONE,
        "address": BuiltinIdentity.ADMIN_USER_ADDRESS,
        "role": UserRole.ADMIN,
    },
)


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound(ErrorMessages.USER_NOT_FOUND, resource_type="user", resource_id=user_id)
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(db: Session, user: UserRegister, role: UserRole = UserRole.USER) -> User:
    email = user.email.strip().lower()
    if get_user_by_email(db, email) is not None:
        logger.warning(f"Registration failed: email '{email}' already exists")
        raise Conflict(ErrorMessages.DUPLICATE_EMAIL, details={"email": email})

    db_user = User(
        name=user.name,
        email=email,
        hashed_password=get_password_hash(user.password),
        phone=user.phone,
        address=user.address,
        role=role,
        is_verified=False,
        verification_token=generate_verification_token(),
    )
    try:
        with transaction(db, "register user"):
            db.add(db_user)
    except StorageError as e:
        # Lost a race with a concurrent registration of the same address
        if isinstance(e.__cause__, IntegrityError):
            raise Conflict(ErrorMessages.DUPLICATE_EMAIL, details={"email": email}) from e
        raise
    db.refresh(db_user)

    logger.info(f"User registered: ID {db_user.id}, email {db_user.email}")
    return db_user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


def update_profile(db: Session, user: User, update: ProfileUpdate) -> User:
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        changes["name"] = changes["name"].strip()
        if not changes["name"]:
            raise InvalidArgument("Name cannot be empty or just whitespace")

    for key, value in changes.items():
        setattr(user, key, value)
    commit(db, "update profile")
    db.refresh(user)

    logger.info(f"Profile updated for user {user.id}: {sorted(changes)}")
    return user


def update_password(db: Session, user: User, update: PasswordUpdate) -> User:
    if not verify_password(update.current_password, user.hashed_password):
        raise InvalidArgument(ErrorMessages.WRONG_PASSWORD)

    user.hashed_password = get_password_hash(update.new_password)
    commit(db, "update password")

    logger.info(f"Password changed for user {user.id}")
    return user


def set_profile_picture(db: Session, user: User, media: MediaPayload) -> User:
    user.profile_picture = media.data
    user.profile_picture_content_type = media.content_type
    user.profile_picture_digest = media.digest
    commit(db, "update profile picture")
    db.refresh(user)

    logger.info(f"Profile picture updated for user {user.id}: {len(media.data)} bytes")
    return user


def verify_email(db: Session, token: str) -> User:
    user = db.query(User).filter(User.verification_token == token).first()
    if user is None:
        raise NotFound(ErrorMessages.VERIFICATION_TOKEN_NOT_FOUND, resource_type="verification_token")

    user.is_verified = True
    user.verification_token = None
    commit(db, "verify email")

    logger.info(f"Email verified for user {user.id}")
    return user


def ensure_builtin_users(db: Session) -> None:
    """Seed the reserved demo and admin identities so foreign keys and author names resolve."""
    for builtin in BUILTIN_USERS:
        if db.query(User.id).filter(User.id == builtin["id"]).first() is not None:
            continue
        db.add(User(
            id=builtin["id"],
            name=builtin["name"],
            email=builtin["email"],
            hashed_password=get_password_hash(builtin["password"]),
            phone=builtin["phone"],
            address=builtin["address"],
            role=builtin["role"],
            is_verified=True,
        ))
        logger.info(f"Seeded built-in user {builtin['id']}")
    commit(db, "seed built-in users")
