"""
Identity Resolver.

Maps the opaque credential from the Authorization header to an Actor.
Two reserved literals resolve to the built-in demo and admin identities
without touching the user store; signed access tokens and (while enabled)
bare user ids are resolved against the store.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.constants import BuiltinIdentity, ErrorMessages
from app.core.exception import Unauthenticated
from app.core.security import decode_access_token, looks_like_jwt
from app.models.enums import UserRole
from app.models.user import User

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class Actor(BaseModel):
    """The resolved identity performing a request."""
    id: str
    role: UserRole

    model_config = ConfigDict(frozen=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


BUILTIN_ACTORS = {
    BuiltinIdentity.DEMO_USER_ID: Actor(id=BuiltinIdentity.DEMO_USER_ID, role=UserRole.USER),
    BuiltinIdentity.ADMIN_USER_ID: Actor(id=BuiltinIdentity.ADMIN_USER_ID, role=UserRole.ADMIN),
}


def extract_credential(authorization: Optional[str]) -> str:
    """Strip an optional 'Bearer ' scheme; the remainder is the credential."""
    if not authorization:
        return ""
    value = authorization.strip()
    if value.lower().startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):].strip()
    return value


def _resolve_subject(db: Session, subject: str) -> Actor:
    builtin = BUILTIN_ACTORS.get(subject)
    if builtin is not None:
        return builtin

    user = db.query(User).filter(User.id == subject).first()
    if user is None:
        logger.warning(f"Credential refers to unknown user: {subject}")
        raise Unauthenticated(ErrorMessages.USER_NOT_FOUND_FOR_TOKEN)
    return Actor(id=user.id, role=user.role)


def resolve(db: Session, credential: Optional[str]) -> Actor:
    """Resolve a credential to an Actor or raise Unauthenticated."""
    if not credential:
        raise Unauthenticated(ErrorMessages.AUTH_REQUIRED)

    builtin = BUILTIN_ACTORS.get(credential)
    if builtin is not None:
        return builtin

    if looks_like_jwt(credential):
        subject = decode_access_token(credential)
        if subject is None:
            raise Unauthenticated(ErrorMessages.INVALID_AUTHENTICATION)
        return _resolve_subject(db, subject)

    if not settings.ALLOW_LEGACY_ID_CREDENTIALS:
        raise Unauthenticated(ErrorMessages.INVALID_AUTHENTICATION)

    return _resolve_subject(db, credential)
