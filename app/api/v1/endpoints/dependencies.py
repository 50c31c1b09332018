from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from app.core.identity import Actor, extract_credential, resolve
from app.crud import users as crud_users
from app.db.database import get_db
from app.models.user import User

# The Authorization header carries either "Bearer <token>" or a bare credential
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def get_current_actor(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Depends(authorization_header),
) -> Actor:
    """Resolve the request's credential to an Actor.
    Any endpoint that requires authentication can use this dependency.
    """
    return resolve(db, extract_credential(authorization))


def get_current_user(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> User:
    """Load the stored user behind the current actor."""
    return crud_users.get_user(db, actor.id)
