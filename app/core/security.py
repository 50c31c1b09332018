from datetime import datetime, timedelta, timezone
from typing import Optional
import secrets

from passlib.context import CryptContext
from jose import JWTError, jwt

from app.core.config import settings
from app.core.constants import AuthConfig

ALGORITHM = AuthConfig.ALGORITHM

# Configure password context with proper bcrypt settings
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,  # Explicit rounds for bcrypt
    bcrypt__default_ident="2b"  # Use 2b variant for better compatibility
)


def _truncate_for_bcrypt(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > 72:
        password = password_bytes[:72].decode('utf-8', errors='ignore')
    return password


# Password hashing
def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(_truncate_for_bcrypt(plain_password), hashed_password)
    except ValueError:
        # Malformed or unknown hash format
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(_truncate_for_bcrypt(password))


# JWT token creation and verification
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Optional[str]:
    """Return the token subject, or None when the token is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) and subject else None


def looks_like_jwt(credential: str) -> bool:
    return credential.count(".") == 2


def generate_verification_token() -> str:
    return secrets.token_urlsafe(AuthConfig.VERIFICATION_TOKEN_BYTES)
