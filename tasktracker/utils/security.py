# tasktracker/utils/security.py
# Password hashing and session token signing

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from tasktracker.config.settings import Settings
from tasktracker.exceptions import InvalidTokenError
from tasktracker.models.user import UserRole

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class Identity:
    """Who the caller is, as carried in a verified session token"""

    id: int
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def _password_bytes(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        logger.warning("Password exceeds %d bytes, truncating", BCRYPT_MAX_BYTES)
        password_bytes = password_bytes[:BCRYPT_MAX_BYTES]
    return password_bytes


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh salt"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash; never raises on a bad hash"""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.error("Stored password hash is not a valid bcrypt hash")
        return False


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.access_token_expire_hours)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def token_for(identity: Identity, settings: Settings) -> str:
    return create_access_token(
        data={
            "sub": identity.email,
            "id": identity.id,
            "email": identity.email,
            "role": identity.role.value,
        },
        settings=settings,
    )


def decode_access_token(token: str, settings: Settings) -> Identity:
    """Verify signature and expiry and return the embedded identity"""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise InvalidTokenError()

    user_id = payload.get("id")
    email = payload.get("email")
    role = payload.get("role")
    if not isinstance(user_id, int) or not email or role is None:
        raise InvalidTokenError()
    try:
        return Identity(id=user_id, email=email, role=UserRole(role))
    except ValueError:
        raise InvalidTokenError()
