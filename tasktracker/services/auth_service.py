# tasktracker/services/auth_service.py
import logging
import secrets
from typing import Optional

from tasktracker.config.settings import Settings
from tasktracker.exceptions import DuplicateUserError, InvalidCredentialsError, UserNotFoundError
from tasktracker.models.user import User, UserRole
from tasktracker.stores.user_store import UserStore
from tasktracker.utils.security import (
    Identity,
    decode_access_token,
    hash_password,
    token_for,
    verify_password,
)

logger = logging.getLogger(__name__)

# Verified against when the email is unknown, so both login failures cost one bcrypt check
_dummy_hashes = {}


def _dummy_hash(rounds: int) -> str:
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = hash_password(secrets.token_urlsafe(16), rounds=rounds)
    return _dummy_hashes[rounds]


def normalize_email(email: str) -> str:
    return email.strip().lower()


def public_user(user: User) -> dict:
    """The user projection that leaves the service; never includes the hash"""
    return {"id": user.id, "name": user.name, "email": user.email, "role": user.role}


class AuthService:
    """Registration, login and token verification"""

    def __init__(self, users: UserStore, settings: Settings):
        self.users = users
        self.settings = settings

    def _session(self, user: User) -> dict:
        identity = Identity(id=user.id, email=user.email, role=user.role)
        return {"token": token_for(identity, self.settings), "user": public_user(user)}

    def register(self, name: str, email: str, password: str, role: UserRole) -> dict:
        email = normalize_email(email)
        if self.users.get_by_email(email) is not None:
            raise DuplicateUserError()

        hashed = hash_password(password, rounds=self.settings.bcrypt_rounds)
        user = self.users.add(name=name.strip(), email=email, hashed_password=hashed, role=role)
        logger.info("Registered user %s with role %s", user.id, user.role.value)
        return self._session(user)

    def login(self, email: str, password: str) -> dict:
        user: Optional[User] = self.users.get_by_email(normalize_email(email))
        if user is None:
            verify_password(password, _dummy_hash(self.settings.bcrypt_rounds))
            raise InvalidCredentialsError()
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return self._session(user)

    def authenticate(self, token: str) -> Identity:
        """Resolve a bearer token to the identity it carries (no database access)"""
        return decode_access_token(token, self.settings)

    def get_current_user(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError()
        return user
