"""
User directory: registration and credential checks.

Only an argon2 hash of the password is stored. Login failures use one
message whether the email is unknown or the password is wrong.
"""

import logging
from typing import Any, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from community_board.database.store import Store
from community_board.errors import AuthError, ValidationError
from community_board.models import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

# Verified against when the email is unknown, so both failure paths do the same work
_DUMMY_PASSWORD = "community-board-dummy-password"


def _text(value: Any, label: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    return value


class UserDirectory:
    def __init__(self, store: Store, hasher: Optional[PasswordHasher] = None) -> None:
        self.store = store
        self.hasher = hasher or PasswordHasher()
        self._dummy_hash: Optional[str] = None

    def register(self, name: str, email: str, password: str) -> User:
        """
        Create a new account.

        Raises:
            ValidationError: A field is missing, blank or not a string.
            ConflictError: The email is already registered (case-insensitive).
        """
        name = _text(name, "Name").strip()
        email = _text(email, "Email").strip().lower()
        password = _text(password, "Password")

        if not name:
            raise ValidationError("Name is required")
        if not email:
            raise ValidationError("Email is required")
        if not password.strip():
            raise ValidationError("Password is required")

        user = self.store.add_user(name, email, self.hasher.hash(password))
        logger.info(f"[Directory] Registered user {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """
        Check credentials and return the matching user.

        Raises:
            AuthError: Unknown email or wrong password (same message for both).
        """
        if not isinstance(email, str) or not isinstance(password, str):
            self._burn_verification("")
            raise AuthError(INVALID_CREDENTIALS)
        email = email.strip().lower()

        user = self.store.get_user_by_email(email) if email else None
        if user is None:
            self._burn_verification(password)
            raise AuthError(INVALID_CREDENTIALS)

        try:
            self.hasher.verify(user.password_hash, password)
        except (VerificationError, InvalidHashError):
            raise AuthError(INVALID_CREDENTIALS)

        return user

    def get(self, user_id: int) -> Optional[User]:
        return self.store.get_user(user_id)

    def _burn_verification(self, password: str) -> None:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(_DUMMY_PASSWORD)
        try:
            self.hasher.verify(self._dummy_hash, password)
        except (VerificationError, InvalidHashError):
            pass
