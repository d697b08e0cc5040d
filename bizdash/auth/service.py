from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ..config.loader import DEFAULT_HASH_METHOD
from .store import User, UserStore

"""Signup / login on top of a user store.

Passwords are hashed with werkzeug at a fixed work factor (the iteration
count in ``hash_method``) and never leave this module in clear or hashed
form; callers get User.public() dicts.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "AuthError",
    "AuthService",
    "EmailInUseError",
    "InvalidCredentialsError",
    "MissingFieldsError",
]


class AuthError(Exception):
    pass


class EmailInUseError(AuthError):
    def __init__(self) -> None:
        super().__init__("Email already in use")


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class MissingFieldsError(AuthError):
    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Missing required fields: {', '.join(fields)}")


def _require(**values: str | None) -> None:
    missing = [k for k, v in values.items() if not v]
    if missing:
        raise MissingFieldsError(missing)


class AuthService:
    def __init__(self, store: UserStore, hash_method: str = DEFAULT_HASH_METHOD) -> None:
        self.store = store
        self.hash_method = hash_method

    def signup(self, name: str | None, email: str | None, password: str | None) -> dict[str, str]:
        """Create a user.

        Raises:
            MissingFieldsError: name, email or password empty
            EmailInUseError: a user with this email exists
        """
        _require(name=name, email=email, password=password)
        if self.store.find_by_email(email) is not None:  # type: ignore[arg-type]
            raise EmailInUseError()
        hashed = generate_password_hash(password, method=self.hash_method)  # type: ignore[arg-type]
        user: User = self.store.create(name, email, hashed)  # type: ignore[arg-type]
        logger.info(f"user signed up id={user.id}")
        return user.public()

    def login(self, email: str | None, password: str | None) -> dict[str, str]:
        """Check credentials.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        if not email or not password:
            raise InvalidCredentialsError()
        user = self.store.find_by_email(email)
        if user is None or not check_password_hash(user.password_hash, password):
            raise InvalidCredentialsError()
        return user.public()
