"""Authentication: signup / login service and user stores."""

from .service import AuthError, AuthService, EmailInUseError, InvalidCredentialsError, MissingFieldsError
from .store import InMemoryUserStore, PostgresUserStore, User, UserStore

__all__ = [
    "AuthError",
    "AuthService",
    "EmailInUseError",
    "InMemoryUserStore",
    "InvalidCredentialsError",
    "MissingFieldsError",
    "PostgresUserStore",
    "User",
    "UserStore",
]
