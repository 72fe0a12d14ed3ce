"""User domain models."""

import uuid
from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    ``password`` holds the PBKDF2 hash at rest. It only carries plaintext on
    the way into ``user_service.create_user``.
    """
    id: str | None = None
    customer_number: int = 0
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    postal_code: int | None = None
    city: str | None = None
    email_address: str | None = None
    phone_number: str | None = None
    password: str | None = None

    @staticmethod
    def new_id() -> str:
        """Generate a fresh user ID (hyphenated UUID4 string)."""
        return str(uuid.uuid4())


@dataclass(frozen=True)
class Login:
    """Credentials submitted for authentication. Never persisted."""
    email_address: str | None
    password: str | None


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a login attempt.

    ``id`` is empty when ``matched`` is False, regardless of whether the
    email was unknown or the password was wrong.
    """
    matched: bool
    id: str = ""

    @classmethod
    def rejected(cls) -> 'AuthResult':
        return cls(matched=False, id="")
