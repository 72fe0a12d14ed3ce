"""Auth service — password hashing and login verification.

Pure business logic with no HTTP dependencies.

Hashes are PBKDF2-HMAC-SHA256, 100k iterations, 32-byte key, base64 encoded,
with a single fixed salt shared by every user. The salt and parameters must
not change: stored hashes from the existing user database are compared
byte for byte. Moving to per-user salts needs a new stored field and a
migration of existing records.
"""

import base64
import hashlib
import hmac
import logging

from domain.model.errors import InvalidArgumentError
from domain.model.user import AuthResult, Login
from port.user_collection import UserCollection

logger = logging.getLogger(__name__)

PBKDF2_ALGORITHM = "sha256"
PBKDF2_ITERATIONS = 100_000
PBKDF2_KEY_LENGTH = 32
PASSWORD_SALT = bytes.fromhex("5a3c9e1f7b2d4086a1e3c5f7092b4d6e")


def hash_password(password: str) -> str:
    """Hash a plaintext password. Deterministic for a given input."""
    derived = hashlib.pbkdf2_hmac(
        PBKDF2_ALGORITHM,
        password.encode("utf-8"),
        PASSWORD_SALT,
        PBKDF2_ITERATIONS,
        dklen=PBKDF2_KEY_LENGTH,
    )
    return base64.b64encode(derived).decode("ascii")


def _hashes_equal(stored: str, computed: str) -> bool:
    return hmac.compare_digest(stored.encode("utf-8"), computed.encode("utf-8"))


def login(collection: UserCollection, credentials: Login | None) -> AuthResult:
    """Check an email/password pair against the stored users.

    Looks up the first user with exactly this email address (no case
    folding; duplicate emails resolve to whichever the store returns first).
    Unknown email and wrong password both yield ``AuthResult.rejected()``.

    Raises:
        InvalidArgumentError: credentials, email or password missing
        StorageUnavailableError: collection lookup failed
    """
    if credentials is None or credentials.email_address is None or credentials.password is None:
        logger.warning("Login attempted without email address or password")
        raise InvalidArgumentError("Email address and password are required")

    password_hash = hash_password(credentials.password)
    user = collection.find_one({'email_address': credentials.email_address})

    if user is None or user.password is None or not _hashes_equal(user.password, password_hash):
        logger.info("Login rejected", extra={"email": credentials.email_address})
        return AuthResult.rejected()

    logger.info("User logged in", extra={"userId": user.id, "email": credentials.email_address})
    return AuthResult(matched=True, id=user.id)
