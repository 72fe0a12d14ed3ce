"""User service — CRUD over the users collection and customer numbering.

Pure business logic with no HTTP dependencies. Invalid input raises
InvalidArgumentError; a missing record is reported as None/False, never as
an exception. Storage errors from the collection propagate unchanged.
"""

import logging
from dataclasses import replace

from domain.model.errors import DuplicateError, InvalidArgumentError
from domain.model.user import User
from port.user_collection import UserCollection
from services.auth_service import hash_password

logger = logging.getLogger(__name__)

CREATE_MAX_ATTEMPTS = 5


def _require_id(user_id: str | None, operation: str) -> None:
    if user_id is None or not user_id.strip():
        logger.warning(f"Invalid ID provided for {operation}")
        raise InvalidArgumentError("Invalid ID")


def _next_customer_number(collection: UserCollection) -> int:
    top = collection.find_top_one_sorted_descending('customer_number')
    return top.customer_number + 1 if top else 1


def create_user(collection: UserCollection, user: User | None) -> User:
    """Create a user from caller-supplied profile fields.

    Assigns a new ID and the next customer number, and replaces the
    plaintext password with its hash. The caller's object is left untouched.

    Two concurrent creates can read the same max customer number; the
    collection rejects the second insert (unique index) and this retries
    with a fresh number.

    Raises:
        InvalidArgumentError: user is None
        DuplicateError: customer number still taken after CREATE_MAX_ATTEMPTS
    """
    if user is None:
        logger.warning("Attempted to create a null user")
        raise InvalidArgumentError("User cannot be null")

    password_hash = hash_password(user.password) if user.password is not None else None

    for attempt in range(1, CREATE_MAX_ATTEMPTS + 1):
        new_user = replace(
            user,
            id=User.new_id(),
            customer_number=_next_customer_number(collection),
            password=password_hash,
        )
        try:
            collection.insert_one(new_user)
        except DuplicateError:
            if attempt == CREATE_MAX_ATTEMPTS:
                logger.error("Giving up on user creation", extra={"attempts": attempt})
                raise
            logger.warning("Customer number taken, retrying", extra={
                "customerNumber": new_user.customer_number,
                "attempt": attempt,
            })
            continue

        logger.info("User created", extra={
            "userId": new_user.id,
            "customerNumber": new_user.customer_number,
        })
        return new_user


def get_user_by_id(collection: UserCollection, user_id: str | None) -> User | None:
    """Return the user with this ID, or None if absent."""
    _require_id(user_id, "get_user_by_id")

    user = collection.find_one({'id': user_id})
    if user is None:
        logger.warning("User not found", extra={"userId": user_id})
    else:
        logger.info("User retrieved", extra={"userId": user_id})
    return user


def get_all_users(collection: UserCollection) -> list[User]:
    users = collection.find_many({})
    logger.info("Users retrieved", extra={"count": len(users)})
    return users


def update_user(collection: UserCollection, user_id: str | None, updated_user: User | None) -> User | None:
    """Replace the stored user with ``updated_user`` in full.

    Not a patch: every field is overwritten, including ``customer_number``
    and ``password``, which are written exactly as supplied (the password is
    not re-hashed). Callers that want to keep them must send them back.
    Only ``id`` is pinned to ``user_id``.

    Returns the stored user, or None if nothing matched or nothing changed.

    Raises:
        InvalidArgumentError: bad ID or None user
        DuplicateError: the supplied non-zero customer number belongs to
            another user
    """
    _require_id(user_id, "update_user")
    if updated_user is None:
        logger.warning("Attempted to update with a null user")
        raise InvalidArgumentError("Updated user cannot be null")

    replacement = replace(updated_user, id=user_id)
    modified = collection.replace_one({'id': user_id}, replacement)
    if modified > 0:
        logger.info("User updated", extra={"userId": user_id})
        return replacement

    logger.warning("User not found or no changes made", extra={"userId": user_id})
    return None


def delete_user(collection: UserCollection, user_id: str | None) -> bool:
    """Delete the user with this ID. Return True iff a record was removed."""
    _require_id(user_id, "delete_user")

    if collection.delete_one({'id': user_id}) > 0:
        logger.info("User deleted", extra={"userId": user_id})
        return True

    logger.warning("User not found", extra={"userId": user_id})
    return False
