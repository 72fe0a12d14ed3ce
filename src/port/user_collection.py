"""Port for the users document collection."""

from typing import Any, Protocol

from domain.model.user import User


class UserCollection(Protocol):
    """Protocol for document-style access to stored users.

    Filters are dicts keyed by ``User`` attribute names and match by exact
    equality, e.g. ``{'email_address': 'a@b.com'}``. An empty filter matches
    every user.

    All methods raise StorageUnavailableError when the store cannot be reached.
    """

    def insert_one(self, user: User) -> None:
        """Insert a user. Raise DuplicateError on a unique-key conflict."""
        ...

    def find_one(self, filter: dict[str, Any]) -> User | None:
        """Return the first matching user, or None."""
        ...

    def find_many(self, filter: dict[str, Any]) -> list[User]:
        """Return all matching users (order not guaranteed)."""
        ...

    def find_top_one_sorted_descending(self, field: str) -> User | None:
        """Return the user with the highest value of ``field``, or None if empty."""
        ...

    def replace_one(self, filter: dict[str, Any], user: User) -> int:
        """Replace the first matching user entirely. Return modified count."""
        ...

    def delete_one(self, filter: dict[str, Any]) -> int:
        """Delete the first matching user. Return deleted count."""
        ...
