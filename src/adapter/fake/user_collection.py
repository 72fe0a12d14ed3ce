"""In-memory implementation of UserCollection for testing."""

from dataclasses import fields, replace
from typing import Any

from domain.model.errors import DuplicateError, InvalidArgumentError
from domain.model.user import User

_USER_FIELDS = {f.name for f in fields(User)}


class FakeUserCollection:
    """Dict-backed collection mirroring the MongoDB adapter's semantics.

    Enforces unique ``id`` and non-zero ``customer_number`` like the Mongo indexes,
    reports zero modified documents for identical replacements, and hands
    out copies so callers cannot mutate stored state.
    """

    def __init__(self):
        self.store: dict[str, User] = {}

    @staticmethod
    def _check_fields(filter: dict[str, Any]) -> None:
        unknown = set(filter) - _USER_FIELDS
        if unknown:
            raise InvalidArgumentError(f"Unknown user field: {unknown.pop()}")

    @staticmethod
    def _matches(user: User, filter: dict[str, Any]) -> bool:
        return all(getattr(user, key) == value for key, value in filter.items())

    def _first_key(self, filter: dict[str, Any]) -> str | None:
        self._check_fields(filter)
        for key, user in self.store.items():
            if self._matches(user, filter):
                return key
        return None

    def _check_customer_number(self, user: User, ignore_key: str | None = None) -> None:
        # 0 means "never assigned" and may repeat, like the partial Mongo index
        if user.customer_number == 0:
            return
        for key, existing in self.store.items():
            if key != ignore_key and existing.customer_number == user.customer_number:
                raise DuplicateError(f"Customer number {user.customer_number} already in use")

    # ── write operations ─────────────────────────────────────

    def insert_one(self, user: User) -> None:
        if user.id in self.store:
            raise DuplicateError(f"User ID {user.id} already exists")
        self._check_customer_number(user)
        self.store[user.id] = replace(user)

    def replace_one(self, filter: dict[str, Any], user: User) -> int:
        key = self._first_key(filter)
        if key is None or self.store[key] == user:
            return 0
        self._check_customer_number(user, ignore_key=key)
        self.store[key] = replace(user)
        return 1

    def delete_one(self, filter: dict[str, Any]) -> int:
        key = self._first_key(filter)
        if key is None:
            return 0
        del self.store[key]
        return 1

    # ── read operations ──────────────────────────────────────

    def find_one(self, filter: dict[str, Any]) -> User | None:
        key = self._first_key(filter)
        return replace(self.store[key]) if key is not None else None

    def find_many(self, filter: dict[str, Any]) -> list[User]:
        self._check_fields(filter)
        return [replace(u) for u in self.store.values() if self._matches(u, filter)]

    def find_top_one_sorted_descending(self, field: str) -> User | None:
        if field not in _USER_FIELDS:
            raise InvalidArgumentError(f"Unknown user field: {field}")
        candidates = [u for u in self.store.values() if getattr(u, field) is not None]
        if not candidates:
            return None
        return replace(max(candidates, key=lambda u: getattr(u, field)))
