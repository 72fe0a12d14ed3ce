"""MongoDB implementation of UserCollection."""

from contextlib import contextmanager
from dataclasses import asdict, fields
from logging import getLogger
from typing import Any

import pymongo
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import MONGODB_TIMEOUT_SECONDS, USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, InvalidArgumentError, StorageUnavailableError
from domain.model.user import User

logger = getLogger(__name__)

# Document field names as written by the original .NET service
FIELD_MAP = {
    'id': '_id',
    'customer_number': 'CustomerNumber',
    'first_name': 'FirstName',
    'last_name': 'LastName',
    'address': 'Address',
    'postal_code': 'PostalCode',
    'city': 'City',
    'email_address': 'EmailAddress',
    'phone_number': 'PhoneNumber',
    'password': 'Password',
}


class MongoUserCollection:
    def __init__(
        self,
        db: Database,
        collection_name: str = USERS_COLLECTION_NAME,
        timeout: float = MONGODB_TIMEOUT_SECONDS,
    ):
        self.collection = db[collection_name]
        self.timeout = timeout

    def ensure_indexes(self) -> bool:
        """Create indexes for the users collection.

        The unique customer number index is what makes concurrent creates safe:
        a second insert with the same number fails and the service retries.
        Number 0 (never assigned, e.g. after an update that omits it) is left
        out of the index so any number of users may carry it.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(
                self.collection, [(FIELD_MAP['customer_number'], ASCENDING)],
                'idx_users_customer_number', unique=True,
                partialFilterExpression={FIELD_MAP['customer_number']: {'$gt': 0}},
            )
            create_index_safe(
                self.collection, [(FIELD_MAP['email_address'], ASCENDING)],
                'idx_users_email_address',
            )
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    @contextmanager
    def _storage_call(self, action: str, **log_fields):
        """Run a collection call under the request timeout and translate driver errors."""
        try:
            with pymongo.timeout(self.timeout):
                yield
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key on {action}", extra={**log_fields, "error": str(e)})
            raise DuplicateError(f"Duplicate key on {action}") from e
        except PyMongoError as e:
            logger.error(f"Failed to {action}", extra={
                **log_fields,
                "error": str(e),
                "timeout": e.timeout,
            })
            raise StorageUnavailableError(f"Failed to {action}", retryable=e.timeout) from e

    @staticmethod
    def _to_document(user: User) -> dict:
        return {FIELD_MAP[key]: value for key, value in asdict(user).items()}

    @staticmethod
    def _to_domain(doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        values = {f.name: doc.get(FIELD_MAP[f.name]) for f in fields(User)}
        values['customer_number'] = values['customer_number'] or 0
        return User(**values)

    @staticmethod
    def _to_query(filter: dict[str, Any]) -> dict:
        try:
            return {FIELD_MAP[key]: value for key, value in filter.items()}
        except KeyError as e:
            raise InvalidArgumentError(f"Unknown user field: {e.args[0]}") from e

    def insert_one(self, user: User) -> None:
        with self._storage_call("insert user", userId=user.id):
            self.collection.insert_one(self._to_document(user))

    def find_one(self, filter: dict[str, Any]) -> User | None:
        query = self._to_query(filter)
        with self._storage_call("find user", filter=list(filter)):
            doc = self.collection.find_one(query)
        return self._to_domain(doc) if doc else None

    def find_many(self, filter: dict[str, Any]) -> list[User]:
        query = self._to_query(filter)
        with self._storage_call("find users", filter=list(filter)):
            docs = list(self.collection.find(query))
        return [self._to_domain(doc) for doc in docs]

    def find_top_one_sorted_descending(self, field: str) -> User | None:
        sort_key = self._to_query({field: None}).popitem()[0]
        with self._storage_call("find top user", field=field):
            doc = self.collection.find_one({}, sort=[(sort_key, DESCENDING)])
        return self._to_domain(doc) if doc else None

    def replace_one(self, filter: dict[str, Any], user: User) -> int:
        query = self._to_query(filter)
        with self._storage_call("replace user", userId=user.id):
            result = self.collection.replace_one(query, self._to_document(user))
        return result.modified_count

    def delete_one(self, filter: dict[str, Any]) -> int:
        query = self._to_query(filter)
        with self._storage_call("delete user", filter=list(filter)):
            result = self.collection.delete_one(query)
        return result.deleted_count
