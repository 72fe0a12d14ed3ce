from adapter.mongodb.connection import (
    DATABASE_NAME,
    MONGODB_TIMEOUT_SECONDS,
    USERS_COLLECTION_NAME,
    get_mongodb_client,
)

__all__ = [
    'DATABASE_NAME',
    'MONGODB_TIMEOUT_SECONDS',
    'USERS_COLLECTION_NAME',
    'get_mongodb_client',
]
