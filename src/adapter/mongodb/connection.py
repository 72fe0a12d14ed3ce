import os
import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

# Read from the environment; api.main loads .env first so a local file can fill gaps
MONGO_CONNECTION_STRING = os.getenv('MONGO_CONNECTION_STRING', 'mongodb://localhost:27017')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'UserDB')
USERS_COLLECTION_NAME = os.getenv('MONGODB_COLLECTION', 'Users')
MONGODB_TIMEOUT_SECONDS = float(os.getenv('MONGODB_TIMEOUT_SECONDS', '5'))

_client_cache = None
_connection_attempted = False


def reset_client():
    global _client_cache, _connection_attempted
    _client_cache = None
    _connection_attempted = False


def get_mongodb_client() -> MongoClient | None:
    """Get MongoDB client with connection caching and reconnection logic.

    Connection strategy:
    1. Return cached client if healthy (ping succeeds)
    2. Otherwise build a new client and ping it
    3. On failure log and return None; the next call tries again

    A failed connection never raises. Callers treat None as "storage
    unavailable" for the request at hand.

    Returns:
        MongoDB client or None if connection fails
    """
    global _client_cache, _connection_attempted

    if _client_cache:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            _client_cache = None
            logger.debug("[MONGODB] Cached client failed ping, attempting reconnection...")

    timeout_ms = int(MONGODB_TIMEOUT_SECONDS * 1000)
    is_first_attempt = not _connection_attempted
    _connection_attempted = True

    try:
        client = MongoClient(
            MONGO_CONNECTION_STRING,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
        )
        client.admin.command('ping')
        _client_cache = client
        logger.info("[MONGODB] Connected", extra={
            "database": DATABASE_NAME,
            "collection": USERS_COLLECTION_NAME,
        })
        return client
    except (ConnectionFailure, PyMongoError) as e:
        error_msg = str(e)[:200]
        if is_first_attempt:
            logger.error(f"[MONGODB] Initial connection failed: {error_msg}")
        else:
            logger.debug(f"[MONGODB] Reconnection failed: {error_msg}")
        return None
