"""Domain-level exceptions.

Services raise these errors to express invalid input and storage failures.
Route handlers catch them and map to appropriate HTTP status codes.

"Not found" is deliberately not an exception: services return None/False.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class InvalidArgumentError(DomainError):
    """Missing or empty ID, or missing payload."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class StorageUnavailableError(DomainError):
    """The underlying collection call failed (network, timeout, no connection).

    ``retryable`` is True for timeouts; callers may retry those.
    """

    def __init__(self, message: str, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)
