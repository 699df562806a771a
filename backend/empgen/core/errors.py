"""
Error types raised by the employee store.

StoreConnectionError is fatal at startup; PersistenceError is raised per request
and mapped to HTTP 500 by the application's exception handlers.
"""


class StoreConnectionError(ConnectionError):
    """The MongoDB server could not be reached while connecting."""


class PersistenceError(Exception):
    """A storage-layer fault occurred during an insert or delete."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
