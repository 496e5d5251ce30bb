"""Exceptions raised by the data-access layer."""


class RepositoryException(Exception):
    """Base exception for repository operations."""


class DuplicateError(RepositoryException):
    """Raised when attempting to create a duplicate entity."""


class PersistenceError(RepositoryException):
    """Raised when the store is unreachable or a write fails unexpectedly."""
