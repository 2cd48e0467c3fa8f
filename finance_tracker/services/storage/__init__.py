"""
Storage Services Package

Provides the abstract record store interface and the SQLite
implementation used by the application.
"""

from finance_tracker.services.storage.interface import (
    ConnectionError,
    DuplicateError,
    NotFoundError,
    RecordStorageInterface,
    StorageError,
)
from finance_tracker.services.storage.sqlite import (
    SQLiteClient,
    SQLiteRecordStorage,
)

__all__ = [
    # Interface
    "RecordStorageInterface",
    # Exceptions
    "ConnectionError",
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # SQLite implementation
    "SQLiteClient",
    "SQLiteRecordStorage",
]
