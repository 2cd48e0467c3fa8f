"""Services package."""

from finance_tracker.services.files import (
    FileFormatError,
    read_csv,
    write_csv,
    write_text_report,
)
from finance_tracker.services.storage import (
    ConnectionError,
    DuplicateError,
    NotFoundError,
    RecordStorageInterface,
    SQLiteClient,
    SQLiteRecordStorage,
    StorageError,
)

__all__ = [
    # File services
    "FileFormatError",
    "read_csv",
    "write_csv",
    "write_text_report",
    # Storage services
    "ConnectionError",
    "DuplicateError",
    "NotFoundError",
    "RecordStorageInterface",
    "SQLiteClient",
    "SQLiteRecordStorage",
    "StorageError",
]
