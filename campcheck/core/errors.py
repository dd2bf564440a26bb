"""Error types for the CampCheck core.

Defines a small hierarchy of exceptions raised by the storage engine, the
domain repositories and the backup serializer. Lookups that miss are not
errors; they return ``None``.
"""

from __future__ import annotations


class CampCheckError(Exception):
    """Base error for all CampCheck exceptions."""


class StoreError(CampCheckError):
    """Base error for record store failures."""


class StoreNotInitializedError(StoreError):
    """Raised when the store is used before ``init()`` completed."""

    def __init__(self) -> None:
        super().__init__("Database not initialized")


class StoreInitializationError(StoreError):
    """Raised when the underlying store cannot be opened or its schema created."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to open the local database: {reason}")


class UnknownCollectionError(StoreError):
    """Raised for a collection name the schema does not define."""

    def __init__(self, collection: str) -> None:
        super().__init__(f"Unknown collection: '{collection}'")


class UnknownIndexError(StoreError):
    """Raised for an index name the collection does not define."""

    def __init__(self, collection: str, index_name: str) -> None:
        super().__init__(f"Collection '{collection}' has no index '{index_name}'")


class ConstraintViolationError(StoreError):
    """Raised when a write would break a unique index."""

    def __init__(self, collection: str, message: str) -> None:
        super().__init__(f"Constraint violated in '{collection}': {message}")


class StorageError(StoreError):
    """Raised when the underlying database fails (I/O, quota, driver errors)."""

    def __init__(self, operation: str, collection: str, message: str) -> None:
        super().__init__(f"Storage operation '{operation}' on '{collection}' failed: {message}")


class RecordValidationError(CampCheckError):
    """Raised when a record is missing a required identifier or field."""


class BackupError(CampCheckError):
    """Base error for export/import failures."""


class BackupFormatError(BackupError):
    """Raised when a backup document is malformed or misses required fields."""


class BackupExportError(BackupError):
    """User-facing error raised when an export fails."""

    def __init__(self) -> None:
        super().__init__("Failed to export data")


class BackupImportError(BackupError):
    """User-facing error raised when an import fails."""

    def __init__(self) -> None:
        super().__init__("Failed to import data")
