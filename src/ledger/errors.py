"""Ledger exception hierarchy. Every error carries a stable ``code`` for callers."""


class LedgerError(Exception):
    """Base class for all ledger errors."""

    code = "LEDGER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotOpenError(LedgerError):
    """Raised when the store is used before open() or after close()."""

    code = "NOT_OPEN"

    def __init__(self):
        super().__init__("Database not opened. Call open() first.")


class StorageUnavailableError(LedgerError):
    """Raised when open() cannot establish a connection to the location."""

    code = "STORAGE_UNAVAILABLE"

    def __init__(self, location: str, cause: str):
        super().__init__(f"Cannot open database at '{location}': {cause}")
        self.location = location


class NotInitializedError(LedgerError):
    code = "DB_NOT_INITIALIZED"

    def __init__(self):
        super().__init__("Database is not initialized. Call db_init first.")


class AlreadyInitializedError(LedgerError):
    code = "DB_ALREADY_INITIALIZED"

    def __init__(self):
        super().__init__("Database is already initialized.")


class NotFoundError(LedgerError):
    """Raised when a lookup or link validation target does not exist."""

    code = "ENTITY_NOT_FOUND"

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class InvalidArgumentError(LedgerError):
    code = "INVALID_ARGUMENT"


class StorageFailureError(LedgerError):
    """Raised for engine I/O errors and constraint violations not covered above."""

    code = "STORAGE_FAILURE"


class FileReadError(LedgerError):
    code = "FILE_READ_ERROR"

    def __init__(self, file_path: str, cause: str):
        super().__init__(f"Failed to read file '{file_path}': {cause}")
        self.file_path = file_path
        self.cause = cause
