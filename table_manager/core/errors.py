"""
Error taxonomy shared by every seating operation
"""

from typing import Any, Optional


class SeatingError(Exception):
    """Base class for classified failures"""

    error_code = "seating_error"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(SeatingError):
    """A required field is missing or a value is out of range"""

    error_code = "validation_error"


class NotFound(SeatingError):
    """A referenced event, table, party, icon or token does not exist"""

    error_code = "not_found"

    def __init__(self, resource: str, key: Any):
        super().__init__(f"{resource} not found", details={"resource": resource, "key": key})
        self.resource = resource
        self.key = key


class ConflictError(SeatingError):
    """Duplicate table name within an event"""

    error_code = "conflict"


class StorageError(SeatingError):
    """Any other persistence failure"""

    error_code = "storage_error"

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original
