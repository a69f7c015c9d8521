"""
Hotel Listings Backend — Custom Exception Hierarchy
====================================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    ListingsError (base)
    ├── ValidationError        → 400 Bad Request (lists every violated field)
    ├── BadRequestError        → 400 Bad Request (single message)
    ├── NotFoundError          → 404 Not Found
    └── StorageError           → 500 Internal Server Error
        └── CorruptRecordError → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class ListingsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ListingsError):
    """
    Raised when a hotel document fails one or more field rules.

    HTTP:    400 Bad Request

    Every violated rule is carried in `violations` so the client can fix
    all of them in one round trip.

    Example response:
        {
            "error": "validation_error",
            "message": "Hotel data failed validation",
            "errors": [
                {"msg": "Address is required", "param": "address"},
                {"msg": "Rooms must be an array", "param": "rooms"}
            ]
        }
    """

    def __init__(
        self,
        violations: Optional[List[Any]] = None,
        message: str = "Hotel data failed validation",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.violations = list(violations or [])
        ctx = context or {}
        ctx["fields"] = [v.param for v in self.violations]
        super().__init__(message=message, context=ctx)

    @property
    def errors(self) -> List[Dict[str, str]]:
        """Violations in the `{msg, param}` wire format."""
        return [{"msg": v.msg, "param": v.param} for v in self.violations]


class BadRequestError(ListingsError):
    """
    Raised when the request itself is malformed.

    When:    Missing upload identifier, disallowed file type, file too large,
             too many files in one upload.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Bad request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(ListingsError):
    """
    Raised when a requested resource does not exist.

    When:    Hotel identifier (ID or slug) does not resolve to any record.
    HTTP:    404 Not Found

    The record store returns None for missing records; services convert
    that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        # Identifier goes to the log context only: "Hotel not found"
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(ListingsError):
    """
    Raised when a filesystem read or write fails.

    When:    Disk full, permission denied, directory not writable, I/O error.
    HTTP:    500 Internal Server Error

    The client receives a generic message; the OS error and path are kept
    in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "Storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CorruptRecordError(StorageError):
    """
    Raised when a record file exists but does not hold a JSON object.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        record_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if record_id is not None:
            ctx["record_id"] = record_id
        super().__init__(message="Stored hotel record is unreadable", context=ctx)
        self.record_id = record_id
