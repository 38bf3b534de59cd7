"""
CustomerBook Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for the customer API and its browser UI.
Why:   Targeted error handling with the right HTTP status code and a safe,
       human-readable message, instead of leaking internal exceptions.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       `{"error": "<message>"}` JSON bodies.

Exception Hierarchy:
    CustomerBookError (base)
    ├── ValidationError            → 400 Bad Request
    ├── MalformedIdentifierError   → 400 Bad Request
    ├── NotFoundError              → 404 Not Found
    ├── DatabaseError              → 500 Internal Server Error
    └── ApiClientError             → raised by the UI's HTTP client, rendered in HTML
"""

from typing import Any, Dict, Optional


class CustomerBookError(Exception):
    """
    Base exception for all CustomerBook application errors.

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


class ValidationError(CustomerBookError):
    """
    Raised when customer fields are missing or malformed.

    When:    Create with a missing required field, update with an unknown
             field or an explicit null, a non-integer member number, etc.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MalformedIdentifierError(CustomerBookError):
    """
    Raised when a customer id is not a syntactically valid UUID.

    Distinct from NotFoundError: a malformed id can never match a record,
    so it is reported as a client error rather than an absent resource.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        raw_id: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message="Invalid customer id", context=ctx)
        self.raw_id = raw_id


class NotFoundError(CustomerBookError):
    """
    Raised when a requested customer does not exist.

    The record store returns None for absent rows; the service layer
    converts that into NotFoundError so routes stay free of status logic.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        message: str = "Customer not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(CustomerBookError):
    """
    Raised when a database operation fails unexpectedly.

    The message is operation-specific but generic ("Failed to update customer");
    driver details stay in `context` and in the server log.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ApiClientError(CustomerBookError):
    """
    Raised by the browser UI's API client when a call does not succeed.

    Covers non-2xx responses (other than the 404s the client maps to None),
    transport failures and timeouts. `status_code` is None when no response
    was received.
    """

    def __init__(
        self,
        message: str = "The customer service could not be reached",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
