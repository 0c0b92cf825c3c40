"""
Pokemon API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the three failure kinds of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) translate them
       into JSON error responses with the matching HTTP status code.
Who:   Raised by the service layer and the record stores.
When:  During request processing.

Exception Hierarchy:
    PokemonAPIError (base)
    ├── ValidationError  → 400 Bad Request
    ├── NotFoundError    → 404 Not Found
    └── StoreError       → 500 Internal Server Error

Every error body has the same shape:
    {"error": "<message>", "code": "<machine code>", "request_id": "..."}
"""

from typing import Any, Dict, Optional


class PokemonAPIError(Exception):
    """
    Base exception for all Pokemon API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client,
                  except for ValidationError where it names the bad fields)
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PokemonAPIError):
    """
    Raised when client input fails a presence check.

    When:    Create without one of the four required fields, or an update
             payload that carries no usable field.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "All fields are required.",
            "code": "validation_error",
            "details": {"missing_fields": ["description", "image"]}
        }
    """

    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PokemonAPIError):
    """
    Raised when a lookup or mutation targets no existing row.

    The stores report "nothing there" as None or a zero affected-row count;
    the service layer converts that into this exception.
    HTTP:    404 Not Found
    """

    code = "not_found"

    def __init__(
        self,
        message: str = "Pokemon not found.",
        identifier: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if identifier is not None:
            ctx["identifier"] = str(identifier)
        super().__init__(message=message, context=ctx)


class StoreError(PokemonAPIError):
    """
    Raised when the record store fails.

    When:    Connection refused or timed out, constraint violation (duplicate
             name), malformed statement.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The driver
        error type and statement details stay in `context` and are only
        logged server-side.
    """

    code = "store_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
