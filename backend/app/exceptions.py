"""
Elite Logistic Backend — Custom Exception Hierarchy
=====================================================

What:  Application-specific exceptions for the shipment store and API.
Why:   Custom exceptions let the store signal "bad input" or "no such
       shipment" without knowing anything about HTTP. Global exception
       handlers (registered in main.py) map them to status codes.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by ShipmentStore; caught by global handlers.

Exception Hierarchy:
    EliteLogisticError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class EliteLogisticError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EliteLogisticError):
    """
    Raised when shipment fields are missing or malformed.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Shipment validation failed: trackingNumber: Field required",
            "details": {"fields": ["trackingNumber"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class NotFoundError(EliteLogisticError):
    """
    Raised when no record matches a lookup key.

    HTTP: 404 Not Found

    SQLAlchemy returns None for missing rows; the store converts that None
    into this exception so routes stay free of status-code logic.
    """

    def __init__(
        self,
        resource: str = "Shipment",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if key:
            ctx["key"] = key
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(EliteLogisticError):
    """
    Raised when a store operation fails unexpectedly.

    What:    Connection lost, missing table, driver error, etc.
    HTTP:    500 Internal Server Error

    The message carries the underlying driver message so operators see the
    cause directly in the response.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
