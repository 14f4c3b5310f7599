"""
OmniCognitor Gateway: Exception Hierarchy
==========================================

What:  Application-specific exceptions, one per failure class of the gateway.
How:   Each exception carries an HTTP status, a client-facing `error` payload
       and an optional context dict for logs. Global exception handlers
       (registered in main.py) turn them into the JSON error envelope:

           {"success": false, "error": <payload>}

Exception Hierarchy:
    GatewayError (base)
    ├── ValidationError      → 400 Bad Request (missing or malformed field)
    ├── AuthorizationError   → 401 Unauthorized (writes not enabled)
    ├── NotFoundError        → 404 Not Found (no route matches)
    ├── UpstreamError        → upstream status, upstream body verbatim
    └── UnhandledError       → 500 Internal Server Error

Validation and authorization are raised before any network call. Upstream
errors carry whatever the data API returned, unchanged.
"""

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """
    Base exception for all gateway errors.

    Attributes:
        message:     Human-readable description (used in logs)
        status_code: HTTP status returned to the client
        context:     Extra debug info, logged but never returned
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def payload(self) -> Any:
        """Value placed under `error` in the response envelope."""
        return self.message


class ValidationError(GatewayError):
    """
    Raised when a create request is missing a required field or carries a
    field of the wrong type.

    Example response:
        400 {"success": false, "error": "Name and ownerId are required"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])


class AuthorizationError(GatewayError):
    """
    Raised when a write is attempted without a service credential while the
    public-write override is off.
    """

    status_code = 401

    def __init__(
        self,
        message: str = (
            "Writes require SUPABASE_SERVICE_ROLE_KEY or enable ALLOW_PUBLIC_WRITE"
        ),
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(GatewayError):
    """Raised when no route matches the request's method and path."""

    status_code = 404

    def __init__(
        self,
        method: Optional[str] = None,
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if method:
            ctx["method"] = method
        if path is not None:
            ctx["path"] = path
        super().__init__(message="Not found", context=ctx)


class UpstreamError(GatewayError):
    """
    Raised when the data API answers with a 4xx or 5xx status.

    The upstream status and decoded body are passed through to the client
    unchanged, so a unique-constraint violation reported as 409 by the
    database reaches the caller as 409 with the database's own error object.
    """

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["upstream_status"] = status_code
        super().__init__(
            message=f"Upstream data API returned HTTP {status_code}",
            context=ctx,
        )
        self.status_code = status_code
        self.body = body

    @property
    def payload(self) -> Any:
        return self.body


class UnhandledError(GatewayError):
    """
    Wraps any exception that escaped a handler.

    The original exception's message is kept as the client-facing error so
    callers see the same text the gateway logged.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message or "Internal server error", context=context)
