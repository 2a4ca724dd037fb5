"""
Consistent error shapes for the request layer.

The rule engines never raise for business denials; they return decisions.
These errors exist for callers (route handlers, guards) that turn a denial
into a response.

Standard HTTP status codes:
- 400: Bad Request (invalid appointment time)
- 403: Forbidden (plan restrictions, read-only mode, limits)
- 409: Conflict (double booking)
"""

from typing import Any, Optional

from fastapi import HTTPException, status


class AppError(Exception):
    """
    Base application error with consistent error shape.

    All custom errors should inherit from this class.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to API error response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }

    def to_http_exception(self) -> HTTPException:
        """Wrap as a FastAPI HTTPException for routers that raise instead of return."""
        return HTTPException(status_code=self.status_code, detail=self.to_dict()["error"])


class ValidationError(AppError):
    """Validation error (400)."""

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            code=code,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class PermissionDeniedError(AppError):
    """Permission denied (403)."""

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            code=code,
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class ConflictError(AppError):
    """Resource conflict (409)."""

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            code=code,
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )
