# eventops/core/errors.py
"""
Application errors and their HTTP translation.

Domain code raises an `AppError` subclass with a human-readable message
("Promo code not found", "Not authorized"). The handler registered in
`eventops.main` turns it into a JSON response with the matching status code.
"""

import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from eventops.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class ErrorCategory:
    """Error categories for structured error handling"""
    VALIDATION = "validation_error"
    AUTHENTICATION = "authentication_error"
    FORBIDDEN = "forbidden_error"
    NOT_FOUND = "not_found_error"
    CONFLICT = "conflict_error"
    LOCKED = "locked_error"
    RATE_LIMIT = "rate_limit_error"
    EXTERNAL_SERVICE = "external_service_error"
    INTERNAL = "internal_error"


class AppError(Exception):
    """Base application error with structured information"""

    def __init__(
        self,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = 500,
        details: Optional[dict] = None,
        retry_after: Optional[int] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        self.retry_after = retry_after
        super().__init__(self.message)


class ValidationError(AppError):
    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            status_code=400,
            details=details,
        )


class AuthenticationError(AppError):
    def __init__(self, message: str = "Not authenticated", details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.AUTHENTICATION,
            status_code=401,
            details=details,
        )


class ForbiddenError(AppError):
    def __init__(self, message: str = "Not authorized"):
        super().__init__(
            message=message,
            category=ErrorCategory.FORBIDDEN,
            status_code=403,
        )


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            category=ErrorCategory.NOT_FOUND,
            status_code=404,
        )


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFLICT,
            status_code=409,
        )


class LockedError(AppError):
    """Raised while an account is locked out after repeated failed logins."""

    def __init__(self, message: str, retry_after: int):
        super().__init__(
            message=message,
            category=ErrorCategory.LOCKED,
            status_code=423,
            retry_after=retry_after,
        )


class ExternalServiceError(AppError):
    """External service errors (LLM API, etc.)"""

    def __init__(self, message: str, service: str, status_code: int = 502):
        super().__init__(
            message=message,
            category=ErrorCategory.EXTERNAL_SERVICE,
            status_code=status_code,
            details={"service": service},
            retry_after=10,
        )


def not_found(resource: str) -> NotFoundError:
    return NotFoundError(f"{resource} not found")


async def app_error_handler(request: Request, error: AppError) -> JSONResponse:
    """Exception handler for structured application errors"""
    log = logger.error if error.status_code >= 500 else logger.info
    log(
        f"{error.category} on {request.method} {request.url.path}: {error.message}"
    )

    content = {
        "detail": error.message,
        "error": {
            "category": error.category,
            "message": error.message,
            "timestamp": utcnow().isoformat(),
            "path": request.url.path,
            **error.details,
        },
    }

    headers = {}
    if error.retry_after:
        headers["Retry-After"] = str(error.retry_after)

    return JSONResponse(status_code=error.status_code, content=content, headers=headers)
