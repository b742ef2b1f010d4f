"""
Custom exception classes for the rental trust core.
Provides structured error handling with the HTTP status code each error maps to.
"""

from http import HTTPStatus
from typing import Any, Dict, Optional, List


class APIException(Exception):
    """Base exception class carrying a status code and a stable error code."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code
        self.headers = headers

    def to_dict(self) -> Dict[str, Any]:
        """Render the error the way a transport layer would return it."""
        return {
            "error": self.detail,
            "error_code": self.error_code,
            "status_code": int(self.status_code),
        }


class ValidationError(APIException):
    """Validation error exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        detail = f"{resource} not found"
        if resource_id:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=HTTPStatus.NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class UnauthorizedError(APIException):
    """Authentication required exception."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenError(APIException):
    """Access forbidden exception."""

    def __init__(self, detail: str = "Access forbidden"):
        super().__init__(
            status_code=HTTPStatus.FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


# Access control exceptions
class LandlordOnlyError(ForbiddenError):
    """Raised when a non-landlord tries to use a landlord-only operation."""

    def __init__(self, detail: str = "Only landlords can access this resource"):
        super().__init__(detail)


# Reference survey exceptions
class ReferenceNotFoundError(NotFoundError):
    """Unknown reference token or id."""

    def __init__(self, token: Optional[str] = None):
        super().__init__("Reference request")
        self.token = token
        self.detail = "Invalid reference link"


class ReferenceExpiredError(BadRequestError):
    """Reference link past its expiry."""

    def __init__(self, detail: str = "Reference link has expired"):
        super().__init__(detail)


class ReferenceAlreadyCompletedError(BadRequestError):
    """A reference survey can only be submitted once."""

    def __init__(self, detail: str = "Reference survey has already been completed"):
        super().__init__(detail)


class DuplicateReferenceRequestError(BadRequestError):
    """An open request to the same landlord phone already exists."""

    def __init__(self, phone: str):
        super().__init__(f"A reference request to {phone} is already in progress")


# Verification exceptions
class VerificationFailedError(BadRequestError):
    """Verification provider reported a failure."""

    def __init__(self, category: str, detail: Optional[str] = None):
        message = f"{category} verification failed"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.category = category


# File/image exceptions
class InvalidImageError(BadRequestError):
    """Data is not a readable image."""

    def __init__(self, detail: str = "Not a valid image file"):
        super().__init__(detail)


class UnsupportedFileTypeError(BadRequestError):
    """Unsupported file type exception."""

    def __init__(self, file_type: str, supported_types: List[str]):
        supported = ", ".join(supported_types)
        super().__init__(f"Unsupported file type '{file_type}'. Supported types: {supported}")


class FileSizeExceededError(BadRequestError):
    """File size exceeded exception."""

    def __init__(self, size: int, max_size: int):
        super().__init__(f"File size {size} bytes exceeds maximum allowed size {max_size} bytes")


# Rate limiting exceptions
class RateLimitExceededError(APIException):
    """Rate limit exceeded exception."""

    def __init__(self, retry_after: int):
        super().__init__(
            status_code=HTTPStatus.TOO_MANY_REQUESTS,
            detail="Rate limit exceeded",
            error_code="RATE_LIMIT_EXCEEDED",
            headers={"Retry-After": str(retry_after)}
        )
        self.retry_after = retry_after
