"""
Utility modules for the rental trust core.
"""

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    BadRequestError,
    LandlordOnlyError,
    ReferenceNotFoundError,
    ReferenceExpiredError,
    ReferenceAlreadyCompletedError,
    DuplicateReferenceRequestError,
    VerificationFailedError,
    InvalidImageError,
    UnsupportedFileTypeError,
    FileSizeExceededError,
    RateLimitExceededError
)

from .validators import ValidationUtils, mask_phone

from .sanitize import (
    escape_html,
    strip_html,
    sanitize_string,
    sanitize_user_input,
    sanitize_object
)

# Rate limiting, dates and logging are imported directly from their modules

__all__ = [
    # Exceptions
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "BadRequestError",
    "LandlordOnlyError",
    "ReferenceNotFoundError",
    "ReferenceExpiredError",
    "ReferenceAlreadyCompletedError",
    "DuplicateReferenceRequestError",
    "VerificationFailedError",
    "InvalidImageError",
    "UnsupportedFileTypeError",
    "FileSizeExceededError",
    "RateLimitExceededError",

    # Validation and sanitization
    "ValidationUtils",
    "mask_phone",
    "escape_html",
    "strip_html",
    "sanitize_string",
    "sanitize_user_input",
    "sanitize_object",
]
