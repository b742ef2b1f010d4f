"""
Validation utilities for the rental trust core.
Provides the email, password, phone and pagination rules shared by the request schemas.
"""

import re
from typing import Any

from email_validator import validate_email, EmailNotValidError

from rental_trust.utils.exceptions import ValidationError


class ValidationUtils:
    """
    Utility class for common validation operations.
    Every method raises ValidationError with a field-specific message.
    """

    # Korean mobile numbers: 010/011/016/017/018/019, dashes optional
    PHONE_PATTERN = re.compile(r'^01[016789]-?\d{3,4}-?\d{4}$')
    PHONE_DIGITS_PATTERN = re.compile(r'^01[016789]\d{7,8}$')
    LETTER_PATTERN = re.compile(r'[a-zA-Z]')
    DIGIT_PATTERN = re.compile(r'[0-9]')

    EMAIL_MAX_LENGTH = 255
    PASSWORD_MIN_LENGTH = 8
    PASSWORD_MAX_LENGTH = 100

    @staticmethod
    def validate_email_address(email: Any, field_name: str = "email") -> str:
        """
        Validate email address format.

        Args:
            email: Email to validate
            field_name: Name of the field for error messages

        Returns:
            Normalized email string

        Raises:
            ValidationError: If email is invalid
        """
        if not email:
            raise ValidationError(f"{field_name} is required")

        email_str = str(email).strip()

        if len(email_str) > ValidationUtils.EMAIL_MAX_LENGTH:
            raise ValidationError(
                f"{field_name} cannot exceed {ValidationUtils.EMAIL_MAX_LENGTH} characters"
            )

        try:
            valid_email = validate_email(email_str, check_deliverability=False)
            return valid_email.normalized
        except EmailNotValidError as e:
            raise ValidationError(f"Invalid email format for {field_name}: {str(e)}")

    @staticmethod
    def validate_password(password: Any, field_name: str = "password") -> str:
        """
        Validate password strength: 8-100 characters with a letter and a digit.

        Raises:
            ValidationError: If the password is too weak
        """
        if password is None:
            raise ValidationError(f"{field_name} is required")

        value = str(password)

        if len(value) < ValidationUtils.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"{field_name} must be at least {ValidationUtils.PASSWORD_MIN_LENGTH} characters long"
            )
        if len(value) > ValidationUtils.PASSWORD_MAX_LENGTH:
            raise ValidationError(
                f"{field_name} cannot exceed {ValidationUtils.PASSWORD_MAX_LENGTH} characters"
            )
        if not ValidationUtils.LETTER_PATTERN.search(value):
            raise ValidationError(f"{field_name} must contain a letter")
        if not ValidationUtils.DIGIT_PATTERN.search(value):
            raise ValidationError(f"{field_name} must contain a digit")

        return value

    @staticmethod
    def validate_phone_number(phone: Any, field_name: str = "phone") -> str:
        """
        Validate a Korean mobile phone number.

        Args:
            phone: Phone number to validate
            field_name: Name of the field for error messages

        Returns:
            The trimmed phone number, formatting preserved

        Raises:
            ValidationError: If phone number is invalid
        """
        if not phone:
            raise ValidationError(f"{field_name} is required")

        phone_str = str(phone).strip()

        if not ValidationUtils.PHONE_PATTERN.match(phone_str):
            raise ValidationError(f"Invalid phone number format for {field_name}")

        return phone_str

    @staticmethod
    def validate_phone_digits(phone: Any, field_name: str = "phone") -> str:
        """Validate a Korean mobile number written without dashes."""
        if not phone:
            raise ValidationError(f"{field_name} is required")

        phone_str = str(phone).strip()

        if not ValidationUtils.PHONE_DIGITS_PATTERN.match(phone_str):
            raise ValidationError(f"Invalid phone number format for {field_name}")

        return phone_str

    @staticmethod
    def validate_integer(
        value: Any,
        field_name: str,
        min_value: int = None,
        max_value: int = None
    ) -> int:
        """Validate (and coerce) an integer value within optional bounds."""
        if value is None:
            raise ValidationError(f"{field_name} is required")

        if isinstance(value, bool):
            raise ValidationError(f"{field_name} must be a valid integer")

        try:
            int_value = int(value)
        except (ValueError, TypeError):
            raise ValidationError(f"{field_name} must be a valid integer")

        if min_value is not None and int_value < min_value:
            raise ValidationError(f"{field_name} must be at least {min_value}")

        if max_value is not None and int_value > max_value:
            raise ValidationError(f"{field_name} cannot exceed {max_value}")

        return int_value

    @staticmethod
    def validate_pagination(
        page: Any,
        limit: Any,
        max_limit: int = 100
    ) -> tuple[int, int]:
        """
        Validate pagination parameters.

        Returns:
            Tuple of validated page and limit
        """
        validated_page = ValidationUtils.validate_integer(page, "page", min_value=1)
        validated_limit = ValidationUtils.validate_integer(
            limit,
            "limit",
            min_value=1,
            max_value=max_limit
        )
        return validated_page, validated_limit


def mask_phone(phone: str) -> str:
    """Mask a phone number for logging: keep the first 7 characters."""
    if not phone:
        return ""
    return phone[:7] + "****"
