"""
Pydantic schemas for login, signup and phone verification payloads.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from rental_trust.models.phone_verification import PhoneVerification
from rental_trust.models.user import UserType
from rental_trust.schemas.common import RequestSchema, run_check
from rental_trust.utils.validators import ValidationUtils


class LoginRequest(RequestSchema):
    """Login request schema."""

    email: str = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return run_check(ValidationUtils.validate_email_address, v, "email")


class SignupRequest(RequestSchema):
    """Signup request schema. Accounts default to tenants."""

    email: str = Field(..., description="User's email address")
    password: str = Field(
        ...,
        description="8-100 characters with at least one letter and one digit"
    )
    user_type: UserType = Field(UserType.TENANT, description="tenant or landlord")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return run_check(ValidationUtils.validate_email_address, v, "email")

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        """Validate password strength."""
        return run_check(ValidationUtils.validate_password, v, "password")


class PhoneCodeRequest(RequestSchema):
    """Ask for a verification code; the number is digits only."""

    phone_number: str = Field(..., description="01012345678")

    @field_validator('phone_number')
    @classmethod
    def validate_phone_number(cls, v):
        return run_check(ValidationUtils.validate_phone_digits, v, "phone number")


class PhoneCodeVerify(RequestSchema):
    phone_number: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)


class PhoneCodeIssued(BaseModel):
    """
    A freshly issued code.

    code is echoed back outside production so the flow works without SMS.
    replaced lists the unverified codes for the same number that the new
    one supersedes; callers delete them.
    """

    verification: PhoneVerification
    code: Optional[str] = None
    replaced: List[PhoneVerification] = Field(default_factory=list)
