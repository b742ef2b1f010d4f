"""
Pydantic schemas for verification requests and provider results.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from rental_trust.models.verification import IncomeRange
from rental_trust.schemas.common import RequestSchema, run_check
from rental_trust.utils.validators import ValidationUtils


class EmploymentVerificationRequest(RequestSchema):
    company: str = Field(..., max_length=100)

    @field_validator('company')
    @classmethod
    def validate_company(cls, v):
        """Company name must have at least 2 characters once trimmed."""
        value = v.strip()
        if len(value) < 2:
            raise ValueError("Company name must be at least 2 characters long")
        return value


class IncomeVerificationRequest(RequestSchema):
    income_range: IncomeRange


class IdentityVerificationRequest(RequestSchema):
    name: str = Field(..., min_length=1, max_length=50)
    phone_number: str
    birth_date: str = Field(..., pattern=r'^\d{4}-?\d{2}-?\d{2}$')

    @field_validator('phone_number')
    @classmethod
    def validate_phone(cls, v):
        return run_check(ValidationUtils.validate_phone_number, v, "phone number")


class VerificationResult(BaseModel):
    """Base provider result: either success with data or an error message."""

    success: bool
    error: Optional[str] = None


class EmploymentVerificationResult(VerificationResult):
    company: Optional[str] = None
    join_date: Optional[str] = None
    department: Optional[str] = None


class IncomeVerificationResult(VerificationResult):
    annual_income: Optional[int] = None
    income_range: Optional[str] = None


class CreditVerificationResult(VerificationResult):
    credit_score: Optional[int] = None
    credit_grade: Optional[int] = Field(None, ge=1, le=10)
    grade_label: Optional[str] = None


class IdentityVerificationResult(VerificationResult):
    name: Optional[str] = None
    birth_date: Optional[str] = None
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    ci: Optional[str] = None
    di: Optional[str] = None


class VerificationStatus(BaseModel):
    """Which verification categories a user has completed."""

    employment: bool = False
    income: bool = False
    credit: bool = False
    identity: bool = False
    completed_count: int = 0
    total_count: int = 4
