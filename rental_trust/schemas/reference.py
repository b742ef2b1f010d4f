"""
Pydantic schemas for landlord reference requests and surveys.
"""

from pydantic import Field, field_validator
from typing import Optional
import uuid

from rental_trust.models.reference import LandlordReference
from rental_trust.schemas.common import RequestSchema, run_check
from rental_trust.utils.validators import ValidationUtils


class ReferenceRequestCreate(RequestSchema):
    """Tenant asks a past landlord for a reference."""

    landlord_name: Optional[str] = Field(None, max_length=100)
    landlord_phone: str = Field(..., description="Korean mobile number of the landlord")
    landlord_email: Optional[str] = Field(None, max_length=255)

    @field_validator('landlord_phone')
    @classmethod
    def validate_phone(cls, v):
        return run_check(ValidationUtils.validate_phone_number, v, "landlord phone")

    @field_validator('landlord_email')
    @classmethod
    def validate_email(cls, v):
        if v is None:
            return v
        return run_check(ValidationUtils.validate_email_address, v, "landlord email")


class ReferenceSurveySubmit(RequestSchema):
    """A landlord's survey answers: four integer ratings from 1 to 5."""

    rent_payment: int = Field(..., ge=1, le=5)
    property_condition: int = Field(..., ge=1, le=5)
    neighbor_issues: int = Field(..., ge=1, le=5)
    checkout_condition: int = Field(..., ge=1, le=5)
    would_recommend: bool = Field(..., strict=True)
    comment: Optional[str] = Field(None, max_length=500)

    @field_validator(
        'rent_payment',
        'property_condition',
        'neighbor_issues',
        'checkout_condition',
        mode='before'
    )
    @classmethod
    def validate_rating_is_number(cls, v):
        """Ratings are JSON numbers: 4 and 4.0 pass, "4" and true do not."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("Rating must be a number")
        return v


class ReferenceTokenStatus(RequestSchema):
    """Result of checking a survey link."""

    valid: bool
    tenant_name: str
    reference_id: uuid.UUID


class ReferenceRequestResult(RequestSchema):
    """A freshly issued reference request and the survey link to send."""

    reference: LandlordReference
    survey_url: str
