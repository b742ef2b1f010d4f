"""
Pydantic schemas for landlord profiles and tenant browsing.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional

from rental_trust.models.profile import AgeRange, FamilyType, Profile
from rental_trust.models.reference import ReferenceResponse
from rental_trust.models.verification import Verification
from rental_trust.schemas.common import Pagination, RequestSchema, run_check
from rental_trust.schemas.trust_score import TrustScoreBreakdown
from rental_trust.utils.validators import ValidationUtils


class LandlordProfileUpdate(RequestSchema):
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = None
    property_count: Optional[int] = Field(None, ge=0, le=1000)
    property_regions: Optional[List[str]] = Field(None, max_length=20)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        if v is None:
            return v
        return run_check(ValidationUtils.validate_phone_number, v, "phone")

    @field_validator('property_regions')
    @classmethod
    def validate_regions(cls, v):
        if v is None:
            return v
        for region in v:
            if len(region) > 50:
                raise ValueError("Region names cannot exceed 50 characters")
        return v


class TenantFilter(RequestSchema):
    """
    Tenant list query parameters.
    Numeric values arrive as query strings and are coerced.
    """

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    age_range: Optional[AgeRange] = None
    family_type: Optional[FamilyType] = None
    min_score: Optional[int] = Field(None, ge=0, le=120)
    smoking: Optional[Literal["true", "false"]] = None

    @property
    def smoking_flag(self) -> Optional[bool]:
        if self.smoking is None:
            return None
        return self.smoking == "true"


class TenantSummary(BaseModel):
    """A tenant as shown to landlords, with a freshly computed score."""

    profile: Profile
    verification: Optional[Verification] = None
    reference_responses: List[ReferenceResponse] = Field(default_factory=list)
    trust_score: int
    breakdown: TrustScoreBreakdown


class TenantPage(BaseModel):
    profiles: List[TenantSummary]
    pagination: Pagination
