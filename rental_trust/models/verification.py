"""
Verification record: one row per user covering every verification category.
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
import enum
import uuid

from rental_trust.models.base import Record


class VerificationCategory(str, enum.Enum):
    EMPLOYMENT = "employment"
    INCOME = "income"
    CREDIT = "credit"
    IDENTITY = "identity"


class IncomeRange(str, enum.Enum):
    UNDER_30M = "3000만원 미만"
    FROM_30M_TO_50M = "3000-5000만원"
    FROM_50M_TO_70M = "5000-7000만원"
    OVER_70M = "7000만원 이상"


class Verification(Record):
    """Per-category verification flags with their metadata."""

    user_id: uuid.UUID

    employment_verified: bool = False
    employment_company: Optional[str] = None
    employment_verified_at: Optional[datetime] = None

    income_verified: bool = False
    income_range: Optional[str] = None
    income_verified_at: Optional[datetime] = None

    credit_verified: bool = False
    credit_grade: Optional[int] = Field(None, ge=1, le=10)
    credit_verified_at: Optional[datetime] = None

    identity_verified: bool = False
    identity_ci: Optional[str] = None
    identity_verified_at: Optional[datetime] = None

    def is_verified(self, category: VerificationCategory) -> bool:
        return bool(getattr(self, f"{VerificationCategory(category).value}_verified"))
