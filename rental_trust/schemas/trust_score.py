"""
Pydantic schemas for trust score results.
"""

from pydantic import BaseModel, Field
import enum


class TrustScoreLevel(str, enum.Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    LOW = "low"


class TrustScoreBreakdown(BaseModel):
    """
    Per-category points and the clamped total.

    reference is the raw signed sum; only total is floored at 0.
    """

    profile: int = Field(0, description="0 or 20")
    employment: int = Field(0, description="0 or 25")
    income: int = Field(0, description="0 or 25")
    credit: int = Field(0, description="0, 10, 15 or 20")
    reference: int = Field(0, description="+30 / -20 per survey response, unclamped")
    total: int = Field(0, ge=0)
