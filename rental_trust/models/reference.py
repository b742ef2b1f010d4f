"""
Landlord reference request and survey response records.
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
import enum
import uuid

from rental_trust.models.base import Record


class ReferenceStatus(str, enum.Enum):
    PENDING = "pending"
    SENT = "sent"
    COMPLETED = "completed"
    EXPIRED = "expired"


# Requests in these states block a new request to the same landlord phone
OPEN_REFERENCE_STATUSES = (ReferenceStatus.PENDING, ReferenceStatus.SENT)


class OverallRating(str, enum.Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class LandlordReference(Record):
    """A tenant's request for a survey from a past landlord."""

    user_id: uuid.UUID
    landlord_name: Optional[str] = None
    landlord_phone: str
    landlord_email: Optional[str] = None
    verification_token: str
    token_expires_at: Optional[datetime] = None
    status: ReferenceStatus = ReferenceStatus.PENDING
    request_sent_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_REFERENCE_STATUSES


class ReferenceResponse(Record):
    """A past landlord's survey: four 1-5 ratings plus a recommendation."""

    reference_id: uuid.UUID
    rent_payment: int = Field(..., ge=1, le=5)
    property_condition: int = Field(..., ge=1, le=5)
    neighbor_issues: int = Field(..., ge=1, le=5)
    checkout_condition: int = Field(..., ge=1, le=5)
    would_recommend: bool
    comment: Optional[str] = None
    overall_rating: Optional[OverallRating] = None

    @property
    def average_rating(self) -> float:
        return (
            self.rent_payment
            + self.property_condition
            + self.neighbor_issues
            + self.checkout_condition
        ) / 4
