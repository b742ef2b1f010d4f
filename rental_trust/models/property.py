"""
Property listing records for landlords.
Handles listing data with pricing in won, status and attached images.
"""

from pydantic import Field
from datetime import date
from typing import List, Optional
import enum
import uuid

from rental_trust.models.base import Record


class PropertyType(str, enum.Enum):
    """Building type enumeration."""
    APARTMENT = "apartment"
    VILLA = "villa"
    OFFICETEL = "officetel"
    ONEROOM = "oneroom"
    HOUSE = "house"
    OTHER = "other"


class PropertyStatus(str, enum.Enum):
    """Listing status; hidden listings stay with the landlord only."""
    AVAILABLE = "available"
    RESERVED = "reserved"
    RENTED = "rented"
    HIDDEN = "hidden"


class Property(Record):
    """
    A landlord's rental listing.
    deposit, monthly_rent and maintenance_fee are whole won.
    """

    landlord_id: uuid.UUID
    title: str = Field(..., max_length=100)
    description: Optional[str] = None
    address: str = Field(..., max_length=200)
    address_detail: Optional[str] = None
    region: Optional[str] = None
    deposit: int = Field(..., ge=0)
    monthly_rent: int = Field(..., ge=0)
    maintenance_fee: int = Field(0, ge=0)
    property_type: PropertyType
    room_count: int = Field(1, ge=1)
    bathroom_count: int = Field(1, ge=1)
    floor: Optional[int] = None
    total_floor: Optional[int] = None
    area_sqm: Optional[float] = Field(None, gt=0)
    options: List[str] = Field(default_factory=list)
    status: PropertyStatus = PropertyStatus.AVAILABLE
    available_from: Optional[date] = None
    view_count: int = Field(0, ge=0)

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.landlord_id == user_id


class PropertyImage(Record):
    """An uploaded listing photo; at most one per property is the main image."""

    property_id: uuid.UUID
    image_url: str
    thumbnail_url: Optional[str] = None
    sort_order: int = 0
    is_main: bool = False
