"""
Pydantic schemas for landlord property listings.
Handles listing create/update payloads, list filters and listing views.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import List, Optional

from rental_trust.models.property import Property, PropertyImage, PropertyStatus, PropertyType
from rental_trust.schemas.common import Pagination, RequestSchema


class PropertyCreate(RequestSchema):
    """Schema for registering a new listing."""

    title: str = Field(..., min_length=1, max_length=100, description="Listing title")
    description: Optional[str] = Field(None, max_length=2000)
    address: str = Field(..., min_length=1, max_length=200)
    address_detail: Optional[str] = Field(None, max_length=100)
    region: Optional[str] = Field(None, max_length=50)
    deposit: int = Field(..., ge=0, description="Deposit in won")
    monthly_rent: int = Field(..., ge=0, description="Monthly rent in won")
    maintenance_fee: int = Field(0, ge=0)
    property_type: PropertyType
    room_count: int = Field(1, ge=1)
    bathroom_count: int = Field(1, ge=1)
    floor: Optional[int] = None
    total_floor: Optional[int] = None
    area_sqm: Optional[float] = Field(None, gt=0)
    options: List[str] = Field(default_factory=list)
    available_from: Optional[date] = None

    @field_validator('title', 'address')
    @classmethod
    def validate_required_text(cls, v):
        """Validate and clean required text."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class PropertyUpdate(RequestSchema):
    """Schema for partial listing updates; omitted fields keep their value."""

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    address: Optional[str] = Field(None, min_length=1, max_length=200)
    address_detail: Optional[str] = Field(None, max_length=100)
    region: Optional[str] = Field(None, max_length=50)
    deposit: Optional[int] = Field(None, ge=0)
    monthly_rent: Optional[int] = Field(None, ge=0)
    maintenance_fee: Optional[int] = Field(None, ge=0)
    property_type: Optional[PropertyType] = None
    room_count: Optional[int] = Field(None, ge=1)
    bathroom_count: Optional[int] = Field(None, ge=1)
    floor: Optional[int] = None
    total_floor: Optional[int] = None
    area_sqm: Optional[float] = Field(None, gt=0)
    options: Optional[List[str]] = None
    status: Optional[PropertyStatus] = None
    available_from: Optional[date] = None

    @field_validator('title', 'address')
    @classmethod
    def validate_required_text(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip() if v is not None else v


class PropertyListFilter(RequestSchema):
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)
    status: Optional[PropertyStatus] = None


class PropertyListing(BaseModel):
    """A listing row with its main image."""

    property: Property
    main_image_url: Optional[str] = None


class PropertyPage(BaseModel):
    properties: List[PropertyListing]
    pagination: Pagination


class PropertyDetail(BaseModel):
    property: Property
    images: List[PropertyImage] = Field(default_factory=list)
