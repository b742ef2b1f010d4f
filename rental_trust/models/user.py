"""
User record with account type.
Tenants build trust profiles; landlords browse them.
"""

from pydantic import Field
from typing import Optional
import enum

from rental_trust.models.base import Record


class UserType(str, enum.Enum):
    """Account type enumeration."""
    TENANT = "tenant"
    LANDLORD = "landlord"


class User(Record):
    """Marketplace account."""

    email: str = Field(..., max_length=255)
    name: Optional[str] = None
    user_type: UserType = UserType.TENANT
    phone: Optional[str] = None
    phone_verified: bool = False

    @property
    def is_landlord(self) -> bool:
        return self.user_type == UserType.LANDLORD

    @property
    def is_tenant(self) -> bool:
        return self.user_type == UserType.TENANT
