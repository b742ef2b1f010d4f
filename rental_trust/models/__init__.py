"""
Domain records for the rental trust core.
Mirror the persisted user, profile, verification, reference, listing,
messaging, favorite and phone-code rows.
"""

from rental_trust.models.base import Record, utcnow
from rental_trust.models.user import User, UserType
from rental_trust.models.profile import (
    Profile,
    AgeRange,
    FamilyType,
    Pet,
    StayTime,
    Duration,
    NoiseLevel,
)
from rental_trust.models.verification import Verification, VerificationCategory, IncomeRange
from rental_trust.models.reference import (
    LandlordReference,
    ReferenceResponse,
    ReferenceStatus,
    OverallRating,
    OPEN_REFERENCE_STATUSES,
)
from rental_trust.models.property import Property, PropertyImage, PropertyType, PropertyStatus
from rental_trust.models.message import Conversation, Message
from rental_trust.models.favorite import TenantFavorite
from rental_trust.models.phone_verification import PhoneVerification

__all__ = [
    "Record",
    "utcnow",
    "User",
    "UserType",
    "Profile",
    "AgeRange",
    "FamilyType",
    "Pet",
    "StayTime",
    "Duration",
    "NoiseLevel",
    "Verification",
    "VerificationCategory",
    "IncomeRange",
    "LandlordReference",
    "ReferenceResponse",
    "ReferenceStatus",
    "OverallRating",
    "OPEN_REFERENCE_STATUSES",
    "Property",
    "PropertyImage",
    "PropertyType",
    "PropertyStatus",
    "Conversation",
    "Message",
    "TenantFavorite",
    "PhoneVerification",
]
