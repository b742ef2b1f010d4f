"""
Pydantic schemas for tenant profile updates.
"""

from pydantic import Field
from typing import List, Optional

from rental_trust.models.profile import AgeRange, FamilyType, Pet, StayTime, Duration, NoiseLevel
from rental_trust.schemas.common import RequestSchema


class ProfileUpdate(RequestSchema):
    """
    Profile create/update payload.
    Every field is optional; omitted or null fields keep their stored value.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    age_range: Optional[AgeRange] = None
    family_type: Optional[FamilyType] = None
    pets: Optional[List[Pet]] = None
    smoking: Optional[bool] = None
    stay_time: Optional[StayTime] = None
    duration: Optional[Duration] = None
    noise_level: Optional[NoiseLevel] = None
    bio: Optional[str] = Field(None, max_length=100, description="One-line introduction")
    intro: Optional[str] = Field(None, max_length=500)
    is_complete: Optional[bool] = None
