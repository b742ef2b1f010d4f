"""
Tenant profile record and its lifestyle enumerations.
Enum values are the Korean strings stored in the profiles table.
"""

from pydantic import Field
from typing import List, Optional
import enum
import uuid

from rental_trust.models.base import Record


class AgeRange(str, enum.Enum):
    EARLY_20S = "20대초반"
    LATE_20S = "20대후반"
    THIRTIES = "30대"
    FORTIES_PLUS = "40대이상"


class FamilyType(str, enum.Enum):
    SINGLE = "1인"
    COUPLE = "커플"
    FAMILY = "가족"


class Pet(str, enum.Enum):
    NONE = "없음"
    DOG = "강아지"
    CAT = "고양이"
    OTHER = "기타"


class StayTime(str, enum.Enum):
    MORNING = "아침"
    EVENING = "저녁"
    WEEKENDS = "주말만"
    RARELY = "거의없음"


class Duration(str, enum.Enum):
    SIX_MONTHS = "6개월"
    ONE_YEAR = "1년"
    TWO_YEARS = "2년"
    LONG_TERM = "장기"


class NoiseLevel(str, enum.Enum):
    QUIET = "조용"
    MODERATE = "보통"
    LIVELY = "활발"


class Profile(Record):
    """
    Tenant profile.

    trust_score is the last persisted total; it is recomputed from the
    verification and reference rows whenever those change.
    """

    user_id: uuid.UUID
    name: str
    age_range: AgeRange
    family_type: FamilyType
    pets: List[Pet] = Field(default_factory=lambda: [Pet.NONE])
    smoking: bool = False
    stay_time: Optional[StayTime] = None
    duration: Optional[Duration] = None
    noise_level: Optional[NoiseLevel] = None
    bio: Optional[str] = None
    intro: Optional[str] = None
    profile_image_url: Optional[str] = None
    trust_score: int = 0
    is_complete: bool = False
