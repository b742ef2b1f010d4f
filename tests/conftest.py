"""
Test configuration and fixtures for the rental trust core.
Provides settings fixtures, record factories, in-memory images and common test utilities.
"""

import io
import random
import struct
import uuid
import zlib
from datetime import timedelta
from typing import List, Optional

import pytest
from PIL import Image

from rental_trust.config import Settings
from rental_trust.models.base import utcnow
from rental_trust.models.user import User, UserType
from rental_trust.models.profile import Profile, AgeRange, FamilyType
from rental_trust.models.verification import Verification
from rental_trust.models.reference import LandlordReference, ReferenceResponse, ReferenceStatus
from rental_trust.models.property import Property, PropertyImage, PropertyStatus, PropertyType
from rental_trust.models.message import Conversation, Message
from rental_trust.models.favorite import TenantFavorite
from rental_trust.models.phone_verification import PhoneVerification
from rental_trust.services.favorite import FavoriteService
from rental_trust.services.landlord_stats import LandlordStatsService
from rental_trust.services.messaging import MessagingService
from rental_trust.services.phone_verification import PhoneVerificationService
from rental_trust.services.profile import ProfileService
from rental_trust.services.property import PropertyService
from rental_trust.services.reference import ReferenceService
from rental_trust.services.tenant_search import TenantSearchService
from rental_trust.services.trust_score import TrustScoreService
from rental_trust.services.verification import MockVerificationProvider, VerificationService
from rental_trust.utils.rate_limit import RateLimiter


# Settings fixtures
@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        testing=True,
        verification_delay_seconds=0,
        survey_base_url="https://rental.test",
    )


# Service fixtures
@pytest.fixture
def profile_service() -> ProfileService:
    return ProfileService()


@pytest.fixture
def trust_score_service() -> TrustScoreService:
    return TrustScoreService()


@pytest.fixture
def mock_provider() -> MockVerificationProvider:
    """Mock provider without latency and with a seeded random source."""
    return MockVerificationProvider(delay_seconds=0, rng=random.Random(42))


@pytest.fixture
def verification_service(mock_provider: MockVerificationProvider) -> VerificationService:
    return VerificationService(provider=mock_provider)


@pytest.fixture
def reference_service(test_settings: Settings) -> ReferenceService:
    return ReferenceService(settings=test_settings)


@pytest.fixture
def tenant_search_service() -> TenantSearchService:
    return TenantSearchService()


@pytest.fixture
def property_service() -> PropertyService:
    return PropertyService()


@pytest.fixture
def messaging_service() -> MessagingService:
    return MessagingService()


@pytest.fixture
def favorite_service() -> FavoriteService:
    return FavoriteService()


@pytest.fixture
def landlord_stats_service() -> LandlordStatsService:
    return LandlordStatsService()


@pytest.fixture
def phone_verification_service(test_settings: Settings) -> PhoneVerificationService:
    """Phone code service with a seeded random source."""
    return PhoneVerificationService(settings=test_settings, rng=random.Random(7))


class FakeClock:
    """Manually advanced clock for time-dependent code."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(clock: FakeClock) -> RateLimiter:
    limiter = RateLimiter(clock=clock)
    yield limiter
    limiter.stop_sweeper()


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user(
        email: str = None,
        name: str = "Test User",
        user_type: UserType = UserType.TENANT
    ) -> User:
        return User(
            email=email or f"test{uuid.uuid4().hex[:8]}@example.com",
            name=name,
            user_type=user_type,
        )


class ProfileFactory:
    """Factory for creating tenant profiles."""

    @staticmethod
    def create_profile(
        user_id: uuid.UUID = None,
        name: str = "김세입",
        age_range: AgeRange = AgeRange.LATE_20S,
        family_type: FamilyType = FamilyType.SINGLE,
        smoking: bool = False,
        trust_score: int = 0,
        is_complete: bool = True,
        created_at=None
    ) -> Profile:
        data = {
            "user_id": user_id or uuid.uuid4(),
            "name": name,
            "age_range": age_range,
            "family_type": family_type,
            "smoking": smoking,
            "trust_score": trust_score,
            "is_complete": is_complete,
        }
        if created_at is not None:
            data["created_at"] = created_at
        return Profile(**data)


class VerificationFactory:
    """Factory for creating verification rows."""

    @staticmethod
    def create_verification(
        user_id: uuid.UUID = None,
        employment: bool = False,
        income: bool = False,
        credit: bool = False,
        credit_grade: Optional[int] = None,
        identity: bool = False
    ) -> Verification:
        return Verification(
            user_id=user_id or uuid.uuid4(),
            employment_verified=employment,
            income_verified=income,
            credit_verified=credit,
            credit_grade=credit_grade,
            identity_verified=identity,
        )


class ReferenceFactory:
    """Factory for creating reference requests and survey responses."""

    @staticmethod
    def create_reference(
        user_id: uuid.UUID = None,
        landlord_phone: str = "010-1234-5678",
        status: ReferenceStatus = ReferenceStatus.SENT,
        expires_in: timedelta = timedelta(days=7),
        token: str = None
    ) -> LandlordReference:
        return LandlordReference(
            user_id=user_id or uuid.uuid4(),
            landlord_phone=landlord_phone,
            verification_token=token or uuid.uuid4().hex,
            token_expires_at=utcnow() + expires_in,
            status=status,
        )

    @staticmethod
    def create_response(
        ratings: List[int] = (5, 5, 5, 5),
        would_recommend: bool = True,
        reference_id: uuid.UUID = None
    ) -> ReferenceResponse:
        rent_payment, property_condition, neighbor_issues, checkout_condition = ratings
        return ReferenceResponse(
            reference_id=reference_id or uuid.uuid4(),
            rent_payment=rent_payment,
            property_condition=property_condition,
            neighbor_issues=neighbor_issues,
            checkout_condition=checkout_condition,
            would_recommend=would_recommend,
        )


class PropertyFactory:
    """Factory for creating listings and listing images."""

    @staticmethod
    def create_property(
        landlord_id: uuid.UUID = None,
        title: str = "역세권 원룸",
        status: PropertyStatus = PropertyStatus.AVAILABLE,
        view_count: int = 0,
        created_offset: int = 0
    ) -> Property:
        return Property(
            landlord_id=landlord_id or uuid.uuid4(),
            title=title,
            address="서울시 마포구 연남동 1-1",
            deposit=10_000_000,
            monthly_rent=600_000,
            property_type=PropertyType.ONEROOM,
            status=status,
            view_count=view_count,
            created_at=utcnow() - timedelta(minutes=created_offset),
        )

    @staticmethod
    def create_image(
        property_id: uuid.UUID,
        sort_order: int = 0,
        is_main: bool = False
    ) -> PropertyImage:
        return PropertyImage(
            property_id=property_id,
            image_url=f"https://cdn.test/{property_id}/{sort_order}.webp",
            sort_order=sort_order,
            is_main=is_main,
        )


class MessageFactory:
    """Factory for creating conversations and messages."""

    @staticmethod
    def create_conversation(landlord: User, tenant: User, last_offset: int = 0) -> Conversation:
        return Conversation(
            landlord_id=landlord.id,
            tenant_id=tenant.id,
            last_message_at=utcnow() - timedelta(minutes=last_offset),
        )

    @staticmethod
    def create_message(
        conversation: Conversation,
        sender: User,
        content: str = "안녕하세요",
        is_read: bool = False,
        created_at=None
    ) -> Message:
        return Message(
            conversation_id=conversation.id,
            sender_id=sender.id,
            content=content,
            is_read=is_read,
            created_at=created_at or utcnow(),
        )


class FavoriteFactory:
    @staticmethod
    def create_favorite(
        landlord_id: uuid.UUID,
        tenant_id: uuid.UUID = None,
        note: str = None,
        created_offset: int = 0
    ) -> TenantFavorite:
        return TenantFavorite(
            landlord_id=landlord_id,
            tenant_id=tenant_id or uuid.uuid4(),
            note=note,
            created_at=utcnow() - timedelta(minutes=created_offset),
        )


class PhoneCodeFactory:
    @staticmethod
    def create_code(
        phone_number: str = "01012345678",
        code: str = "123456",
        expires_in: timedelta = timedelta(minutes=3),
        verified: bool = False,
        created_offset: int = 0
    ) -> PhoneVerification:
        return PhoneVerification(
            phone_number=phone_number,
            code=code,
            expires_at=utcnow() + expires_in,
            verified=verified,
            created_at=utcnow() - timedelta(seconds=created_offset),
        )


# Common test fixtures
@pytest.fixture
def tenant_user() -> User:
    return UserFactory.create_user(email="tenant@test.com", name="Test Tenant")


@pytest.fixture
def landlord_user() -> User:
    return UserFactory.create_user(
        email="landlord@test.com",
        name="Test Landlord",
        user_type=UserType.LANDLORD
    )


@pytest.fixture
def complete_profile(tenant_user: User) -> Profile:
    return ProfileFactory.create_profile(user_id=tenant_user.id)


# Image fixtures
def make_image(
    width: int = 100,
    height: int = 100,
    image_format: str = "PNG",
    color=(255, 0, 0),
    mode: str = "RGB"
) -> bytes:
    """Encode a solid-color image in memory."""
    output = io.BytesIO()
    Image.new(mode, (width, height), color).save(output, image_format)
    return output.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """100x100 red PNG."""
    return make_image()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """100x100 blue JPEG."""
    return make_image(image_format="JPEG", color=(0, 0, 255))


def make_oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """A 1x1 PNG whose header claims width x height pixels."""
    data = bytearray(make_image(width=1, height=1))
    # IHDR data follows the 8-byte signature and the chunk's length and type
    data[16:24] = struct.pack(">II", width, height)
    data[29:33] = struct.pack(">I", zlib.crc32(bytes(data[12:29])))
    return bytes(data)


def make_transparent_palette_png() -> bytes:
    """20x20 palette PNG: left half transparent, right half opaque blue."""
    image = Image.new("P", (20, 20), 1)
    image.putpalette([255, 255, 255, 0, 0, 255])
    image.paste(0, (0, 0, 10, 20))
    output = io.BytesIO()
    image.save(output, "PNG", transparency=0)
    return output.getvalue()
