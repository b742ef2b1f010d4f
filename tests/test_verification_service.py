"""
Tests for verification flows against the mock provider.
"""

import random
import uuid

import pytest

from rental_trust.config import Settings
from rental_trust.models.verification import IncomeRange
from rental_trust.schemas.verification import (
    EmploymentVerificationRequest,
    IncomeVerificationRequest,
    IdentityVerificationRequest,
    CreditVerificationResult,
    EmploymentVerificationResult
)
from rental_trust.services.verification import (
    MockVerificationProvider,
    VerificationService,
    build_provider,
    credit_grade_from_score,
    credit_grade_label
)
from rental_trust.utils.exceptions import VerificationFailedError
from tests.conftest import VerificationFactory


class RejectingProvider(MockVerificationProvider):
    """Provider that turns every employment check down."""

    async def verify_employment(self, company: str) -> EmploymentVerificationResult:
        return EmploymentVerificationResult(success=False, error="company not found")


class BrokenProvider(MockVerificationProvider):
    """Provider whose credit lookup raises."""

    async def verify_credit(self) -> CreditVerificationResult:
        raise ConnectionError("credit bureau unreachable")


class ScoreOnlyProvider(MockVerificationProvider):
    """Provider that reports a raw credit score instead of a grade."""

    async def verify_credit(self) -> CreditVerificationResult:
        return CreditVerificationResult(success=True, credit_score=880)


class TestMockProvider:
    """Test the mock provider's canned results."""

    @pytest.mark.asyncio
    async def test_employment(self, mock_provider: MockVerificationProvider):
        result = await mock_provider.verify_employment("삼성전자")

        assert result.success is True
        assert result.company == "삼성전자"
        assert result.join_date == "2022-03-01"
        assert result.department == "개발팀"

    @pytest.mark.asyncio
    async def test_credit_grade_range(self):
        provider = MockVerificationProvider(delay_seconds=0, rng=random.Random(7))

        for _ in range(20):
            result = await provider.verify_credit()
            assert result.credit_grade in (1, 2, 3)
            assert result.grade_label in ("최우량", "양호", "보통")

    @pytest.mark.asyncio
    async def test_identity(self, mock_provider: MockVerificationProvider):
        result = await mock_provider.verify_identity("홍길동", "010-1234-5678", "1990-01-01")

        assert result.success is True
        assert result.ci.startswith("mock_ci_")
        assert result.di.startswith("mock_di_")

    def test_build_provider_uses_settings(self, test_settings: Settings):
        provider = build_provider(test_settings)

        assert isinstance(provider, MockVerificationProvider)
        assert provider.delay_seconds == 0


class TestVerificationService:
    """Test recording verification outcomes."""

    @pytest.mark.asyncio
    async def test_employment_creates_record(self, verification_service: VerificationService):
        user_id = uuid.uuid4()

        record = await verification_service.verify_employment(
            user_id,
            EmploymentVerificationRequest(company="삼성전자")
        )

        assert record.user_id == user_id
        assert record.employment_verified is True
        assert record.employment_company == "삼성전자"
        assert record.employment_verified_at is not None

    @pytest.mark.asyncio
    async def test_income_updates_existing_record(self, verification_service: VerificationService):
        existing = VerificationFactory.create_verification(employment=True)

        record = await verification_service.verify_income(
            existing.user_id,
            IncomeVerificationRequest(income_range=IncomeRange.FROM_30M_TO_50M),
            existing
        )

        assert record.id == existing.id
        assert record.employment_verified is True
        assert record.income_verified is True
        assert record.income_range == "3000-5000만원"

    @pytest.mark.asyncio
    async def test_credit_stores_grade(self, verification_service: VerificationService):
        record = await verification_service.verify_credit(uuid.uuid4())

        assert record.credit_verified is True
        assert record.credit_grade in (1, 2, 3)

    @pytest.mark.asyncio
    async def test_credit_score_mapped_to_grade(self):
        service = VerificationService(provider=ScoreOnlyProvider(delay_seconds=0))

        record = await service.verify_credit(uuid.uuid4())

        assert record.credit_grade == 2

    @pytest.mark.asyncio
    async def test_identity_stores_ci(self, verification_service: VerificationService):
        request = IdentityVerificationRequest(
            name="홍길동",
            phone_number="010-1234-5678",
            birth_date="1990-01-01"
        )

        record = await verification_service.verify_identity(uuid.uuid4(), request)

        assert record.identity_verified is True
        assert record.identity_ci.startswith("mock_ci_")

    @pytest.mark.asyncio
    async def test_rejection_raises(self):
        service = VerificationService(provider=RejectingProvider(delay_seconds=0))

        with pytest.raises(VerificationFailedError, match="company not found") as exc_info:
            await service.verify_employment(uuid.uuid4(), EmploymentVerificationRequest(company="없는회사"))

        assert exc_info.value.category == "employment"

    @pytest.mark.asyncio
    async def test_provider_error_raises(self):
        service = VerificationService(provider=BrokenProvider(delay_seconds=0))

        with pytest.raises(VerificationFailedError, match="unreachable"):
            await service.verify_credit(uuid.uuid4())

    def test_status_counts(self):
        verification = VerificationFactory.create_verification(employment=True, credit=True, credit_grade=1)

        status = VerificationService.status(verification)

        assert status.employment is True
        assert status.income is False
        assert status.credit is True
        assert status.completed_count == 2
        assert status.total_count == 4

    def test_status_without_record(self):
        assert VerificationService.status(None).completed_count == 0


class TestCreditGrades:
    """Test NICE score to grade mapping."""

    @pytest.mark.parametrize("score,grade", [
        (950, 1), (900, 1), (899, 2), (870, 2), (840, 3), (805, 4),
        (750, 5), (665, 6), (600, 7), (515, 8), (445, 9), (444, 10), (0, 10),
    ])
    def test_score_to_grade(self, score, grade):
        assert credit_grade_from_score(score) == grade

    def test_labels(self):
        assert credit_grade_label(1) == "최우량"
        assert credit_grade_label(10) == "위험"

    def test_label_out_of_range(self):
        with pytest.raises(ValueError):
            credit_grade_label(11)
