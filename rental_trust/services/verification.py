"""
Verification service for employment, income, credit and identity checks.
Runs checks through the configured provider and records the outcome on the user's verification row.
"""

from typing import Optional
import asyncio
import logging
import random
import time
import uuid

from rental_trust.config import Settings, get_settings, SUPPORTED_VERIFICATION_PROVIDERS
from rental_trust.models.base import utcnow
from rental_trust.models.verification import Verification, VerificationCategory, IncomeRange
from rental_trust.schemas.verification import (
    EmploymentVerificationRequest,
    IncomeVerificationRequest,
    IdentityVerificationRequest,
    EmploymentVerificationResult,
    IncomeVerificationResult,
    CreditVerificationResult,
    IdentityVerificationResult,
    VerificationStatus
)
from rental_trust.utils.exceptions import VerificationFailedError, BadRequestError
from rental_trust.utils.validators import mask_phone

logger = logging.getLogger(__name__)

# NICE credit score lower bounds for grades 1..9; anything below is grade 10
CREDIT_SCORE_GRADE_BOUNDS = (900, 870, 840, 805, 750, 665, 600, 515, 445)

CREDIT_GRADE_LABELS = {
    1: "최우량",
    2: "우량",
    3: "양호",
    4: "양호",
    5: "보통",
    6: "보통",
    7: "주의",
    8: "주의",
    9: "위험",
    10: "위험",
}

# The mock provider only issues grades 1-3 and labels them on a coarser scale
MOCK_CREDIT_GRADE_LABELS = {
    1: "최우량",
    2: "양호",
    3: "보통",
}


def credit_grade_from_score(score: int) -> int:
    """Map a NICE credit score to a grade from 1 (best) to 10."""
    for grade, lower_bound in enumerate(CREDIT_SCORE_GRADE_BOUNDS, start=1):
        if score >= lower_bound:
            return grade
    return 10


def credit_grade_label(grade: int) -> str:
    if grade not in CREDIT_GRADE_LABELS:
        raise ValueError(f"Credit grade must be between 1 and 10, got {grade}")
    return CREDIT_GRADE_LABELS[grade]


def get_verification_provider(settings: Optional[Settings] = None) -> str:
    """Name of the configured verification provider."""
    settings = settings or get_settings()
    return settings.verification_provider


class MockVerificationProvider:
    """
    Development provider that approves every request after a short delay.
    Credit grades are drawn at random from 1-3.
    """

    name = "mock"

    def __init__(self, delay_seconds: float = 0.5, rng: Optional[random.Random] = None):
        self.delay_seconds = delay_seconds
        self.rng = rng or random.Random()

    async def _simulate_latency(self) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

    async def verify_employment(self, company: str) -> EmploymentVerificationResult:
        await self._simulate_latency()
        logger.info(f"Employment verification (mock): {company}")
        return EmploymentVerificationResult(
            success=True,
            company=company,
            join_date="2022-03-01",
            department="개발팀",
        )

    async def verify_income(self, income_range: str) -> IncomeVerificationResult:
        await self._simulate_latency()
        logger.info(f"Income verification (mock): {income_range}")
        return IncomeVerificationResult(success=True, income_range=income_range)

    async def verify_credit(self) -> CreditVerificationResult:
        await self._simulate_latency()
        grade = self.rng.randint(1, 3)
        logger.info(f"Credit verification (mock): grade {grade}")
        return CreditVerificationResult(
            success=True,
            credit_grade=grade,
            grade_label=MOCK_CREDIT_GRADE_LABELS[grade],
        )

    async def verify_identity(
        self,
        name: str,
        phone_number: str,
        birth_date: str
    ) -> IdentityVerificationResult:
        await self._simulate_latency()
        logger.info(f"Identity verification (mock): {name}, {mask_phone(phone_number)}")
        stamp = int(time.time() * 1000)
        return IdentityVerificationResult(
            success=True,
            name=name,
            birth_date=birth_date,
            gender="M",
            phone_number=phone_number,
            ci=f"mock_ci_{stamp}",
            di=f"mock_di_{stamp}",
        )


def build_provider(settings: Optional[Settings] = None) -> MockVerificationProvider:
    """
    Instantiate the configured provider.

    Raises:
        BadRequestError: If the configured provider is not available
    """
    settings = settings or get_settings()
    provider = get_verification_provider(settings)

    if provider not in SUPPORTED_VERIFICATION_PROVIDERS:
        raise BadRequestError(f"Unsupported verification provider: {provider}")

    return MockVerificationProvider(delay_seconds=settings.verification_delay_seconds)


class VerificationService:
    """
    Verification service recording provider outcomes on the verification row.
    Each method returns the updated record; on failure the record is left untouched.
    """

    def __init__(self, provider: Optional[MockVerificationProvider] = None):
        self.provider = provider or build_provider()

    @staticmethod
    def ensure_record(user_id: uuid.UUID, verification: Optional[Verification]) -> Verification:
        """Return the user's verification row, creating an empty one on first use."""
        if verification is None:
            logger.debug(f"Creating verification record for user {user_id}")
            return Verification(user_id=user_id)
        return verification

    async def verify_employment(
        self,
        user_id: uuid.UUID,
        request: EmploymentVerificationRequest,
        verification: Optional[Verification] = None
    ) -> Verification:
        """
        Verify current employment at the requested company.

        Raises:
            VerificationFailedError: If the provider rejects or errors
        """
        record = self.ensure_record(user_id, verification)
        result = await self._call(
            VerificationCategory.EMPLOYMENT,
            self.provider.verify_employment(request.company)
        )

        updated = record.touch(
            employment_verified=True,
            employment_company=result.company or request.company,
            employment_verified_at=utcnow(),
        )
        logger.info(f"Employment verified for user {user_id}")
        return updated

    async def verify_income(
        self,
        user_id: uuid.UUID,
        request: IncomeVerificationRequest,
        verification: Optional[Verification] = None
    ) -> Verification:
        record = self.ensure_record(user_id, verification)
        income_range = IncomeRange(request.income_range).value
        result = await self._call(
            VerificationCategory.INCOME,
            self.provider.verify_income(income_range)
        )

        updated = record.touch(
            income_verified=True,
            income_range=result.income_range or income_range,
            income_verified_at=utcnow(),
        )
        logger.info(f"Income verified for user {user_id}")
        return updated

    async def verify_credit(
        self,
        user_id: uuid.UUID,
        verification: Optional[Verification] = None
    ) -> Verification:
        """
        Verify credit standing and store the grade the provider reports.

        A provider that returns a raw score instead of a grade has it mapped
        through credit_grade_from_score.
        """
        record = self.ensure_record(user_id, verification)
        result = await self._call(VerificationCategory.CREDIT, self.provider.verify_credit())

        grade = result.credit_grade
        if grade is None and result.credit_score is not None:
            grade = credit_grade_from_score(result.credit_score)
        if grade is None:
            raise VerificationFailedError(VerificationCategory.CREDIT.value, "no credit grade returned")

        updated = record.touch(
            credit_verified=True,
            credit_grade=grade,
            credit_verified_at=utcnow(),
        )
        logger.info(f"Credit verified for user {user_id}: grade {grade}")
        return updated

    async def verify_identity(
        self,
        user_id: uuid.UUID,
        request: IdentityVerificationRequest,
        verification: Optional[Verification] = None
    ) -> Verification:
        record = self.ensure_record(user_id, verification)
        result = await self._call(
            VerificationCategory.IDENTITY,
            self.provider.verify_identity(request.name, request.phone_number, request.birth_date)
        )

        updated = record.touch(
            identity_verified=True,
            identity_ci=result.ci,
            identity_verified_at=utcnow(),
        )
        logger.info(f"Identity verified for user {user_id}")
        return updated

    @staticmethod
    def status(verification: Optional[Verification]) -> VerificationStatus:
        """Summarise which categories are complete."""
        if verification is None:
            return VerificationStatus()

        flags = {
            category.value: verification.is_verified(category)
            for category in VerificationCategory
        }
        return VerificationStatus(**flags, completed_count=sum(flags.values()))

    async def _call(self, category: VerificationCategory, pending):
        """Await a provider call, turning failures into VerificationFailedError."""
        try:
            result = await pending
        except VerificationFailedError:
            raise
        except Exception as e:
            logger.error(f"{category.value} verification error: {e}", exc_info=True)
            raise VerificationFailedError(category.value, str(e))

        if not result.success:
            logger.warning(f"{category.value} verification rejected: {result.error}")
            raise VerificationFailedError(category.value, result.error)

        return result
