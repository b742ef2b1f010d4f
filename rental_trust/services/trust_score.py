"""
Trust score aggregation.
Turns profile completeness, verification flags and landlord survey responses into a point total.
"""

from typing import Iterable, Optional
import logging

from rental_trust.models.profile import Profile
from rental_trust.models.reference import ReferenceResponse
from rental_trust.models.verification import Verification
from rental_trust.schemas.trust_score import TrustScoreBreakdown, TrustScoreLevel

logger = logging.getLogger(__name__)

PROFILE_POINTS = 20
EMPLOYMENT_POINTS = 25
INCOME_POINTS = 25

# Credit grade 1 (best) to 3; any other grade scores like grade 3
CREDIT_GRADE_POINTS = {1: 20, 2: 15, 3: 10}
DEFAULT_CREDIT_POINTS = 10

POSITIVE_REFERENCE_POINTS = 30
NEGATIVE_REFERENCE_POINTS = -20
POSITIVE_REFERENCE_MIN_AVERAGE = 3.5
NEGATIVE_REFERENCE_MAX_AVERAGE = 2.5

LEVEL_THRESHOLDS = (
    (80, TrustScoreLevel.EXCELLENT),
    (50, TrustScoreLevel.GOOD),
    (20, TrustScoreLevel.FAIR),
)

LEVEL_LABELS = {
    TrustScoreLevel.EXCELLENT: "우수",
    TrustScoreLevel.GOOD: "양호",
    TrustScoreLevel.FAIR: "보통",
    TrustScoreLevel.LOW: "시작",
}

LEVEL_COLORS = {
    TrustScoreLevel.EXCELLENT: "bg-green-500",
    TrustScoreLevel.GOOD: "bg-blue-500",
    TrustScoreLevel.FAIR: "bg-yellow-500",
    TrustScoreLevel.LOW: "bg-gray-400",
}


def reference_points(response: ReferenceResponse) -> int:
    """
    Points contributed by a single survey response.

    +30 when the four-rating average is at least 3.5 and the landlord
    recommends the tenant, -20 when the average is below 2.5 or the landlord
    does not recommend, otherwise 0.
    """
    average = (
        response.rent_payment
        + response.property_condition
        + response.neighbor_issues
        + response.checkout_condition
    ) / 4

    if response.would_recommend and average >= POSITIVE_REFERENCE_MIN_AVERAGE:
        return POSITIVE_REFERENCE_POINTS
    if not response.would_recommend or average < NEGATIVE_REFERENCE_MAX_AVERAGE:
        return NEGATIVE_REFERENCE_POINTS
    return 0


def calculate_trust_score(
    profile: Optional[Profile] = None,
    verification: Optional[Verification] = None,
    reference_responses: Optional[Iterable[ReferenceResponse]] = None
) -> TrustScoreBreakdown:
    """
    Calculate a tenant's trust score.

    - Complete profile: 20
    - Employment verified: 25
    - Income verified: 25
    - Credit verified with a grade: 20 / 15 / 10 for grades 1 / 2 / 3 (10 otherwise)
    - Each reference response: +30 positive, -20 negative, 0 neutral

    Categories reach 120 under normal inputs. The reference category is a
    signed sum and is reported as-is; only the total is floored at 0.

    Args:
        profile: Tenant profile, if any
        verification: Verification record, if any
        reference_responses: Survey responses from past landlords

    Returns:
        TrustScoreBreakdown with each category and the clamped total
    """
    profile_score = PROFILE_POINTS if profile is not None and profile.is_complete else 0

    employment_score = 0
    income_score = 0
    credit_score = 0

    if verification is not None:
        if verification.employment_verified:
            employment_score = EMPLOYMENT_POINTS

        if verification.income_verified:
            income_score = INCOME_POINTS

        if verification.credit_verified and verification.credit_grade:
            credit_score = CREDIT_GRADE_POINTS.get(verification.credit_grade, DEFAULT_CREDIT_POINTS)

    reference_score = sum(reference_points(response) for response in reference_responses or ())

    total = max(0, profile_score + employment_score + income_score + credit_score + reference_score)

    return TrustScoreBreakdown(
        profile=profile_score,
        employment=employment_score,
        income=income_score,
        credit=credit_score,
        reference=reference_score,
        total=total,
    )


def get_trust_score_level(score: int) -> TrustScoreLevel:
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return TrustScoreLevel.LOW


def get_trust_score_label(score: int) -> str:
    """Display label for a score: 우수, 양호, 보통 or 시작."""
    return LEVEL_LABELS[get_trust_score_level(score)]


def get_trust_score_color(score: int) -> str:
    """Badge color class for a score."""
    return LEVEL_COLORS[get_trust_score_level(score)]


class TrustScoreService:
    """
    Keeps a profile's persisted trust_score in step with its inputs.
    """

    def refresh(
        self,
        profile: Profile,
        verification: Optional[Verification] = None,
        reference_responses: Optional[Iterable[ReferenceResponse]] = None
    ) -> Profile:
        """
        Recompute the score and return the profile carrying the new total.

        The profile is returned unchanged when the total did not move.
        """
        breakdown = calculate_trust_score(profile, verification, reference_responses)

        if breakdown.total == profile.trust_score:
            logger.debug(f"Trust score unchanged for user {profile.user_id}: {breakdown.total}")
            return profile

        logger.info(
            f"Trust score updated for user {profile.user_id}: "
            f"{profile.trust_score} -> {breakdown.total}"
        )
        return profile.touch(trust_score=breakdown.total)
