"""
Reference service for landlord reference requests and survey submissions.
Handles token issuance, link validation and the one-time survey completion.
"""

from datetime import timedelta, timezone
from typing import Dict, Iterable, Optional, Tuple
import logging
import secrets
import uuid

from rental_trust.config import Settings, get_settings
from rental_trust.models.base import utcnow
from rental_trust.models.profile import Profile
from rental_trust.models.reference import (
    LandlordReference,
    ReferenceResponse,
    ReferenceStatus,
    OverallRating
)
from rental_trust.schemas.reference import (
    ReferenceRequestCreate,
    ReferenceSurveySubmit,
    ReferenceTokenStatus,
    ReferenceRequestResult
)
from rental_trust.utils.exceptions import (
    ReferenceNotFoundError,
    ReferenceExpiredError,
    ReferenceAlreadyCompletedError,
    DuplicateReferenceRequestError,
    ForbiddenError
)
from rental_trust.utils.sanitize import sanitize_user_input
from rental_trust.utils.validators import mask_phone

logger = logging.getLogger(__name__)

DEFAULT_TENANT_NAME = "세입자"


def classify_overall_rating(survey: ReferenceSurveySubmit) -> OverallRating:
    """positive for an average of 4 or more, negative below 2.5, neutral otherwise."""
    average = (
        survey.rent_payment
        + survey.property_condition
        + survey.neighbor_issues
        + survey.checkout_condition
    ) / 4

    if average >= 4:
        return OverallRating.POSITIVE
    if average < 2.5:
        return OverallRating.NEGATIVE
    return OverallRating.NEUTRAL


class ReferenceService:
    """
    Reference request lifecycle: sent -> completed.

    The survey link carries a random token valid for reference_token_ttl_days.
    A completed reference never accepts a second submission.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def create_request(
        self,
        user_id: uuid.UUID,
        data: ReferenceRequestCreate,
        existing: Iterable[LandlordReference] = ()
    ) -> ReferenceRequestResult:
        """
        Issue a new reference request.

        Args:
            user_id: Tenant asking for the reference
            data: Validated landlord contact details
            existing: The tenant's existing reference requests

        Returns:
            The new reference (status sent) and the survey URL to deliver

        Raises:
            DuplicateReferenceRequestError: If an open request to the same phone exists
        """
        for reference in existing:
            if (
                reference.user_id == user_id
                and reference.landlord_phone == data.landlord_phone
                and reference.is_open
            ):
                raise DuplicateReferenceRequestError(mask_phone(data.landlord_phone))

        now = utcnow()
        token = secrets.token_hex(self.settings.reference_token_bytes)

        reference = LandlordReference(
            user_id=user_id,
            landlord_name=sanitize_user_input(data.landlord_name) or None,
            landlord_phone=data.landlord_phone,
            landlord_email=data.landlord_email,
            verification_token=token,
            token_expires_at=now + timedelta(days=self.settings.reference_token_ttl_days),
            status=ReferenceStatus.SENT,
            request_sent_at=now,
        )

        logger.info(
            f"Reference request {reference.id} issued by user {user_id} "
            f"to {mask_phone(data.landlord_phone)}"
        )
        return ReferenceRequestResult(
            reference=reference,
            survey_url=self.survey_url(token),
        )

    def survey_url(self, token: str, base_url: Optional[str] = None) -> str:
        base = (base_url or self.settings.survey_base_url).rstrip("/")
        return f"{base}/reference/survey/{token}"

    def check_token(self, reference: Optional[LandlordReference]) -> LandlordReference:
        """
        Validate a survey link.

        Args:
            reference: The reference found for the token, or None

        Raises:
            ReferenceNotFoundError: If no reference matches the token
            ReferenceExpiredError: If the link has expired
            ReferenceAlreadyCompletedError: If the survey was already submitted
        """
        if reference is None:
            raise ReferenceNotFoundError()

        expires_at = reference.token_expires_at
        if expires_at is not None:
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=timezone.utc)
            if expires_at < utcnow():
                raise ReferenceExpiredError()

        if reference.status == ReferenceStatus.COMPLETED:
            raise ReferenceAlreadyCompletedError()

        return reference

    def token_status(
        self,
        reference: Optional[LandlordReference],
        tenant_profile: Optional[Profile] = None
    ) -> ReferenceTokenStatus:
        """What the survey page shows before the landlord answers."""
        reference = self.check_token(reference)
        return ReferenceTokenStatus(
            valid=True,
            tenant_name=tenant_profile.name if tenant_profile else DEFAULT_TENANT_NAME,
            reference_id=reference.id,
        )

    def submit_survey(
        self,
        reference: Optional[LandlordReference],
        survey: ReferenceSurveySubmit
    ) -> Tuple[LandlordReference, ReferenceResponse]:
        """
        Record a landlord's survey.

        The response row and the completed reference are built together and
        returned as a pair; callers persist both in one transaction.

        Returns:
            (completed reference, survey response)

        Raises:
            ReferenceNotFoundError, ReferenceExpiredError, ReferenceAlreadyCompletedError
        """
        reference = self.check_token(reference)

        response = ReferenceResponse(
            reference_id=reference.id,
            rent_payment=survey.rent_payment,
            property_condition=survey.property_condition,
            neighbor_issues=survey.neighbor_issues,
            checkout_condition=survey.checkout_condition,
            would_recommend=survey.would_recommend,
            comment=sanitize_user_input(survey.comment) or None,
            overall_rating=classify_overall_rating(survey),
        )

        completed = reference.touch(
            status=ReferenceStatus.COMPLETED,
            completed_at=response.created_at,
        )

        logger.info(
            f"Reference {reference.id} completed: {response.overall_rating.value}, "
            f"recommend={response.would_recommend}"
        )
        return completed, response

    def get_for_user(
        self,
        user_id: uuid.UUID,
        reference: Optional[LandlordReference]
    ) -> LandlordReference:
        """
        Return a reference owned by user_id.

        Raises:
            ReferenceNotFoundError: If the reference does not exist
            ForbiddenError: If it belongs to another tenant
        """
        if reference is None:
            raise ReferenceNotFoundError()
        if reference.user_id != user_id:
            raise ForbiddenError("You can only view your own reference requests")
        return reference

    @staticmethod
    def summarize(references: Iterable[LandlordReference]) -> Dict[str, int]:
        """Count references per status, every status present."""
        counts = {status.value: 0 for status in ReferenceStatus}
        for reference in references:
            counts[ReferenceStatus(reference.status).value] += 1
        return counts

    @staticmethod
    def newest_first(references: Iterable[LandlordReference]) -> list:
        return sorted(references, key=lambda reference: reference.created_at, reverse=True)
