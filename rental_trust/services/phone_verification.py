"""
Phone verification codes.
Issues six-digit codes with a short expiry and checks them once.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple
import logging
import secrets

from rental_trust.config import Settings, get_settings
from rental_trust.models.base import utcnow
from rental_trust.models.phone_verification import PhoneVerification
from rental_trust.models.user import User
from rental_trust.schemas.auth import PhoneCodeRequest, PhoneCodeVerify, PhoneCodeIssued
from rental_trust.utils.exceptions import BadRequestError
from rental_trust.utils.validators import mask_phone

logger = logging.getLogger(__name__)

CODE_MIN = 100000
CODE_MAX = 999999


class PhoneVerificationService:
    """
    Code issue and check.

    A code matches when the number and code are equal, it has not been used
    and it has not expired. Issuing a new code supersedes every unused code
    for the same number.
    """

    def __init__(self, settings: Optional[Settings] = None, rng=None):
        self.settings = settings or get_settings()
        self.rng = rng or secrets.SystemRandom()

    def issue_code(
        self,
        data: PhoneCodeRequest,
        existing: Iterable[PhoneVerification] = (),
        now: Optional[datetime] = None
    ) -> PhoneCodeIssued:
        """
        Create a new code for a phone number.

        Args:
            data: Validated phone number
            existing: Stored codes; unused ones for the same number are returned as replaced
            now: Issue time

        Returns:
            PhoneCodeIssued; the code itself is only included outside production
        """
        now = now or utcnow()
        code = str(self.rng.randint(CODE_MIN, CODE_MAX))

        verification = PhoneVerification(
            phone_number=data.phone_number,
            code=code,
            expires_at=now + timedelta(seconds=self.settings.phone_code_ttl_seconds),
            created_at=now,
            updated_at=now,
        )
        replaced = [
            record for record in existing
            if record.phone_number == data.phone_number and not record.verified
        ]

        logger.info(f"Verification code issued for {mask_phone(data.phone_number)}")

        return PhoneCodeIssued(
            verification=verification,
            code=None if self.settings.is_production else code,
            replaced=replaced,
        )

    def verify_code(
        self,
        data: PhoneCodeVerify,
        records: Iterable[PhoneVerification],
        user: Optional[User] = None,
        now: Optional[datetime] = None
    ) -> Tuple[PhoneVerification, Optional[User]]:
        """
        Check a code and consume it.

        Args:
            data: Phone number and code entered by the user
            records: Stored codes
            user: Signed-in user whose phone gets marked verified, if any
            now: Check time

        Returns:
            (used code record, updated user or None)

        Raises:
            BadRequestError: If no unused, unexpired code matches
        """
        now = now or utcnow()

        candidates = [
            record for record in records
            if record.phone_number == data.phone_number
            and record.code == data.code
            and not record.verified
            and not record.is_expired(now)
        ]
        if not candidates:
            logger.warning(f"Invalid verification code for {mask_phone(data.phone_number)}")
            raise BadRequestError("Verification code is invalid or expired")

        record = max(candidates, key=lambda candidate: candidate.created_at)
        record = record.touch(verified=True)

        updated_user = None
        if user is not None:
            updated_user = user.touch(phone=data.phone_number, phone_verified=True)

        logger.info(f"Phone {mask_phone(data.phone_number)} verified")
        return record, updated_user
