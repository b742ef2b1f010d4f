"""
Phone verification code record.
"""

from datetime import datetime, timezone

from rental_trust.models.base import Record, utcnow


class PhoneVerification(Record):
    """A six-digit code sent to a phone number; usable once before it expires."""

    phone_number: str
    code: str
    expires_at: datetime
    verified: bool = False

    def is_expired(self, now: datetime = None) -> bool:
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= (now or utcnow())
