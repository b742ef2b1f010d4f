"""
Conversation and message records.
A conversation always pairs one landlord with one tenant.
"""

from pydantic import Field
from datetime import datetime
import uuid

from rental_trust.models.base import Record, utcnow


class Conversation(Record):
    landlord_id: uuid.UUID
    tenant_id: uuid.UUID
    last_message_at: datetime = Field(default_factory=utcnow)

    def has_participant(self, user_id: uuid.UUID) -> bool:
        return user_id in (self.landlord_id, self.tenant_id)

    def other_participant(self, user_id: uuid.UUID) -> uuid.UUID:
        return self.tenant_id if user_id == self.landlord_id else self.landlord_id


class Message(Record):
    conversation_id: uuid.UUID
    sender_id: uuid.UUID
    content: str = Field(..., max_length=1000)
    is_read: bool = False

    def is_unread_for(self, user_id: uuid.UUID) -> bool:
        """Unread messages count only for the recipient."""
        return self.sender_id != user_id and not self.is_read
