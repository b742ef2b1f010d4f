"""
Pydantic schemas for landlord-tenant conversations.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
import uuid

from rental_trust.models.message import Conversation, Message
from rental_trust.models.user import UserType
from rental_trust.schemas.common import Pagination, RequestSchema


class ConversationCreate(RequestSchema):
    """Open (or reopen) a conversation, optionally with a first message."""

    target_user_id: uuid.UUID
    initial_message: Optional[str] = Field(None, min_length=1, max_length=1000)


class MessageCreate(RequestSchema):
    content: str = Field(..., min_length=1, max_length=1000)


class Participant(BaseModel):
    """The other side of a conversation, as seen by the viewer."""

    id: uuid.UUID
    name: Optional[str] = None
    type: UserType


class ConversationSummary(BaseModel):
    conversation: Conversation
    other_user: Participant
    last_message: Optional[str] = None
    unread_count: int = 0


class ConversationPage(BaseModel):
    conversations: List[ConversationSummary]
    pagination: Pagination


class ConversationStart(BaseModel):
    """
    Result of opening a conversation.
    message is set when an initial message was sent.
    """

    conversation: Conversation
    message: Optional[Message] = None
    is_new: bool


class ConversationThread(BaseModel):
    """
    One page of a conversation, oldest message first.

    newly_read holds the other participant's messages that viewing the
    thread marked as read; callers persist them.
    """

    conversation: Conversation
    other_user: Participant
    messages: List[Message]
    newly_read: List[Message] = Field(default_factory=list)
    pagination: Pagination
