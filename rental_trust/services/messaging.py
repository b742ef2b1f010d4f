"""
Messaging service for landlord-tenant conversations.
Opens conversations, sends messages, lists threads and tracks unread counts.
"""

from typing import Iterable, Mapping, Optional, Tuple
import logging
import uuid

from rental_trust.models.message import Conversation, Message
from rental_trust.models.user import User, UserType
from rental_trust.schemas.common import paginate
from rental_trust.schemas.message import (
    ConversationCreate,
    MessageCreate,
    Participant,
    ConversationSummary,
    ConversationPage,
    ConversationStart,
    ConversationThread
)
from rental_trust.utils.dependencies import require_user
from rental_trust.utils.exceptions import BadRequestError, NotFoundError, ValidationError
from rental_trust.utils.sanitize import sanitize_user_input
from rental_trust.utils.validators import ValidationUtils

logger = logging.getLogger(__name__)

CONVERSATION_PAGE_SIZE = 20
THREAD_PAGE_SIZE = 50


class MessagingService:
    """
    Conversations between exactly one landlord and one tenant.

    A pair has at most one conversation; opening it again returns the
    existing one. Messages count as unread for the recipient until the
    recipient views the thread.
    """

    def start_conversation(
        self,
        user: Optional[User],
        target: Optional[User],
        data: ConversationCreate,
        existing: Iterable[Conversation] = ()
    ) -> ConversationStart:
        """
        Open a conversation with another user, or return the existing one.

        Args:
            user: The requesting user
            target: The user found for data.target_user_id, or None
            data: Target and optional first message
            existing: Stored conversations to look for the pair in

        Returns:
            The conversation, the initial message if one was sent, and whether it is new

        Raises:
            BadRequestError: If the target is the user or has the same account type
            NotFoundError: If the target user does not exist
        """
        user = require_user(user)

        if data.target_user_id == user.id:
            raise BadRequestError("You cannot start a conversation with yourself")
        if target is None:
            raise NotFoundError("Target user", str(data.target_user_id))
        if target.user_type == user.user_type:
            raise BadRequestError("Conversations are only possible between a landlord and a tenant")

        landlord, tenant = (user, target) if user.is_landlord else (target, user)

        conversation = next(
            (
                conversation for conversation in existing
                if conversation.landlord_id == landlord.id and conversation.tenant_id == tenant.id
            ),
            None
        )
        is_new = conversation is None
        if is_new:
            conversation = Conversation(landlord_id=landlord.id, tenant_id=tenant.id)
            logger.info(f"Conversation {conversation.id} opened by user {user.id}")

        message = None
        if data.initial_message:
            conversation, message = self._post(conversation, user, data.initial_message)

        return ConversationStart(conversation=conversation, message=message, is_new=is_new)

    def send_message(
        self,
        user: Optional[User],
        conversation: Optional[Conversation],
        data: MessageCreate
    ) -> Tuple[Conversation, Message]:
        """
        Post a message to a conversation the user takes part in.

        Returns:
            (conversation with last_message_at bumped, new message)

        Raises:
            NotFoundError: If the conversation does not exist or the user is not in it
            ValidationError: If the message is empty after sanitization
        """
        user = require_user(user)
        conversation = self._participating(user, conversation)
        return self._post(conversation, user, data.content)

    def list_conversations(
        self,
        user: Optional[User],
        conversations: Iterable[Conversation],
        messages: Iterable[Message] = (),
        names: Optional[Mapping[uuid.UUID, str]] = None,
        page: int = 1,
        limit: int = CONVERSATION_PAGE_SIZE
    ) -> ConversationPage:
        """
        The user's conversations, most recently active first.

        Args:
            user: The requesting user
            conversations: Candidate conversations
            messages: Messages of those conversations, for previews and unread counts
            names: Profile names by user id
            page: 1-based page number
            limit: Page size, at most 100

        Returns:
            ConversationPage with the other participant, last message and unread count
        """
        user = require_user(user)
        page, limit = ValidationUtils.validate_pagination(page, limit)
        names = names or {}

        mine = [conversation for conversation in conversations if conversation.has_participant(user.id)]
        mine.sort(key=lambda conversation: conversation.last_message_at, reverse=True)
        page_items, pagination = paginate(mine, page, limit)

        by_conversation = self._group(messages)

        summaries = []
        for conversation in page_items:
            thread = by_conversation.get(conversation.id, [])
            last = max(thread, key=lambda message: message.created_at) if thread else None
            summaries.append(ConversationSummary(
                conversation=conversation,
                other_user=self._other_user(user, conversation, names),
                last_message=last.content if last else None,
                unread_count=sum(1 for message in thread if message.is_unread_for(user.id)),
            ))

        return ConversationPage(conversations=summaries, pagination=pagination)

    def get_thread(
        self,
        user: Optional[User],
        conversation: Optional[Conversation],
        messages: Iterable[Message] = (),
        names: Optional[Mapping[uuid.UUID, str]] = None,
        page: int = 1,
        limit: int = THREAD_PAGE_SIZE
    ) -> ConversationThread:
        """
        One page of messages, newest page first, oldest message first within it.

        Viewing the thread marks every unread message from the other participant
        as read; those updated messages are returned in newly_read. The page
        itself shows the read state from before this view.

        Raises:
            NotFoundError: If the conversation does not exist or the user is not in it
        """
        user = require_user(user)
        conversation = self._participating(user, conversation)
        page, limit = ValidationUtils.validate_pagination(page, limit)

        thread = [message for message in messages if message.conversation_id == conversation.id]
        thread.sort(key=lambda message: message.created_at, reverse=True)
        page_items, pagination = paginate(thread, page, limit)

        newly_read = [
            message.touch(is_read=True)
            for message in thread
            if message.is_unread_for(user.id)
        ]
        if newly_read:
            logger.debug(f"Marked {len(newly_read)} messages read in conversation {conversation.id}")

        return ConversationThread(
            conversation=conversation,
            other_user=self._other_user(user, conversation, names or {}),
            messages=list(reversed(page_items)),
            newly_read=newly_read,
            pagination=pagination,
        )

    @staticmethod
    def unread_count(
        user: Optional[User],
        conversations: Iterable[Conversation],
        messages: Iterable[Message]
    ) -> int:
        """Unread messages addressed to the user across all their conversations."""
        user = require_user(user)
        mine = {conversation.id for conversation in conversations if conversation.has_participant(user.id)}
        return sum(
            1 for message in messages
            if message.conversation_id in mine and message.is_unread_for(user.id)
        )

    @staticmethod
    def _post(conversation: Conversation, sender: User, content: str) -> Tuple[Conversation, Message]:
        cleaned = sanitize_user_input(content)
        if not cleaned:
            raise ValidationError("Message cannot be empty")

        message = Message(conversation_id=conversation.id, sender_id=sender.id, content=cleaned)
        conversation = conversation.touch(last_message_at=message.created_at)

        logger.info(f"Message {message.id} sent by user {sender.id} in conversation {conversation.id}")
        return conversation, message

    @staticmethod
    def _participating(user: User, conversation: Optional[Conversation]) -> Conversation:
        if conversation is None or not conversation.has_participant(user.id):
            raise NotFoundError("Conversation")
        return conversation

    @staticmethod
    def _other_user(
        user: User,
        conversation: Conversation,
        names: Mapping[uuid.UUID, str]
    ) -> Participant:
        other_id = conversation.other_participant(user.id)
        return Participant(
            id=other_id,
            name=names.get(other_id),
            type=UserType.TENANT if other_id == conversation.tenant_id else UserType.LANDLORD,
        )

    @staticmethod
    def _group(messages: Iterable[Message]) -> dict:
        grouped = {}
        for message in messages:
            grouped.setdefault(message.conversation_id, []).append(message)
        return grouped
