"""
Tests for landlord-tenant conversations and messages.
"""

from datetime import timedelta

import pytest

from rental_trust.models.base import utcnow
from rental_trust.models.user import User, UserType
from rental_trust.schemas.message import ConversationCreate, MessageCreate
from rental_trust.services.messaging import MessagingService
from rental_trust.utils.exceptions import (
    BadRequestError,
    NotFoundError,
    UnauthorizedError,
    ValidationError
)
from tests.conftest import MessageFactory, UserFactory


class TestStartConversation:

    def test_new_conversation(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        result = messaging_service.start_conversation(
            tenant_user, landlord_user, ConversationCreate(targetUserId=landlord_user.id)
        )

        assert result.is_new is True
        assert result.message is None
        assert result.conversation.landlord_id == landlord_user.id
        assert result.conversation.tenant_id == tenant_user.id

    def test_existing_pair_reused(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        existing = MessageFactory.create_conversation(landlord_user, tenant_user)

        result = messaging_service.start_conversation(
            landlord_user, tenant_user, ConversationCreate(targetUserId=tenant_user.id), [existing]
        )

        assert result.is_new is False
        assert result.conversation.id == existing.id

    def test_initial_message(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        data = ConversationCreate(targetUserId=landlord_user.id, initialMessage="<b>방 보러 가도 될까요?</b>")

        result = messaging_service.start_conversation(tenant_user, landlord_user, data)

        assert result.message.content == "방 보러 가도 될까요?"
        assert result.message.sender_id == tenant_user.id
        assert result.message.conversation_id == result.conversation.id
        assert result.conversation.last_message_at == result.message.created_at

    def test_cannot_message_self(self, messaging_service: MessagingService, tenant_user: User):
        with pytest.raises(BadRequestError):
            messaging_service.start_conversation(
                tenant_user, tenant_user, ConversationCreate(targetUserId=tenant_user.id)
            )

    def test_missing_target(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        with pytest.raises(NotFoundError):
            messaging_service.start_conversation(
                tenant_user, None, ConversationCreate(targetUserId=landlord_user.id)
            )

    def test_same_account_type_rejected(self, messaging_service: MessagingService, tenant_user: User):
        other_tenant = UserFactory.create_user()

        with pytest.raises(BadRequestError) as exc_info:
            messaging_service.start_conversation(
                tenant_user, other_tenant, ConversationCreate(targetUserId=other_tenant.id)
            )

        assert exc_info.value.status_code == 400

    def test_requires_user(self, messaging_service: MessagingService, landlord_user: User):
        with pytest.raises(UnauthorizedError):
            messaging_service.start_conversation(
                None, landlord_user, ConversationCreate(targetUserId=landlord_user.id)
            )


class TestSendMessage:

    def test_send_bumps_conversation(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        conversation = MessageFactory.create_conversation(landlord_user, tenant_user, last_offset=60)

        updated, message = messaging_service.send_message(
            landlord_user, conversation, MessageCreate(content="네, 토요일 어떠세요?")
        )

        assert message.sender_id == landlord_user.id
        assert message.is_read is False
        assert updated.last_message_at > conversation.last_message_at

    def test_outsider_sees_not_found(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        conversation = MessageFactory.create_conversation(landlord_user, tenant_user)
        outsider = UserFactory.create_user()

        with pytest.raises(NotFoundError):
            messaging_service.send_message(outsider, conversation, MessageCreate(content="hi"))

    def test_empty_after_sanitizing(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        conversation = MessageFactory.create_conversation(landlord_user, tenant_user)

        with pytest.raises(ValidationError):
            messaging_service.send_message(tenant_user, conversation, MessageCreate(content="<i></i>"))

    def test_content_too_long(self):
        with pytest.raises(ValueError):
            MessageCreate(content="가" * 1001)


class TestListConversations:

    def test_ordered_with_unread_counts(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        other_landlord = UserFactory.create_user(name="다른 집주인", user_type=UserType.LANDLORD)
        stale = MessageFactory.create_conversation(other_landlord, tenant_user, last_offset=30)
        recent = MessageFactory.create_conversation(landlord_user, tenant_user, last_offset=1)
        unrelated = MessageFactory.create_conversation(landlord_user, UserFactory.create_user())
        now = utcnow()
        messages = [
            MessageFactory.create_message(recent, landlord_user, "첫 메시지", created_at=now - timedelta(minutes=5)),
            MessageFactory.create_message(recent, landlord_user, "마지막 메시지", created_at=now - timedelta(minutes=1)),
            MessageFactory.create_message(recent, tenant_user, "제 메시지", created_at=now - timedelta(minutes=3)),
            MessageFactory.create_message(stale, other_landlord, "읽음", is_read=True),
        ]

        page = messaging_service.list_conversations(
            tenant_user,
            [stale, unrelated, recent],
            messages,
            names={landlord_user.id: "박집주인"}
        )

        assert [summary.conversation.id for summary in page.conversations] == [recent.id, stale.id]
        first, second = page.conversations
        assert first.last_message == "마지막 메시지"
        assert first.unread_count == 2
        assert first.other_user.id == landlord_user.id
        assert first.other_user.name == "박집주인"
        assert first.other_user.type == UserType.LANDLORD
        assert second.unread_count == 0
        assert second.other_user.name is None
        assert page.pagination.total_count == 2

    def test_conversation_without_messages(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        conversation = MessageFactory.create_conversation(landlord_user, tenant_user)

        page = messaging_service.list_conversations(landlord_user, [conversation])

        assert page.conversations[0].last_message is None
        assert page.conversations[0].other_user.type == UserType.TENANT

    def test_invalid_limit(self, messaging_service: MessagingService, tenant_user: User):
        with pytest.raises(ValidationError):
            messaging_service.list_conversations(tenant_user, [], limit=101)


class TestGetThread:

    def test_chronological_and_marks_read(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        conversation = MessageFactory.create_conversation(landlord_user, tenant_user)
        now = utcnow()
        first = MessageFactory.create_message(conversation, landlord_user, created_at=now - timedelta(minutes=3))
        reply = MessageFactory.create_message(conversation, tenant_user, created_at=now - timedelta(minutes=2))
        last = MessageFactory.create_message(conversation, landlord_user, created_at=now - timedelta(minutes=1))

        thread = messaging_service.get_thread(tenant_user, conversation, [last, first, reply])

        assert [message.id for message in thread.messages] == [first.id, reply.id, last.id]
        assert {message.id for message in thread.newly_read} == {first.id, last.id}
        assert all(message.is_read for message in thread.newly_read)
        assert thread.other_user.id == landlord_user.id

    def test_newest_page_first(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        conversation = MessageFactory.create_conversation(landlord_user, tenant_user)
        now = utcnow()
        messages = [
            MessageFactory.create_message(conversation, tenant_user, created_at=now - timedelta(minutes=minutes))
            for minutes in range(5)
        ]

        thread = messaging_service.get_thread(tenant_user, conversation, messages, limit=2)

        assert [message.id for message in thread.messages] == [messages[1].id, messages[0].id]
        assert thread.newly_read == []
        assert thread.pagination.total_pages == 3

    def test_outsider_sees_not_found(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        conversation = MessageFactory.create_conversation(landlord_user, tenant_user)

        with pytest.raises(NotFoundError):
            messaging_service.get_thread(UserFactory.create_user(), conversation)


class TestUnreadCount:

    def test_counts_across_conversations(self, messaging_service: MessagingService, tenant_user: User, landlord_user: User):
        other_landlord = UserFactory.create_user(user_type=UserType.LANDLORD)
        first = MessageFactory.create_conversation(landlord_user, tenant_user)
        second = MessageFactory.create_conversation(other_landlord, tenant_user)
        foreign = MessageFactory.create_conversation(landlord_user, UserFactory.create_user())
        messages = [
            MessageFactory.create_message(first, landlord_user),
            MessageFactory.create_message(second, other_landlord),
            MessageFactory.create_message(second, other_landlord, is_read=True),
            MessageFactory.create_message(second, tenant_user),
            MessageFactory.create_message(foreign, landlord_user),
        ]

        assert messaging_service.unread_count(tenant_user, [first, second, foreign], messages) == 2
