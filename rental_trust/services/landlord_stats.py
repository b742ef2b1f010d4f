"""
Landlord dashboard statistics.
Aggregates listings, favorites and messages into summary counts, recent
activity and a six-month message history.
"""

from collections import Counter
from datetime import datetime
from typing import Iterable, Mapping, Optional
import logging
import uuid

from rental_trust.models.base import utcnow
from rental_trust.models.favorite import TenantFavorite
from rental_trust.models.message import Conversation, Message
from rental_trust.models.property import Property, PropertyStatus
from rental_trust.models.user import User
from rental_trust.schemas.stats import StatsSummary, ActivityItem, MonthlyStat, LandlordStats
from rental_trust.utils.dependencies import require_landlord

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 10
MONTHLY_WINDOW = 6
UNKNOWN_SENDER = "알 수 없음"


def month_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m")


def window_start(now: datetime, months: int = MONTHLY_WINDOW) -> datetime:
    """First instant of the month `months - 1` months before now's month."""
    index = now.year * 12 + (now.month - 1) - (months - 1)
    return now.replace(
        year=index // 12,
        month=index % 12 + 1,
        day=1,
        hour=0,
        minute=0,
        second=0,
        microsecond=0
    )


class LandlordStatsService:

    def get_stats(
        self,
        landlord: Optional[User],
        properties: Iterable[Property],
        favorites: Iterable[TenantFavorite],
        conversations: Iterable[Conversation],
        messages: Iterable[Message],
        names: Optional[Mapping[uuid.UUID, str]] = None,
        now: Optional[datetime] = None
    ) -> LandlordStats:
        """
        Dashboard numbers for one landlord.

        Args:
            landlord: The requesting user; must be a landlord
            properties: Listings; only the landlord's own are counted
            favorites: Favorites; only the landlord's own are counted
            conversations: Conversations; only those the landlord is in are counted
            messages: Messages of those conversations
            names: Profile names by user id, for activity descriptions
            now: Reference time for the monthly window

        Returns:
            LandlordStats with summary, recent activity and monthly stats
        """
        landlord = require_landlord(landlord, "view landlord statistics")
        names = names or {}
        now = now or utcnow()

        owned = [property_obj for property_obj in properties if property_obj.is_owned_by(landlord.id)]
        statuses = Counter(property_obj.status for property_obj in owned)

        conversation_ids = {
            conversation.id for conversation in conversations
            if conversation.landlord_id == landlord.id
        }
        landlord_messages = [
            message for message in messages
            if message.conversation_id in conversation_ids
        ]
        received = sorted(
            (message for message in landlord_messages if message.sender_id != landlord.id),
            key=lambda message: message.created_at,
            reverse=True
        )

        summary = StatsSummary(
            total_properties=len(owned),
            available_properties=statuses[PropertyStatus.AVAILABLE],
            reserved_properties=statuses[PropertyStatus.RESERVED],
            rented_properties=statuses[PropertyStatus.RENTED],
            total_views=sum(property_obj.view_count for property_obj in owned),
            total_favorites=sum(1 for favorite in favorites if favorite.landlord_id == landlord.id),
            unread_messages=sum(1 for message in received if not message.is_read),
            total_conversations=len(conversation_ids),
        )

        recent_activity = [
            ActivityItem(
                type="message_received",
                description=f"{names.get(message.sender_id) or UNKNOWN_SENDER}님이 메시지를 보냈습니다",
                created_at=message.created_at,
            )
            for message in received[:RECENT_ACTIVITY_LIMIT]
        ]

        start = window_start(now)
        per_month = Counter(
            month_key(message.created_at)
            for message in landlord_messages
            if message.created_at >= start
        )
        monthly_stats = [
            MonthlyStat(month=month, messages=count)
            for month, count in sorted(per_month.items())
        ]

        logger.debug(f"Stats computed for landlord {landlord.id}: {summary.total_properties} properties")
        return LandlordStats(
            summary=summary,
            recent_activity=recent_activity,
            monthly_stats=monthly_stats,
        )
