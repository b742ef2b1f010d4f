"""
Pydantic schemas for the landlord dashboard statistics.
"""

from pydantic import BaseModel
from datetime import datetime
from typing import List, Literal


class StatsSummary(BaseModel):
    total_properties: int = 0
    available_properties: int = 0
    reserved_properties: int = 0
    rented_properties: int = 0
    total_views: int = 0
    total_favorites: int = 0
    unread_messages: int = 0
    total_conversations: int = 0


class ActivityItem(BaseModel):
    type: Literal["property_view", "favorite_added", "message_received"]
    description: str
    created_at: datetime


class MonthlyStat(BaseModel):
    """
    Activity for one calendar month (YYYY-MM).
    Only messages are tracked per month; views and favorites stay 0.
    """

    month: str
    views: int = 0
    favorites: int = 0
    messages: int = 0


class LandlordStats(BaseModel):
    summary: StatsSummary
    recent_activity: List[ActivityItem]
    monthly_stats: List[MonthlyStat]
