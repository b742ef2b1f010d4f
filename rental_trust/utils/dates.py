"""
Date display helpers (Korean locale).
"""

import math
from datetime import datetime, timezone
from typing import Optional, Union

DateLike = Union[str, datetime]


def _to_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        result = value
    else:
        result = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


def _now(now: Optional[datetime]) -> datetime:
    return _to_datetime(now) if now is not None else datetime.now(timezone.utc)


def format_distance_to_now(value: DateLike, now: Optional[datetime] = None) -> str:
    """
    Relative time such as "5분 전", "2시간 전" or "3일 전".

    Anything under a minute (including future dates) is "방금 전".
    """
    diff_seconds = math.floor((_now(now) - _to_datetime(value)).total_seconds())
    diff_min = diff_seconds // 60
    diff_hour = diff_min // 60
    diff_day = diff_hour // 24
    diff_week = diff_day // 7
    diff_month = diff_day // 30
    diff_year = diff_day // 365

    if diff_seconds < 60:
        return "방금 전"
    if diff_min < 60:
        return f"{diff_min}분 전"
    if diff_hour < 24:
        return f"{diff_hour}시간 전"
    if diff_day < 7:
        return f"{diff_day}일 전"
    if diff_week < 4:
        return f"{diff_week}주 전"
    if diff_month < 12:
        return f"{diff_month}개월 전"
    return f"{diff_year}년 전"


def format_date(value: DateLike) -> str:
    """e.g. "2024년 1월 15일"."""
    target = _to_datetime(value)
    return f"{target.year}년 {target.month}월 {target.day}일"


def format_time(value: DateLike) -> str:
    """e.g. "오후 3:30"."""
    target = _to_datetime(value)
    meridiem = "오전" if target.hour < 12 else "오후"
    hour = target.hour % 12 or 12
    return f"{meridiem} {hour}:{target.minute:02d}"


def format_date_time(value: DateLike) -> str:
    """e.g. "2024년 1월 15일 오후 3:30"."""
    return f"{format_date(value)} {format_time(value)}"


def is_today(value: DateLike, now: Optional[datetime] = None) -> bool:
    target = _to_datetime(value)
    today = _now(now).astimezone(target.tzinfo)
    return target.date() == today.date()


def format_message_date(value: DateLike, now: Optional[datetime] = None) -> str:
    """Time only for today's messages, the date otherwise."""
    if is_today(value, now):
        return format_time(value)
    return format_date(value)
