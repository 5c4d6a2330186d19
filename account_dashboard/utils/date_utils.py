"""Date manipulation utilities"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple


def utcnow() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def week_bounds(day: date) -> Tuple[date, date]:
    """Monday and Sunday of the ISO week containing day"""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def is_within(day: date, start: date, end: date) -> bool:
    """Inclusive date range check"""
    return start <= day <= end


def tuesday_deadline(now: datetime) -> datetime:
    """This week's Tuesday at 17:00, in now's timezone"""
    monday, _ = week_bounds(now.date())
    return datetime.combine(monday + timedelta(days=1), time(17, 0), tzinfo=now.tzinfo)
