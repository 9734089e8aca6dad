"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, time, timezone
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    """Parse an ISO date or timestamp string (or pass a date through) into a date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_datetime(value).date()


def parse_datetime(value: DateLike) -> datetime:
    """
    Parse a value into a timezone-aware UTC datetime.

    Plain dates become midnight UTC; naive datetimes are taken as UTC.
    Accepts the trailing "Z" the backend emits on timestamps.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text) if "T" in text or " " in text else date.fromisoformat(text)
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_optional_datetime(value: Optional[DateLike]) -> Optional[datetime]:
    if not value:
        return None
    return parse_datetime(value)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of shorter months"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return from_date.replace(year=year, month=month, day=day)
