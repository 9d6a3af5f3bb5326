# app/helpers/time.py
from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Optional, Union
from zoneinfo import ZoneInfo

from config.appconfig import settings


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


@lru_cache(maxsize=8)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def practice_zone() -> ZoneInfo:
    return _zone(settings.PRACTICE_TIMEZONE)


def to_practice_local(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a datetime to naive practice-local wall-clock time.

    Aware values are shifted into the practice timezone; naive values are
    already wall-clock times and are returned unchanged.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(practice_zone()).replace(tzinfo=None)


def practice_now() -> datetime:
    return to_practice_local(utcnow())


def parse_datetime(value: Union[str, datetime, date, None]) -> Optional[datetime]:
    """Parse an ISO date or datetime string into a practice-local datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_practice_local(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return to_practice_local(parsed)


def parse_clock(value: Optional[str]) -> Optional[time]:
    """Parse 'HH:MM' or 'HH:MM:SS' into a time."""
    if not value:
        return None
    try:
        return time.fromisoformat(value.strip())
    except ValueError:
        return None


def is_date_only(value: Optional[str]) -> bool:
    return bool(value) and "T" not in value and " " not in value.strip()


def combine(day: date, clock: time) -> datetime:
    return datetime.combine(day, clock)


def add_minutes(start: datetime, minutes: int) -> datetime:
    return start + timedelta(minutes=minutes)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time(23, 59, 59))


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware UTC datetime for storage. Naive input is read as practice-local."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=practice_zone())
    return value.astimezone(timezone.utc)


def from_db(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops the offset on read; stored values are always UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
