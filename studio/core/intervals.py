from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def normalize_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Naive UTC with millisecond precision, the resolution the store keeps."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def parse_datetime(value) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return normalize_datetime(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return normalize_datetime(datetime.fromisoformat(str(value).replace("Z", "+00:00")))


def add_minutes(value: datetime, minutes: float) -> datetime:
    return value + timedelta(minutes=minutes)


def buffered_window(start: datetime, end: datetime, buffer_minutes: float = 0) -> Tuple[datetime, datetime]:
    return add_minutes(start, -buffer_minutes), add_minutes(end, buffer_minutes)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime, buffer_minutes: float = 0) -> bool:
    """True when half-open [a_start, a_end), widened by the buffer on both
    sides, intersects [b_start, b_end). Touching edges do not overlap."""
    if buffer_minutes < 0:
        raise ValueError("buffer_minutes cannot be negative")
    start, end = buffered_window(a_start, a_end, buffer_minutes)
    return start < b_end and end > b_start


def all_day_window(start_day: date, end_day: Optional[date] = None, tz_name: str = "UTC") -> Tuple[datetime, datetime]:
    """Turn an all-day span into a timed half-open interval.

    `end_day` is exclusive, as calendar providers report it. A missing or
    non-advancing end means a single day.
    """
    if end_day is None or end_day <= start_day:
        end_day = start_day + timedelta(days=1)
    try:
        tz = ZoneInfo(tz_name or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        tz = timezone.utc
    start = datetime.combine(start_day, time.min, tzinfo=tz)
    end = datetime.combine(end_day, time.min, tzinfo=tz)
    return normalize_datetime(start), normalize_datetime(end)
