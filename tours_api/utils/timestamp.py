"""Timestamp parsing and normalization utilities."""
from datetime import datetime, timedelta, timezone
from dateutil import parser as date_parser

# Stored dates are fixed-width UTC strings "YYYY-MM-DDTHH:MM:SS.ffffffZ",
# so lexical order == chronological order


def parse_timestamp(s: str) -> datetime:
    """
    Parse a date or timestamp string into a timezone-aware datetime.

    Supports:
    - ISO dates: "2024-01-02"
    - ISO format with "Z" suffix: "2024-01-02T09:10:00Z"
    - ISO format with timezone: "2024-01-02T09:10:00+08:00"
    - ISO format without timezone: "2024-01-02T09:10:00"
    - Space-separated: "2024-01-02 09:10:00"
    - Other human formats understood by dateutil: "Jan 5 2024", "05/01/2024 10:00"

    Naive values are assumed to be UTC.

    Args:
        s: Date or timestamp string

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string cannot be parsed
    """
    if not s or not s.strip():
        raise ValueError("Empty timestamp string")

    s = s.strip()

    # Convert trailing "Z" to "+00:00" for ISO format compatibility
    iso = s[:-1] + "+00:00" if s.endswith("Z") else s

    try:
        dt = datetime.fromisoformat(iso)
    except ValueError:
        try:
            dt = date_parser.parse(s)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Unable to parse timestamp: {s}") from e

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _to_utc(dt: datetime) -> datetime:
    """Convert to UTC, clamping to datetime.min/max when the shift leaves the supported range."""
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        offset = dt.utcoffset()
        if offset is not None and offset > timedelta(0):
            return datetime.min.replace(tzinfo=timezone.utc)
        return datetime.max.replace(tzinfo=timezone.utc)


def start_of_day(dt: datetime) -> datetime:
    """Floor to 00:00:00.000 of the value's own calendar day, returned in UTC."""
    return _to_utc(dt.replace(hour=0, minute=0, second=0, microsecond=0))


def end_of_day(dt: datetime) -> datetime:
    """Ceil to 23:59:59.999 of the value's own calendar day, returned in UTC."""
    return _to_utc(dt.replace(hour=23, minute=59, second=59, microsecond=999000))


def to_storage(dt: datetime) -> str:
    """Format a datetime for storage (naive values are treated as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = _to_utc(dt)
    # strftime("%Y") does not zero-pad years below 1000
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T{dt:%H:%M:%S}.{dt.microsecond:06d}Z"


def from_storage(s: str) -> datetime:
    """Inverse of :func:`to_storage`."""
    return datetime.fromisoformat(s.rstrip("Z")).replace(tzinfo=timezone.utc)
