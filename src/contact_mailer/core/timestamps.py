"""
Timestamp helpers.

UTC clock access and the two formats the service emits: ISO 8601 for
JSON responses and a long human-readable form for admin emails.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo


def now_utc() -> datetime:
    """Get the current UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso8601(moment: datetime) -> str:
    """
    Format a datetime as ISO 8601 UTC with milliseconds and a Z suffix.
    
    Naive datetimes are assumed to already be in UTC.
    
    Example:
        2026-10-19T14:30:00.000Z
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_received_at(moment: datetime, tz_name: str) -> str:
    """
    Format a reception time for display in the admin notification.
    
    Args:
        moment: The reception time. Naive values are treated as UTC.
        tz_name: IANA timezone name used for display.
        
    Returns:
        A string like "Monday, October 19, 2026 at 02:30 PM".
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    local = moment.astimezone(ZoneInfo(tz_name))
    return (
        f"{local:%A}, {local:%B} {local.day}, {local.year} "
        f"at {local:%I:%M %p}"
    )
