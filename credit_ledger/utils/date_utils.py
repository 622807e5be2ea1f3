"""Date manipulation utilities"""

from datetime import date, datetime
from zoneinfo import ZoneInfo


def current_date(tz_name: str = "UTC") -> date:
    """Calendar date right now in the given IANA timezone"""
    return datetime.now(ZoneInfo(tz_name)).date()


def days_overdue(due_date: date, today: date) -> int:
    """Whole days past the due date (0 when not yet due)"""
    return max((today - due_date).days, 0)
