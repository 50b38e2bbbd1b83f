# core/clock.py
from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from config import TIMEZONE


Moment = Union[date, datetime]


def get_now() -> datetime:
    """Return the current moment in the configured timezone (system clock)."""
    return datetime.now(ZoneInfo(TIMEZONE))


def capture_today(now: Optional[Moment] = None) -> date:
    """
    Pin "now" to a single calendar date.

    Called once at the top of every parse so the year and month used in one
    computation can never come from two different clock reads.
    """
    if now is None:
        now = get_now()
    if isinstance(now, datetime):
        return now.date()
    return now
