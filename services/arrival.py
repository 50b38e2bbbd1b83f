# services/arrival.py
import re
from typing import Optional

from pydantic import BaseModel, Field

from core.clock import Moment, capture_today
from core.outcome import ParseOutcomeType
from services.date_parser import parse_dates
from services.text_normalizer import normalize_text


class Arrival(BaseModel):
    date: Optional[str] = Field(None, description="Arrival date, ISO format YYYY-MM-DD, if confirmed")
    time: Optional[str] = Field(None, description="Arrival time HH:MM, if given")


# a time right after a date: "28.09.2025 18:30", "28.9. v 18.30"
_date_time_re = re.compile(
    r"""
    \d{1,2}\s*[.\-/]\s*\d{1,2}(?:\s*[.\-/]\s*\d{2,4})?\.?
    (?:\s+(?:v|ve|at|kolem|around)\s+|\s+|t)
    (?P<hh>\d{1,2})[:.](?P<mm>\d{2})(?!\d)
    """,
    re.VERBOSE,
)

# a time on its own: "kolem 18:30"; "18.30" only when the text holds no date
_time_only_re = re.compile(r"(?<![\d.:/\-])(?P<hh>\d{1,2})(?P<sep>[:.])(?P<mm>\d{2})(?!\d)(?![.:]\d)")


def _clock(hh: str, mm: str) -> str:
    return f"{max(0, min(23, int(hh))):02d}:{max(0, min(59, int(mm))):02d}"


def _extract_time(t: str, allow_dot: bool) -> Optional[str]:
    m = _date_time_re.search(t)
    if m:
        return _clock(m["hh"], m["mm"])

    for m in _time_only_re.finditer(t):
        if m["sep"] == ":" or allow_dot:
            return _clock(m["hh"], m["mm"])
    return None


def extract_arrival(text: str, now: Optional[Moment] = None) -> Optional[Arrival]:
    """
    Arrival date and time from e.g. "28.09.2025 18:30" or "kolem 18:30".

    `date` is set only for a confirmed date; a past month without a year
    leaves it empty so the caller runs the date dialogue. Returns None when
    the text names neither a date nor a time.
    """
    outcome = parse_dates(text, capture_today(now))
    arrival_date = outcome.confirmed.start if outcome.confirmed is not None else None
    arrival_time = _extract_time(
        normalize_text(text), allow_dot=outcome.type is ParseOutcomeType.NO_MATCH
    )

    if arrival_date is None and arrival_time is None:
        return None
    return Arrival(date=arrival_date, time=arrival_time)
