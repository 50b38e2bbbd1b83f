"""
Date Expression Parser

- Turns a guest's free-form Czech date text into a confirmed stay interval
- Asks back (this month / next year) when a month without a year has already passed
- Never raises on odd input: unknown text is a NoMatch, impossible days are clamped
"""

import calendar
import re
from datetime import date, timedelta
from typing import Optional

from config import TWO_DIGIT_YEAR_PIVOT
from core.clock import Moment, capture_today
from core.logging_setup import get_logger
from core.outcome import Confirmed, NeedsDisambiguation, NoMatch, ParseResult
from models.interval import DateInterval
from services.prompts import build_disambiguation_prompt
from services.text_normalizer import normalize_text

logger = get_logger("date_parser")

# -----------------------------
# Patterns (run on normalized text: "až" arrives here as "az")
# -----------------------------

# 2025-09-20, optionally twice: "2025-09-20 az 2025-09-24"
_iso_re = re.compile(r"(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)")

# "od 15 do 17. 8. 2025", "15–17.8", "20.09.–24.09.2025", "15.–17. 3."
# The first date only takes "." or "/" so the dash stays a range connector.
_range_re = re.compile(
    r"""
    (?<!\d)(?:od\s*)?
    (?P<d1>\d{1,2})
    (?:\s*[./]\s*(?P<m1>\d{1,2})
        (?:\s*[./]\s*(?P<y1>\d{4}|\d{2})(?!\d))?
    )?(?!\d)
    \s*\.?\s*
    (?:-|–|—|az|do)
    \s*
    (?P<d2>\d{1,2})
    (?:\s*[.\-/ ]\s*(?P<m2>\d{1,2})
        (?:\s*[.\-/ ]\s*(?P<y2>\d{4}|\d{2})(?!\d)(?!\s*[:.]\s*\d))?
    )?(?!\d)
    (?!\s*[-/]\s*\d)
    """,
    re.VERBOSE,
)

# "15. 8. 2025", "15.8", "12/09/25", "28.09.2025 18:30" (time is not a year)
_single_re = re.compile(
    r"""
    (?<!\d)
    (?P<d>\d{1,2})
    \s*[.\-/ ]\s*
    (?P<m>\d{1,2})(?!\d)
    (?:\s*[.\-/ ]\s*(?P<y>\d{4}|\d{2})(?!\d)(?!\s*[:.]\s*\d))?
    """,
    re.VERBOSE,
)

_one_night_re = re.compile(r"((?<!\d)1\s*noc|\bjednu\s*noc|\bone\s*night)")


# -----------------------------
# Calendar helpers
# -----------------------------
def expand_year(raw: Optional[str]) -> Optional[int]:
    """'49' -> 2049, '51' -> 1951, '2025' -> 2025, None -> None."""
    if not raw:
        return None
    value = int(raw)
    if len(raw) == 2:
        return 1900 + value if value > TWO_DIGIT_YEAR_PIVOT else 2000 + value
    return value


def clamp_day(year: int, month: int, day: int) -> int:
    return max(1, min(day, calendar.monthrange(year, month)[1]))


def make_iso(year: int, month: int, day: int) -> str:
    return date(year, month, clamp_day(year, month, day)).isoformat()


def _plus_one_day(iso: str) -> str:
    return (date.fromisoformat(iso) + timedelta(days=1)).isoformat()


def _month(raw: Optional[str]) -> Optional[int]:
    return int(raw) if raw else None


def _valid_month(month: int) -> bool:
    return 1 <= month <= 12


def _valid_year(year: Optional[int]) -> bool:
    # leaves room for the "+1 year" and "+1 night" arithmetic
    return year is None or 1 <= year < date.max.year


def says_one_night(text: str) -> bool:
    """'1 noc', 'jednu noc', 'one night' (accents and case ignored)."""
    return bool(_one_night_re.search(normalize_text(text)))


def _span(iso: str, one_night: bool) -> DateInterval:
    if one_night:
        return DateInterval(start=iso, end=_plus_one_day(iso))
    return DateInterval.single(iso)


def _ask(this_month: DateInterval, next_year: DateInterval) -> NeedsDisambiguation:
    logger.debug(
        f"Past month without year: this_month={this_month.as_dict()}, next_year={next_year.as_dict()}"
    )
    return NeedsDisambiguation(
        prompt=build_disambiguation_prompt(this_month, next_year),
        this_month=this_month,
        next_year=next_year,
    )


# -----------------------------
# Shapes
# -----------------------------
def _parse_iso(t: str, one_night: bool) -> Optional[ParseResult]:
    found = []
    for m in _iso_re.finditer(t):
        year, month, day = int(m.group(1)), int(m.group(2)), int(m.group(3))
        if not (_valid_year(year) and _valid_month(month)):
            continue
        found.append(make_iso(year, month, day))
        if len(found) == 2:
            break

    if not found:
        return None
    if len(found) == 1:
        return Confirmed(_span(found[0], one_night))
    return Confirmed(DateInterval.ordered(found[0], found[1]))


def _parse_range(t: str, today: date) -> Optional[ParseResult]:
    cy, cm = today.year, today.month

    for m in _range_re.finditer(t):
        d1, d2 = int(m["d1"]), int(m["d2"])
        m1, m2 = _month(m["m1"]), _month(m["m2"])

        # month/year travel to the date that lacks them before "now" fills in
        month1 = m1 if m1 is not None else (m2 if m2 is not None else cm)
        month2 = m2 if m2 is not None else month1
        if not (_valid_month(month1) and _valid_month(month2)):
            continue

        year1 = expand_year(m["y1"] or m["y2"])
        year2 = expand_year(m["y2"] or m["y1"])
        if not (_valid_year(year1) and _valid_year(year2)):
            continue
        had_year = year1 is not None

        # both dates share a year, so typing them backwards changes nothing;
        # the earlier of the two decides whether the stay already passed
        earliest_month = min((month1, d1), (month2, d2))[0]

        if not had_year and earliest_month < cm:
            this_month = DateInterval.ordered(make_iso(cy, cm, d1), make_iso(cy, cm, d2))
            next_year = DateInterval.ordered(
                make_iso(cy + 1, month1, d1),
                make_iso(cy + 1, month2, d2),
            )
            return _ask(this_month, next_year)

        if not had_year:
            year1 = year2 = cy

        interval = DateInterval.ordered(
            make_iso(year1, month1, d1), make_iso(year2, month2, d2)
        )
        logger.debug(f"Range '{m.group(0)}' -> {interval.as_dict()}")
        return Confirmed(interval)

    return None


def _parse_single(t: str, today: date, one_night: bool) -> Optional[ParseResult]:
    cy, cm = today.year, today.month

    for m in _single_re.finditer(t):
        day, month = int(m["d"]), int(m["m"])
        if not _valid_month(month):
            continue
        year = expand_year(m["y"])
        if not _valid_year(year):
            continue

        if year is None and month < cm:
            return _ask(
                _span(make_iso(cy, cm, day), one_night),
                _span(make_iso(cy + 1, month, day), one_night),
            )

        interval = _span(make_iso(year if year is not None else cy, month, day), one_night)
        logger.debug(f"Single day '{m.group(0)}' -> {interval.as_dict()}")
        return Confirmed(interval)

    return None


# -----------------------------
# Public API
# -----------------------------
def parse_dates(text: str, now: Optional[Moment] = None) -> ParseResult:
    """
    Parse a date expression into Confirmed, NeedsDisambiguation or NoMatch.

    Shapes, first match wins:
    1. explicit ISO dates ("2025-09-20 až 2025-09-24")
    2. a range of two days ("15–17.8", "od 15 do 17. 8. 2025")
    3. a single day ("15. 8. 2025"); with "1 noc"/"one night" it becomes
       arrival + one night

    `now` is read once; pass it explicitly to keep the call deterministic.
    """
    today = capture_today(now)
    t = normalize_text(text)
    if not t:
        return NoMatch()

    one_night = says_one_night(t)

    outcome = (
        _parse_iso(t, one_night)
        or _parse_range(t, today)
        or _parse_single(t, today, one_night)
    )
    if outcome is None:
        logger.debug(f"No date expression in '{t[:100]}'")
        return NoMatch()
    return outcome
