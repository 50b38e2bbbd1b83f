import calendar
from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from core.outcome import Confirmed, NeedsDisambiguation, NoMatch, ParseOutcomeType
from services.date_parser import expand_year, parse_dates, says_one_night


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def confirmed(text, now):
    outcome = parse_dates(text, now)
    assert outcome.type is ParseOutcomeType.CONFIRMED, outcome
    return outcome.interval.as_dict()


# ---------------------------------------------------------------------
# TESTS: REFERENCE SCENARIO (today = 2025-09-20)
# ---------------------------------------------------------------------

def test_explicit_range_with_year_is_confirmed(today):
    outcome = parse_dates("20.09.–24.09.2025", today)

    assert isinstance(outcome, Confirmed)
    assert outcome.as_dict() == {
        "confirmed": {"from": "2025-09-20", "to": "2025-09-24"},
        "ask": None,
    }


def test_past_month_without_year_asks_back(today):
    outcome = parse_dates("15–17.8", today)

    assert isinstance(outcome, NeedsDisambiguation)
    assert outcome.confirmed is None

    this_marker = "**2025-09-15 až 2025-09-17**"
    next_marker = "**2026-08-15 až 2026-08-17**"
    assert this_marker in outcome.ask
    assert next_marker in outcome.ask
    assert outcome.ask.index(this_marker) < outcome.ask.index(next_marker)

    assert outcome.this_month.as_dict() == {"from": "2025-09-15", "to": "2025-09-17"}
    assert outcome.next_year.as_dict() == {"from": "2026-08-15", "to": "2026-08-17"}


def test_impossible_day_is_clamped(today):
    assert confirmed("31.2.2025", today) == {"from": "2025-02-28", "to": "2025-02-28"}


def test_text_without_dates_is_no_match(today):
    outcome = parse_dates("Hello, how are you?", today)

    assert isinstance(outcome, NoMatch)
    assert outcome.as_dict() == {"confirmed": None, "ask": None}


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_input_is_no_match(text, today):
    assert parse_dates(text, today).type is ParseOutcomeType.NO_MATCH


# ---------------------------------------------------------------------
# TESTS: TWO-DIGIT YEARS
# ---------------------------------------------------------------------

def test_two_digit_year_pivot(today):
    assert confirmed("15.8.49", today)["from"] == "2049-08-15"
    assert confirmed("15.8.51", today)["from"] == "1951-08-15"


@pytest.mark.parametrize(
    "raw, expected",
    [("49", 2049), ("50", 2050), ("51", 1951), ("00", 2000), ("2025", 2025), (None, None)],
)
def test_expand_year(raw, expected):
    assert expand_year(raw) == expected


# ---------------------------------------------------------------------
# TESTS: RANGE SHAPE
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "text",
    [
        "15-17.10.2025",
        "17-15.10.2025",
        "od 15 do 17. 10. 2025",
        "od 17 do 15. 10. 2025",
        "15 až 17/10/2025",
        "15.10.2025 – 17.10.2025",
        "17.10.2025 - 15.10.2025",
    ],
)
def test_range_is_ordered_regardless_of_input_order(text, today):
    assert confirmed(text, today) == {"from": "2025-10-15", "to": "2025-10-17"}


def test_range_without_month_uses_current_month(today):
    assert confirmed("22-25", today) == {"from": "2025-09-22", "to": "2025-09-25"}


def test_range_without_year_in_future_month_is_confirmed(today):
    assert confirmed("od 15 do 17. 10.", today) == {"from": "2025-10-15", "to": "2025-10-17"}


def test_month_and_year_propagate_to_the_bare_day(today):
    assert confirmed("20.9.2025 - 24", today) == {"from": "2025-09-20", "to": "2025-09-24"}


def test_range_across_two_months(today):
    assert confirmed("30.9. – 2.10.", today) == {"from": "2025-09-30", "to": "2025-10-02"}


@pytest.mark.parametrize(
    "forward, backward, expected",
    [
        ("15.10.–17.11.", "17.11.–15.10.", {"from": "2025-10-15", "to": "2025-11-17"}),
        ("30.9. – 2.10.", "2.10. – 30.9.", {"from": "2025-09-30", "to": "2025-10-02"}),
    ],
)
def test_cross_month_range_without_year_ignores_input_order(forward, backward, expected, today):
    assert confirmed(forward, today) == expected
    assert confirmed(backward, today) == expected


@pytest.mark.parametrize(
    "forward, backward",
    [("15.8.–17.9.", "17.9.–15.8."), ("28.12.–3.1.", "3.1.–28.12.")],
)
def test_reversed_range_reaching_a_past_month_asks_the_same_question(forward, backward, today):
    first = parse_dates(forward, today)
    second = parse_dates(backward, today)

    assert isinstance(first, NeedsDisambiguation)
    assert isinstance(second, NeedsDisambiguation)
    assert first.this_month == second.this_month
    assert first.next_year == second.next_year
    assert first.ask == second.ask


def test_past_month_question_for_cross_month_range(today):
    outcome = parse_dates("17.9.–15.8.", today)

    assert outcome.this_month.as_dict() == {"from": "2025-09-15", "to": "2025-09-17"}
    assert outcome.next_year.as_dict() == {"from": "2026-08-15", "to": "2026-09-17"}
    assert "**2026-08-15 až 2026-09-17**" in outcome.ask


def test_range_without_year_stays_in_one_year(today):
    outcome = parse_dates("28.12.–3.1.", today)

    assert isinstance(outcome, NeedsDisambiguation)
    assert outcome.next_year.as_dict() == {"from": "2026-01-03", "to": "2026-12-28"}


def test_range_clamps_each_day(today):
    assert confirmed("30–31.11.2025", today) == {"from": "2025-11-30", "to": "2025-11-30"}


def test_dash_separated_full_date_is_a_single_day(today):
    assert confirmed("12-10-2025", today) == {"from": "2025-10-12", "to": "2025-10-12"}


def test_range_in_past_month_asks_with_dotted_days(mid_september):
    outcome = parse_dates("15.–17. 3.", mid_september)

    assert isinstance(outcome, NeedsDisambiguation)
    assert "**2025-09-15 až 2025-09-17**" in outcome.ask
    assert "**2026-03-15 až 2026-03-17**" in outcome.ask


def test_explicit_year_never_asks_even_for_past_month(today):
    assert confirmed("15–17.8.2025", today) == {"from": "2025-08-15", "to": "2025-08-17"}


# ---------------------------------------------------------------------
# TESTS: SINGLE-DAY SHAPE
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("15. 10. 2025", "2025-10-15"),
        ("15.10", "2025-10-15"),
        ("12/10/25", "2025-10-12"),
        ("přijedu 1.11.", "2025-11-01"),
    ],
)
def test_single_day_shapes(text, expected, today):
    assert confirmed(text, today) == {"from": expected, "to": expected}


def test_single_day_in_past_month_asks_with_bare_dates(today):
    outcome = parse_dates("15.8.", today)

    assert isinstance(outcome, NeedsDisambiguation)
    assert "**2025-09-15**" in outcome.ask
    assert "**2026-08-15**" in outcome.ask
    assert " až " not in outcome.ask.split("?")[0]


def test_leap_day(today):
    assert confirmed("29.2.2024", today)["from"] == "2024-02-29"
    assert confirmed("29.2.2025", today)["from"] == "2025-02-28"


def test_time_after_date_is_not_read_as_year(today):
    assert confirmed("28.09. 18:30", today) == {"from": "2025-09-28", "to": "2025-09-28"}


def test_invalid_month_is_no_match(today):
    assert isinstance(parse_dates("15.13.2025", today), NoMatch)


@pytest.mark.parametrize("month", range(1, 13))
@pytest.mark.parametrize("day", [1, 28, 29, 30, 31])
def test_day_always_lands_on_a_real_date(day, month, today):
    result = confirmed(f"{day}.{month}.2025", today)
    expected_day = min(day, calendar.monthrange(2025, month)[1])
    assert result["from"] == date(2025, month, expected_day).isoformat()


# ---------------------------------------------------------------------
# TESTS: ISO INPUT AND IDEMPOTENCE
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "text",
    ["20.09.–24.09.2025", "31.2.2025", "30.9. – 2.10.", "od 15 do 17. 10.", "15.8.51"],
)
def test_reparsing_the_iso_rendering_gives_the_same_interval(text, today):
    first = parse_dates(text, today).confirmed
    assert first is not None

    again = parse_dates(f"{first.start} až {first.end}", today).confirmed
    assert again == first

    if first.is_single_day:
        assert parse_dates(first.start, today).confirmed == first


# ---------------------------------------------------------------------
# TESTS: ONE-NIGHT SHORTCUT
# ---------------------------------------------------------------------

@pytest.mark.parametrize("text", ["15.10.2025 na 1 noc", "Jednu noc, 15.10.", "one night 15.10.2025"])
def test_one_night_shortcut(text, today):
    assert confirmed(text, today) == {"from": "2025-10-15", "to": "2025-10-16"}


def test_one_night_does_not_match_eleven_nights():
    assert says_one_night("1 noc")
    assert says_one_night("JEDNU NOC")
    assert not says_one_night("11 nocí")


def test_one_night_in_past_month_offers_one_night_candidates(today):
    outcome = parse_dates("15.8. jednu noc", today)

    assert isinstance(outcome, NeedsDisambiguation)
    assert outcome.this_month.as_dict() == {"from": "2025-09-15", "to": "2025-09-16"}
    assert outcome.next_year.as_dict() == {"from": "2026-08-15", "to": "2026-08-16"}
    assert "**2025-09-15 až 2025-09-16**" in outcome.ask


# ---------------------------------------------------------------------
# TESTS: "NOW"
# ---------------------------------------------------------------------

def test_timezone_aware_now_is_accepted():
    now = datetime(2025, 9, 20, 23, 30, tzinfo=ZoneInfo("Europe/Prague"))
    assert isinstance(parse_dates("15–17.8", now), NeedsDisambiguation)


def test_missing_now_reads_the_clock_once(monkeypatch):
    calls = []

    def fake_now():
        calls.append(1)
        return datetime(2025, 9, 20, 12, 0)

    monkeypatch.setattr("core.clock.get_now", fake_now)

    outcome = parse_dates("15–17.8")

    assert isinstance(outcome, NeedsDisambiguation)
    assert len(calls) == 1
