# services/prompts.py
"""
Guest-facing wording for the date dialogue.

The disambiguation prompt is read back by the choice resolver on the next
turn, so every candidate date stays wrapped in EMPHASIS and the this-month
candidate is always rendered before the next-year one.
"""

from models.interval import DateInterval

EMPHASIS = "**"
RANGE_CONNECTOR = "až"

CHOICE_THIS_MONTH = "tento měsíc"
CHOICE_NEXT_YEAR = "příští rok"


def emphasize_interval(interval: DateInterval, as_range: bool) -> str:
    if as_range:
        body = f"{interval.start} {RANGE_CONNECTOR} {interval.end}"
    else:
        body = interval.start
    return f"{EMPHASIS}{body}{EMPHASIS}"


def build_disambiguation_prompt(this_month: DateInterval, next_year: DateInterval) -> str:
    # both candidates share one rendering, otherwise a range clamped to a
    # single day would leave the resolver with one pair and one bare date
    as_range = not (this_month.is_single_day and next_year.is_single_day)
    return (
        "Zadal jste měsíc, který už proběhl. "
        f"Myslíte spíš {emphasize_interval(this_month, as_range)} ({CHOICE_THIS_MONTH}), "
        f"nebo {emphasize_interval(next_year, as_range)} ({CHOICE_NEXT_YEAR})? "
        f'Odpovězte prosím "{CHOICE_THIS_MONTH}" nebo "{CHOICE_NEXT_YEAR}", '
        "případně napište přesná data."
    )
