"""
Choice Resolver

- Maps the guest's reply ("tento měsíc" / "příští rok") onto one of the two
  candidates offered in the previous disambiguation prompt
- Takes the dates the guest was actually shown; nothing is recomputed from "now"
"""

import re
from enum import Enum
from typing import List, Optional, Union

from core.logging_setup import get_logger
from core.outcome import NeedsDisambiguation
from models.interval import DateInterval
from services.text_normalizer import normalize_text

logger = get_logger("choice_resolver")


class ChoiceKind(str, Enum):
    THIS_MONTH = "this"
    NEXT_YEAR = "next"


_ISO = r"\d{4}-\d{2}-\d{2}"
_pair_re = re.compile(rf"\*\*({_ISO})\s+(?:až|az|do)\s+({_ISO})\*\*", re.IGNORECASE)
_single_re = re.compile(rf"\*\*({_ISO})\*\*")


def classify_choice(choice_text: str) -> Optional[ChoiceKind]:
    txt = normalize_text(choice_text)
    if "tento mesic" in txt:
        return ChoiceKind.THIS_MONTH
    if "pristi rok" in txt:
        return ChoiceKind.NEXT_YEAR
    return None


def _interval(start: str, end: str) -> Optional[DateInterval]:
    # a hand-edited prompt may carry impossible or reversed dates
    try:
        return DateInterval.ordered(start, end)
    except ValueError:
        logger.warning(f"Ignoring malformed candidate {start} / {end}")
        return None


def _from_prompt_text(kind: ChoiceKind, ask_text: str) -> Optional[DateInterval]:
    pairs: List[tuple] = _pair_re.findall(ask_text)
    if pairs:
        if len(pairs) == 1:
            # only one candidate was offered
            return _interval(*pairs[0])
        start, end = pairs[0] if kind is ChoiceKind.THIS_MONTH else pairs[1]
        return _interval(start, end)

    singles: List[str] = _single_re.findall(ask_text)
    if singles:
        if kind is ChoiceKind.THIS_MONTH:
            iso = singles[0]
        else:
            iso = singles[1] if len(singles) > 1 else singles[0]
        return _interval(iso, iso)

    return None


def resolve_choice(
    choice_text: str,
    ask: Union[str, NeedsDisambiguation, None],
) -> Optional[DateInterval]:
    """
    Resolve a reply against the prompt it answers.

    `ask` is either the rendered prompt text (as stored in the conversation)
    or the NeedsDisambiguation outcome itself, whose candidates are used as is.
    Returns None when the reply is not a choice or the prompt holds no dates;
    the caller should then try the reply as a date expression.
    """
    if not ask:
        return None

    kind = classify_choice(choice_text)
    if kind is None:
        return None

    if isinstance(ask, NeedsDisambiguation):
        chosen = ask.this_month if kind is ChoiceKind.THIS_MONTH else ask.next_year
    else:
        chosen = _from_prompt_text(kind, ask)

    if chosen is None:
        logger.debug("Choice given but the prompt carries no date markers")
    else:
        logger.debug(f"Choice '{kind.value}' -> {chosen.as_dict()}")
    return chosen
