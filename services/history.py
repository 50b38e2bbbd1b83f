# services/history.py
"""
Recovering date state from the rendered conversation.

Only text survives between turns, so the confirmed range and a pending
disambiguation question are read back from earlier assistant messages.
"""

import re
from typing import Any, Iterable, Mapping, Optional

from models.interval import DateInterval
from services.prompts import CHOICE_NEXT_YEAR, CHOICE_THIS_MONTH, EMPHASIS

AVAILABILITY_HEADERS = {
    "cs": "Dostupnost pro",
    "en": "Availability for",
}

_ISO = r"\d{4}-\d{2}-\d{2}"
_header_res = [
    re.compile(rf"{re.escape(label)} \*\*({_ISO})\s*→\s*({_ISO})\*\*")
    for label in AVAILABILITY_HEADERS.values()
]


def render_availability_header(interval: DateInterval, lang: str = "cs") -> str:
    label = AVAILABILITY_HEADERS.get(lang, AVAILABILITY_HEADERS["cs"])
    return f"{label} {EMPHASIS}{interval.start} → {interval.end}{EMPHASIS}"


def _assistant_texts_newest_first(messages: Iterable[Mapping[str, Any]]):
    for message in reversed(list(messages)):
        if message.get("role") == "assistant":
            yield str(message.get("content") or "")


def range_from_history(messages: Iterable[Mapping[str, Any]]) -> Optional[DateInterval]:
    """The most recent range the assistant already showed availability for."""
    for content in _assistant_texts_newest_first(messages):
        for header_re in _header_res:
            m = header_re.search(content)
            if m:
                return DateInterval.ordered(m.group(1), m.group(2))
    return None


def is_disambiguation_prompt(text: Optional[str]) -> bool:
    if not text:
        return False
    return (
        text.count(EMPHASIS) >= 4
        and CHOICE_THIS_MONTH in text
        and CHOICE_NEXT_YEAR in text
    )


def pending_ask_from_history(messages: Iterable[Mapping[str, Any]]) -> Optional[str]:
    """The last assistant message, if it is an unanswered date question."""
    for content in _assistant_texts_newest_first(messages):
        return content if is_disambiguation_prompt(content) else None
    return None
