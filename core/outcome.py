# core/outcome.py

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from models.interval import DateInterval


# ---------------------------------------------------------------------
# Parse Outcome Model
# ---------------------------------------------------------------------
class ParseOutcomeType(str, Enum):
    CONFIRMED = "confirmed"
    ASK = "ask"
    NO_MATCH = "no_match"


class _OutcomeView:
    """
    The flat {confirmed, ask} view callers used before the outcome was typed.
    At most one of the two is ever set.
    """

    @property
    def confirmed(self) -> Optional[DateInterval]:
        return None

    @property
    def ask(self) -> Optional[str]:
        return None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "confirmed": self.confirmed.as_dict() if self.confirmed else None,
            "ask": self.ask,
        }


@dataclass(frozen=True)
class Confirmed(_OutcomeView):
    interval: DateInterval
    type: ParseOutcomeType = ParseOutcomeType.CONFIRMED

    @property
    def confirmed(self) -> Optional[DateInterval]:
        return self.interval


@dataclass(frozen=True)
class NeedsDisambiguation(_OutcomeView):
    prompt: str
    this_month: DateInterval
    next_year: DateInterval
    type: ParseOutcomeType = ParseOutcomeType.ASK

    @property
    def ask(self) -> Optional[str]:
        return self.prompt


@dataclass(frozen=True)
class NoMatch(_OutcomeView):
    type: ParseOutcomeType = ParseOutcomeType.NO_MATCH


ParseResult = Union[Confirmed, NeedsDisambiguation, NoMatch]
