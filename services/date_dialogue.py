# FILE: services/date_dialogue.py
"""
Date dialogue turn

One guest utterance in, one decision out: a confirmed stay, a question back,
or "no date yet". A reply to a pending question goes through the choice
resolver first and falls back to the parser (the guest may just type dates).
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from core.clock import Moment, capture_today
from core.logging_setup import get_logger
from core.outcome import NeedsDisambiguation, ParseOutcomeType
from models.interval import DateInterval
from services.choice_resolver import resolve_choice
from services.date_parser import parse_dates

logger = get_logger("date_dialogue")


class DateTurnStatus(str, Enum):
    CONFIRMED = "confirmed"
    ASK = "ask"
    NO_DATE = "no_date"


class DateTurnSource(str, Enum):
    CHOICE = "choice"
    PARSER = "parser"


class DateTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: DateTurnStatus
    source: Optional[DateTurnSource] = None
    interval: Optional[DateInterval] = None
    ask: Optional[str] = Field(None, description="Question to show the guest")
    # carried so the next turn can resolve without re-reading the prompt text
    pending: Optional[Dict[str, Any]] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "source": self.source.value if self.source else None,
            "confirmed": self.interval.as_dict() if self.interval else None,
            "ask": self.ask,
        }


def _pending_from(outcome: NeedsDisambiguation) -> Dict[str, Any]:
    return {
        "this_month": outcome.this_month.as_dict(),
        "next_year": outcome.next_year.as_dict(),
    }


def handle_date_turn(
    text: str,
    previous_ask: Union[str, NeedsDisambiguation, None] = None,
    now: Optional[Moment] = None,
) -> DateTurn:
    today = capture_today(now)

    if previous_ask:
        chosen = resolve_choice(text, previous_ask)
        if chosen is not None:
            logger.info(f"[DATES] resolved choice -> {chosen.as_dict()}")
            return DateTurn(
                status=DateTurnStatus.CONFIRMED,
                source=DateTurnSource.CHOICE,
                interval=chosen,
            )
        logger.info("[DATES] reply is not a choice, parsing it as dates")

    outcome = parse_dates(text, today)

    if outcome.type is ParseOutcomeType.CONFIRMED:
        logger.info(f"[DATES] confirmed -> {outcome.interval.as_dict()}")
        return DateTurn(
            status=DateTurnStatus.CONFIRMED,
            source=DateTurnSource.PARSER,
            interval=outcome.interval,
        )

    if outcome.type is ParseOutcomeType.ASK:
        logger.info("[DATES] past month without year, asking back")
        return DateTurn(
            status=DateTurnStatus.ASK,
            source=DateTurnSource.PARSER,
            ask=outcome.prompt,
            pending=_pending_from(outcome),
        )

    logger.info(f"[DATES] no date in text_length={len(text or '')}")
    return DateTurn(status=DateTurnStatus.NO_DATE)


def pending_to_disambiguation(turn: DateTurn) -> Optional[NeedsDisambiguation]:
    """Rebuild the structured question from a stored ASK turn."""
    if turn.status is not DateTurnStatus.ASK or not turn.pending:
        return None
    return NeedsDisambiguation(
        prompt=turn.ask or "",
        this_month=DateInterval(**turn.pending["this_month"]),
        next_year=DateInterval(**turn.pending["next_year"]),
    )
