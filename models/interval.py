# models/interval.py
from datetime import date, timedelta
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# -----------------------------
# Date Interval
# -----------------------------
class DateInterval(BaseModel):
    """
    A confirmed stay: arrival and departure as ISO dates.

    Whether `to` counts as a night is left to whoever consumes the interval.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: str = Field(
        ..., alias="from", description="Arrival date (inclusive), ISO format YYYY-MM-DD"
    )
    end: str = Field(
        ..., alias="to", description="Departure date, ISO format YYYY-MM-DD"
    )

    # -----------------------------
    # Validators
    # -----------------------------
    @field_validator("start", "end")
    @classmethod
    def must_be_iso_date(cls, v: str) -> str:
        if not isinstance(v, str) or len(v) != 10:
            raise ValueError(f"Expected an ISO date YYYY-MM-DD, got {v!r}")
        # raises ValueError for impossible dates such as 2025-02-30
        date.fromisoformat(v)
        return v

    @model_validator(mode="after")
    def check_order(self) -> "DateInterval":
        if self.start > self.end:
            raise ValueError(
                f"Arrival {self.start} must not be after departure {self.end}"
            )
        return self

    # -----------------------------
    # Constructors
    # -----------------------------
    @classmethod
    def ordered(cls, a: str, b: str) -> "DateInterval":
        """Build an interval from two ISO dates given in either order."""
        return cls(start=min(a, b), end=max(a, b))

    @classmethod
    def single(cls, iso: str) -> "DateInterval":
        return cls(start=iso, end=iso)

    # -----------------------------
    # Helpers
    # -----------------------------
    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def as_dict(self) -> Dict[str, str]:
        return {"from": self.start, "to": self.end}

    def _walk(self, include_end: bool) -> List[str]:
        current = date.fromisoformat(self.start)
        last = date.fromisoformat(self.end)
        if not include_end:
            last -= timedelta(days=1)
        out = []
        while current <= last:
            out.append(current.isoformat())
            current += timedelta(days=1)
        return out

    def nights(self) -> List[str]:
        """Every date in [from, to), i.e. the nights an availability lookup checks."""
        return self._walk(include_end=False)

    def days(self) -> List[str]:
        """Every date in [from, to]."""
        return self._walk(include_end=True)
