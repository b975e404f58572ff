"""
Timesheet Model

One entry per day. An entry only exists once the departure time is
known; the arrival time falls back to ``DEFAULT_ARRIVAL``.
"""

import re
from datetime import time
from typing import Any, Optional

from pydantic import Field, field_validator

from daybook.config import DEFAULT_ARRIVAL
from daybook.models.base import StoredModel


# "HH:MM", optionally with seconds, as produced by time inputs
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")


def parse_time(text: str) -> time:
    """Parse an ``HH:MM`` / ``HH:MM:SS`` time-of-day string."""
    match = TIME_PATTERN.match(text.strip())
    if match is None:
        raise ValueError(f"Invalid time of day: {text!r}")
    hour, minute, second = match.groups()
    return time(int(hour), int(minute), int(second or 0))


def is_valid_time(text: Optional[str]) -> bool:
    return bool(text) and TIME_PATTERN.match(text.strip()) is not None


class TimeEntry(StoredModel):
    """Arrival and departure for one working day."""

    arrival: Optional[str] = Field(
        default=None,
        description=f"Arrival time; {DEFAULT_ARRIVAL} when absent"
    )
    departure: str = Field(
        ...,
        min_length=1,
        description="Departure time (required)"
    )
    notes: Optional[str] = Field(
        default=None,
        description="Free-text notes about the day"
    )

    @field_validator('arrival', mode='before')
    @classmethod
    def blank_arrival_is_default(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('arrival', 'departure')
    @classmethod
    def validate_time_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not is_valid_time(v):
            raise ValueError(f"Invalid time of day: {v!r}")
        return v.strip()

    @property
    def effective_arrival(self) -> str:
        return self.arrival or DEFAULT_ARRIVAL
