"""Breakdown of a signed duration into years, days, clock fields and sub-seconds."""

from __future__ import annotations

import math
from datetime import timedelta
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field

from durfmt.errors import DecomposeError
from durfmt.utils.logging import get_logger

log = get_logger(__name__)

SECS_PER_MINUTE = 60
SECS_PER_HOUR = SECS_PER_MINUTE * 60
SECS_PER_DAY = SECS_PER_HOUR * 24
DAYS_PER_YEAR = 365
SECS_PER_YEAR = SECS_PER_DAY * DAYS_PER_YEAR

MILLIS_PER_SEC = 1000.0
MICROS_PER_SEC = 1.0e6
NANOS_PER_SEC = 1.0e9

# Totals are limited to what an unsigned 64-bit counter can hold.
MAX_TOTAL = 2**64 - 1


class Sign(IntEnum):
    NEGATIVE = -1
    UNSIGNED = 0
    POSITIVE = 1


def _digit_group(value: float) -> int:
    return min(max(math.trunc(value), 0), 999)


def decompose_fractional_seconds(fractional_seconds: float) -> tuple[int, int, int]:
    """Split a fraction of a second into (milliseconds, microseconds, nanoseconds).

    Each group is truncated, never rounded, and the consumed part is
    subtracted before the next finer group is computed.
    """
    rem = fractional_seconds
    milliseconds = _digit_group(rem * MILLIS_PER_SEC)
    rem -= milliseconds / MILLIS_PER_SEC
    microseconds = _digit_group(rem * MICROS_PER_SEC)
    rem -= microseconds / MICROS_PER_SEC
    nanoseconds = _digit_group(rem * NANOS_PER_SEC)
    return milliseconds, microseconds, nanoseconds


class DecomposedTime(BaseModel):
    """A duration magnitude split into calendar-like units, plus its sign.

    A "year" is always 365 days. Instances are immutable; the ``with_*``
    methods return a copy and fail with ``ValidationError`` when the new
    value is out of range.
    """

    model_config = ConfigDict(frozen=True)

    sign: Sign = Sign.POSITIVE
    years: int = Field(default=0, ge=0)
    days: int = Field(default=0, ge=0, lt=DAYS_PER_YEAR)
    hours: int = Field(default=0, ge=0, lt=24)
    minutes: int = Field(default=0, ge=0, lt=60)
    seconds: int = Field(default=0, ge=0, lt=60)
    fractional_seconds: float = Field(default=0.0, ge=0.0, lt=1.0)

    @classmethod
    def zero(cls) -> DecomposedTime:
        return cls()

    @property
    def milliseconds(self) -> int:
        return decompose_fractional_seconds(self.fractional_seconds)[0]

    @property
    def microseconds(self) -> int:
        return decompose_fractional_seconds(self.fractional_seconds)[1]

    @property
    def nanoseconds(self) -> int:
        return decompose_fractional_seconds(self.fractional_seconds)[2]

    @property
    def is_positive(self) -> bool:
        return self.sign != Sign.NEGATIVE

    @property
    def is_negative(self) -> bool:
        return self.sign == Sign.NEGATIVE

    def signum(self) -> int:
        return int(self.sign)

    def total_days(self) -> int | None:
        """Whole days across the entire duration, or None past the u64 range."""
        days = self.years * DAYS_PER_YEAR + self.days
        return days if days <= MAX_TOTAL else None

    def total_hours(self) -> int | None:
        """Whole hours across the entire duration, or None past the u64 range."""
        hours = (self.years * DAYS_PER_YEAR + self.days) * 24 + self.hours
        return hours if hours <= MAX_TOTAL else None

    def _replace(self, **changes: object) -> DecomposedTime:
        return type(self).model_validate({**self.model_dump(), **changes})

    def with_sign(self, sign: Sign | int) -> DecomposedTime:
        return self._replace(sign=sign)

    def with_years(self, years: int) -> DecomposedTime:
        return self._replace(years=years)

    def with_days(self, days: int) -> DecomposedTime:
        return self._replace(days=days)

    def with_hours(self, hours: int) -> DecomposedTime:
        return self._replace(hours=hours)

    def with_minutes(self, minutes: int) -> DecomposedTime:
        return self._replace(minutes=minutes)

    def with_seconds(self, seconds: int) -> DecomposedTime:
        return self._replace(seconds=seconds)

    def with_fractional_seconds(self, fractional_seconds: float) -> DecomposedTime:
        return self._replace(fractional_seconds=fractional_seconds)

    def to_seconds(self) -> float:
        """Signed seconds represented by this breakdown."""
        magnitude = (
            self.years * SECS_PER_YEAR
            + self.days * SECS_PER_DAY
            + self.hours * SECS_PER_HOUR
            + self.minutes * SECS_PER_MINUTE
            + self.seconds
            + self.fractional_seconds
        )
        return -magnitude if self.is_negative else magnitude

    def to_timedelta(self) -> timedelta:
        # timedelta keeps microseconds only
        delta = timedelta(
            days=self.years * DAYS_PER_YEAR + self.days,
            hours=self.hours,
            minutes=self.minutes,
            seconds=self.seconds,
            microseconds=self.milliseconds * 1000 + self.microseconds,
        )
        return -delta if self.is_negative else delta

    def __str__(self) -> str:
        from durfmt.formatting import display

        return display(self)

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        from durfmt.formatting import Template

        return Template(format_spec).render(self)


def decompose_seconds(secs: float) -> DecomposedTime:
    """Decompose signed seconds into a DecomposedTime.

    Raises DecomposeError for NaN and infinite values.
    """
    secs = float(secs)
    if not math.isfinite(secs):
        raise DecomposeError(f"Cannot decompose a non-finite duration: {secs!r}")

    sign = Sign.NEGATIVE if secs < 0 else Sign.POSITIVE
    fractional, whole = math.modf(abs(secs))

    # whole is integral, so the unit split is exact for any magnitude
    rem = int(whole)
    years, rem = divmod(rem, SECS_PER_YEAR)
    days, rem = divmod(rem, SECS_PER_DAY)
    hours, rem = divmod(rem, SECS_PER_HOUR)
    minutes, seconds = divmod(rem, SECS_PER_MINUTE)

    time = DecomposedTime(
        sign=sign,
        years=years,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        fractional_seconds=fractional,
    )
    log.debug("Decomposed %r seconds into %r", secs, time)
    return time
