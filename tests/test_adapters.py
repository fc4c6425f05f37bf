"""Tests for decomposing the supported duration sources."""

from datetime import timedelta
from decimal import Decimal
from fractions import Fraction

import pytest

from durfmt.adapters import (
    decompose,
    decompose_count,
    decompose_microseconds,
    decompose_milliseconds,
    decompose_nanoseconds,
)
from durfmt.decomposed import DecomposedTime, Sign, decompose_seconds
from durfmt.errors import DecomposeError


class Stopwatch:
    def __init__(self, elapsed: float):
        self.elapsed = elapsed

    def decompose(self) -> DecomposedTime:
        return decompose_seconds(self.elapsed)


def test_numbers_are_seconds():
    assert decompose(90) == decompose_seconds(90.0)
    assert decompose(1.5) == decompose_seconds(1.5)
    assert decompose(Fraction(3, 2)) == decompose_seconds(1.5)
    assert decompose(Decimal("1.5")) == decompose_seconds(1.5)


def test_breakdown_passes_through():
    time = DecomposedTime(hours=3)
    assert decompose(time) is time


def test_timedelta():
    time = decompose(timedelta(hours=2, minutes=30, milliseconds=250))
    assert (time.hours, time.minutes) == (2, 30)
    assert time.milliseconds == 250


def test_negative_timedelta():
    time = decompose(timedelta(seconds=-1.5))
    assert time.sign == Sign.NEGATIVE
    assert time.seconds == 1
    assert time.milliseconds == 500


def test_protocol_object():
    assert decompose(Stopwatch(61.0)).minutes == 1


def test_unsupported_type():
    with pytest.raises(DecomposeError):
        decompose("10 minutes")


def test_integer_counts():
    assert decompose_milliseconds(1500) == decompose_seconds(1.5)
    assert decompose_microseconds(2_000_000).seconds == 2
    assert decompose_nanoseconds(10).nanoseconds == 10
    assert decompose_count(-3, "s").sign == Sign.NEGATIVE


def test_unknown_unit():
    with pytest.raises(DecomposeError):
        decompose_count(1, "weeks")


def test_overflowing_int():
    with pytest.raises(DecomposeError):
        decompose(10**400)
