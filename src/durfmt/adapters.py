"""Turn supported duration representations into a DecomposedTime."""

from __future__ import annotations

import numbers
from datetime import timedelta
from decimal import Decimal
from functools import singledispatch
from typing import Literal, Protocol, runtime_checkable

from durfmt.decomposed import (
    MICROS_PER_SEC,
    MILLIS_PER_SEC,
    NANOS_PER_SEC,
    SECS_PER_DAY,
    DecomposedTime,
    decompose_seconds,
)
from durfmt.errors import DecomposeError

Unit = Literal["s", "ms", "us", "ns"]

UNIT_SCALES: dict[str, float] = {
    "s": 1.0,
    "ms": MILLIS_PER_SEC,
    "us": MICROS_PER_SEC,
    "ns": NANOS_PER_SEC,
}


@runtime_checkable
class Decompose(Protocol):
    """Anything that can break itself down into a DecomposedTime."""

    def decompose(self) -> DecomposedTime:
        ...


@singledispatch
def decompose(source: object) -> DecomposedTime:
    """Decompose any supported duration source.

    Numbers are taken as seconds. Objects with a ``decompose()`` method are
    asked to decompose themselves.
    """
    if isinstance(source, Decompose):
        return source.decompose()
    raise DecomposeError(f"Cannot decompose a value of type {type(source).__name__}")


@decompose.register
def _decompose_breakdown(source: DecomposedTime) -> DecomposedTime:
    return source


@decompose.register
def _decompose_real(source: numbers.Real) -> DecomposedTime:
    try:
        secs = float(source)
    except OverflowError as e:
        raise DecomposeError(f"{source} seconds does not fit in a float: {e}") from e
    return decompose_seconds(secs)


@decompose.register
def _decompose_decimal(source: Decimal) -> DecomposedTime:
    return _decompose_real(source)


@decompose.register
def _decompose_timedelta(source: timedelta) -> DecomposedTime:
    # days carries the sign; seconds and microseconds are always non-negative
    return decompose_seconds(
        source.days * SECS_PER_DAY + source.seconds + source.microseconds / MICROS_PER_SEC
    )


def decompose_count(count: int | float, unit: Unit = "s") -> DecomposedTime:
    """Decompose a count of ``unit`` (s, ms, us or ns)."""
    try:
        scale = UNIT_SCALES[unit]
    except KeyError:
        raise DecomposeError(f"Unknown duration unit: {unit!r}") from None
    try:
        secs = count / scale
    except OverflowError as e:
        raise DecomposeError(f"{count} {unit} does not fit in a float: {e}") from e
    return decompose_seconds(secs)


def decompose_milliseconds(count: int) -> DecomposedTime:
    return decompose_count(count, "ms")


def decompose_microseconds(count: int) -> DecomposedTime:
    return decompose_count(count, "us")


def decompose_nanoseconds(count: int) -> DecomposedTime:
    return decompose_count(count, "ns")
