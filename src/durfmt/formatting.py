"""Template language for rendering a DecomposedTime.

A template is literal text mixed with directives: ``%`` followed by one
field selector, e.g. ``%H:%M:%S``. ``%%`` is a literal percent sign.
Templates are validated once and can then be rendered any number of times.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterator, TextIO

from durfmt.adapters import decompose
from durfmt.decomposed import DecomposedTime
from durfmt.errors import (
    RenderError,
    UnexpectedDelimiterError,
    UnknownFieldError,
    ValueOutOfRangeError,
)
from durfmt.utils.logging import get_logger

log = get_logger(__name__)

FIELD_DELIMITER = "%"


class _Overflow(Exception):
    """Raised by a field renderer when a folded total cannot be represented."""


def _plain_float(value: float) -> str:
    """Shortest round-trip digits in positional notation, no trailing ``.0``."""
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _total(value: int | None) -> str:
    if value is None:
        raise _Overflow
    return str(value)


FIELDS: dict[str, Callable[[DecomposedTime], str]] = {
    "Y": lambda t: str(t.years),
    "D": lambda t: str(t.days),
    "H": lambda t: f"{t.hours:02d}",
    "h": lambda t: str(t.hours),
    "M": lambda t: f"{t.minutes:02d}",
    "m": lambda t: str(t.minutes),
    "S": lambda t: f"{t.seconds:02d}",
    "s": lambda t: str(t.seconds),
    "x": lambda t: f"{t.milliseconds:03d}",
    "y": lambda t: f"{t.microseconds:03d}",
    "z": lambda t: f"{t.nanoseconds:03d}",
    "f": lambda t: _plain_float(t.fractional_seconds),
    "F": lambda t: f"{t.fractional_seconds:.5f}",
    "T": lambda t: _total(t.total_hours()),
    "U": lambda t: _total(t.total_days()),
}


def _scan(template: str) -> Iterator[tuple[int, str, bool]]:
    """Yield ``(position, char, is_directive)`` for each template element.

    For a directive, ``char`` is the selector following the delimiter.
    """
    chars = iter(enumerate(template))
    for pos, ch in chars:
        if ch != FIELD_DELIMITER:
            yield pos, ch, False
            continue
        try:
            _, selector = next(chars)
        except StopIteration:
            raise UnexpectedDelimiterError(template, pos) from None
        yield pos, selector, True


def validate_template(template: str) -> tuple[str, ...]:
    """Check every directive in ``template`` and return the selectors in order."""
    selectors = []
    for pos, ch, is_directive in _scan(template):
        if not is_directive:
            continue
        if ch != FIELD_DELIMITER and ch not in FIELDS:
            raise UnknownFieldError(template, pos, ch)
        selectors.append(ch)
    return tuple(selectors)


@dataclass(frozen=True)
class Template:
    """A validated template, reusable across any number of durations."""

    text: str
    fields: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", validate_template(self.text))
        log.debug("Validated template %r with %d directive(s)", self.text, len(self.fields))

    def render(self, time: DecomposedTime) -> str:
        parts = []
        for pos, ch, is_directive in _scan(self.text):
            if not is_directive or ch == FIELD_DELIMITER:
                parts.append(ch)
                continue
            try:
                parts.append(FIELDS[ch](time))
            except _Overflow:
                raise ValueOutOfRangeError(self.text, pos, ch) from None
        return "".join(parts)

    def write(self, time: DecomposedTime, stream: TextIO) -> None:
        """Render ``time`` into ``stream``; nothing is written if rendering fails."""
        rendered = self.render(time)
        try:
            stream.write(rendered)
        except (OSError, ValueError) as e:
            raise RenderError(f"Failed to write formatted duration: {e}") from e

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class DurationFormat:
    """A validated template paired with the duration it renders."""

    template: Template
    time: DecomposedTime

    def __post_init__(self) -> None:
        if not isinstance(self.template, Template):
            object.__setattr__(self, "template", Template(self.template))

    @property
    def format_string(self) -> str:
        return self.template.text

    def render(self) -> str:
        return self.template.render(self.time)

    def write(self, stream: TextIO) -> None:
        self.template.write(self.time, stream)

    def __str__(self) -> str:
        return self.render()


def make_format(template: str | Template, source: object) -> DurationFormat:
    """Decompose ``source`` and pair it with a validated template.

    Raises DecomposeError if the source is unsupported or not finite, and a
    TemplateError subclass if the template is invalid.
    """
    time = decompose(source)
    if not isinstance(template, Template):
        template = Template(template)
    return DurationFormat(template, time)


def format_duration(template: str | Template, source: object) -> str:
    """Render ``source`` through ``template`` in one call."""
    return make_format(template, source).render()


def display(time: DecomposedTime) -> str:
    """Compact display form, e.g. ``2yr 182d 12:00:00`` or ``01:30.000'500``."""
    out = io.StringIO()
    if time.is_negative:
        out.write("-")
    if time.years > 0:
        out.write(f"{time.years}yr ")
    if time.days > 0:
        out.write(f"{time.days}d ")
    if time.hours > 0 or time.days > 0 or time.years > 0:
        out.write(f"{time.hours:02d}:")
    out.write(f"{time.minutes:02d}:{time.seconds:02d}")

    if time.nanoseconds > 0:
        out.write(f".{time.milliseconds:03d}'{time.microseconds:03d}'{time.nanoseconds:03d}")
    elif time.microseconds > 0:
        out.write(f".{time.milliseconds:03d}'{time.microseconds:03d}")
    elif time.milliseconds > 0:
        out.write(f".{time.milliseconds:03d}")
    return out.getvalue()

