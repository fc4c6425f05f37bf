"""Parsing of human-typed duration strings."""

from __future__ import annotations

import re

_CLOCK_RE = re.compile(r"^(?:(\d+):)?(\d+):(\d+(?:\.\d*)?)$")


def hms_to_seconds(hms: str) -> float:
    """Convert HH:MM:SS, MM:SS or a plain number to signed seconds.

    A leading ``-`` negates the whole value. Raises ValueError on anything
    else.
    """
    text = hms.strip()
    negative = text.startswith("-")
    body = text[1:] if negative or text.startswith("+") else text
    if body.startswith(("+", "-")):
        raise ValueError(f"Invalid duration: {hms!r}")

    match = _CLOCK_RE.match(body)
    if match:
        hours, minutes, seconds = match.groups()
        value = int(hours or 0) * 3600 + int(minutes) * 60 + float(seconds)
    else:
        value = float(body)
    return -value if negative else value
