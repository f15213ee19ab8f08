from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal
from typing import List

# Microseconds per unit. Nanoseconds stay fractional and are truncated
# after summing, timedelta cannot hold anything finer.
_UNITS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # micro sign
    "μs": Decimal(1),  # greek mu
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60 * 1_000_000),
    "h": Decimal(3600 * 1_000_000),
}

_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)([^\d.]+)")

_MICROSECOND = timedelta(microseconds=1)


def split_path(path: str) -> List[str]:
    """
    Split a dotted path into its key segments.

    Segments may be double-quoted to contain dots:

      servers."alpha.example".ip -> ["servers", "alpha.example", "ip"]
    """
    parts: List[str] = []
    current: List[str] = []
    quoted = False
    was_quoted = False

    for char in path:
        if char == '"':
            quoted = not quoted
            was_quoted = True
            continue
        if char == "." and not quoted:
            parts.append(_finish_segment(current, was_quoted))
            current = []
            was_quoted = False
            continue
        current.append(char)

    if quoted:
        raise ValueError(f"unterminated quote in path {path!r}")
    parts.append(_finish_segment(current, was_quoted))
    return parts


def _finish_segment(chars: List[str], was_quoted: bool) -> str:
    segment = "".join(chars)
    if not was_quoted:
        segment = segment.strip()
    return segment


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration literal such as "300ms", "-1.5h" or "2h45m".

    Valid units are "ns", "us" (or "µs"), "ms", "s", "m", "h".
    A bare "0" is accepted without a unit.
    """
    original = text
    sign = 1
    if text[:1] in ("-", "+"):
        if text[0] == "-":
            sign = -1
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {original!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            if not text[pos].isdigit() and text[pos] != ".":
                raise ValueError(f"invalid duration {original!r}")
            raise ValueError(f"missing unit in duration {original!r}")
        number, unit = match.groups()
        if unit not in _UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {original!r}")
        total += Decimal(number) * _UNITS[unit]
        pos = match.end()

    try:
        return sign * timedelta(microseconds=int(total))
    except OverflowError as exc:
        raise ValueError(f"duration {original!r} out of range") from exc


def format_duration(value: timedelta) -> str:
    """
    Format a duration in canonical unit-suffixed form.

    Leading zero units are omitted: 0s, 750µs, 1.5ms, 3s, 2m0s, 1h2m3.5s.
    """
    micros = value // _MICROSECOND
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_fraction(micros, 1_000)}ms"

    hours, micros = divmod(micros, 3600 * 1_000_000)
    minutes, micros = divmod(micros, 60 * 1_000_000)
    seconds = _fraction(micros, 1_000_000)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _fraction(amount: int, unit: int) -> str:
    whole, rest = divmod(amount, unit)
    if not rest:
        return str(whole)
    digits = str(rest).rjust(len(str(unit)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_float(value: float) -> str:
    """Return the shortest round-tripping text of a float, without a trailing '.0'."""
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text
