"""
Time Codec
==========

Exact conversion between the fixed-point time unit and human time.

10,000,000 units = 1 second. Parsing never goes through floats, so a
parsed timestamp is exact to the unit.

ACCEPTED SHAPES (tried in order):
1. H:MM:SS   - hours any digit count, minutes/seconds two digits
2. MM:SS     - two digits each
3. Generic   - [d.]h:mm[:ss[.fffffff]] or a bare day count

No clamping happens here; negative input is rejected, not repaired.
"""

from __future__ import annotations
import logging
import re
from typing import Optional

from ..contracts.base import Error, ErrorCode, Result
from ..contracts.records import UNITS_PER_SECOND

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

_FRACTION_DIGITS = 7

_STRICT_HMS = re.compile(r'^(\d+):([0-5]\d):([0-5]\d)$')
_STRICT_MS = re.compile(r'^([0-5]\d):([0-5]\d)$')
_GENERIC_CLOCK = re.compile(
    r'^\s*(?:(\d+)\.)?(\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.(\d{1,7}))?)?\s*$'
)
_GENERIC_DAYS = re.compile(r'^\s*(\d+)\s*$')


def seconds_to_units(seconds: float) -> int:
    """Convert seconds to units, truncating toward zero."""
    return int(seconds * UNITS_PER_SECOND)


def units_to_seconds(units: int) -> float:
    """Convert units to (possibly fractional) seconds."""
    return units / UNITS_PER_SECOND


def _to_units(days: int = 0, hours: int = 0, minutes: int = 0,
              seconds: int = 0, fraction: str = '') -> int:
    whole = (days * SECONDS_PER_DAY + hours * SECONDS_PER_HOUR
             + minutes * SECONDS_PER_MINUTE + seconds)
    units = whole * UNITS_PER_SECOND
    if fraction:
        units += int(fraction) * 10 ** (_FRACTION_DIGITS - len(fraction))
    return units


def _parse_strict_hms(text: str) -> Optional[int]:
    match = _STRICT_HMS.match(text)
    if not match:
        return None
    hours, minutes, seconds = (int(g) for g in match.groups())
    return _to_units(hours=hours, minutes=minutes, seconds=seconds)


def _parse_strict_ms(text: str) -> Optional[int]:
    match = _STRICT_MS.match(text)
    if not match:
        return None
    minutes, seconds = (int(g) for g in match.groups())
    return _to_units(minutes=minutes, seconds=seconds)


def _parse_generic(text: str) -> Optional[int]:
    match = _GENERIC_DAYS.match(text)
    if match:
        return _to_units(days=int(match.group(1)))

    match = _GENERIC_CLOCK.match(text)
    if not match:
        return None

    days, hours, minutes, seconds, fraction = match.groups()
    hours, minutes = int(hours), int(minutes)
    seconds = int(seconds) if seconds else 0
    if hours > 23 or minutes > 59 or seconds > 59:
        return None

    return _to_units(
        days=int(days) if days else 0,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        fraction=fraction or ''
    )


_PARSERS = (
    ('h:mm:ss', _parse_strict_hms),
    ('mm:ss', _parse_strict_ms),
    ('generic', _parse_generic),
)


def parse_timestamp(text: Optional[str]) -> Result:
    """
    Parse a timestamp string into units.

    Returns Result.success(units) or Result.failure with
    ErrorCode.INVALID_TIMESTAMP. Never raises.
    """
    if text is None or not text.strip():
        return Result.failure(Error(
            code=ErrorCode.INVALID_TIMESTAMP,
            message="Timestamp is empty"
        ))

    for shape, parser in _PARSERS:
        units = parser(text)
        if units is not None:
            logger.debug("Parsed timestamp %r as %s -> %d units", text, shape, units)
            return Result.success(units)

    return Result.failure(Error(
        code=ErrorCode.INVALID_TIMESTAMP,
        message=f"Invalid timestamp format: {text}",
        context=(("timestamp", text),)
    ))


def format_timestamp(units: int) -> str:
    """Render units as H:MM:SS (an hour or more) or MM:SS. Drops sub-seconds."""
    if units < 0:
        raise ValueError("units must be non-negative")

    total_seconds = units // UNITS_PER_SECOND
    hours, remainder = divmod(total_seconds, SECONDS_PER_HOUR)
    minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)

    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"
