"""
Temporal Layer
==============

Fixed-point time arithmetic shared by ingestion and segment derivation.

INVARIANTS:
- All stored times are integer units (10,000,000 per second)
- Parsing is exact; floats appear only at the seconds boundary
"""

from .codec import (
    seconds_to_units,
    units_to_seconds,
    parse_timestamp,
    format_timestamp,
)

__all__ = [
    'seconds_to_units',
    'units_to_seconds',
    'parse_timestamp',
    'format_timestamp',
]
