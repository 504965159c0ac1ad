"""
Segment Deriver

Pure conversion of a single-point record into a display interval.

BOUNDARY RULES (applied in this order):
A. start >= end  -> flat one-second window starting at the timestamp
B. start < 0     -> clamp start to 0; end is left alone
C. end <= start  -> after the clamp, fall back to the flat window of rule A

A record at T=0 with (-2, +2) therefore becomes [0, 2s], not [0, 1s].
A record at T=1s with (-10, -5) clamps to [0, -4s] and so becomes [1s, 2s].
"""

from __future__ import annotations
import logging

from ..contracts.records import CanonicalRecord, DisplayInterval, UNITS_PER_SECOND

logger = logging.getLogger(__name__)


def derive(record: CanonicalRecord, start_delta_seconds: int,
           end_delta_seconds: int) -> DisplayInterval:
    """Derive the display interval for a record under the given offsets."""
    timestamp = record.timestamp_units
    start_units = timestamp + start_delta_seconds * UNITS_PER_SECOND
    end_units = timestamp + end_delta_seconds * UNITS_PER_SECOND

    if start_units >= end_units:
        logger.warning(
            "Invalid segment boundaries for jump scare %s: start=%d, end=%d. "
            "Using 1-second duration.", record.record_id, start_units, end_units)
        start_units = timestamp
        end_units = timestamp + UNITS_PER_SECOND

    if start_units < 0:
        logger.warning("Start ticks < 0 for jump scare %s, clamping to 0", record.record_id)
        start_units = 0

    if end_units <= start_units:
        logger.warning(
            "Segment for jump scare %s ends before 0 after clamping. "
            "Using 1-second duration.", record.record_id)
        start_units = timestamp
        end_units = timestamp + UNITS_PER_SECOND

    return DisplayInterval(
        segment_id=record.record_id,
        item_id=record.item_id,
        start_units=start_units,
        end_units=end_units
    )
