"""
Segment Provider

Per-playback query: item id -> ordered display intervals.

Holds no state of its own. Intervals are recomputed on every call from
the stored records and the current offsets, so changing the offsets
takes effect immediately without any migration.

FAILURE POLICY:
- Unknown item        -> empty list (the common case)
- Collaborator failure -> logged, empty list; playback is never blocked
"""

from __future__ import annotations
from typing import Callable, List, Tuple
import logging

from ..contracts.base import CollaboratorUnavailableError
from ..contracts.records import CatalogItem, DisplayInterval

from .deriver import derive

logger = logging.getLogger(__name__)


class SegmentProvider:
    """Serves jump scare segments to the host's segment query mechanism."""

    name = "Jump Scare Markers"

    def __init__(self, store, offsets: Callable[[], Tuple[int, int]]):
        self._store = store
        self._offsets = offsets

    def supports(self, item: CatalogItem) -> bool:
        """Only video items (movies, episodes, ...) carry segments."""
        return item.is_video

    def get_segments(self, item_id: str) -> List[DisplayInterval]:
        """Return intervals for an item in record storage order."""
        try:
            records = self._store.records_for_item(item_id)
            if not records:
                logger.debug("No jump scares found for item %s", item_id)
                return []
            start_delta, end_delta = self._offsets()
        except (CollaboratorUnavailableError, OSError):
            logger.exception("Segment data unavailable for item %s", item_id)
            return []

        logger.info("Found %d jump scares for item %s", len(records), item_id)

        segments = []
        for record in records:
            try:
                segments.append(derive(record, start_delta, end_delta))
            except (TypeError, ValueError):
                logger.exception("Failed to create segment for jump scare %s", record.record_id)

        logger.info("Created %d segments for item %s", len(segments), item_id)
        return segments
