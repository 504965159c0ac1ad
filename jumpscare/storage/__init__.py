"""
Reconciliation Store
====================

RESPONSIBILITY: Authoritative record collection, dedup-on-merge, stats
ALLOWED INPUTS: CanonicalRecord candidates, offset updates
OUTPUTS: MergeResult, ImportStatistics, read-only record snapshots

INVARIANTS:
===========
- Never holds two records with the same (item_id, timestamp_units)
- A merge is all-or-nothing to concurrent readers
- First occurrence of a dedup key wins, in input order
- A failed save leaves the in-memory state untouched

CONCURRENCY:
============
Writers serialize on one lock. Readers take the current immutable
tuple snapshot without locking; writers swap in a new tuple only after
the configuration store accepted the save.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Set, Tuple
import logging
import threading

from ..contracts.base import Error, ErrorCode, StorageUnavailableError
from ..contracts.records import (
    CanonicalRecord, ImportStatistics, MergeResult, PluginConfiguration,
    ScareIntensity
)
from ..temporal.codec import units_to_seconds

from .config_store import (
    ConfigurationStore, InMemoryConfigurationStore, JsonFileConfigurationStore
)

logger = logging.getLogger(__name__)


class RecordStore:
    """
    In-memory record collection persisted through a ConfigurationStore.

    The store is the only owner of the record list for the lifetime of
    the process; everything else reads snapshots.
    """

    def __init__(self, config_store: ConfigurationStore):
        self._config_store = config_store
        self._lock = threading.RLock()

        configuration = config_store.load()
        self._records: Tuple[CanonicalRecord, ...] = tuple(configuration.records)
        self._offsets: Tuple[int, int] = (
            configuration.start_delta_seconds,
            configuration.end_delta_seconds
        )
        logger.info("Loaded %d jump scare records", len(self._records))

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def _persist(self, records: Tuple[CanonicalRecord, ...], offsets: Tuple[int, int]):
        """Save, then publish. Caller holds the lock."""
        configuration = PluginConfiguration(
            start_delta_seconds=offsets[0],
            end_delta_seconds=offsets[1],
            records=list(records)
        )
        try:
            self._config_store.save(configuration)
        except Exception as e:
            raise StorageUnavailableError(Error(
                code=ErrorCode.STORAGE_WRITE_FAILED,
                message=f"Failed to save configuration: {e}"
            )) from e

        self._records = records
        self._offsets = offsets

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add_merge(self, candidates: Iterable[CanonicalRecord]) -> MergeResult:
        """
        Append candidates whose dedup key is new.

        Keys are checked against stored records and against candidates
        accepted earlier in the same batch.
        """
        with self._lock:
            existing_keys: Set[Tuple[str, int]] = {r.dedup_key for r in self._records}
            accepted: List[CanonicalRecord] = []
            skipped = 0

            for candidate in candidates:
                key = candidate.dedup_key
                if key in existing_keys:
                    skipped += 1
                    logger.debug("Skipping duplicate: ItemId=%s, Timestamp=%s",
                                 candidate.item_id, units_to_seconds(candidate.timestamp_units))
                    continue
                accepted.append(candidate)
                existing_keys.add(key)

            if accepted:
                self._persist(self._records + tuple(accepted), self._offsets)

            logger.info("Merged %d records, skipped %d duplicates (total %d)",
                        len(accepted), skipped, len(self._records))
            return MergeResult(added_count=len(accepted), skipped_count=skipped)

    def clear(self) -> int:
        """Remove every record. Returns how many were removed."""
        with self._lock:
            count = len(self._records)
            self._persist((), self._offsets)
            logger.info("Cleared %d jump scares from configuration", count)
            return count

    def update_offsets(self, start_delta_seconds: int, end_delta_seconds: int):
        """Replace the configured offsets (seconds, signed integers)."""
        for name, value in (("start_delta_seconds", start_delta_seconds),
                            ("end_delta_seconds", end_delta_seconds)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")

        with self._lock:
            self._persist(self._records, (start_delta_seconds, end_delta_seconds))
            logger.info("Offsets set to start=%ds end=%ds",
                        start_delta_seconds, end_delta_seconds)

    # =========================================================================
    # READS (snapshot, never mutate)
    # =========================================================================

    def records(self) -> Tuple[CanonicalRecord, ...]:
        """All records in storage order."""
        return self._records

    def records_for_item(self, item_id: str) -> List[CanonicalRecord]:
        """Records for one item, in storage order."""
        return [r for r in self._records if r.item_id == item_id]

    def records_sorted(self) -> List[CanonicalRecord]:
        """All records ordered by item name, then timestamp."""
        return sorted(self._records, key=lambda r: (r.item_name or '', r.timestamp_units))

    def offsets(self) -> Tuple[int, int]:
        """Current (start_delta_seconds, end_delta_seconds)."""
        return self._offsets

    def get(self, record_id: str) -> Optional[CanonicalRecord]:
        for record in self._records:
            if record.record_id == record_id:
                return record
        return None

    @property
    def count(self) -> int:
        return len(self._records)

    def statistics(self) -> ImportStatistics:
        """Aggregate counts; records without intensity count in neither bucket."""
        records = self._records
        return ImportStatistics(
            total_records=len(records),
            distinct_items=len({r.item_id for r in records}),
            major_count=sum(1 for r in records if r.intensity == ScareIntensity.Major),
            minor_count=sum(1 for r in records if r.intensity == ScareIntensity.Minor)
        )


__all__ = [
    'RecordStore',
    'ConfigurationStore',
    'InMemoryConfigurationStore',
    'JsonFileConfigurationStore',
]
