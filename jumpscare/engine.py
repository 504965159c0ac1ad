"""
Engine Orchestration Module

Unified interface that wires all layers together by explicit injection.

DESIGN PRINCIPLES:
==================
1. Collaborators (catalog, configuration store) are passed in, never looked up
2. Engine orchestrates flow without owning business logic
3. The record store is the only mutable shared state
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging
import os
from pathlib import Path

from .catalog import Catalog, CatalogMatcher, InMemoryCatalog
from .contracts.base import CollaboratorUnavailableError
from .contracts.records import (
    CanonicalRecord, DisplayInterval, ImportResult, ImportStatistics
)
from .ingestion import CsvImporter, ImportService
from .segments import SegmentProvider
from .storage import (
    ConfigurationStore, InMemoryConfigurationStore, JsonFileConfigurationStore,
    RecordStore
)

logger = logging.getLogger(__name__)


@dataclass
class ServiceConfig:
    """Deployment configuration for the backend."""
    storage_type: str = "memory"  # "memory" or "file"
    storage_dir: Optional[str] = None
    catalog_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        storage_dir = os.environ.get("JUMPSCARE_STORAGE_DIR")
        return cls(
            storage_type="file" if storage_dir else "memory",
            storage_dir=storage_dir,
            catalog_path=os.environ.get("JUMPSCARE_CATALOG_PATH")
        )

    def create_config_store(self) -> ConfigurationStore:
        if self.storage_type == "file" and self.storage_dir:
            return JsonFileConfigurationStore(self.storage_dir)
        return InMemoryConfigurationStore()

    def create_catalog(self) -> Catalog:
        if self.catalog_path:
            return InMemoryCatalog.load(Path(self.catalog_path))
        return InMemoryCatalog()


class JumpScareBackend:
    """
    Unified backend for jump scare markers.

    LAYER FLOW:
    ===========
    1. Ingestion: CSV text -> CanonicalRecords (catalog matcher, time codec)
    2. Storage: dedup merge into the record store
    3. Segments: item id -> display intervals, derived per query
    """

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        catalog: Optional[Catalog] = None,
        config_store: Optional[ConfigurationStore] = None
    ):
        self._config = config or ServiceConfig()
        self._catalog = catalog if catalog is not None else self._config.create_catalog()
        self._config_store = config_store or self._config.create_config_store()

        self._store = RecordStore(self._config_store)
        self._matcher = CatalogMatcher(self._catalog)
        self._importer = CsvImporter(self._matcher)
        self._import_service = ImportService(self._importer, self._store)
        self._segments = SegmentProvider(self._store, self._store.offsets)

    # =========================================================================
    # SEGMENT INTERFACE
    # =========================================================================

    def get_segments(self, item_id: str) -> List[DisplayInterval]:
        return self._segments.get_segments(item_id)

    # =========================================================================
    # ADMIN INTERFACE
    # =========================================================================

    def import_csv(self, csv_content: str) -> ImportResult:
        return self._import_service.import_csv(csv_content)

    def get_statistics(self) -> ImportStatistics:
        return self._import_service.get_statistics()

    def clear_all(self) -> bool:
        return self._import_service.clear_all()

    def get_records_for_item(self, item_id: str) -> List[CanonicalRecord]:
        """Records for one item ordered by timestamp."""
        records = sorted(self._store.records_for_item(item_id), key=lambda r: r.timestamp_units)
        logger.info("Retrieved %d jump scares for item %s", len(records), item_id)
        return records

    def get_all_records(self) -> List[CanonicalRecord]:
        """All records ordered by item name, then timestamp."""
        records = self._store.records_sorted()
        logger.info("Retrieved all %d jump scares", len(records))
        return records

    def get_offsets(self) -> Tuple[int, int]:
        return self._store.offsets()

    def update_offsets(self, start_delta_seconds: int, end_delta_seconds: int) -> bool:
        """Persist new offsets. Returns False if the store could not be saved."""
        try:
            self._store.update_offsets(start_delta_seconds, end_delta_seconds)
            return True
        except CollaboratorUnavailableError:
            logger.exception("Failed to update offsets")
            return False

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def matcher(self) -> CatalogMatcher:
        return self._matcher

