"""
Import Service

Orchestrates CSV parsing and the deduplicating merge into the store.

DESIGN:
=======
1. Parse CSV into candidate records (row failures are dropped and counted)
2. Merge candidates into the store (duplicates are skipped and counted)
3. Report only aggregate figures to the caller
"""

from __future__ import annotations
import logging

from ..contracts.base import CollaboratorUnavailableError, InvalidInputError
from ..contracts.records import ImportResult, ImportStatistics

from .csv_importer import CsvImporter

logger = logging.getLogger(__name__)


class ImportService:
    """Import, clear and statistics entry points over one RecordStore."""

    def __init__(self, importer: CsvImporter, store):
        self._importer = importer
        self._store = store

    def import_csv(self, csv_content: str) -> ImportResult:
        """Import CSV text. Never raises; failures come back as ImportResult."""
        logger.info("Starting CSV import")

        try:
            report = self._importer.parse_with_report(csv_content)
        except InvalidInputError as e:
            logger.warning("CSV import rejected: %s", e.error.message)
            return ImportResult(success=False, message=e.error.message)
        except CollaboratorUnavailableError as e:
            logger.error("CSV import failed: %s", e.error.message)
            return ImportResult(success=False, message=f"Import failed: {e.error.message}")

        if not report.records:
            message = "No valid jump scares found in CSV"
            logger.warning(message)
            return ImportResult(
                success=False,
                message=message,
                total_rows=report.total_rows,
                skipped_count=report.total_rows
            )

        try:
            merge = self._store.add_merge(report.records)
        except CollaboratorUnavailableError as e:
            logger.error("CSV import failed: %s", e.error.message)
            return ImportResult(
                success=False,
                message=f"Import failed: {e.error.message}",
                total_rows=report.total_rows
            )

        skipped = report.total_rows - merge.added_count
        message = (
            f"Successfully imported {merge.added_count} jump scares, skipped {skipped} "
            f"({merge.skipped_count} duplicates, {report.dropped_count} invalid rows)"
        )
        logger.info(message)
        logger.info("Total jump scares in database: %d", self._store.count)

        return ImportResult(
            success=True,
            message=message,
            total_rows=report.total_rows,
            imported_count=merge.added_count,
            skipped_count=skipped
        )

    def clear_all(self) -> bool:
        """Remove all records. Returns False if the store could not be saved."""
        try:
            self._store.clear()
            return True
        except CollaboratorUnavailableError:
            logger.exception("Failed to clear jump scares")
            return False

    def get_statistics(self) -> ImportStatistics:
        return self._store.statistics()
