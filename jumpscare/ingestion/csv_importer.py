"""
CSV Importer
============

Parses delimited jump scare data into CanonicalRecords.

Expected header: ItemName,IMDb,TMDb,Timestamp,Intensity,Description,Type

GUARANTEES:
- Every data row is either a record or a DroppedRow with a reason
- A bad row never aborts the batch
- Unknown intensity/type text falls back to Minor/Other, never drops a row
- Only an empty or header-only payload is fatal (InvalidInputError)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union
import csv
import logging
import uuid

from ..contracts.base import (
    CollaboratorUnavailableError, Error, ErrorCode, InvalidInputError
)
from ..contracts.records import CanonicalRecord, ScareIntensity, ScareType
from ..temporal.codec import parse_timestamp

logger = logging.getLogger(__name__)

CSV_SOURCE = "csv_import"
REQUIRED_FIELDS = 7
EXPECTED_HEADER = ("ItemName", "IMDb", "TMDb", "Timestamp", "Intensity", "Description", "Type")


@dataclass(frozen=True)
class DroppedRow:
    """Record of a data row that did not become a CanonicalRecord."""
    line_number: int
    code: ErrorCode
    reason: str
    line: str


@dataclass
class ParseReport:
    """
    Complete report of one parse.

    TRACEABLE:
    Every data row results in exactly one of:
    - A record in `records`
    - An entry in `dropped_rows`
    """
    total_rows: int = 0
    records: List[CanonicalRecord] = field(default_factory=list)
    dropped_rows: List[DroppedRow] = field(default_factory=list)

    @property
    def accepted_count(self) -> int:
        return len(self.records)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_rows)


class CsvImporter:
    """
    Turns CSV text into CanonicalRecords, matching each row to the catalog.

    Matching order per row: external ids first (when either is present),
    then the title column.
    """

    def __init__(self, matcher, clock: Optional[Callable[[], datetime]] = None):
        self._matcher = matcher
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def parse(self, csv_content: Optional[str]) -> List[CanonicalRecord]:
        """Parse CSV text; rows that fail are dropped silently (and logged)."""
        return self.parse_with_report(csv_content).records

    def parse_with_report(self, csv_content: Optional[str]) -> ParseReport:
        """
        Parse CSV text into a ParseReport.

        Raises:
            InvalidInputError: content is empty or has no data row.
            CollaboratorUnavailableError: the catalog could not be queried.
        """
        if csv_content is None or not csv_content.strip():
            raise InvalidInputError(Error(
                code=ErrorCode.EMPTY_PAYLOAD,
                message="CSV content is empty"
            ))

        lines = [line for line in csv_content.replace('\r', '\n').split('\n') if line]
        if len(lines) < 2:
            raise InvalidInputError(Error(
                code=ErrorCode.MALFORMED_PAYLOAD,
                message="CSV must contain at least a header row and one data row"
            ))

        header = [h.strip() for h in lines[0].split(',')]
        logger.info("CSV header: %s", ", ".join(header))
        if tuple(header[:REQUIRED_FIELDS]) != EXPECTED_HEADER:
            logger.warning("Unexpected CSV header, columns are read by position: %s",
                           ", ".join(EXPECTED_HEADER))

        report = ParseReport(total_rows=len(lines) - 1)

        for line_number, line in enumerate(lines[1:], start=2):
            try:
                result = self._parse_line(line, line_number)
            except CollaboratorUnavailableError:
                raise
            except Exception as e:
                logger.exception("Failed to parse CSV line %d: %s", line_number, line)
                result = DroppedRow(
                    line_number=line_number,
                    code=ErrorCode.ROW_PARSE_FAILED,
                    reason=f"Unexpected error: {e}",
                    line=line
                )

            if isinstance(result, CanonicalRecord):
                report.records.append(result)
            else:
                report.dropped_rows.append(result)

        logger.info("Successfully parsed %d jump scares from CSV (%d rows dropped)",
                    report.accepted_count, report.dropped_count)
        return report

    def _parse_line(self, line: str, line_number: int) -> Union[CanonicalRecord, DroppedRow]:
        """Parse one data row into a record, or explain why it was dropped."""
        fields = next(csv.reader([line]), [])

        if len(fields) < REQUIRED_FIELDS:
            logger.warning("CSV line has insufficient fields: %s", line)
            return DroppedRow(line_number, ErrorCode.MALFORMED_ROW,
                              f"Expected {REQUIRED_FIELDS} fields, got {len(fields)}", line)

        item_name, imdb_id, tmdb_id, timestamp, intensity_text, description, type_text = (
            f.strip() for f in fields[:REQUIRED_FIELDS]
        )

        item_id = None
        if imdb_id or tmdb_id:
            item_id = self._matcher.find_by_external_id(imdb_id, tmdb_id)

        if item_id is None and item_name:
            item_id = self._matcher.find_by_name(item_name)

        if item_id is None:
            logger.warning("Could not match item '%s' (IMDb: %s, TMDb: %s) to library",
                           item_name, imdb_id, tmdb_id)
            return DroppedRow(line_number, ErrorCode.ITEM_NOT_MATCHED,
                              f"No catalog match for '{item_name}'", line)

        parsed_time = parse_timestamp(timestamp)
        if parsed_time.is_failure:
            logger.warning("Invalid timestamp format: %s", timestamp)
            return DroppedRow(line_number, ErrorCode.INVALID_TIMESTAMP,
                              parsed_time.error.message, line)

        intensity = ScareIntensity.parse(intensity_text)
        if not intensity.recognized:
            logger.warning("Invalid intensity value: %s, defaulting to %s",
                           intensity_text, intensity.value.name)

        scare_type = ScareType.parse(type_text)
        if not scare_type.recognized:
            logger.warning("Invalid type value: %s, defaulting to %s",
                           type_text, scare_type.value.name)

        return CanonicalRecord(
            record_id=uuid.uuid4().hex,
            item_id=item_id,
            timestamp_units=parsed_time.value,
            description=description,
            scare_type=scare_type.value,
            intensity=intensity.value,
            item_name=item_name,
            source=CSV_SOURCE,
            created_at=self._clock()
        )
