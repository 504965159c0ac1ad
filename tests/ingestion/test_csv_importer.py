"""
CSV Importer Tests

Row-level leniency, fatal input handling, and record construction.
"""

import pytest

from jumpscare.catalog import CatalogMatcher
from jumpscare.contracts.base import (
    CollaboratorUnavailableError, ErrorCode, InvalidInputError,
)
from jumpscare.contracts.records import ScareIntensity, ScareType, UNITS_PER_SECOND
from jumpscare.ingestion import CSV_SOURCE, CsvImporter

from ..fixtures import (
    BrokenCatalog, CSV_HEADER, T_CREATED, WEAPONS_ID, WEAPONS_ROW,
    create_catalog, csv_of, fixed_clock,
)


@pytest.fixture
def importer():
    return CsvImporter(CatalogMatcher(create_catalog()), clock=fixed_clock)


class TestFatalInput:

    @pytest.mark.parametrize("content", [None, "", "   \n\r\n  "])
    def test_empty_content(self, importer, content):
        with pytest.raises(InvalidInputError) as exc_info:
            importer.parse(content)
        assert exc_info.value.code == ErrorCode.EMPTY_PAYLOAD

    def test_header_only(self, importer):
        with pytest.raises(InvalidInputError) as exc_info:
            importer.parse(CSV_HEADER + "\n\n")
        assert exc_info.value.code == ErrorCode.MALFORMED_PAYLOAD

    def test_unreachable_catalog_aborts_parse(self):
        importer = CsvImporter(CatalogMatcher(BrokenCatalog()))
        with pytest.raises(CollaboratorUnavailableError):
            importer.parse(csv_of(WEAPONS_ROW))


class TestRecordConstruction:

    def test_weapons_row(self, importer):
        records = importer.parse(csv_of(WEAPONS_ROW))

        assert len(records) == 1
        record = records[0]
        assert record.item_id == WEAPONS_ID
        assert record.timestamp_units == 711 * UNITS_PER_SECOND
        assert record.intensity == ScareIntensity.Minor
        assert record.scare_type == ScareType.Visual
        assert record.description == "Ghost appears"
        assert record.item_name == "Weapons (2025)"
        assert record.source == CSV_SOURCE
        assert record.created_at == T_CREATED

    def test_each_record_gets_fresh_id(self, importer):
        records = importer.parse(csv_of(WEAPONS_ROW, WEAPONS_ROW))

        assert len(records) == 2
        assert records[0].record_id != records[1].record_id

    def test_crlf_line_endings(self, importer):
        content = CSV_HEADER + "\r\n" + WEAPONS_ROW + "\r\n"
        assert len(importer.parse(content)) == 1

    def test_fields_are_trimmed(self, importer):
        row = " Weapons (2025) , tt26581740 , , 11:51 , major , Hands , audio "
        record = importer.parse(csv_of(row))[0]

        assert record.timestamp_units == 711 * UNITS_PER_SECOND
        assert record.intensity == ScareIntensity.Major
        assert record.scare_type == ScareType.Audio

    def test_name_fallback_when_ids_blank(self, importer):
        records = importer.parse(csv_of("Weapons (2025),,,00:11:51,Major,Ghost,Visual"))
        assert records[0].item_id == WEAPONS_ID

    def test_name_fallback_when_ids_unknown(self, importer):
        records = importer.parse(csv_of("Weapons,tt0000000,0,00:11:51,Major,Ghost,Visual"))
        assert records[0].item_id == WEAPONS_ID


class TestLenientValues:

    def test_unknown_intensity_defaults_to_minor(self, importer):
        row = "Weapons (2025),tt26581740,,00:11:51,Huge,Ghost,Visual"
        assert importer.parse(csv_of(row))[0].intensity == ScareIntensity.Minor

    def test_unknown_type_defaults_to_other(self, importer):
        row = "Weapons (2025),tt26581740,,00:11:51,Major,Ghost,Smell"
        assert importer.parse(csv_of(row))[0].scare_type == ScareType.Other

    def test_blank_enums_default(self, importer):
        row = "Weapons (2025),tt26581740,,00:11:51,,Ghost,"
        record = importer.parse(csv_of(row))[0]
        assert record.intensity == ScareIntensity.Minor
        assert record.scare_type == ScareType.Other


class TestDroppedRows:

    def test_short_row_dropped(self, importer):
        report = importer.parse_with_report(csv_of("Weapons,tt26581740,1078605,00:11:51"))

        assert report.records == []
        assert report.dropped_rows[0].code == ErrorCode.MALFORMED_ROW
        assert report.dropped_rows[0].line_number == 2

    def test_unmatched_title_dropped(self, importer):
        report = importer.parse_with_report(
            csv_of("Hereditary (2018),,,00:42:00,Major,Head,Visual", WEAPONS_ROW))

        assert report.total_rows == 2
        assert report.accepted_count == 1
        assert report.dropped_rows[0].code == ErrorCode.ITEM_NOT_MATCHED

    def test_bad_timestamp_dropped(self, importer):
        report = importer.parse_with_report(
            csv_of("Weapons (2025),tt26581740,,soon,Major,Ghost,Visual"))

        assert report.dropped_count == 1
        assert report.dropped_rows[0].code == ErrorCode.INVALID_TIMESTAMP

    def test_bad_rows_do_not_abort_batch(self, importer):
        report = importer.parse_with_report(csv_of(
            "garbage",
            WEAPONS_ROW,
            "Nope (1900),,,00:01,Minor,x,Visual",
            "Sinister,,,1:05:00,Major,Lawnmower,Combined",
        ))

        assert report.total_rows == 4
        assert report.accepted_count == 2
        assert report.dropped_count == 2

    def test_extra_fields_ignored(self, importer):
        row = WEAPONS_ROW + ",extra,columns"
        assert len(importer.parse(csv_of(row))) == 1

    def test_quoted_description_with_comma(self, importer):
        row = 'Weapons (2025),tt26581740,,00:11:51,Major,"Ghost, then door",Visual'
        record = importer.parse(csv_of(row))[0]
        assert record.description == "Ghost, then door"
        assert record.scare_type == ScareType.Visual

    def test_unclosed_quote_swallows_rest_of_row(self, importer):
        """An opening quote with no closing quote reads the rest of the line as one field."""
        report = importer.parse_with_report(csv_of(
            '"Weapons (2025),tt26581740,1078605,00:11:51,Major,Ghost,Visual',
            WEAPONS_ROW
        ))

        assert report.accepted_count == 1
        assert report.dropped_rows[0].code == ErrorCode.MALFORMED_ROW
        assert report.dropped_rows[0].line_number == 2
