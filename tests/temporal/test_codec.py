"""
Time Codec Tests

Exact parsing of timestamp shapes and unit conversion.
"""

import pytest

from jumpscare.contracts.base import ErrorCode
from jumpscare.contracts.records import UNITS_PER_SECOND
from jumpscare.temporal.codec import (
    format_timestamp, parse_timestamp, seconds_to_units, units_to_seconds,
)


class TestUnitConversion:

    def test_seconds_to_units_whole_seconds(self):
        assert seconds_to_units(711) == 711 * UNITS_PER_SECOND

    def test_seconds_to_units_truncates_toward_zero(self):
        assert seconds_to_units(1.00000009) == 10_000_000
        assert seconds_to_units(-1.00000009) == -10_000_000

    def test_units_to_seconds(self):
        assert units_to_seconds(15_000_000) == 1.5
        assert units_to_seconds(0) == 0.0


class TestStrictShapes:
    """H:MM:SS is tried before MM:SS; both are exact."""

    def test_hms_and_ms_agree_on_same_instant(self):
        hms = parse_timestamp("0:23:45")
        ms = parse_timestamp("23:45")

        assert hms.is_success and ms.is_success
        assert hms.value == 1425 * UNITS_PER_SECOND
        assert ms.value == 1425 * UNITS_PER_SECOND

    def test_zero_padded_hours(self):
        assert parse_timestamp("00:11:51").value == 711 * UNITS_PER_SECOND

    def test_hours_any_digit_count(self):
        assert parse_timestamp("123:00:01").value == (123 * 3600 + 1) * UNITS_PER_SECOND

    def test_zero(self):
        assert parse_timestamp("00:00").value == 0


class TestGenericFallback:

    def test_single_digit_fields(self):
        result = parse_timestamp("1:2:3")
        assert result.value == (3600 + 120 + 3) * UNITS_PER_SECOND

    def test_fractional_seconds_are_exact(self):
        result = parse_timestamp("0:01:02.5")
        assert result.value == 62 * UNITS_PER_SECOND + 5_000_000

    def test_seven_fraction_digits(self):
        assert parse_timestamp("0:00:00.0000001").value == 1

    def test_days_prefix(self):
        result = parse_timestamp("1.02:00:00")
        assert result.value == (86400 + 7200) * UNITS_PER_SECOND

    def test_bare_integer_means_days(self):
        assert parse_timestamp("2").value == 2 * 86400 * UNITS_PER_SECOND

    def test_surrounding_whitespace(self):
        assert parse_timestamp(" 1:02:03 ").value == 3723 * UNITS_PER_SECOND


class TestInvalidTimestamps:

    @pytest.mark.parametrize("text", [
        "", "   ", "abc", "12:61", "1:99:00", "-0:01:00", "1:2:3:4:5", "24:00:00.5",
    ])
    def test_rejected_with_typed_error(self, text):
        result = parse_timestamp(text)

        assert result.is_failure
        assert result.value is None
        assert result.error.code == ErrorCode.INVALID_TIMESTAMP

    def test_none_is_rejected(self):
        assert parse_timestamp(None).is_failure


class TestFormatting:

    def test_under_an_hour(self):
        assert format_timestamp(711 * UNITS_PER_SECOND) == "11:51"

    def test_over_an_hour(self):
        assert format_timestamp(3723 * UNITS_PER_SECOND) == "1:02:03"

    def test_drops_sub_second_remainder(self):
        assert format_timestamp(62 * UNITS_PER_SECOND + 9_999_999) == "01:02"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            format_timestamp(-1)

    def test_format_then_parse(self):
        units = 5025 * UNITS_PER_SECOND
        assert parse_timestamp(format_timestamp(units)).value == units
