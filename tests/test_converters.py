"""Tests for the built-in value converters."""

import pytest

from erp_migration.errors import MigrationObjectError
from erp_migration.models.mapping import ConverterTag
from erp_migration.services.converters import (
    CONVERTERS,
    bool_tf,
    bool_yn,
    get_converter,
    is_known_converter,
    pad_left,
    strip_leading_zeros,
    to_date,
    to_decimal,
    to_integer,
    to_lower_case,
    to_upper_case,
    trim,
)


class TestToDate:
    def test_compact_date(self):
        assert to_date("20240115") == "2024-01-15"

    def test_separators_ignored(self):
        assert to_date("2024-01-15") == "2024-01-15"
        assert to_date("2024/01/15") == "2024-01-15"

    @pytest.mark.parametrize("value", [None, "", "2024011", "abcdefgh", "20241341", True])
    def test_invalid_input_is_empty(self, value):
        assert to_date(value) == ""

    def test_integer_input(self):
        assert to_date(20231231) == "2023-12-31"


class TestNumbers:
    def test_decimal_keeps_precision(self):
        assert to_decimal("1234.50") == "1234.50"
        assert to_decimal(" 12.345 ") == "12.345"

    def test_decimal_default_on_bad_input(self):
        assert to_decimal("abc") == "0.00"
        assert to_decimal(None) == "0.00"
        assert to_decimal("NaN") == "0.00"

    def test_integer_truncates_toward_zero(self):
        assert to_integer("42.9") == 42
        assert to_integer("-42.9") == -42

    def test_integer_default_on_bad_input(self):
        assert to_integer("x") == 0
        assert to_integer(None) == 0

    def test_huge_exponents_fall_back_to_defaults(self):
        assert to_decimal("1E+20000000") == "0.00"
        assert to_integer("1E+2000000") == 0
        assert to_decimal("1E-200") == "0.00"

    def test_scientific_notation_within_bounds(self):
        assert to_decimal("1.5E+3") == "1500"
        assert to_integer("2E+2") == 200


class TestFlags:
    @pytest.mark.parametrize("value", ["X", "Y", 1, 1.0, True])
    def test_bool_yn_set(self, value):
        assert bool_yn(value) == "X"

    @pytest.mark.parametrize("value", ["", "N", "0", "1", "x", "y", " X", 0, 2, None, False])
    def test_bool_yn_unset(self, value):
        assert bool_yn(value) == ""

    def test_bool_tf(self):
        assert bool_tf("T") == "T"
        assert bool_tf("X") == "T"
        assert bool_tf(1) == "T"
        assert bool_tf("") == "F"
        assert bool_tf("1") == "F"
        assert bool_tf("t") == "F"


class TestStrings:
    def test_case(self):
        assert to_upper_case("abc") == "ABC"
        assert to_lower_case("ABC") == "abc"
        assert to_upper_case(None) == ""

    def test_pad_left(self):
        pad = pad_left(10)
        assert pad("12345") == "0000012345"
        assert pad("12345678901") == "12345678901"
        assert pad(None) == ""

    def test_pad_left_exact_width_unchanged(self):
        assert pad_left(10)("1234567890") == "1234567890"

    @pytest.mark.parametrize("value", ["", "7", "ABC", "1" * 39, "9" * 40, "5" * 45])
    def test_pad_left_40_length(self, value):
        padded = get_converter("padLeft40")(value)
        assert len(padded) == max(40, len(value))
        assert padded.endswith(value)
        assert set(padded[:len(padded) - len(value)]) <= {"0"}

    def test_strip_leading_zeros(self):
        assert strip_leading_zeros("0000012345") == "12345"
        assert strip_leading_zeros("0000") == "0"
        assert strip_leading_zeros("") == ""

    def test_trim(self):
        assert trim("  a b  ") == "a b"


SAMPLE_INPUTS = ["20240115", "  0012.50 ", "abc", "", "X", "Y", "N", "000123", "Mixed Case", "-42.9"]


class TestLaws:
    @pytest.mark.parametrize("tag", sorted(CONVERTERS))
    @pytest.mark.parametrize("value", SAMPLE_INPUTS)
    def test_idempotent(self, tag, value):
        convert = CONVERTERS[tag]
        once = convert(value)
        assert convert(once) == once

    @pytest.mark.parametrize("value", ["0", "12345", "0000012345", "ABC"])
    def test_pad_then_strip(self, value):
        assert strip_leading_zeros(pad_left(10)(value)) == strip_leading_zeros(value)

    @pytest.mark.parametrize("value", ["abc", "MiXeD", ""])
    def test_case_round_trip(self, value):
        assert to_upper_case(to_lower_case(value)) == to_upper_case(value)
        assert to_lower_case(to_upper_case(value)) == to_lower_case(value)

    def test_decimal_output_parses_back(self):
        for value in ["12.50", "-0.001", "1E+3", "42"]:
            assert to_decimal(to_decimal(value)) == to_decimal(value)
            assert to_integer(to_decimal(value)) == to_integer(value)


class TestRegistry:
    def test_every_tag_registered(self):
        assert set(CONVERTERS) == {tag.value for tag in ConverterTag}

    def test_lookup_by_tag_or_string(self):
        assert get_converter(ConverterTag.PAD_LEFT_10)("7") == "0000000007"
        assert get_converter("toUpperCase")("x") == "X"
        assert is_known_converter("trim")
        assert not is_known_converter("toRoman")

    def test_unknown_tag_raises(self):
        with pytest.raises(MigrationObjectError) as exc_info:
            get_converter("toRoman")
        assert exc_info.value.code == "MIGOBJ_UNKNOWN_CONVERTER"
