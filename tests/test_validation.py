"""Tests for core.validation parameter helpers."""

from __future__ import annotations

import pytest

from core.validation import (
    ParamError,
    check_range,
    multi,
    one_of,
    optional_text,
    parse_bool,
    parse_int,
    validate_id,
)


class TestValidateId:
    @pytest.mark.parametrize("value", ["barbaro", "Mago_2024", "palla-di-fuoco", "a" * 50])
    def test_accepts_slugs(self, value):
        assert validate_id("id-classe", value) == value

    def test_empty_is_required(self):
        with pytest.raises(ParamError, match="id-classe is required"):
            validate_id("id-classe", "")

    def test_too_long(self):
        with pytest.raises(ParamError, match="cannot exceed 50 characters"):
            validate_id("id-classe", "a" * 51)

    @pytest.mark.parametrize("value", ["mago rosso", "mago%", "../etc", "mago'; DROP"])
    def test_rejects_invalid_characters(self, value):
        with pytest.raises(ParamError) as excinfo:
            validate_id("id-classe", value)
        assert excinfo.value.name == "id-classe"
        assert "invalid characters" in str(excinfo.value)


class TestParseInt:
    def test_missing_uses_default(self):
        assert parse_int("$limit", None, default=20) == 20
        assert parse_int("$limit", "", default=20) == 20

    def test_not_an_integer(self):
        with pytest.raises(ParamError, match="must be a valid integer"):
            parse_int("$limit", "abc")

    def test_range_bounds_are_inclusive(self):
        assert parse_int("livello", "0", minimum=0, maximum=9) == 0
        assert parse_int("livello", "9", minimum=0, maximum=9) == 9

    def test_outside_range(self):
        with pytest.raises(ParamError, match="livello must be between 0 and 9"):
            parse_int("livello", "10", minimum=0, maximum=9)

    def test_minimum_only(self):
        with pytest.raises(ParamError, match=r"\$offset must be at least 0"):
            parse_int("$offset", "-1", minimum=0)

    @pytest.mark.parametrize("raw", ["٣", "1_0", " 5 ", "5 ", "+", "-", "1.0", "0x10"])
    def test_only_plain_ascii_digits(self, raw):
        with pytest.raises(ParamError, match=r"\$limit must be a valid integer"):
            parse_int("$limit", raw)

    def test_explicit_sign(self):
        assert parse_int("$offset", "+7") == 7
        assert parse_int("$offset", "-7") == -7

    @pytest.mark.parametrize("raw", ["99999999999999999999", "9223372036854775808", "-9223372036854775809"])
    def test_outside_64_bit_range(self, raw):
        with pytest.raises(ParamError, match=r"\$offset must be a valid integer"):
            parse_int("$offset", raw)

    def test_64_bit_bounds_are_accepted(self):
        assert parse_int("$offset", "9223372036854775807") == 2**63 - 1


class TestCheckRange:
    def test_within(self):
        assert check_range("$limit", 100, minimum=1, maximum=100) == 100

    def test_maximum_only(self):
        with pytest.raises(ParamError, match="livello cannot exceed 9"):
            check_range("livello", 10, maximum=9)

    def test_both_bounds(self):
        with pytest.raises(ParamError, match=r"\$limit must be between 1 and 100"):
            check_range("$limit", 0, minimum=1, maximum=100)


class TestParseBool:
    @pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_spellings(self, raw):
        assert parse_bool("rituale", raw) is True

    @pytest.mark.parametrize("raw", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false_spellings(self, raw):
        assert parse_bool("rituale", raw) is False

    @pytest.mark.parametrize("raw", ["yes", "no", "on", "tRuE", "2"])
    def test_other_spellings_rejected(self, raw):
        with pytest.raises(ParamError, match="rituale must be a valid boolean"):
            parse_bool("rituale", raw)

    def test_missing_is_none(self):
        assert parse_bool("rituale", None) is None


def test_optional_text_length():
    assert optional_text("nome", "", max_length=5) is None
    assert optional_text("nome", "abcde", max_length=5) == "abcde"
    with pytest.raises(ParamError, match="nome: value exceeds max length of 5"):
        optional_text("nome", "abcdef", max_length=5)


def test_one_of():
    assert one_of("sort", "asc", ["asc", "desc"]) == "asc"
    with pytest.raises(ParamError, match="sort must be one of: asc, desc"):
        one_of("sort", "up", ["asc", "desc"])


class TestMulti:
    def test_none_is_empty(self):
        assert multi("componenti", None, max_items=3) == []

    def test_too_many(self):
        with pytest.raises(ParamError, match=r"too many values \(max 3\)"):
            multi("componenti", ["V", "S", "M", "V"], max_items=3)

    def test_allowed_values(self):
        with pytest.raises(ParamError, match="componenti must be one of: V, S, M"):
            multi("componenti", ["V", "X"], max_items=3, allowed=["V", "S", "M"])

    def test_item_length(self):
        with pytest.raises(ParamError, match="max length of 3"):
            multi("classi", ["Mago"], max_items=3, max_length=3)
