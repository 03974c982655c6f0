"""Tests for request parameter parsing helpers."""

import uuid

import pytest

from elite_bgs.exceptions import UsageError
from elite_bgs.query.params import escape_like, parse_ids, parse_ints, split_values


class TestSplitValues:
    def test_none_is_empty(self):
        assert split_values(None) == []

    def test_splits_on_commas_with_whitespace(self):
        assert split_values("Democracy ,  Anarchy,Feudal") == ["democracy", "anarchy", "feudal"]

    def test_drops_empty_elements(self):
        assert split_values("boom,,") == ["boom"]

    def test_single_value(self):
        assert split_values("Sol") == ["sol"]


class TestParseIds:
    def test_valid_ids(self):
        first, second = uuid.uuid4(), uuid.uuid4()
        assert parse_ids(f"{first}, {second}") == [first, second]

    def test_invalid_id_is_usage_error(self):
        with pytest.raises(UsageError):
            parse_ids("not-an-id")


class TestParseInts:
    def test_valid(self):
        assert parse_ints("1,22") == [1, 22]

    def test_invalid(self):
        with pytest.raises(UsageError):
            parse_ints("1,two")


class TestEscapeLike:
    def test_metacharacters_are_escaped(self):
        assert escape_like("a_b%c") == "a\\_b\\%c"

    def test_escape_character_is_doubled(self):
        assert escape_like("a\\b") == "a\\\\b"

    def test_regex_characters_are_left_alone(self):
        assert escape_like("a.b*") == "a.b*"
