"""Tests for columns module."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import pytest

from record_sheet._exceptions import InvalidConfigurationError
from record_sheet.columns import (
    HEADER,
    fill_row,
    flatten_columns,
    get_field,
    infer_columns,
    parse_column_spec,
    parse_columns,
    parse_headers,
    record_field_names,
    resolve_columns,
    resolve_headers,
    to_cell_value,
)
from record_sheet.types.columns import GroupSpec
from tests.sheet_fakes import Account, Address, Model, Person, Point


def _group(*names: str) -> GroupSpec:
    return {"type": "group", "items": [{"type": "leaf", "name": n} for n in names]}


class TestParseColumnSpec:
    """Tests for parse_column_spec and parse_columns."""

    def test_string_is_leaf(self) -> None:
        assert parse_column_spec("name") == {"type": "leaf", "name": "name"}

    def test_list_and_tuple_are_groups(self) -> None:
        expected = _group("a", "b")
        assert parse_column_spec(["a", "b"]) == expected
        assert parse_column_spec(("a", "b")) == expected

    def test_mapping_is_nesting(self) -> None:
        spec = parse_column_spec({"address": ["city", "zip"]})
        assert spec == {
            "type": "nesting",
            "entries": [("address", _group("city", "zip"))],
        }

    def test_nesting_keeps_mapping_order(self) -> None:
        spec = parse_column_spec({"b": "x", "a": "y"})
        assert spec["type"] == "nesting"
        assert [key for key, _ in spec["entries"]] == ["b", "a"]

    def test_rejects_number(self) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            parse_column_spec(["name", 5])
        assert "5" in str(exc_info.value)
        assert "int" in str(exc_info.value)

    def test_rejects_none(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            parse_column_spec(None)

    def test_rejects_non_string_nesting_key(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            parse_column_spec({1: ["city"]})

    def test_parse_columns_absent(self) -> None:
        assert parse_columns(None) is None

    def test_parse_columns_rejects_string(self) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            parse_columns("not_a_list")
        assert exc_info.value.option == "columns"

    def test_parse_columns_rejects_mapping(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            parse_columns({"address": ["city"]})

    def test_parse_columns_empty(self) -> None:
        assert parse_columns([]) == {"type": "group", "items": []}


class TestParseHeaders:
    """Tests for parse_headers."""

    def test_absent(self) -> None:
        assert parse_headers(None) is None

    def test_list_of_strings(self) -> None:
        assert parse_headers(("Name", "Age")) == ["Name", "Age"]

    def test_rejects_non_sequence(self) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            parse_headers("Name")
        assert exc_info.value.option == "headers"

    def test_rejects_true(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            parse_headers(True)

    def test_rejects_non_string_label(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            parse_headers(["Name", 2])


class TestInferColumns:
    """Tests for record_field_names and infer_columns."""

    def test_mapping_keys_sorted(self) -> None:
        assert infer_columns([{"b": 1, "a": 2}]) == _group("a", "b")

    def test_only_first_record_is_inspected(self) -> None:
        assert infer_columns([{"b": 1}, {"a": 2, "c": 3}]) == _group("b")

    def test_empty_dataset(self) -> None:
        assert infer_columns([]) == {"type": "group", "items": []}

    def test_plain_object_has_no_columns(self) -> None:
        assert infer_columns([Account("Ada", "Lovelace")]) == {"type": "group", "items": []}

    def test_dataclass_fields(self) -> None:
        person = Person("Ada", 36, None)
        assert record_field_names(person) == ["name", "age", "address"]
        assert flatten_columns(infer_columns([person])) == ["address", "age", "name"]

    def test_named_tuple_fields(self) -> None:
        assert flatten_columns(infer_columns([Point(y=1, x=2)])) == ["x", "y"]

    def test_attributes_mapping(self) -> None:
        assert flatten_columns(infer_columns([Model(b=1, a=2)])) == ["a", "b"]

    def test_non_string_mapping_keys(self) -> None:
        spec = infer_columns([{2: "b", 1: "a"}])
        assert flatten_columns(spec) == ["1", "2"]
        assert fill_row(spec, {2: "b", 1: "a"}) == ["a", "b"]

    def test_plain_tuple_has_no_columns(self) -> None:
        assert record_field_names((1, 2)) is None

    def test_resolve_prefers_explicit(self) -> None:
        explicit = _group("z")
        assert resolve_columns(explicit, [{"a": 1}]) is explicit

    def test_resolve_infers_when_absent(self) -> None:
        assert resolve_columns(None, [{"a": 1}]) == _group("a")


class TestResolveHeaders:
    """Tests for resolve_headers."""

    def test_defaults_to_flat_columns(self) -> None:
        assert resolve_headers(None, ["a", "b"]) == ["a", "b"]

    def test_explicit_headers(self) -> None:
        assert resolve_headers(["A", "B"], ["a", "b"]) == ["A", "B"]

    def test_length_mismatch_is_tolerated_and_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="record_sheet.columns"):
            result = resolve_headers(["Only"], ["a", "b"])
        assert result == ["Only"]
        assert "does not match" in caplog.text


class TestGetField:
    """Tests for get_field and to_cell_value."""

    def test_mapping_lookup(self) -> None:
        assert get_field({"a": 1}, "a") == 1

    def test_mapping_missing_key(self) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            get_field({"a": 1}, "b")
        assert "'b'" in str(exc_info.value)

    def test_mapping_key_matched_by_string_form(self) -> None:
        assert get_field({1: "a"}, "1") == "a"

    def test_mapping_exact_key_wins(self) -> None:
        assert get_field({1: "int", "1": "str"}, "1") == "str"

    def test_attribute_lookup(self) -> None:
        assert get_field(Address("Paris", "75001"), "city") == "Paris"

    def test_missing_attribute(self) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            get_field(Address("Paris", "75001"), "street")
        assert "Address" in str(exc_info.value)

    def test_method_is_called(self) -> None:
        assert get_field(Account("Ada", "Lovelace"), "full_name") == "Ada Lovelace"

    def test_cell_values_pass_through(self) -> None:
        assert to_cell_value(None) is None
        assert to_cell_value("x") == "x"
        assert to_cell_value(True) is True
        assert to_cell_value(3) == 3
        assert to_cell_value(1.5) == 1.5
        assert to_cell_value(Decimal("2.50")) == Decimal("2.50")
        assert to_cell_value(date(2024, 1, 2)) == date(2024, 1, 2)

    def test_aware_datetime_becomes_naive_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        value = to_cell_value(datetime(2024, 1, 1, 12, 0, tzinfo=plus_two))
        assert value == datetime(2024, 1, 1, 10, 0)
        assert isinstance(value, datetime)
        assert value.tzinfo is None

    def test_aware_time_becomes_naive_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        assert to_cell_value(time(1, 30, tzinfo=plus_two)) == time(23, 30)

    def test_naive_datetime_unchanged(self) -> None:
        assert to_cell_value(datetime(2024, 1, 1, 12, 0)) == datetime(2024, 1, 1, 12, 0)

    def test_control_characters_are_stripped(self) -> None:
        assert to_cell_value("bell\x07") == "bell"
        assert to_cell_value("a\x00b\x1fc") == "abc"

    def test_tab_and_newline_are_kept(self) -> None:
        assert to_cell_value("a\tb\nc") == "a\tb\nc"

    def test_other_values_are_stringified(self) -> None:
        assert to_cell_value(["a", "b"]) == "['a', 'b']"
        assert to_cell_value(Address("Paris", "75001")) == "Address(city='Paris', zip='75001')"


class TestFillRow:
    """Tests for fill_row and flatten_columns."""

    def test_flat_columns_in_order(self) -> None:
        spec = parse_column_spec(["age", "name"])
        assert fill_row(spec, Person("Ada", 36, None)) == [36, "Ada"]

    def test_header_mode_emits_names(self) -> None:
        spec = parse_column_spec(["name", {"address": ["city", "zip"]}])
        assert fill_row(spec, HEADER) == ["name", "city", "zip"]

    def test_nested_columns(self) -> None:
        spec = parse_column_spec(["name", {"address": ["city", "zip"]}])
        person = Person("Ada", 36, Address("London", "N1"))
        assert fill_row(spec, person) == ["Ada", "London", "N1"]

    def test_nested_single_leaf(self) -> None:
        spec = parse_column_spec([{"address": "city"}])
        assert fill_row(spec, Person("Ada", 36, Address("London", "N1"))) == ["London"]

    def test_deep_nesting_over_mappings(self) -> None:
        spec = parse_column_spec([{"order": {"customer": ["id", "email"]}}, "total"])
        record = {"order": {"customer": {"id": 7, "email": "a@b.c"}}, "total": 12.5}
        assert fill_row(spec, record) == [7, "a@b.c", 12.5]
        assert flatten_columns(spec) == ["id", "email", "total"]

    def test_missing_sub_object_gives_empty_cells(self) -> None:
        spec = parse_column_spec(["name", {"address": ["city", "zip"]}])
        assert fill_row(spec, Person("Ada", 36, None)) == ["Ada", None, None]

    def test_header_and_data_rows_align(self) -> None:
        spec = parse_column_spec([("name",), {"address": ["zip"]}, "age"])
        person = Person("Ada", 36, Address("London", "N1"))
        assert len(fill_row(spec, HEADER)) == len(fill_row(spec, person)) == 3

    def test_missing_field_raises(self) -> None:
        spec = parse_column_spec(["name", "email"])
        with pytest.raises(InvalidConfigurationError):
            fill_row(spec, Person("Ada", 36, None))

    def test_false_sub_object_is_not_treated_as_missing(self) -> None:
        spec = parse_column_spec([{"address": ["city"]}])
        with pytest.raises(InvalidConfigurationError):
            fill_row(spec, {"address": False})

    def test_zero_sub_object_is_not_treated_as_missing(self) -> None:
        spec = parse_column_spec([{"address": ["city"]}])
        with pytest.raises(InvalidConfigurationError):
            fill_row(spec, {"address": 0})
