"""
Tests for column resolution and type coercion
"""

import json
from datetime import datetime, timezone

import pytest

from crmstream.core.errors import CoercionError, ColumnNotFoundError
from crmstream.core.projector import coerce, project, resolve
from crmstream.core.types import Cell, Column, ColumnKind


def col(spec):
    return Column.parse(spec)


class TestResolve:
    """Test column resolution against raw records"""

    def test_direct_key_wins_over_properties(self):
        record = {"name": "Acme", "properties": {"name": "Acme Props"}}
        assert resolve(record, col("name:string")) == "Acme"

    def test_falls_back_to_properties(self):
        record = {"properties": {"industry": "Tech"}}
        assert resolve(record, col("industry:string")) == "Tech"

    def test_dotted_path(self):
        record = {"properties": {"email": "a@b.com"}}
        assert resolve(record, col("properties.email:string")) == "a@b.com"

    def test_dotted_path_missing(self):
        record = {"properties": {"email": "a@b.com"}}
        with pytest.raises(ColumnNotFoundError, match="properties.missing") as exc_info:
            resolve(record, col("properties.missing:string"))
        assert exc_info.value.column == "properties.missing"

    def test_dotted_path_does_not_use_fallback(self):
        """Test dotted names are walked from the top level only"""
        record = {"properties": {"address": {"city": "Berlin"}}}
        with pytest.raises(ColumnNotFoundError):
            resolve(record, col("address.city:string"))

    def test_dotted_path_through_non_object(self):
        record = {"properties": {"email": "a@b.com"}}
        with pytest.raises(ColumnNotFoundError):
            resolve(record, col("properties.email.domain:string"))

    def test_flat_missing(self):
        with pytest.raises(ColumnNotFoundError, match="source column 'phone' not found"):
            resolve({"properties": {}}, col("phone:string"))

    def test_flat_missing_without_properties(self):
        with pytest.raises(ColumnNotFoundError):
            resolve({"id": "1"}, col("phone:string"))

    def test_null_value_is_present(self):
        """Test a JSON null still counts as a present key"""
        assert resolve({"properties": {"phone": None}}, col("phone:json")) is None


class TestCoerce:
    """Test coercion to declared kinds"""

    def test_boolean(self):
        assert coerce(True, col("archived:boolean")) == Cell(ColumnKind.BOOLEAN, True)

    def test_boolean_from_string_fails(self):
        with pytest.raises(CoercionError, match="cannot convert column 'archived' to type BOOLEAN"):
            coerce("true", col("archived:boolean"))

    def test_string_verbatim(self):
        assert coerce("  Alice ", col("firstname:string")).value == "  Alice "

    def test_string_from_number_fails(self):
        with pytest.raises(CoercionError):
            coerce(42, col("id:string"))

    def test_string_from_null_fails(self):
        with pytest.raises(CoercionError):
            coerce(None, col("phone:string"))

    def test_timestamp(self):
        cell = coerce("2024-01-15T10:30:00Z", col("createdAt:timestamp"))
        assert cell.kind == ColumnKind.TIMESTAMP
        assert cell.value == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_timestamp_unparseable_fails(self):
        with pytest.raises(CoercionError) as exc_info:
            coerce("not-a-date", col("createdAt:timestamp"))
        assert exc_info.value.kind == ColumnKind.TIMESTAMP

    def test_timestamp_from_number_fails(self):
        with pytest.raises(CoercionError):
            coerce(1705314600000, col("createdAt:timestamp"))

    @pytest.mark.parametrize(
        "value",
        [{"b": 1, "a": [1, 2]}, [1, "two", None], "text", 3.5, 7, True, None],
    )
    def test_json_always_succeeds(self, value):
        cell = coerce(value, col("anything:json"))
        assert cell.kind == ColumnKind.JSON
        assert json.loads(cell.value) == value

    def test_json_is_compact_and_sorted(self):
        cell = coerce({"b": 1, "a": {"d": 2, "c": 3}}, col("x:json"))
        assert cell.value == '{"a":{"c":3,"d":2},"b":1}'

    def test_json_keeps_non_ascii(self):
        assert coerce("Zürich", col("city:json")).value == '"Zürich"'

    @pytest.mark.parametrize(
        "spec, value, expected",
        [
            ("num_notes:integer", 12, "12"),
            ("amount:decimal", 1500.5, "1500.5"),
            ("score:float", -0.25, "-0.25"),
            ("id:uuid", 7, "7"),
        ],
    )
    def test_numeric_as_string(self, spec, value, expected):
        cell = coerce(value, col(spec))
        assert cell == Cell(ColumnKind.STRING, expected)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1e16, "10000000000000000"),
            (1.5e-7, "0.00000015"),
            (123456789012345678901234567890, "123456789012345678901234567890"),
            (3.0, "3.0"),
        ],
    )
    def test_numeric_text_is_plain_decimal(self, value, expected):
        assert coerce(value, col("amount:decimal")).value == expected

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_numeric_rejects_non_finite(self, value):
        with pytest.raises(CoercionError):
            coerce(value, col("amount:decimal"))

    @pytest.mark.parametrize("value", ["12", True, None, {"n": 1}, [1]])
    def test_numeric_rejects_non_numbers(self, value):
        with pytest.raises(CoercionError, match="to type INTEGER"):
            coerce(value, col("num_notes:integer"))


class TestProject:
    """Test projecting whole rows"""

    def test_row_in_column_order(self, contacts):
        columns = [
            col("properties.email:string"),
            col("id:string"),
            col("archived:boolean"),
            col("num_notes:integer"),
            col("createdAt:timestamp"),
        ]
        row = project(contacts[0], columns)

        assert [cell.value for cell in row[:4]] == ["alice@example.com", "1", False, "3"]
        assert row[4].value == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_one_bad_column_fails_the_row(self, contacts):
        columns = [col("id:string"), col("archived:string")]
        with pytest.raises(CoercionError, match="archived"):
            project(contacts[0], columns)

    def test_no_columns(self, contacts):
        assert project(contacts[0], []) == []
