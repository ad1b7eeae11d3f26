"""Tests for field specs."""

import pytest
from ort_format.fields import FieldSpec, format_field_spec, parse_field_spec
from ort_format.types import ErrorType, OrtError


class TestParseFieldSpec:
    """Tests for parse_field_spec."""

    def test_simple_fields(self):
        """Test a flat column list."""
        fields = parse_field_spec("id,name,email")

        assert [f.name for f in fields] == ["id", "name", "email"]
        assert not any(f.is_nested for f in fields)

    def test_empty_spec(self):
        """Test that an empty spec yields no fields."""
        assert parse_field_spec("") == []
        assert parse_field_spec("   ") == []

    def test_nested_fields(self):
        """Test recursive sub-schemas."""
        fields = parse_field_spec("id,address(city,geo(lat,lng))")

        assert fields[0] == FieldSpec.simple("id")
        address = fields[1]
        assert address.is_nested
        assert [f.name for f in address.children] == ["city", "geo"]
        assert [f.name for f in address.children[1].children] == ["lat", "lng"]

    def test_empty_nested_group(self):
        """Test a nested field with no columns."""
        fields = parse_field_spec("meta()")

        assert fields == [FieldSpec.nested("meta", [])]

    def test_names_are_unescaped(self):
        """Test escaped characters in column names."""
        fields = parse_field_spec("a\\:b,c\\,d")

        assert [f.name for f in fields] == ["a:b", "c,d"]

    def test_unmatched_closing_parenthesis(self):
        """Test the error for a stray closer."""
        with pytest.raises(OrtError) as exc_info:
            parse_field_spec("id),name", "x:id),name:", 4)

        error = exc_info.value
        assert error.error_type == ErrorType.FIELD_SPEC
        assert error.line == 4
        assert error.code == "x:id),name:"

    def test_unclosed_group(self):
        """Test the error for a missing closer."""
        with pytest.raises(OrtError):
            parse_field_spec("id,address(city")

    def test_text_after_nested_group(self):
        """Test the error for trailing text after a group."""
        with pytest.raises(OrtError, match="Unexpected text after nested field 'address'"):
            parse_field_spec("address(city)x")


class TestFormatFieldSpec:
    """Tests for format_field_spec."""

    def test_format_round_trips(self):
        """Test that formatting and parsing agree."""
        spec = "id,address(city,geo(lat,lng)),tags"

        assert format_field_spec(parse_field_spec(spec)) == spec

    def test_names_are_escaped(self):
        """Test escaping of reserved characters in names."""
        fields = [FieldSpec.simple("a:b"), FieldSpec.simple("x(y)")]

        assert format_field_spec(fields) == "a\\:b,x\\(y\\)"
