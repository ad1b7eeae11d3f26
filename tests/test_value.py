"""Tests for the OrtValue tree."""

import pytest
from ort_format.types import ValueKind
from ort_format.value import NULL, OrtValue


class TestOrtValueConstruction:
    """Tests for building values."""

    def test_from_native_scalars(self):
        """Test mapping of native scalars to value kinds."""
        assert OrtValue.from_native(None).is_null()
        assert OrtValue.from_native(True).kind == ValueKind.BOOL
        assert OrtValue.from_native(3).kind == ValueKind.NUMBER
        assert OrtValue.from_native(2.5).as_number() == 2.5
        assert OrtValue.from_native("hi").as_string() == "hi"

    def test_bool_is_not_a_number(self):
        """Test that bool is detected before int."""
        value = OrtValue.from_native(False)

        assert value.is_bool()
        assert value.as_number() is None

    def test_integers_are_widened(self):
        """Test that every number is stored as a float."""
        value = OrtValue.from_number(7)

        assert isinstance(value.as_number(), float)
        assert value.as_int() == 7

    def test_from_native_containers(self):
        """Test recursive conversion of lists and dicts."""
        value = OrtValue.from_native({"a": [1, {"b": None}], "c": (1, 2)})

        assert value.is_object()
        assert value["a"].is_array()
        assert value["a"][1]["b"].is_null()
        assert value["c"].as_array() == [OrtValue.from_number(1), OrtValue.from_number(2)]

    def test_from_native_rejects_unknown_types(self):
        """Test that unsupported types raise TypeError."""
        with pytest.raises(TypeError):
            OrtValue.from_native({"when": object()})

    def test_to_native_round_trip(self):
        """Test conversion back to native data."""
        data = {"a": [1.0, "x", None, True], "b": {}}

        assert OrtValue.from_native(data).to_native() == data

    def test_from_native_passes_values_through(self):
        """Test that an OrtValue is returned unchanged."""
        value = OrtValue.from_string("x")

        assert OrtValue.from_native(value) is value


class TestOrtValueAccessors:
    """Tests for narrowing accessors and lookups."""

    def test_accessors_return_none_on_mismatch(self):
        """Test that narrowing never raises."""
        value = OrtValue.from_string("text")

        assert value.as_bool() is None
        assert value.as_number() is None
        assert value.as_int() is None
        assert value.as_array() is None
        assert value.as_object() is None

    def test_as_int_truncates(self):
        """Test truncation toward zero."""
        assert OrtValue.from_number(-2.7).as_int() == -2
        assert OrtValue.from_number(float("nan")).as_int() is None

    def test_missing_lookups_yield_null(self):
        """Test graceful lookups on missing keys and scalars."""
        obj = OrtValue.from_native({"a": 1})
        arr = OrtValue.from_native([1, 2])

        assert obj["missing"] is NULL
        assert arr[5].is_null()
        assert arr[-1].is_null()
        assert OrtValue.from_number(1)["a"].is_null()
        assert obj.get("missing") is None
        assert arr.get(0).as_number() == 1.0

    def test_len_contains_and_iteration(self):
        """Test container protocol helpers."""
        obj = OrtValue.from_native({"x": 1, "y": 2})
        arr = OrtValue.from_native(["a", "b"])

        assert len(obj) == 2
        assert len(OrtValue.from_number(1)) == 0
        assert "x" in obj
        assert "a" in arr
        assert list(obj) == ["x", "y"]
        assert obj.keys() == ["x", "y"]
        assert [str(v) for v in arr] == ['"a"', '"b"']


class TestOrtValueComparison:
    """Tests for equality and display."""

    def test_object_equality_ignores_key_order(self):
        """Test structural equality of objects."""
        first = OrtValue.from_native({"a": 1, "b": 2})
        second = OrtValue.from_native({"b": 2, "a": 1})

        assert first == second

    def test_kind_matters_for_equality(self):
        """Test that number and string never compare equal."""
        assert OrtValue.from_number(1) != OrtValue.from_string("1")

    def test_values_are_unhashable(self):
        """Test that mutable containers are not hashable."""
        with pytest.raises(TypeError):
            hash(OrtValue.from_number(1))

    def test_display_form(self):
        """Test the JSON-like display form."""
        value = OrtValue.from_native({"n": 1, "s": "x", "l": [True, None], "f": 1.5})

        assert str(value) == '{"n": 1, "s": "x", "l": [true, null], "f": 1.5}'
