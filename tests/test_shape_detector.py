"""Tests for shape detection."""

from ort_format.fields import FieldSpec
from ort_format.shape_detector import ShapeDetector
from ort_format.types import SectionShape
from ort_format.value import OrtValue


def _values(data):
    return OrtValue.from_native(data).as_array()


class TestShapeDetector:
    """Tests for ShapeDetector class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.detector = ShapeDetector()

    def test_uniform_object_array(self):
        """Test detection of identical key sets."""
        items = _values([{"a": 1, "b": 2}, {"a": 3, "b": 4}])

        assert self.detector.is_uniform_object_array(items)

    def test_key_order_does_not_matter(self):
        """Test that reordering keys keeps the result."""
        items = _values([{"a": 1, "b": 2}, {"b": 4, "a": 3}])

        assert self.detector.is_uniform_object_array(items)

    def test_changed_key_set_breaks_uniformity(self):
        """Test that a missing or extra key is detected."""
        assert not self.detector.is_uniform_object_array(_values([{"a": 1}, {"a": 1, "b": 2}]))
        assert not self.detector.is_uniform_object_array(_values([{"a": 1, "b": 2}, {"a": 1}]))
        assert not self.detector.is_uniform_object_array(_values([{"a": 1}, {"b": 1}]))

    def test_non_objects_are_not_uniform(self):
        """Test scalars, mixed arrays and empty arrays."""
        assert not self.detector.is_uniform_object_array([])
        assert not self.detector.is_uniform_object_array(_values([1, 2]))
        assert not self.detector.is_uniform_object_array(_values([{"a": 1}, 2]))

    def test_detect_section_shape(self):
        """Test the section shape for each kind of value."""
        detect = self.detector.detect_section_shape

        assert detect(OrtValue.from_native([{"a": 1}])) == SectionShape.TABULAR
        assert detect(OrtValue.from_native([])) == SectionShape.EMPTY_ARRAY
        assert detect(OrtValue.from_native([1, "x"])) == SectionShape.INLINE_ARRAY
        assert detect(OrtValue.from_native({"a": 1})) == SectionShape.INLINE
        assert detect(OrtValue.from_native("x")) == SectionShape.INLINE

    def test_detect_top_level_shape(self):
        """Test the document shape."""
        detect = self.detector.detect_top_level_shape

        assert detect(OrtValue.from_native({})) == SectionShape.MULTI_SECTION
        assert detect(OrtValue.from_native({"a": 1, "b": 2})) == SectionShape.MULTI_SECTION
        assert detect(OrtValue.from_native({"a": []})) == SectionShape.EMPTY_ARRAY
        assert detect(OrtValue.from_native([{"a": 1}])) == SectionShape.TABULAR
        assert detect(OrtValue.from_native([1])) == SectionShape.INLINE_ARRAY
        assert detect(OrtValue.from_native(1)) == SectionShape.INLINE

    def test_derive_fields_follows_first_record(self):
        """Test column order and nesting."""
        records = _values([
            {"id": 1, "geo": {"lat": 1, "lng": 2}, "name": "a"},
            {"name": "b", "geo": {"lng": 4, "lat": 3}, "id": 2},
        ])

        fields = self.detector.derive_fields(records)

        assert fields == [
            FieldSpec.simple("id"),
            FieldSpec.nested("geo", [FieldSpec.simple("lat"), FieldSpec.simple("lng")]),
            FieldSpec.simple("name"),
        ]

    def test_derive_fields_inconsistent_column_stays_simple(self):
        """Test that a column mixing objects and scalars is not nested."""
        records = _values([{"v": {"a": 1}}, {"v": 5}])

        assert self.detector.derive_fields(records) == [FieldSpec.simple("v")]

    def test_derive_fields_all_null_object_stays_simple(self):
        """Test that an object of nulls is not nested."""
        records = _values([{"v": {"a": None}}, {"v": {"a": 1}}])

        assert self.detector.derive_fields(records) == [FieldSpec.simple("v")]

    def test_derive_fields_empty_string_object_stays_simple(self):
        """Test that an object of empty strings is not nested."""
        records = _values([{"v": {"a": ""}}, {"v": {"a": "x"}}])

        assert self.detector.derive_fields(records) == [FieldSpec.simple("v")]

    def test_derive_fields_empty_key_stays_simple(self):
        """Test that objects with an empty key are not nested."""
        records = _values([{"v": {"": 1, "a": 2}}])

        assert self.detector.derive_fields(records) == [FieldSpec.simple("v")]

    def test_empty_key_document_is_inline(self):
        """Test the document shape of an object with an empty key."""
        value = OrtValue.from_native({"": 1, "b": 2})

        assert self.detector.detect_top_level_shape(value) == SectionShape.INLINE

    def test_calculate_depth(self):
        """Test container nesting depth."""
        assert self.detector.calculate_depth(OrtValue.from_native(1)) == 0
        assert self.detector.calculate_depth(OrtValue.from_native([])) == 1
        assert self.detector.calculate_depth(OrtValue.from_native({"a": [{"b": 1}]})) == 3
