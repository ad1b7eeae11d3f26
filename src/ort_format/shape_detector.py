"""Structure detection deciding how the generator renders a value."""

import logging
from typing import List, Optional, Set
from .fields import FieldSpec
from .types import SectionShape
from .value import OrtValue


class ShapeDetector:
    """
    Analyzes value trees to choose between tabular and inline renderings.

    All decisions depend only on the shape of the input, so identical
    inputs always produce identical output.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the shape detector.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def detect_top_level_shape(self, value: OrtValue) -> SectionShape:
        """
        Detect how a whole document value should be rendered.

        Args:
            value: Root value handed to the generator

        Returns:
            INLINE for objects with an empty key (no header can name it),
            MULTI_SECTION for objects without exactly one entry, the
            single-entry shape for one-entry objects, TABULAR or
            INLINE_ARRAY for arrays, INLINE for scalars
        """
        if value.is_object():
            if "" in value:
                return SectionShape.INLINE
            if len(value) != 1:
                return SectionShape.MULTI_SECTION
            (_, entry), = value.items()
            return self.detect_section_shape(entry)

        if value.is_array():
            if self.is_uniform_object_array(value.as_array()):
                return SectionShape.TABULAR
            return SectionShape.INLINE_ARRAY

        return SectionShape.INLINE

    def detect_section_shape(self, value: OrtValue) -> SectionShape:
        """
        Detect how the value of a named section should be rendered.

        Args:
            value: Value stored under the section key

        Returns:
            SectionShape for the section body
        """
        if not value.is_array():
            return SectionShape.INLINE

        items = value.as_array()
        if not items:
            return SectionShape.EMPTY_ARRAY
        if self.is_uniform_object_array(items):
            return SectionShape.TABULAR
        return SectionShape.INLINE_ARRAY

    def is_uniform_object_array(self, items: List[OrtValue]) -> bool:
        """
        Check whether every element is an object with the same key set.

        Key order inside an element does not matter; only the set of key
        names is compared.

        Args:
            items: Array elements

        Returns:
            True for a non-empty array of objects with identical key sets
        """
        if not items or not items[0].is_object():
            return False

        first_keys = set(items[0].keys())
        for item in items[1:]:
            if not item.is_object() or set(item.keys()) != first_keys:
                return False

        return True

    def derive_fields(self, records: List[OrtValue]) -> List[FieldSpec]:
        """
        Derive the header field specs for a list of records.

        Column order follows the first record's key order. A column becomes
        a nested field when the first record holds an object there and every
        other record holds either null or an object with the same key set;
        otherwise it stays a simple field and objects in it are written as
        inline literals.

        Args:
            records: Non-empty list of objects sharing one key set

        Returns:
            Ordered field specs
        """
        first = records[0]
        fields = []

        for name in first.keys():
            column = [record[name] for record in records]
            nested = self._nested_column_records(column)
            if nested is None:
                fields.append(FieldSpec.simple(name))
            else:
                fields.append(FieldSpec.nested(name, self.derive_fields(nested)))

        return fields

    def _nested_column_records(self, column: List[OrtValue]) -> Optional[List[OrtValue]]:
        """Return the non-null objects of a column if it can be nested, else None."""
        if not column[0].is_object():
            return None

        expected: Set[str] = set(column[0].keys())
        if "" in expected:
            self.logger.debug("Column holds objects with an empty key; writing inline literals")
            return None

        nested = []
        for value in column:
            if value.is_null():
                continue
            if not value.is_object() or set(value.keys()) != expected:
                self.logger.debug("Column holds objects of differing shapes; writing inline literals")
                return None
            # a tuple of blank values collapses to "()", which reads back as an empty object
            if len(value) and all(_renders_blank(v) for _, v in value.items()):
                return None
            nested.append(value)

        return nested

    def calculate_depth(self, value: OrtValue, current_depth: int = 0) -> int:
        """Calculate the maximum container nesting depth of a value."""
        if not (value.is_array() or value.is_object()):
            return current_depth

        children = value.as_array() if value.is_array() else [v for _, v in value.items()]
        max_child_depth = current_depth + 1
        for child in children:
            max_child_depth = max(max_child_depth, self.calculate_depth(child, current_depth + 1))

        return max_child_depth


def _renders_blank(value: OrtValue) -> bool:
    return value.is_null() or value.as_string() == ""
