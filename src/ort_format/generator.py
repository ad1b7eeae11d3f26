"""ORT generator: renders an OrtValue tree as ORT text."""

import logging
import math
from typing import Any, Dict, List, Optional
from .fields import FieldSpec, format_field_spec
from .shape_detector import ShapeDetector
from .types import SectionShape
from .utils.escape import escape_key, escape_token
from .utils.splitter import strip_padding
from .value import NULL, OrtValue


class OrtGenerator:
    """
    Generator producing ORT text from any value tree.

    Uniform arrays of objects become tabular sections with a shared header;
    everything else is written as inline literals. Generation never fails:
    shapes that cannot be tabulated fall back to the inline form.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the ORT generator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.detector = ShapeDetector(self.logger)

    def generate(self, value: Any) -> str:
        """
        Generate ORT text for a value.

        Args:
            value: OrtValue or native JSON-compatible data

        Returns:
            ORT document text
        """
        value = OrtValue.from_native(value)
        shape = self.detector.detect_top_level_shape(value)
        self.logger.debug(f"Generating ORT for a {shape.value} document")

        if value.is_object():
            # an empty key has no header form
            if "" in value:
                return ":" + self.render_inline(value)
            if len(value) != 1:
                return self._generate_multi_section(value.as_object())
            (key, entry), = value.items()
            return self._generate_section(key, entry)

        if value.is_array():
            items = value.as_array()
            if self.detector.is_uniform_object_array(items):
                table = self._generate_table(":", items)
                if table is not None:
                    return table
            return ":" + self.render_inline(value)

        return self.render_inline(value)

    def _generate_multi_section(self, entries: Dict[str, OrtValue]) -> str:
        """Render each entry as a named section, sorted by key, blank-line separated."""
        sections = [
            self._generate_section(key, entries[key]).rstrip("\n")
            for key in sorted(entries)
        ]
        if not sections:
            return ""
        self.logger.debug(f"Generated {len(sections)} sections")
        return "\n\n".join(sections) + "\n"

    def _generate_section(self, key: str, value: OrtValue) -> str:
        """Render one named section."""
        prefix = f"{escape_key(key)}:"
        shape = self.detector.detect_section_shape(value)

        if shape == SectionShape.TABULAR:
            table = self._generate_table(prefix, value.as_array())
            if table is not None:
                return table
            self.logger.debug(f"Section '{key}' cannot be tabulated; writing inline array")
        elif shape == SectionShape.EMPTY_ARRAY:
            return f"{prefix}\n[]"

        return f"{prefix}\n{self.render_inline(value)}"

    def _generate_table(self, prefix: str, records: List[OrtValue]) -> Optional[str]:
        """
        Render records as a header line plus one data line per record.

        Args:
            prefix: ``key:`` for a named section, ``:`` for an anonymous one
            records: Objects sharing one key set

        Returns:
            Tabular text, or None when a column name is empty or a row would
            be indistinguishable from a blank line (no columns, or a single
            column holding null)
        """
        fields = self.detector.derive_fields(records)
        if not fields or any(not field.name for field in fields):
            return None

        lines = [f"{prefix}{format_field_spec(fields)}:"]
        for record in records:
            row = self._render_row(fields, record)
            if not strip_padding(row):
                return None
            lines.append(row)

        return "\n".join(lines)

    def _render_row(self, fields: List[FieldSpec], record: OrtValue) -> str:
        return ",".join(
            self._render_column(field, record.get(field.name, NULL))
            for field in fields
        )

    def _render_column(self, field: FieldSpec, value: OrtValue) -> str:
        """Render a column value; nested objects drop their keys, the header names them."""
        if field.is_nested and value.is_object():
            if not len(value):
                return "()"
            return f"({self._render_row(field.children, value)})"
        return self.render_inline(value)

    def render_inline(self, value: OrtValue) -> str:
        """
        Render a value as a single inline literal token.

        Args:
            value: Any value

        Returns:
            Empty text for null, ``true``/``false``, number text, escaped
            string, ``[a,b]`` for arrays and ``(k:v)`` for objects
        """
        if value.is_null():
            return ""
        if value.is_bool():
            return "true" if value.as_bool() else "false"
        if value.is_number():
            return format_number(value.as_number())
        if value.is_string():
            return escape_token(value.as_string())
        if value.is_array():
            return "[" + ",".join(self.render_inline(item) for item in value.as_array()) + "]"

        pairs = (f"{escape_key(k)}:{self.render_inline(v)}" for k, v in value.items())
        return "(" + ",".join(pairs) + ")"


def format_number(number: float) -> str:
    """
    Decimal text for a number.

    Integral values below 2**53 are written without a fractional part.
    NaN and infinities have no decimal form and are written as null.
    """
    if not math.isfinite(number):
        return ""
    if number.is_integer() and abs(number) < 2 ** 53:
        return str(int(number))
    return repr(number)


def generate_ort(value: Any, logger: Optional[logging.Logger] = None) -> str:
    """Generate ORT text with a default OrtGenerator."""
    return OrtGenerator(logger).generate(value)
