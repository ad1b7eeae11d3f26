"""Field specs: the column schema embedded in section headers."""

from dataclasses import dataclass
from typing import List, Optional
from .types import ErrorType, OrtError
from .utils.escape import escape_key, unescape
from .utils.splitter import UnbalancedDelimiterError, find_unescaped, split_top_level, strip_padding


@dataclass
class FieldSpec:
    """
    One column of a section header.

    A simple field has ``children`` set to None; a nested field carries the
    ordered sub-schema of the record stored in that column.
    """

    name: str
    children: Optional[List["FieldSpec"]] = None

    @property
    def is_nested(self) -> bool:
        return self.children is not None

    @classmethod
    def simple(cls, name: str) -> "FieldSpec":
        return cls(name=name)

    @classmethod
    def nested(cls, name: str, children: List["FieldSpec"]) -> "FieldSpec":
        return cls(name=name, children=list(children))


def parse_field_spec(spec: str, line: str = "", line_num: int = 0) -> List[FieldSpec]:
    """
    Parse the text between a header's colons into field specs.

    Args:
        spec: Field spec text, e.g. ``id,name,address(city,geo(lat,lng))``
        line: Full header line, reported on error
        line_num: 1-based line number, reported on error

    Returns:
        Ordered list of FieldSpec; empty for an empty spec

    Raises:
        OrtError: On unbalanced parentheses or text trailing a nested group
    """
    if not strip_padding(spec):
        return []

    try:
        parts = split_top_level(spec, track_brackets=False, strict=True)
    except UnbalancedDelimiterError as e:
        raise OrtError(line_num, line, str(e), ErrorType.FIELD_SPEC)

    fields: List[FieldSpec] = []
    for part in parts:
        part = strip_padding(part)
        if not part:
            continue

        open_index = find_unescaped(part, "(")
        if open_index is None:
            fields.append(FieldSpec.simple(unescape(part)))
            continue

        name = unescape(strip_padding(part[:open_index]))
        group = part[open_index:]
        if not group.endswith(")"):
            raise OrtError(
                line_num, line,
                f"Unexpected text after nested field '{name}'",
                ErrorType.FIELD_SPEC,
            )

        children = parse_field_spec(group[1:-1], line, line_num)
        fields.append(FieldSpec.nested(name, children))

    return fields


def format_field_spec(fields: List[FieldSpec]) -> str:
    """Render field specs back into header text."""
    rendered = []
    for field in fields:
        name = escape_key(field.name)
        if field.is_nested:
            rendered.append(f"{name}({format_field_spec(field.children)})")
        else:
            rendered.append(name)
    return ",".join(rendered)
