"""ORT parser: turns ORT text into an OrtValue tree."""

import logging
import re
from typing import List, Optional, Tuple
from .fields import FieldSpec, parse_field_spec
from .types import ErrorType, OrtError
from .utils.escape import unescape
from .utils.splitter import (
    PADDING,
    find_unescaped,
    is_escaped_at,
    split_top_level,
    strip_padding,
)
from .value import OrtValue


_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

DataLine = Tuple[int, str]


class OrtParser:
    """
    Recursive-descent parser for ORT documents.

    Scans the document line by line. Each header line opens a section whose
    data lines run until the next header or end of input. Named sections are
    collected into a top-level object; an anonymous section is the whole
    result of the parse.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the ORT parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, content: str) -> OrtValue:
        """
        Parse a complete ORT document.

        Args:
            content: ORT text

        Returns:
            Top-level object of named sections, or the decoded value of an
            anonymous section

        Raises:
            OrtError: At the first malformed header, unbalanced field spec
                or value count mismatch
        """
        lines = content.split("\n")
        result = {}
        index = 0

        while index < len(lines):
            line = strip_padding(lines[index])

            if not line or line.startswith("#"):
                index += 1
                continue

            if ":" not in line:
                self.logger.debug(f"Skipping stray line {index + 1} outside any section")
                index += 1
                continue

            line_num = index + 1

            # ":[...]" carries an anonymous inline value on the header line itself
            if line.startswith(":") and not _ends_with_colon(line):
                return self.decode_value(line[1:], line, line_num)

            key, fields = self._parse_header(line, line_num)
            end = self._find_section_end(lines, index + 1)
            data_lines = self._collect_data_lines(lines, index + 1, end)
            value = self._decode_section(fields, data_lines)

            if key is None:
                self.logger.debug(f"Anonymous section at line {line_num} with {len(data_lines)} data lines")
                # A single-record anonymous section is a bare record
                if fields and len(data_lines) == 1 and value.is_array() and len(value) == 1:
                    return value[0]
                return value

            self.logger.debug(f"Section '{key}' at line {line_num} with {len(data_lines)} data lines")
            result[key] = value
            index = end

        return OrtValue.from_object(result)

    # -- Sections --------------------------------------------------------

    def _parse_header(self, line: str, line_num: int) -> Tuple[Optional[str], List[FieldSpec]]:
        """
        Split a header line into its key (None when anonymous) and field specs.

        Raises:
            OrtError: If a named header lacks its closing colon
        """
        if line.startswith(":"):
            return None, parse_field_spec(_strip_trailing_colons(line[1:]), line, line_num)

        if not is_header(line):
            raise OrtError(
                line_num, line,
                "Invalid header format: expected 'key:fields:'",
                ErrorType.HEADER,
            )

        separator = find_unescaped(line, ":")
        if separator is None:
            raise OrtError(line_num, line, "Invalid header format", ErrorType.HEADER)

        key = unescape(strip_padding(line[:separator]))
        spec_text = strip_padding(_strip_trailing_colons(line[separator + 1:]))
        return key, parse_field_spec(spec_text, line, line_num)

    def _find_section_end(self, lines: List[str], start: int) -> int:
        """Return the index of the next header line, or len(lines)."""
        for index in range(start, len(lines)):
            candidate = strip_padding(lines[index])
            if not candidate or candidate.startswith("#"):
                continue
            if is_header(candidate):
                return index
        return len(lines)

    def _collect_data_lines(self, lines: List[str], start: int, end: int) -> List[DataLine]:
        data_lines = []
        for index in range(start, end):
            candidate = strip_padding(lines[index])
            if candidate and not candidate.startswith("#"):
                data_lines.append((index + 1, candidate))
        return data_lines

    def _decode_section(self, fields: List[FieldSpec], data_lines: List[DataLine]) -> OrtValue:
        """Decode a section's data lines against its field specs."""
        if not fields:
            if not data_lines:
                return OrtValue.null()
            if len(data_lines) > 1:
                self.logger.debug(f"Ignoring {len(data_lines) - 1} extra data lines after line {data_lines[0][0]}")
            line_num, line = data_lines[0]
            return self.decode_value(line, line, line_num)

        rows = []
        for line_num, line in data_lines:
            tokens = split_top_level(line)
            if len(tokens) != len(fields):
                raise OrtError(
                    line_num, line,
                    f"Expected {len(fields)} values but got {len(tokens)}",
                    ErrorType.VALUE_COUNT,
                )
            rows.append(self._decode_record(fields, tokens, line, line_num))

        return OrtValue.from_array(rows)

    def _decode_record(self, fields: List[FieldSpec], tokens: List[str],
                       line: str, line_num: int) -> OrtValue:
        record = {}
        for field, token in zip(fields, tokens):
            record[field.name] = self.decode_field(field, token, line, line_num)
        return OrtValue.from_object(record)

    # -- Values ----------------------------------------------------------

    def decode_field(self, field: FieldSpec, token: str,
                     line: str = "", line_num: int = 0) -> OrtValue:
        """
        Decode one data-line token according to its field spec.

        Nested fields take a positional tuple ``(v1,v2,...)`` matching the
        sub-schema. Empty, ``()`` and bracketed array tokens are accepted as
        well; any other shape is decoded as a plain value.

        Raises:
            OrtError: If a tuple's value count does not match the sub-schema
        """
        if not field.is_nested:
            return self.decode_value(token, line, line_num)

        trimmed = strip_padding(token)
        if not trimmed:
            return OrtValue.null()
        if trimmed == "()":
            return OrtValue.from_object()
        if _is_wrapped(trimmed, "[", "]"):
            return self.decode_value(trimmed, line, line_num)
        if not _is_wrapped(trimmed, "(", ")"):
            self.logger.debug(f"Nested field '{field.name}' holds a plain value at line {line_num}")
            return self.decode_value(trimmed, line, line_num)

        tokens = split_top_level(trimmed[1:-1])
        if len(tokens) != len(field.children):
            raise OrtError(
                line_num, line,
                f"Expected {len(field.children)} nested values but got {len(tokens)}",
                ErrorType.NESTED_COUNT,
            )
        return self._decode_record(field.children, tokens, line, line_num)

    def decode_value(self, token: str, line: str = "", line_num: int = 0) -> OrtValue:
        """
        Decode a scalar or inline composite token.

        Args:
            token: Raw token text (escapes still present)
            line: Source line, for error reporting
            line_num: 1-based line number, for error reporting

        Returns:
            Null for an empty token, an array for ``[...]``, an object for
            ``(k:v,...)``, otherwise a number, bool or string
        """
        trimmed = strip_padding(token)

        if not trimmed:
            return OrtValue.null()
        if trimmed == "[]":
            return OrtValue.from_array()
        if trimmed == "()":
            return OrtValue.from_object()
        if _is_wrapped(trimmed, "[", "]"):
            return self._decode_array(trimmed[1:-1], line, line_num)
        if _is_wrapped(trimmed, "(", ")"):
            return self._decode_inline_object(trimmed[1:-1], line, line_num)

        return decode_scalar(unescape(trimmed))

    def _decode_array(self, inner: str, line: str, line_num: int) -> OrtValue:
        if not strip_padding(inner):
            return OrtValue.from_array()
        # a trailing empty element is a null, as in "[1,]"
        items = [self.decode_value(part, line, line_num) for part in split_top_level(inner)]
        return OrtValue.from_array(items)

    def _decode_inline_object(self, inner: str, line: str, line_num: int) -> OrtValue:
        entries = {}
        for pair in split_top_level(inner, drop_trailing_blank=True):
            separator = find_unescaped(pair, ":")
            if separator is None:
                self.logger.debug(f"Skipping inline object part without a key at line {line_num}: {pair!r}")
                continue
            key = unescape(strip_padding(pair[:separator]))
            entries[key] = self.decode_value(pair[separator + 1:], line, line_num)
        return OrtValue.from_object(entries)


def decode_scalar(text: str) -> OrtValue:
    """Classify unescaped text as number, bool or string, in that order."""
    if _INTEGER_RE.fullmatch(text):
        return OrtValue.from_number(float(int(text)))
    if _FLOAT_RE.fullmatch(text):
        return OrtValue.from_number(float(text))
    if text == "true":
        return OrtValue.from_bool(True)
    if text == "false":
        return OrtValue.from_bool(False)
    return OrtValue.from_string(text)


def is_header(line: str) -> bool:
    """True when a stripped line starts with ``:`` or ends with an unescaped ``:``."""
    return line.startswith(":") or _ends_with_colon(line)


def _ends_with_colon(text: str) -> bool:
    return text.endswith(":") and not is_escaped_at(text, len(text) - 1)


def _is_wrapped(text: str, opener: str, closer: str) -> bool:
    return (
        len(text) >= 2
        and text.startswith(opener)
        and text.endswith(closer)
        and not is_escaped_at(text, len(text) - 1)
    )


def _strip_trailing_colons(text: str) -> str:
    text = text.rstrip(PADDING)
    while text.endswith(":") and not is_escaped_at(text, len(text) - 1):
        text = text[:-1].rstrip(PADDING)
    return text


def parse_ort(content: str, logger: Optional[logging.Logger] = None) -> OrtValue:
    """Parse ORT text with a default OrtParser."""
    return OrtParser(logger).parse(content)
