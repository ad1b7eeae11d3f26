"""Text utilities shared by the ORT parser and generator."""

from .escape import escape, escape_key, escape_token, unescape
from .splitter import (
    PADDING,
    UnbalancedDelimiterError,
    find_unescaped,
    is_escaped_at,
    split_top_level,
    strip_padding,
)

__all__ = [
    "escape",
    "escape_key",
    "escape_token",
    "unescape",
    "UnbalancedDelimiterError",
    "find_unescaped",
    "is_escaped_at",
    "split_top_level",
    "strip_padding",
    "PADDING",
]
