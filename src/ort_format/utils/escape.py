"""Backslash escaping for ORT string tokens."""

from typing import Dict
from .splitter import is_escaped_at

# Characters that would otherwise be read as structure inside a value token.
ESCAPE_TABLE: Dict[str, str] = {
    "(": "\\(",
    ")": "\\)",
    "[": "\\[",
    "]": "\\]",
    ",": "\\,",
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}

UNESCAPE_TABLE: Dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


def escape(text: str) -> str:
    """
    Escape reserved and control characters in a string value.
    
    Args:
        text: Raw string
        
    Returns:
        Text safe to place in a data line
    """
    return "".join(ESCAPE_TABLE.get(ch, ch) for ch in text)


def escape_key(text: str) -> str:
    """Escape an object key or column name; colons are escaped as well."""
    return _protect_line_start(escape(text).replace(":", "\\:"))


def escape_token(text: str) -> str:
    """
    Escape a string value for use as a data-line token.
    
    Beyond escape(), a leading ``#`` or ``:`` and a trailing ``:`` are
    escaped so the token cannot be read as a comment or a header line.
    """
    escaped = _protect_line_start(escape(text))
    if escaped.endswith(":") and not is_escaped_at(escaped, len(escaped) - 1):
        escaped = escaped[:-1] + "\\:"
    return escaped


def _protect_line_start(escaped: str) -> str:
    if escaped[:1] in ("#", ":"):
        return "\\" + escaped
    return escaped


def unescape(text: str) -> str:
    """
    Reverse escape().
    
    ``\\n``, ``\\t`` and ``\\r`` become control characters; any other escaped
    character is passed through literally. A lone trailing backslash is kept.
    """
    result = []
    escaped = False
    
    for ch in text:
        if escaped:
            result.append(UNESCAPE_TABLE.get(ch, ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            result.append(ch)
    
    if escaped:
        result.append("\\")
    
    return "".join(result)
