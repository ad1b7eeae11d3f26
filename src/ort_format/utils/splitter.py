"""Balanced top-level splitting of ORT text."""

from typing import List, Optional

# Padding around lines and tokens; any other whitespace is content.
PADDING = " \t\r"


class UnbalancedDelimiterError(ValueError):
    """Raised by a strict split when parentheses or brackets do not balance."""
    
    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.position = position


def split_top_level(text: str, separator: str = ",",
                    track_parens: bool = True,
                    track_brackets: bool = True,
                    honor_escapes: bool = True,
                    drop_trailing_blank: bool = False,
                    strict: bool = False) -> List[str]:
    """
    Split text on separators that are not nested or escaped.
    
    Parenthesis depth, bracket depth and backslash-escape state are tracked
    together, so a separator inside ``(...)``, ``[...]`` or written as
    ``\\,`` does not split. Escape sequences are kept verbatim in the parts;
    unescaping is left to the caller.
    
    Args:
        text: Text to split
        separator: Single separator character
        track_parens: Count ``(``/``)`` nesting
        track_brackets: Count ``[``/``]`` nesting
        honor_escapes: Treat ``\\`` as escaping the next character
        drop_trailing_blank: Omit the last part when it is only whitespace
        strict: Raise UnbalancedDelimiterError on a stray closer or an
            unclosed opener instead of tolerating it
        
    Returns:
        List of parts (always at least one unless the trailing blank part
        is dropped)
    """
    parts: List[str] = []
    current: List[str] = []
    paren_depth = 0
    bracket_depth = 0
    escaped = False
    
    for position, ch in enumerate(text):
        if escaped:
            current.append(ch)
            escaped = False
            continue
        
        if ch == "\\" and honor_escapes:
            escaped = True
            current.append(ch)
            continue
        
        if track_parens and ch == "(":
            paren_depth += 1
        elif track_parens and ch == ")":
            paren_depth -= 1
            if paren_depth < 0 and strict:
                raise UnbalancedDelimiterError("Unmatched closing parenthesis", position)
        elif track_brackets and ch == "[":
            bracket_depth += 1
        elif track_brackets and ch == "]":
            bracket_depth -= 1
            if bracket_depth < 0 and strict:
                raise UnbalancedDelimiterError("Unmatched closing bracket", position)
        elif ch == separator and paren_depth == 0 and bracket_depth == 0:
            parts.append("".join(current))
            current = []
            continue
        
        current.append(ch)
    
    if strict and paren_depth > 0:
        raise UnbalancedDelimiterError("Unmatched opening parenthesis", len(text))
    if strict and bracket_depth > 0:
        raise UnbalancedDelimiterError("Unmatched opening bracket", len(text))
    
    last = "".join(current)
    if not (drop_trailing_blank and not strip_padding(last)):
        parts.append(last)
    
    return parts


def find_unescaped(text: str, target: str, start: int = 0) -> Optional[int]:
    """
    Return the index of the first unescaped occurrence of target, or None.
    
    Args:
        text: Text to search
        target: Single character to look for
        start: Index to start searching from
    """
    escaped = False
    for index in range(start, len(text)):
        ch = text[index]
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == target:
            return index
    return None


def strip_padding(text: str) -> str:
    """Trim spaces, tabs and carriage returns, leaving other whitespace in place."""
    return text.strip(PADDING)


def is_escaped_at(text: str, index: int) -> bool:
    """True when the character at index is preceded by an odd run of backslashes."""
    backslashes = 0
    position = index - 1
    while position >= 0 and text[position] == "\\":
        backslashes += 1
        position -= 1
    return backslashes % 2 == 1
