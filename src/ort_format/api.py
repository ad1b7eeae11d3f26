"""Convenience functions mirroring the json module's loads/load/dumps/dump."""

from pathlib import Path
from typing import Any, Union
from .generator import generate_ort
from .parser import parse_ort
from .types import ErrorType, OrtError
from .value import OrtValue


def loads(content: str) -> OrtValue:
    """
    Parse ORT text into an OrtValue.
    
    Example::
    
        value = loads("users:id,name:\\n1,John\\n2,Jane")
        value["users"][0]["name"].as_string()  # "John"
    """
    return parse_ort(content)


def load(path: Union[str, Path]) -> OrtValue:
    """
    Parse an ORT file into an OrtValue.
    
    Raises:
        OrtError: If the file cannot be read (line 0) or is malformed
    """
    try:
        content = Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise OrtError(0, "", f"Failed to read file: {e}", ErrorType.FILESYSTEM)
    return parse_ort(content)


def dumps(value: Any) -> str:
    """Render an OrtValue, or native JSON-compatible data, as ORT text."""
    return generate_ort(value)


def dump(value: Any, path: Union[str, Path]) -> None:
    """
    Render a value as ORT text and write it to a file.
    
    Raises:
        OrtError: If the file cannot be written (line 0)
    """
    content = generate_ort(value)
    try:
        Path(path).write_text(content, encoding='utf-8')
    except OSError as e:
        raise OrtError(0, "", f"Failed to write file: {e}", ErrorType.FILESYSTEM)
