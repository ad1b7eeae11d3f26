"""
ORT Format - Object Record Table serialization.

A line-oriented text format carrying the JSON data model that writes
uniform arrays of records as compact tables under a shared header.
"""

from .api import dump, dumps, load, loads
from .converter import OrtConverter
from .fields import FieldSpec
from .generator import OrtGenerator, generate_ort
from .parser import OrtParser, parse_ort
from .types import (
    ConversionDirection,
    ConversionResult,
    ErrorType,
    OrtError,
    ProcessingError,
    ValueKind,
)
from .value import NULL, OrtValue

__version__ = "1.0.0"
__all__ = [
    "OrtValue",
    "NULL",
    "ValueKind",
    "FieldSpec",
    "OrtParser",
    "parse_ort",
    "OrtGenerator",
    "generate_ort",
    "OrtConverter",
    "ConversionDirection",
    "ConversionResult",
    "ErrorType",
    "OrtError",
    "ProcessingError",
    "loads",
    "load",
    "dumps",
    "dump",
]
