"""Core type definitions for the ORT format library."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ValueKind(Enum):
    """Enumeration of value tags carried by OrtValue."""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class SectionShape(Enum):
    """Enumeration of the renderings the generator chooses between."""
    MULTI_SECTION = "multi-section"
    TABULAR = "tabular"
    EMPTY_ARRAY = "empty-array"
    INLINE_ARRAY = "inline-array"
    INLINE = "inline"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    HEADER = "header"
    FIELD_SPEC = "field-spec"
    VALUE_COUNT = "value-count"
    NESTED_COUNT = "nested-count"
    SERIALIZATION = "serialization"
    FILESYSTEM = "filesystem"


class ConversionDirection(Enum):
    """Direction of a file conversion."""
    DECODE = "decode"  # .ort -> .json
    ENCODE = "encode"  # .json -> .ort

    @property
    def target_extension(self) -> str:
        return ".json" if self is ConversionDirection.DECODE else ".ort"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ConversionResult:
    """Result of converting one file."""
    success: bool
    input_path: str
    output_path: Optional[str] = None
    output_size: int = 0
    errors: Optional[List[str]] = None
    metrics: Optional[Dict[str, Any]] = field(default=None, repr=False)
    exception: Optional[Exception] = field(default=None, repr=False)


class OrtError(Exception):
    """
    Positioned syntax error raised by the parser.
    
    Carries the 1-based line number, the verbatim offending line and a
    human-readable message. Parsing stops at the first error.
    """
    
    def __init__(self, line: int, code: str, message: str,
                 error_type: ErrorType = ErrorType.SYNTAX):
        super().__init__(message)
        self.line = line
        self.code = code
        self.message = message
        self.error_type = error_type
    
    def __str__(self) -> str:
        return f"{self.line:3} | {self.code}\nException : {self.message}"


class ProcessingError(Exception):
    """Custom exception for failures outside the ORT parser."""
    
    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


# Abstract base classes for interfaces

class OrtConverterInterface(ABC):
    """Abstract interface for ORT <-> JSON conversion."""
    
    @abstractmethod
    def ort_to_json(self, ort_string: str) -> str:
        """Convert ORT text into JSON text."""
        pass
    
    @abstractmethod
    def json_to_ort(self, json_string: str) -> str:
        """Convert JSON text into ORT text."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""
    
    @abstractmethod
    def validate_json_input(self, input_data: str) -> ValidationResult:
        """Validate JSON input data."""
        pass
    
    @abstractmethod
    def format_error(self, error: Exception, color: bool = False) -> str:
        """Render an error as diagnostic text."""
        pass
