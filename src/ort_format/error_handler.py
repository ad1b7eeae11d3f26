"""Error handling implementation for ORT conversions."""

import json
import logging
from typing import Optional
import click
from .types import (
    ErrorHandlerInterface,
    ErrorType,
    OrtError,
    ProcessingError,
    ValidationError,
    ValidationResult,
)


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for ORT conversion operations.
    
    Validates JSON input before it reaches the generator and renders
    parser and processing errors as diagnostic text for terminals and logs.
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.
        
        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)
    
    def validate_json_input(self, input_data: str) -> ValidationResult:
        """
        Validate a JSON document before conversion.
        
        Args:
            input_data: JSON string to validate
            
        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []
        
        if not input_data.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        
        try:
            json.loads(input_data)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON document is nested too deeply",
                location="input"
            ))
        
        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
    
    def format_error(self, error: Exception, color: bool = False) -> str:
        """
        Render an error as diagnostic text.
        
        Parser errors show the line number and offending line above the
        message; other errors show the message only.
        
        Args:
            error: Exception to render
            color: Apply terminal colours (line number blue, label red)
            
        Returns:
            Diagnostic text
        """
        label = click.style("Exception", fg="red") if color else "Exception"
        
        if isinstance(error, OrtError):
            line_num = f"{error.line:3}"
            if color:
                line_num = click.style(line_num, fg="blue")
            return f"{line_num} | {error.code}\n{label} : {error.message}"
        
        if isinstance(error, ProcessingError):
            return f"{label} : {error}"
        
        return str(error)
    
    def handle_error(self, error: Exception, source: Optional[str] = None) -> str:
        """
        Log an error and return its diagnostic text.
        
        Args:
            error: Exception raised during a conversion
            source: Optional name of the file being processed
            
        Returns:
            Uncoloured diagnostic text
        """
        error_type = getattr(error, "error_type", None)
        kind = error_type.value if isinstance(error_type, ErrorType) else type(error).__name__
        where = f" in {source}" if source else ""
        
        self.logger.error(f"Conversion error{where}: {kind} - {error}")
        return self.format_error(error)
