"""File reader for conversion inputs."""

import logging
from pathlib import Path
from typing import Optional, Union
from ..types import ProcessingError, ErrorType


class FileReader:
    """Reads whole input documents into memory as UTF-8 text."""
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file reader.
        
        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
    
    def read_text(self, path: Union[str, Path]) -> str:
        """
        Read a file's full contents.
        
        Args:
            path: File to read
            
        Returns:
            File contents
            
        Raises:
            ProcessingError: If the file cannot be read or decoded
        """
        file_path = Path(path)
        try:
            content = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ProcessingError(
                f"Failed to read file '{file_path}': {e}",
                ErrorType.FILESYSTEM,
                context={"path": str(file_path)}
            )
        
        self.logger.debug(f"Read {len(content)} characters from {file_path}")
        return content
