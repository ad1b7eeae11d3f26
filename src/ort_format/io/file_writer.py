"""File writer for conversion outputs."""

import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional, Union
from ..types import ProcessingError, ErrorType


class FileWriter:
    """
    File writer for converted documents.
    
    Creates missing output directories and writes UTF-8 text.
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file writer.
        
        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
    
    def write_text(self, path: Union[str, Path], content: str) -> Dict[str, Any]:
        """
        Write a document to disk.
        
        Args:
            path: Destination file
            content: Text to write
            
        Returns:
            Dictionary with the absolute path and the size in bytes
            
        Raises:
            ProcessingError: If the directory or file cannot be written
        """
        file_path = Path(path)
        if file_path.parent != Path(""):
            self._ensure_directory_exists(file_path.parent)
        
        data = content.encode('utf-8')
        try:
            with open(file_path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise ProcessingError(
                f"Failed to write file '{file_path}': {e}",
                ErrorType.FILESYSTEM,
                context={"path": str(file_path)}
            )
        
        self.logger.debug(f"Wrote {len(data)} bytes to {file_path}")
        return {"path": str(file_path.absolute()), "size": len(data)}
    
    def _ensure_directory_exists(self, directory_path: Path) -> None:
        """
        Ensure that a directory exists, creating it if necessary.
        
        Args:
            directory_path: Path to directory
            
        Raises:
            ProcessingError: If directory creation fails
        """
        try:
            directory_path.mkdir(parents=True, exist_ok=True)
            
            if not os.access(directory_path, os.W_OK):
                raise ProcessingError(
                    f"Directory {directory_path} is not writable",
                    ErrorType.FILESYSTEM
                )
                
        except OSError as e:
            raise ProcessingError(
                f"Failed to create directory {directory_path}: {str(e)}",
                ErrorType.FILESYSTEM
            )
