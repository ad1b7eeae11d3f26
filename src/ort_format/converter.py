"""Conversion between ORT and JSON documents and files."""

import json
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union
from .types import (
    ConversionDirection,
    ConversionResult,
    ErrorType,
    OrtConverterInterface,
    OrtError,
    ProcessingError,
)
from .parser import OrtParser
from .generator import OrtGenerator
from .value import OrtValue
from .error_handler import ErrorHandler
from .io import FileReader, FileWriter
from .profiler import PerformanceProfiler


MAX_RECOMMENDED_DEPTH = 20

PathLike = Union[str, Path]


class OrtConverter(OrtConverterInterface):
    """
    Bridges JSON documents and ORT documents.

    The JSON side maps structurally onto OrtValue: null, bool, string, array
    and object are carried over as they are and every number is widened to a
    double. File conversions report failures through ConversionResult rather
    than raising.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 json_indent: Optional[int] = 2,
                 ensure_ascii: bool = False,
                 enable_parallel_processing: bool = True,
                 max_workers: Optional[int] = None,
                 enable_profiling: bool = True):
        """
        Initialize the converter.

        Args:
            logger: Optional logger instance
            json_indent: Indentation for JSON output (None for compact)
            ensure_ascii: Escape non-ASCII characters in JSON output
            enable_parallel_processing: Convert batches on a thread pool
            max_workers: Maximum number of worker threads (None = auto-detect)
            enable_profiling: Collect per-file performance metrics
        """
        self.logger = logger or logging.getLogger(__name__)
        self.json_indent = json_indent
        self.ensure_ascii = ensure_ascii
        self.enable_parallel_processing = enable_parallel_processing
        self.max_workers = max_workers

        self.error_handler = ErrorHandler(self.logger)
        self.parser = OrtParser(self.logger)
        self.generator = OrtGenerator(self.logger)
        self.file_reader = FileReader(self.logger)
        self.file_writer = FileWriter(self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    # -- Text conversions ------------------------------------------------

    def ort_to_json(self, ort_string: str) -> str:
        """
        Convert ORT text into JSON text.

        Args:
            ort_string: ORT document

        Returns:
            JSON document; NaN and infinities become null

        Raises:
            OrtError: If the ORT document is malformed
        """
        value = self.parser.parse(ort_string)
        return json.dumps(
            _json_safe(value.to_native()),
            indent=self.json_indent,
            ensure_ascii=self.ensure_ascii,
        )

    def json_to_ort(self, json_string: str) -> str:
        """
        Convert JSON text into ORT text.

        Args:
            json_string: JSON document

        Returns:
            ORT document

        Raises:
            ProcessingError: If the JSON document is empty or invalid
        """
        validation = self.error_handler.validate_json_input(json_string)
        if not validation.is_valid:
            messages = [
                f"{error.message} ({error.location})" if error.location else error.message
                for error in validation.errors
            ]
            raise ProcessingError(
                f"Invalid JSON input: {'; '.join(messages)}",
                ErrorType.SYNTAX,
                context={"errors": validation.errors}
            )

        value = OrtValue.from_native(json.loads(json_string, parse_int=float))

        depth = self.generator.detector.calculate_depth(value)
        if depth > MAX_RECOMMENDED_DEPTH:
            self.logger.warning(f"Deep nesting detected (depth: {depth}); nested data is written inline")

        return self.generator.generate(value)

    # -- File conversions ------------------------------------------------

    @staticmethod
    def resolve_output_path(input_path: PathLike, output_dir: Optional[PathLike],
                            extension: str) -> Path:
        """
        Work out where a converted file goes.

        Args:
            input_path: Source file
            output_dir: Optional output directory
            extension: Target extension including the dot, e.g. ``.json``

        Returns:
            ``<output_dir>/<stem><extension>`` when a directory is given,
            otherwise the input path with its extension replaced
        """
        source = Path(input_path)
        if output_dir is not None:
            return Path(output_dir) / f"{source.stem}{extension}"
        return source.with_suffix(extension)

    def decode_file(self, input_path: PathLike,
                    output_dir: Optional[PathLike] = None) -> ConversionResult:
        """Convert an ``.ort`` file into a ``.json`` file."""
        return self.convert_file(input_path, ConversionDirection.DECODE, output_dir)

    def encode_file(self, input_path: PathLike,
                    output_dir: Optional[PathLike] = None) -> ConversionResult:
        """Convert a ``.json`` file into an ``.ort`` file."""
        return self.convert_file(input_path, ConversionDirection.ENCODE, output_dir)

    def convert_file(self, input_path: PathLike, direction: ConversionDirection,
                     output_dir: Optional[PathLike] = None) -> ConversionResult:
        """
        Convert one file in the given direction.

        Args:
            input_path: Source file
            direction: DECODE (ORT to JSON) or ENCODE (JSON to ORT)
            output_dir: Optional output directory

        Returns:
            ConversionResult; errors hold diagnostic text on failure
        """
        output_path = self.resolve_output_path(input_path, output_dir, direction.target_extension)
        self.logger.info(f"Starting {direction.value}: {input_path} -> {output_path}")

        try:
            content = self.file_reader.read_text(input_path)
            input_size = len(content.encode('utf-8'))

            if self.profiler is None:
                converted = self._convert_text(content, direction)
                write_info = self.file_writer.write_text(output_path, converted)
                metrics = None
            else:
                with self.profiler.profile_operation(direction.value, input_size) as session:
                    converted = self._convert_text(content, direction)
                    session.sample()
                    write_info = self.file_writer.write_text(output_path, converted)
                    session.output_size = write_info["size"]
                metrics = session.metrics.to_dict()

        except (OrtError, ProcessingError) as e:
            return ConversionResult(
                success=False,
                input_path=str(input_path),
                output_path=str(output_path),
                errors=[self.error_handler.handle_error(e, str(input_path))],
                exception=e
            )

        self.logger.info(f"Finished {direction.value}: wrote {write_info['size']} bytes to {output_path}")
        return ConversionResult(
            success=True,
            input_path=str(input_path),
            output_path=str(output_path),
            output_size=write_info["size"],
            metrics=metrics
        )

    def convert_batch(self, input_paths: Iterable[PathLike], direction: ConversionDirection,
                      output_dir: Optional[PathLike] = None) -> List[ConversionResult]:
        """
        Convert several files, one worker per file when parallel processing is on.

        Args:
            input_paths: Source files
            direction: Conversion direction for every file
            output_dir: Optional output directory shared by all files

        Returns:
            One ConversionResult per input, in input order
        """
        paths = list(input_paths)
        if not self.enable_parallel_processing or len(paths) < 2:
            return [self.convert_file(path, direction, output_dir) for path in paths]

        self.logger.info(f"Converting {len(paths)} files in parallel")
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(
                lambda path: self.convert_file(path, direction, output_dir),
                paths
            ))

    def _convert_text(self, content: str, direction: ConversionDirection) -> str:
        if direction is ConversionDirection.DECODE:
            return self.ort_to_json(content)
        return self.json_to_ort(content)


def _json_safe(data: Any) -> Any:
    """Replace non-finite floats, which JSON cannot express, with None."""
    if isinstance(data, float) and not math.isfinite(data):
        return None
    if isinstance(data, list):
        return [_json_safe(item) for item in data]
    if isinstance(data, dict):
        return {k: _json_safe(v) for k, v in data.items()}
    return data
