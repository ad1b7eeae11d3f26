"""Performance profiler for ORT conversion operations."""

import threading
import time
import logging
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterator, List, Optional
import psutil


@dataclass
class PerformanceMetrics:
    """Performance metrics for one conversion."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_start_mb: float
    memory_end_mb: float
    memory_peak_mb: float
    throughput_mbps: float
    size_ratio: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ProfileSession:
    """State of one profiled operation; filled in by the code being profiled."""

    def __init__(self, operation_name: str, input_size: int):
        self.operation_name = operation_name
        self.input_size = input_size
        self.output_size = 0
        self.start_time = time.time()
        self.start_memory = _rss_mb()
        self.peak_memory = self.start_memory
        self.metrics: Optional[PerformanceMetrics] = None

    def sample(self) -> None:
        """Record the current resident memory as a peak candidate."""
        self.peak_memory = max(self.peak_memory, _rss_mb())


class PerformanceProfiler:
    """
    Profiler collecting duration, memory and size metrics per conversion.

    Each call to profile_operation() gets its own session, so several
    conversions may be profiled concurrently from worker threads.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self._lock = threading.Lock()

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0) -> Iterator[ProfileSession]:
        """
        Context manager for profiling an operation.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes

        Yields:
            ProfileSession; set its output_size before leaving the block
        """
        session = ProfileSession(operation_name, input_size)
        self.logger.debug(f"Started profiling: {operation_name}")
        try:
            yield session
        finally:
            session.metrics = self._finish(session)

    def _finish(self, session: ProfileSession) -> PerformanceMetrics:
        end_time = time.time()
        duration = end_time - session.start_time
        session.sample()
        end_memory = _rss_mb()

        throughput = (session.input_size / 1024 / 1024) / duration if duration > 0 else 0.0
        size_ratio = session.output_size / session.input_size if session.input_size > 0 else 1.0

        metrics = PerformanceMetrics(
            operation_name=session.operation_name,
            start_time=session.start_time,
            end_time=end_time,
            duration=duration,
            input_size=session.input_size,
            output_size=session.output_size,
            memory_start_mb=session.start_memory,
            memory_end_mb=end_memory,
            memory_peak_mb=session.peak_memory,
            throughput_mbps=throughput,
            size_ratio=size_ratio,
        )

        with self._lock:
            self.metrics_history.append(metrics)

        self.logger.debug(
            f"Performance Summary - {session.operation_name}: "
            f"duration={duration:.4f}s, throughput={throughput:.2f} MB/s, "
            f"memory_peak={session.peak_memory:.1f} MB, size_ratio={size_ratio:.2f}"
        )
        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded metrics.

        Returns:
            Dictionary with totals and averages
        """
        with self._lock:
            history = list(self.metrics_history)

        if not history:
            return {"total_operations": 0}

        total_input = sum(m.input_size for m in history)
        total_output = sum(m.output_size for m in history)

        return {
            "total_operations": len(history),
            "total_duration": sum(m.duration for m in history),
            "total_input_bytes": total_input,
            "total_output_bytes": total_output,
            "average_memory_peak_mb": sum(m.memory_peak_mb for m in history) / len(history),
            "overall_size_ratio": total_output / total_input if total_input > 0 else 1.0,
        }


def _rss_mb() -> float:
    try:
        return psutil.Process().memory_info().rss / 1024 / 1024
    except psutil.Error:
        return 0.0
