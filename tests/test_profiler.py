"""Tests for the performance profiler."""

import threading
from ort_format.profiler import PerformanceMetrics, PerformanceProfiler


class TestPerformanceProfiler:
    """Tests for PerformanceProfiler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.profiler = PerformanceProfiler()

    def test_profile_operation_records_metrics(self):
        """Test that a session produces metrics."""
        with self.profiler.profile_operation("encode", input_size=200) as session:
            session.output_size = 100

        metrics = session.metrics
        assert isinstance(metrics, PerformanceMetrics)
        assert metrics.operation_name == "encode"
        assert metrics.size_ratio == 0.5
        assert metrics.duration >= 0
        assert metrics.memory_peak_mb >= metrics.memory_start_mb
        assert self.profiler.metrics_history == [metrics]

    def test_metrics_recorded_when_block_raises(self):
        """Test that failing operations are still recorded."""
        try:
            with self.profiler.profile_operation("decode", input_size=10):
                raise ValueError("boom")
        except ValueError:
            pass

        assert len(self.profiler.metrics_history) == 1

    def test_empty_summary(self):
        """Test the summary without any operations."""
        assert self.profiler.get_performance_summary() == {"total_operations": 0}

    def test_summary_totals(self):
        """Test aggregated totals."""
        for size in (100, 300):
            with self.profiler.profile_operation("encode", input_size=size) as session:
                session.output_size = size // 2

        summary = self.profiler.get_performance_summary()

        assert summary["total_operations"] == 2
        assert summary["total_input_bytes"] == 400
        assert summary["total_output_bytes"] == 200
        assert summary["overall_size_ratio"] == 0.5

    def test_concurrent_sessions(self):
        """Test profiling from several threads."""
        def work():
            with self.profiler.profile_operation("decode", input_size=1) as session:
                session.output_size = 1

        threads = [threading.Thread(target=work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert self.profiler.get_performance_summary()["total_operations"] == 8

    def test_metrics_to_dict(self):
        """Test dictionary export."""
        with self.profiler.profile_operation("encode", input_size=0) as session:
            pass

        data = session.metrics.to_dict()
        assert data["operation_name"] == "encode"
        assert data["size_ratio"] == 1.0
