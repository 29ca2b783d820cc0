"""
Tests for CommandHistory module
"""

import pytest

from core.command_history import CommandHistory
from core.exceptions import CommandExecutionError


class TestCommandHistory:
    """Test CommandHistory functionality"""

    @pytest.fixture
    def history(self):
        """Create a fresh history for each test"""
        return CommandHistory(max_size=10)

    @pytest.fixture
    def failure(self):
        """Sample execution error"""
        return CommandExecutionError("convert missing.png out.png", 1, "unable to open image")

    def test_initialization(self, history):
        """Test history initialization"""
        assert history.max_size == 10
        assert len(history.buffer) == 0
        assert history.total_runs == 0
        assert history.success_count == 0
        assert history.error_count == 0

    def test_add_run_success(self, history):
        """Test adding a successful run"""
        run_id = history.add_run("convert a.png b.png", processing_time_ms=150, returncode=0)

        assert run_id.startswith("run_")
        assert len(history.buffer) == 1
        assert history.total_runs == 1
        assert history.success_count == 1
        assert history.error_count == 0

        record = history.get_run(run_id)
        assert record.result == "SUCCESS"
        assert record.error is None

    def test_add_run_error(self, history, failure):
        """Test adding a failed run"""
        run_id = history.add_run(
            "convert missing.png out.png",
            processing_time_ms=20,
            error=failure,
            stderr="unable to open image",
            returncode=1,
        )

        assert history.error_count == 1
        assert history.success_count == 0

        record = history.get_run(run_id)
        assert record.result == "ERROR"
        assert record.returncode == 1
        assert "unable to open image" in record.error

    def test_add_run_with_metadata(self, history):
        """Test adding run with metadata"""
        metadata = {"source": "upload", "user": "user1"}
        run_id = history.add_run("convert a.png b.png", processing_time_ms=10, metadata=metadata)

        assert history.get_run(run_id).metadata == metadata

    def test_output_is_truncated(self, history):
        """Test that large outputs are truncated"""
        run_id = history.add_run("identify a.png", processing_time_ms=1, stdout="x" * 10000)

        assert len(history.get_run(run_id).stdout) == 4096

    def test_circular_buffer_overflow(self, history):
        """Test that buffer respects max_size limit"""
        ids = [history.add_run(f"convert {i}.png", processing_time_ms=1) for i in range(15)]

        assert len(history.buffer) == 10
        assert history.get_run(ids[0]) is None
        assert history.get_run(ids[-1]) is not None
        assert history.total_runs == 15

    def test_get_run_not_found(self, history):
        """Test retrieving non-existent run"""
        assert history.get_run("nonexistent_id") is None

    def test_get_recent_no_filter(self, history):
        """Test getting recent runs newest first"""
        for i in range(5):
            history.add_run(f"convert {i}.png", processing_time_ms=1)

        recent = history.get_recent(limit=3)
        assert [r.command_line for r in recent] == [
            "convert 4.png",
            "convert 3.png",
            "convert 2.png",
        ]

    def test_get_recent_with_filter(self, history, failure):
        """Test getting recent runs with result filter"""
        for i in range(6):
            history.add_run(
                f"convert {i}.png", processing_time_ms=1, error=failure if i % 2 else None
            )

        successes = history.get_recent(limit=10, result_filter="SUCCESS")
        assert len(successes) == 3
        assert all(r.result == "SUCCESS" for r in successes)

        errors = history.get_recent(limit=10, result_filter="ERROR")
        assert len(errors) == 3

    def test_get_statistics_empty(self, history):
        """Test statistics on empty history"""
        stats = history.get_statistics()

        assert stats["total"] == 0
        assert stats["success_rate"] == 0.0
        assert stats["buffer_usage"] == 0

    def test_get_statistics_with_data(self, history, failure):
        """Test statistics with mixed results"""
        history.add_run("convert 1.png", processing_time_ms=100)
        history.add_run("convert 2.png", processing_time_ms=200)
        history.add_run("convert 3.png", processing_time_ms=300)
        history.add_run("convert 4.png", processing_time_ms=400, error=failure)

        stats = history.get_statistics()
        assert stats["total"] == 4
        assert stats["succeeded"] == 3
        assert stats["failed"] == 1
        assert stats["success_rate"] == 75.0
        assert stats["avg_time_ms"] == 250.0
        assert stats["recent_hour"]["total"] == 4

    def test_clear(self, history):
        """Test clearing history"""
        for i in range(3):
            history.add_run(f"convert {i}.png", processing_time_ms=1)

        history.clear()

        assert len(history.buffer) == 0
        assert history.total_runs == 0
        assert history.total_processing_time == 0

    def test_import_export_roundtrip(self, history, failure):
        """Test export followed by import preserves records and counters"""
        history.add_run("convert 1.png", processing_time_ms=100, stdout="done")
        history.add_run("convert 2.png", processing_time_ms=50, error=failure, returncode=1)

        exported = history.export_to_dict()
        assert len(exported["runs"]) == 2
        assert exported["statistics"]["total"] == 2

        restored = CommandHistory(max_size=10)
        restored.import_from_dict(exported)

        assert restored.total_runs == 2
        assert restored.success_count == 1
        assert restored.error_count == 1
        assert restored.total_processing_time == 150
        assert [r.command_line for r in restored.buffer] == ["convert 1.png", "convert 2.png"]

    def test_get_failure_analysis_no_failures(self, history):
        """Test failure analysis without failures"""
        history.add_run("convert 1.png", processing_time_ms=1)

        analysis = history.get_failure_analysis()
        assert analysis["total_failures"] == 0
        assert analysis["common_failures"] == []

    def test_get_failure_analysis_with_failures(self, history, failure):
        """Test failures grouped by program and exit code"""
        history.add_run("convert a.png", processing_time_ms=1, error=failure, returncode=1)
        history.add_run("convert b.png", processing_time_ms=1, error=failure, returncode=1)
        history.add_run("magick c.png", processing_time_ms=1, error=failure, returncode=127)
        history.add_run("convert d.png", processing_time_ms=1)

        analysis = history.get_failure_analysis()
        assert analysis["total_failures"] == 3
        assert analysis["common_failures"][0] == {"name": "convert (exit 1)", "count": 2}
        assert analysis["failure_rate"] == 75.0

    def test_processing_time_accumulation(self, history):
        """Test that processing times accumulate correctly"""
        times = [100, 150, 200, 250, 300]
        for i, time_ms in enumerate(times):
            history.add_run(f"convert {i}.png", processing_time_ms=time_ms)

        assert history.total_processing_time == sum(times)
        assert history.get_statistics()["avg_time_ms"] == sum(times) / len(times)
