"""
Command History - Circular buffer of executed command lines
"""

import logging
import uuid
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import RLock
from typing import Any, Dict, List, Optional

from core.constants import HistoryConstants
from core.enums import RunResult

logger = logging.getLogger(__name__)


def _truncate(text: str) -> str:
    if len(text) <= HistoryConstants.MAX_OUTPUT_CHARS:
        return text
    return text[: HistoryConstants.MAX_OUTPUT_CHARS]


@dataclass
class CommandRecord:
    """Single command execution record"""

    id: str
    timestamp: datetime
    command_line: str
    result: str  # SUCCESS/ERROR
    returncode: Optional[int]
    processing_time_ms: int
    stdout: str
    stderr: str
    error: Optional[str]
    metadata: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "command_line": self.command_line,
            "result": self.result,
            "returncode": self.returncode,
            "processing_time_ms": self.processing_time_ms,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "error": self.error,
            "metadata": self.metadata,
        }


class CommandHistory:
    """Circular buffer for maintaining command execution history"""

    def __init__(self, max_size: int = HistoryConstants.DEFAULT_BUFFER_SIZE):
        """
        Initialize Command History

        Args:
            max_size: Maximum number of runs to store
        """
        self.max_size = max_size
        self.buffer: deque = deque(maxlen=max_size)

        # Statistics
        self.total_runs = 0
        self.success_count = 0
        self.error_count = 0
        self.total_processing_time = 0

        # Thread safety (RLock allows reentrant locking)
        self.lock = RLock()

        logger.info(f"Command History initialized with max size: {max_size}")

    def add_run(
        self,
        command_line: str,
        processing_time_ms: int,
        error: Optional[Exception] = None,
        stdout: str = "",
        stderr: str = "",
        returncode: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Add execution record to history

        Args:
            command_line: Full command line that was executed
            processing_time_ms: Execution time in milliseconds
            error: Error reported by the executor, if any
            stdout: Captured standard output
            stderr: Captured standard error
            returncode: Process exit code when known
            metadata: Optional metadata

        Returns:
            Run ID
        """
        with self.lock:
            run_id = f"{HistoryConstants.RUN_ID_PREFIX}{uuid.uuid4().hex[:8]}"
            result = RunResult.ERROR if error is not None else RunResult.SUCCESS

            record = CommandRecord(
                id=run_id,
                timestamp=datetime.now(),
                command_line=command_line,
                result=result.value,
                returncode=returncode,
                processing_time_ms=processing_time_ms,
                stdout=_truncate(stdout),
                stderr=_truncate(stderr),
                error=str(error) if error is not None else None,
                metadata=metadata or {},
            )

            self.buffer.append(record)

            # Update statistics
            self.total_runs += 1
            self.total_processing_time += processing_time_ms

            if result == RunResult.SUCCESS:
                self.success_count += 1
            else:
                self.error_count += 1

            logger.debug(f"Added run {run_id}: {result.value} - {command_line}")
            return run_id

    def get_run(self, run_id: str) -> Optional[CommandRecord]:
        """Get specific run by ID"""
        with self.lock:
            for record in self.buffer:
                if record.id == run_id:
                    return record
        return None

    def get_recent(self, limit: int = 10, result_filter: Optional[str] = None) -> List[CommandRecord]:
        """
        Get recent runs

        Args:
            limit: Maximum number of records to return
            result_filter: Filter by result (SUCCESS/ERROR)

        Returns:
            List of run records, newest first
        """
        with self.lock:
            records = list(self.buffer)

            if result_filter:
                records = [r for r in records if r.result == result_filter]

            # Buffer is append-ordered, so reversing gives newest first
            records.reverse()

            return records[:limit]

    def get_statistics(self) -> Dict[str, Any]:
        """Get execution statistics"""
        with self.lock:
            if self.total_runs == 0:
                return {
                    "total": 0,
                    "succeeded": 0,
                    "failed": 0,
                    "success_rate": 0.0,
                    "avg_time_ms": 0,
                    "buffer_usage": 0,
                    "buffer_max": self.max_size,
                }

            success_rate = (self.success_count / self.total_runs) * 100
            avg_time = self.total_processing_time / self.total_runs

            recent_cutoff = datetime.now() - timedelta(hours=1)
            recent_records = [r for r in self.buffer if r.timestamp > recent_cutoff]

            recent_stats = {
                "total": len(recent_records),
                "succeeded": sum(1 for r in recent_records if r.result == RunResult.SUCCESS.value),
                "failed": sum(1 for r in recent_records if r.result == RunResult.ERROR.value),
            }

            return {
                "total": self.total_runs,
                "succeeded": self.success_count,
                "failed": self.error_count,
                "success_rate": round(success_rate, 2),
                "avg_time_ms": round(avg_time, 2),
                "buffer_usage": len(self.buffer),
                "buffer_max": self.max_size,
                "recent_hour": recent_stats,
            }

    def clear(self):
        """Clear all history"""
        with self.lock:
            self.buffer.clear()
            self.total_runs = 0
            self.success_count = 0
            self.error_count = 0
            self.total_processing_time = 0

            logger.info("Command history cleared")

    def export_to_dict(self) -> Dict[str, Any]:
        """Export history to dictionary"""
        with self.lock:
            return {
                "runs": [r.to_dict() for r in self.buffer],
                "statistics": self.get_statistics(),
            }

    def import_from_dict(self, data: Dict[str, Any]):
        """Import history from dictionary"""
        with self.lock:
            self.clear()

            for record_data in data.get("runs", []):
                record = CommandRecord(
                    id=record_data["id"],
                    timestamp=datetime.fromisoformat(record_data["timestamp"]),
                    command_line=record_data["command_line"],
                    result=record_data["result"],
                    returncode=record_data.get("returncode"),
                    processing_time_ms=record_data["processing_time_ms"],
                    stdout=record_data.get("stdout", ""),
                    stderr=record_data.get("stderr", ""),
                    error=record_data.get("error"),
                    metadata=record_data.get("metadata", {}),
                )

                self.buffer.append(record)

                self.total_runs += 1
                self.total_processing_time += record.processing_time_ms
                if record.result == RunResult.SUCCESS.value:
                    self.success_count += 1
                else:
                    self.error_count += 1

            logger.info(f"Imported {len(self.buffer)} run records")

    def get_failure_analysis(self) -> Dict[str, Any]:
        """Group failed runs by program name and exit code"""
        with self.lock:
            failures = [r for r in self.buffer if r.result == RunResult.ERROR.value]

            if not failures:
                return {"total_failures": 0, "common_failures": [], "failure_rate": 0.0}

            failure_counts: Dict[str, int] = {}
            for record in failures:
                program = record.command_line.split(" ", 1)[0]
                key = f"{program} (exit {record.returncode})"
                failure_counts[key] = failure_counts.get(key, 0) + 1

            common_failures = sorted(failure_counts.items(), key=lambda x: x[1], reverse=True)[:5]

            return {
                "total_failures": len(failures),
                "common_failures": [
                    {"name": name, "count": count} for name, count in common_failures
                ],
                "failure_rate": (len(failures) / len(self.buffer)) * 100 if self.buffer else 0.0,
            }
