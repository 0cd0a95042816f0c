from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Run-level result models for the command line tool.

A CLI run may distribute several files one after another; each file is an
independent upload. FileStat records the per-file outcome and RunResult
aggregates them for the SUMMARY line and the exit code.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics (one uploaded file)."""
    file_name: str
    status: str  # success/failed
    records: int  # kept records (0 on failure)
    elapsed_seconds: float
    error_type: str | None = None  # ErrorKind value on failure
    output_path: str | None = None  # written distribution record, if any


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of one CLI run."""
    success_files: int
    failed_files: int
    total_records: int  # records distributed across all successful files
    agent_count: int  # active agents used for every file
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
