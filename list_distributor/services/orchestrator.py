from __future__ import annotations

import json
import logging
from collections.abc import Collection, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..ingest.reader import DEFAULT_CSV_CHUNK_SIZE
from ..logging.error_log import ErrorLogBuffer
from ..models.agent import Agent
from ..models.distribution_result import DistributionResult, UploadFailure
from ..models.error_record import ErrorRecord
from ..models.run_result import FileStat, RunResult
from .pipeline import process_upload
from .progress import ProgressTracker

"""Multi-file orchestration for the command line tool.

Each file given on the command line is treated as an independent upload:
parsed, distributed over the same active agents and, on success, written as a
distribution record JSON. A failing file never stops the run; it is counted,
logged and written to the failure log, which is flushed once at the end.
"""

__all__ = [
    "OutputError",
    "distribution_output_path",
    "write_distribution",
    "process_files",
]

logger = logging.getLogger(__name__)

# error_type for a distributed file whose record could not be written
OUTPUT_ERROR = "OUTPUT_ERROR"


class OutputError(Exception):
    """Raised when a distribution record cannot be written."""


def _elapsed_since(start: datetime) -> float:
    return (datetime.now(UTC) - start).total_seconds()


def _failed_stat(file_path: Path, error_type: str, start: datetime) -> FileStat:
    return FileStat(
        file_name=file_path.name,
        status="failed",
        records=0,
        elapsed_seconds=_elapsed_since(start),
        error_type=error_type,
    )


def distribution_output_path(
    output_directory: Path,
    file_name: str,
    taken: Collection[Path] = (),
) -> Path:
    """Return ``<stem>-distribution.json``, or ``<stem>-<n>-distribution.json`` when taken.

    ``taken`` holds the records already written in this run, so two uploads
    sharing a stem (``a/leads.csv``, ``b/leads.csv``, ``leads.xlsx``) never overwrite
    each other.
    """
    stem = Path(file_name).stem
    path = output_directory / f"{stem}-distribution.json"
    n = 2
    while path in taken:
        path = output_directory / f"{stem}-{n}-distribution.json"
        n += 1
    return path


def write_distribution(
    result: DistributionResult,
    output_directory: Path,
    taken: Collection[Path] = (),
) -> Path:
    """Write ``result`` as pretty JSON in the storage shape and return the path."""
    path = distribution_output_path(output_directory, result.file_name, taken)
    try:
        output_directory.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(result.to_dict(), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise OutputError(f"cannot write {path}: {e}") from e
    return path


def process_files(
    file_paths: Sequence[Path],
    agents: Sequence[Agent],
    *,
    output_directory: Path,
    chunk_size: int = DEFAULT_CSV_CHUNK_SIZE,
    dry_run: bool = False,
    error_log: ErrorLogBuffer | None = None,
) -> RunResult:
    """Distribute every file in ``file_paths`` over ``agents``.

    Args:
        file_paths: Uploaded files, processed in the given order
        agents: Active agents in roster order
        output_directory: Where distribution records are written
        chunk_size: CSV rows per chunk
        dry_run: Distribute but write nothing
        error_log: Failure log buffer (a fresh one when None)

    Returns:
        RunResult with per-file stats
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_records = 0
    written: set[Path] = set()

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            file_start = datetime.now(UTC)

            outcome = process_upload(file_path, agents, chunk_size=chunk_size)
            if isinstance(outcome, UploadFailure):
                error_log.append(ErrorRecord.from_failure(outcome))
                stat = _failed_stat(file_path, outcome.kind.value, file_start)
            else:
                try:
                    output_path = None if dry_run else write_distribution(outcome.result, output_directory, written)
                except OutputError as e:
                    logger.error(f"{file_path.name}: {e}")
                    error_log.append(ErrorRecord.create(file_path.name, OUTPUT_ERROR, str(e)))
                    stat = _failed_stat(file_path, OUTPUT_ERROR, file_start)
                else:
                    if output_path is not None:
                        written.add(output_path)
                    stat = FileStat(
                        file_name=file_path.name,
                        status="success",
                        records=outcome.result.total_items,
                        elapsed_seconds=_elapsed_since(file_start),
                        output_path=str(output_path) if output_path else None,
                    )

            if stat.status == "success":
                success_count += 1
                total_records += stat.records
            else:
                failed_count += 1
            file_stats.append(stat)
            progress.finish_file(success=stat.status == "success")

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"failure log written: {log_path}")

    end_time = datetime.now(UTC)
    return RunResult(
        success_files=success_count,
        failed_files=failed_count,
        total_records=total_records,
        agent_count=len(agents),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
