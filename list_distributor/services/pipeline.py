from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..ingest.reader import DEFAULT_CSV_CHUNK_SIZE, FileSource, parse_file
from ..models.agent import Agent
from ..models.distribution_result import (
    DistributionResult,
    UploadFailure,
    UploadOutcome,
    UploadSuccess,
)
from ..models.errors import DistributionError, NoAgentsAvailableError, NoValidRecordsError
from .distributor import distribute

"""Upload pipeline: parse one uploaded file and distribute it.

This is the seam an upload handler calls once it has the file on disk (or as a
binary handle) and the list of active agents. Steps, in order:

1. validate the extension (no I/O on failure)
2. parse the file into ContactRecords
3. zero kept records -> NoValidRecordsError
4. zero active agents -> NoAgentsAvailableError
5. distribute and return a DistributionResult

The pipeline never deletes or rewrites the input file and never persists
anything; storing the result is the caller's job.
"""

__all__ = [
    "run_upload",
    "process_upload",
]

logger = logging.getLogger(__name__)


def _display_name(source: FileSource, file_name: str | None) -> str:
    if file_name:
        return file_name
    if isinstance(source, (str, Path)):
        return Path(source).name
    return Path(str(getattr(source, "name", "<upload>"))).name


def _upload_extension(source: FileSource, file_name: str | None, extension: str | None) -> str | None:
    """Declared extension: explicit value, else the original upload name's suffix.

    Upload handlers usually store the file under a temp name, so the original
    name carries the real extension. None lets the reader use the source suffix.
    """
    if extension is not None:
        return extension
    if file_name:
        return Path(file_name).suffix
    return None


def run_upload(
    source: FileSource,
    agents: Sequence[Agent],
    *,
    file_name: str | None = None,
    extension: str | None = None,
    chunk_size: int = DEFAULT_CSV_CHUNK_SIZE,
) -> DistributionResult:
    """Parse ``source`` and distribute its records over ``agents``.

    Raises:
        UnsupportedFormatError, ParseError: from the reader
        NoValidRecordsError: the file had no row with both first name and phone
        NoAgentsAvailableError: ``agents`` is empty
    """
    start = datetime.now(UTC)
    name = _display_name(source, file_name)

    records = parse_file(source, _upload_extension(source, file_name, extension), chunk_size=chunk_size)
    if not records:
        raise NoValidRecordsError()
    if not agents:
        raise NoAgentsAvailableError()

    assignments = distribute(records, agents)
    elapsed = (datetime.now(UTC) - start).total_seconds()
    result = DistributionResult(
        file_name=name,
        total_items=len(records),
        assignments=tuple(assignments),
        elapsed_seconds=elapsed,
    )
    logger.info(
        f"{name}: {result.total_items} records -> {len(assignments)} agents "
        f"counts={result.item_counts}"
    )
    return result


def process_upload(
    source: FileSource,
    agents: Sequence[Agent],
    *,
    file_name: str | None = None,
    extension: str | None = None,
    chunk_size: int = DEFAULT_CSV_CHUNK_SIZE,
) -> UploadOutcome:
    """Result-typed wrapper around run_upload.

    Returns UploadSuccess, or UploadFailure whose ``kind`` tells the caller
    which response to build. Exceptions outside the DistributionError family
    (programming errors) still propagate.
    """
    try:
        result = run_upload(
            source,
            agents,
            file_name=file_name,
            extension=extension,
            chunk_size=chunk_size,
        )
    except DistributionError as e:
        name = _display_name(source, file_name)
        logger.warning(f"{name}: {e.kind.value} {e.message}")
        return UploadFailure(file_name=name, kind=e.kind, message=e.message, cause=e.cause)
    return UploadSuccess(result=result)
