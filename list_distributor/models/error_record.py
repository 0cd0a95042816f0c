from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .distribution_result import UploadFailure

"""ErrorRecord model for the failure log.

One ErrorRecord is written per failed upload. The JSON Lines shape is fixed
(timestamp, file, error_type, message); no extra keys are ever emitted so the
log stays machine readable.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Uploaded file name
        error_type: ErrorKind value (UPPER_SNAKE_CASE)
        message: User-facing failure message
    """
    timestamp: str
    file: str
    error_type: str
    message: str

    @staticmethod
    def create(file: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(timestamp=ts, file=file, error_type=error_type, message=message)

    @staticmethod
    def from_failure(failure: UploadFailure) -> ErrorRecord:
        return ErrorRecord.create(
            file=failure.file_name,
            error_type=failure.kind.value,
            message=failure.message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
