from __future__ import annotations

from enum import Enum

"""Failure taxonomy for the upload pipeline.

Every way an upload can fail maps to exactly one ErrorKind. The exception
classes below are the raising form; services.pipeline.process_upload turns them
into UploadFailure values so callers can branch on ``kind`` without catching.

Row-level problems (missing first name / phone) are not failures: those rows
are filtered out by the reader and never reach this module.
"""

__all__ = [
    "ErrorKind",
    "DistributionError",
    "UnsupportedFormatError",
    "ParseError",
    "NoAgentsAvailableError",
    "NoValidRecordsError",
    "NO_VALID_RECORDS_MESSAGE",
    "NO_AGENTS_MESSAGE",
]

NO_VALID_RECORDS_MESSAGE = (
    "No valid data found in file. Please ensure your file has columns: FirstName, Phone, Notes"
)
NO_AGENTS_MESSAGE = "No active agents available for distribution"


class ErrorKind(Enum):
    """Closed set of upload failure kinds (value doubles as error_type in the error log)."""
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    PARSE_ERROR = "PARSE_ERROR"
    NO_AGENTS_AVAILABLE = "NO_AGENTS_AVAILABLE"
    NO_VALID_RECORDS = "NO_VALID_RECORDS"


class DistributionError(Exception):
    """Base exception for upload failures. Subclasses pin ``kind``."""
    kind: ErrorKind

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class UnsupportedFormatError(DistributionError):
    """Raised when the declared extension is not csv / xls / xlsx."""
    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, extension: str) -> None:
        super().__init__("Unsupported file format")
        self.extension = extension


class ParseError(DistributionError):
    """Raised when the underlying CSV / workbook reader rejects the file."""
    kind = ErrorKind.PARSE_ERROR

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Error parsing file: {cause}", cause=cause)


class NoAgentsAvailableError(DistributionError):
    kind = ErrorKind.NO_AGENTS_AVAILABLE

    def __init__(self) -> None:
        super().__init__(NO_AGENTS_MESSAGE)


class NoValidRecordsError(DistributionError):
    kind = ErrorKind.NO_VALID_RECORDS

    def __init__(self) -> None:
        super().__init__(NO_VALID_RECORDS_MESSAGE)
