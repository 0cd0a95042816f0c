"""Domain models for the contact list distributor.

Value objects shared by the reader, the distributor and the CLI: normalized
contact records, agents, assignments, distribution results and the failure
taxonomy.
"""

from .agent import Agent
from .assignment import Assignment
from .contact_record import ContactRecord
from .distribution_result import DistributionResult, UploadFailure, UploadOutcome, UploadSuccess
from .errors import (
    DistributionError,
    ErrorKind,
    NoAgentsAvailableError,
    NoValidRecordsError,
    ParseError,
    UnsupportedFormatError,
)

__all__ = [
    # Input / output records
    "Agent",
    "Assignment",
    "ContactRecord",
    "DistributionResult",
    # Result type
    "UploadFailure",
    "UploadOutcome",
    "UploadSuccess",
    # Failures
    "DistributionError",
    "ErrorKind",
    "NoAgentsAvailableError",
    "NoValidRecordsError",
    "ParseError",
    "UnsupportedFormatError",
]
