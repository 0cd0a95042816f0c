from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .assignment import Assignment
from .errors import ErrorKind

"""Distribution result models.

DistributionResult is what one successful upload produces: the file name, the
number of kept records and the per-agent assignments, ready to be stored as a
list document. UploadSuccess / UploadFailure form the result type returned by
services.pipeline.process_upload.
"""

__all__ = [
    "DistributionResult",
    "UploadSuccess",
    "UploadFailure",
    "UploadOutcome",
]


@dataclass(frozen=True)
class DistributionResult:
    """Outcome of distributing one uploaded file.

    Attributes:
        file_name: Original name of the uploaded file
        total_items: Number of records kept after normalization
        assignments: One Assignment per active agent, in roster order
        elapsed_seconds: Parse + distribute wall time
    """
    file_name: str
    total_items: int
    assignments: tuple[Assignment, ...]
    elapsed_seconds: float = 0.0

    @property
    def item_counts(self) -> list[int]:
        return [a.item_count for a in self.assignments]

    def assignment_for_agent(self, agent_id: str | int) -> Assignment:
        """Return the assignment of ``agent_id`` (empty when the agent got nothing in this list)."""
        for assignment in self.assignments:
            if assignment.agent_id == agent_id:
                return assignment
        return Assignment.empty(agent_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileName": self.file_name,
            "totalItems": self.total_items,
            "distributedLists": [a.to_dict() for a in self.assignments],
        }


@dataclass(frozen=True)
class UploadSuccess:
    result: DistributionResult

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class UploadFailure:
    """Terminal failure of one upload. ``kind`` is the exhaustive branch key."""
    file_name: str
    kind: ErrorKind
    message: str
    cause: BaseException | None = None

    @property
    def ok(self) -> bool:
        return False


UploadOutcome = UploadSuccess | UploadFailure
