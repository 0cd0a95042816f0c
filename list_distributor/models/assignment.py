from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .contact_record import ContactRecord

"""Assignment model: the per-agent output of a distribution run."""

__all__ = [
    "Assignment",
]


@dataclass(frozen=True)
class Assignment:
    """Contiguous slice of the uploaded records handed to one agent.

    ``items`` is a tuple so the slice cannot be mutated after the run;
    ``item_count`` always equals ``len(items)``.
    """
    agent_id: str | int
    items: tuple[ContactRecord, ...] = field(default_factory=tuple)
    item_count: int = 0

    def __post_init__(self) -> None:
        if self.item_count != len(self.items):
            raise ValueError(
                f"item_count={self.item_count} does not match {len(self.items)} items"
            )

    @staticmethod
    def empty(agent_id: str | int) -> Assignment:
        return Assignment(agent_id=agent_id, items=(), item_count=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "agent": self.agent_id,
            "items": [item.to_dict() for item in self.items],
            "itemCount": self.item_count,
        }
