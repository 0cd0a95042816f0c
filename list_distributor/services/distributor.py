from __future__ import annotations

from collections.abc import Sequence

from ..models.agent import Agent
from ..models.assignment import Assignment
from ..models.contact_record import ContactRecord
from ..models.errors import NoAgentsAvailableError

"""Record distribution across the active agent pool.

Records are split into contiguous, order-preserving slices, one per agent:
every agent gets ``n // m`` records and the first ``n % m`` agents (in roster
order) get one extra. Nothing is shuffled, so the same input always yields the
same assignments.
"""

__all__ = [
    "distribute",
]


def distribute(records: Sequence[ContactRecord], agents: Sequence[Agent]) -> list[Assignment]:
    """Partition ``records`` across ``agents``.

    Args:
        records: Normalized records in file order
        agents: Active agents in roster order (not modified)

    Returns:
        One Assignment per agent, in the order of ``agents``

    Raises:
        NoAgentsAvailableError: ``agents`` is empty

    Examples:
        >>> from list_distributor.models import Agent, ContactRecord
        >>> recs = [ContactRecord(f"n{i}", f"{i}") for i in range(7)]
        >>> team = [Agent(i, f"a{i}", f"a{i}@example.com") for i in range(3)]
        >>> [a.item_count for a in distribute(recs, team)]
        [3, 2, 2]
    """
    if not agents:
        raise NoAgentsAvailableError()

    base, remainder = divmod(len(records), len(agents))
    assignments: list[Assignment] = []
    cursor = 0
    for index, agent in enumerate(agents):
        take = base + (1 if index < remainder else 0)
        items = tuple(records[cursor:cursor + take])
        assignments.append(Assignment(agent_id=agent.id, items=items, item_count=take))
        cursor += take
    return assignments
