from __future__ import annotations

from dataclasses import dataclass

"""Agent model.

Agents are owned by the agent CRUD side of the application. The pipeline only
reads the id (and carries name/email for display), so the model is a frozen
value object built by the caller from whatever store holds the roster.
"""

__all__ = [
    "Agent",
]


@dataclass(frozen=True)
class Agent:
    id: str | int
    name: str
    email: str
