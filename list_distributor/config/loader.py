from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..ingest.reader import DEFAULT_CSV_CHUNK_SIZE
from ..models.agent import Agent

"""Config loader.

Responsibilities:
- Locate the YAML config (--config, then $LIST_DISTRIBUTOR_CONFIG, then
  config/distribute.yml)
- Validate it against the bundled JSON schema
- Apply defaults (output_directory=./out, csv_chunk_size=1000, active=true)
- Expose the roster filtered to active agents, in file order
"""

__all__ = [
    "ConfigError",
    "RosterEntry",
    "AppConfig",
    "resolve_config_path",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/distribute.yml")
CONFIG_ENV_VAR = "LIST_DISTRIBUTOR_CONFIG"
DEFAULT_OUTPUT_DIRECTORY = "./out"
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class RosterEntry:
    """One agent line of the config roster."""
    id: str | int
    name: str
    email: str
    active: bool = True

    def to_agent(self) -> Agent:
        return Agent(id=self.id, name=self.name, email=self.email)


@dataclass(frozen=True)
class AppConfig:
    roster: tuple[RosterEntry, ...]
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    csv_chunk_size: int = DEFAULT_CSV_CHUNK_SIZE

    def active_agents(self) -> list[Agent]:
        """Active agents in roster order (the order distribution follows)."""
        return [entry.to_agent() for entry in self.roster if entry.active]


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(cli_value: str | None = None) -> Path:
    if cli_value:
        return Path(cli_value)
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    roster: list[RosterEntry] = []
    seen_ids: set[str | int] = set()
    for raw in data["agents"]:
        if raw["id"] in seen_ids:
            raise ConfigError(f"duplicate agent id: {raw['id']}")
        seen_ids.add(raw["id"])
        roster.append(
            RosterEntry(
                id=raw["id"],
                name=raw["name"],
                email=raw["email"],
                active=raw.get("active", True),
            )
        )

    return AppConfig(
        roster=tuple(roster),
        output_directory=data.get("output_directory", DEFAULT_OUTPUT_DIRECTORY),
        csv_chunk_size=data.get("csv_chunk_size", DEFAULT_CSV_CHUNK_SIZE),
    )
