from __future__ import annotations

import json
import pathlib

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

"""Config schema contract test."""

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[2]
SCHEMA_PATH = PROJECT_ROOT / "list_distributor" / "config" / "config_schema.json"
EXAMPLE_CONFIG = PROJECT_ROOT / "config" / "distribute.example.yml"


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_example():
    config = {
        "agents": [
            {"id": "a1", "name": "Asha", "email": "asha@example.com"},
            {"id": 2, "name": "Ben", "email": "ben@example.com", "active": False},
        ],
        "output_directory": "./out",
        "csv_chunk_size": 500,
    }
    jsonschema.validate(config, _schema())


def test_shipped_example_config_is_valid():
    config = yaml.safe_load(EXAMPLE_CONFIG.read_text(encoding="utf-8"))
    jsonschema.validate(config, _schema())


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"agents": [{"id": "a1", "name": "Asha"}]},
        {"agents": [{"id": "a1", "name": "", "email": "asha@example.com"}]},
        {"agents": [{"id": 1.5, "name": "Asha", "email": "asha@example.com"}]},
        {"agents": [{"id": "a1", "name": "Asha", "email": "asha@example.com", "role": "x"}]},
        {"agents": [], "csv_chunk_size": 0},
        {"agents": [], "output_directory": ""},
        {"agents": [], "database": {"host": "localhost"}},
    ],
)
def test_config_schema_rejects_invalid(config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, _schema())
