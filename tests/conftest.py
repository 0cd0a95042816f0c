# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from list_distributor.models.agent import Agent


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("LIST_DISTRIBUTOR_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """agents:
  - id: a1
    name: Asha
    email: asha@example.com
  - id: a2
    name: Ben
    email: ben@example.com
  - id: a3
    name: Chen
    email: chen@example.com
  - id: a4
    name: Dana
    email: dana@example.com
    active: false
output_directory: ./out
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "distribute.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def agents() -> list[Agent]:
    return [
        Agent(id="a1", name="Asha", email="asha@example.com"),
        Agent(id="a2", name="Ben", email="ben@example.com"),
        Agent(id="a3", name="Chen", email="chen@example.com"),
    ]


@pytest.fixture()
def make_csv(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str, text: str, encoding: str = "utf-8") -> Path:
        p = tmp_path / name
        p.write_bytes(text.encode(encoding))
        return p
    return _make


@pytest.fixture()
def make_xlsx(tmp_path: Path) -> Callable[..., Path]:
    """Build an .xlsx whose sheets are given as row lists (first row = header)."""
    def _make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        p = tmp_path / name
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return p
    return _make
