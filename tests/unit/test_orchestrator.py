from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from list_distributor.logging.error_log import ErrorLogBuffer
from list_distributor.models.distribution_result import DistributionResult
from list_distributor.services.orchestrator import (
    OutputError,
    distribution_output_path,
    process_files,
    write_distribution,
)

"""Unit tests for multi-file orchestration."""

CSV_TEXT = (
    "FirstName,Phone,Notes\n"
    "John,+1234567890,Interested in product A\n"
    "Jane,+0987654321,Follow up next week\n"
    "Bob,+1122334455,\n"
)


def test_distribution_output_path_uses_stem():
    assert distribution_output_path(Path("out"), "leads.xlsx") == Path("out/leads-distribution.json")


def test_write_distribution_storage_shape(tmp_path: Path):
    result = DistributionResult(file_name="contacts.csv", total_items=0, assignments=())
    path = write_distribution(result, tmp_path / "out")
    assert path == tmp_path / "out" / "contacts-distribution.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "fileName": "contacts.csv",
        "totalItems": 0,
        "distributedLists": [],
    }


def test_write_distribution_wraps_os_error(tmp_path: Path):
    blocker = tmp_path / "out"
    blocker.write_text("not a directory", encoding="utf-8")
    result = DistributionResult(file_name="contacts.csv", total_items=0, assignments=())
    with pytest.raises(OutputError):
        write_distribution(result, blocker)


def test_process_files_all_success(temp_workdir: Path, make_csv, agents):
    csv_path = make_csv("contacts.csv", CSV_TEXT)
    result = process_files([csv_path], agents, output_directory=temp_workdir / "out")

    assert result.success_files == 1
    assert result.failed_files == 0
    assert result.total_records == 3
    assert result.agent_count == 3
    stat = result.file_stats[0]
    assert stat.status == "success"
    assert stat.records == 3

    written = json.loads(Path(stat.output_path).read_text(encoding="utf-8"))
    assert written["totalItems"] == 3
    assert [d["agent"] for d in written["distributedLists"]] == ["a1", "a2", "a3"]
    assert [d["itemCount"] for d in written["distributedLists"]] == [1, 1, 1]
    assert written["distributedLists"][0]["items"][0] == {
        "firstName": "John",
        "phone": "+1234567890",
        "notes": "Interested in product A",
    }
    # nothing failed, so no failure log
    assert list((temp_workdir / "logs").glob("errors-*.log")) == []


def test_process_files_partial_failure(temp_workdir: Path, make_csv, agents):
    good = make_csv("contacts.csv", CSV_TEXT)
    bad = make_csv("contacts.pdf", "irrelevant")
    empty = make_csv("blank.csv", "FirstName,Phone\n,\n")

    result = process_files([good, bad, empty], agents, output_directory=temp_workdir / "out")

    assert result.success_files == 1
    assert result.failed_files == 2
    assert result.total_records == 3
    assert [s.error_type for s in result.file_stats] == [None, "UNSUPPORTED_FORMAT", "NO_VALID_RECORDS"]

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    lines = [json.loads(x) for x in logs[0].read_text(encoding="utf-8").splitlines()]
    assert [(r["file"], r["error_type"]) for r in lines] == [
        ("contacts.pdf", "UNSUPPORTED_FORMAT"),
        ("blank.csv", "NO_VALID_RECORDS"),
    ]
    assert lines[0]["message"] == "Unsupported file format"


def test_process_files_without_agents(temp_workdir: Path, make_csv):
    csv_path = make_csv("contacts.csv", CSV_TEXT)
    result = process_files([csv_path], [], output_directory=temp_workdir / "out")

    assert result.failed_files == 1
    assert result.file_stats[0].error_type == "NO_AGENTS_AVAILABLE"
    assert not (temp_workdir / "out").exists()


def test_process_files_dry_run_writes_nothing(temp_workdir: Path, make_csv, agents):
    csv_path = make_csv("contacts.csv", CSV_TEXT)
    result = process_files([csv_path], agents, output_directory=temp_workdir / "out", dry_run=True)

    assert result.success_files == 1
    assert result.file_stats[0].output_path is None
    assert not (temp_workdir / "out").exists()


def test_process_files_output_error_counts_as_failure(temp_workdir: Path, make_csv, agents):
    csv_path = make_csv("contacts.csv", CSV_TEXT)
    buf = ErrorLogBuffer()
    with patch(
        "list_distributor.services.orchestrator.write_distribution",
        side_effect=OutputError("cannot write out/contacts-distribution.json: denied"),
    ):
        result = process_files([csv_path], agents, output_directory=temp_workdir / "out", error_log=buf)

    assert result.failed_files == 1
    assert result.total_records == 0
    assert result.file_stats[0].error_type == "OUTPUT_ERROR"
    log_text = buf.file_path.read_text(encoding="utf-8")
    assert "OUTPUT_ERROR" in log_text


def test_process_files_empty_list(temp_workdir: Path, agents):
    result = process_files([], agents, output_directory=temp_workdir / "out")
    assert result.total_files == 0
    assert result.file_stats == []


def test_distribution_output_path_skips_taken_names():
    out = Path("out")
    taken = {out / "leads-distribution.json", out / "leads-2-distribution.json"}
    assert distribution_output_path(out, "leads.csv", taken) == out / "leads-3-distribution.json"


def test_process_files_same_stem_keeps_every_record(temp_workdir: Path, agents):
    first = temp_workdir / "data" / "a" / "leads.csv"
    second = temp_workdir / "data" / "b" / "leads.csv"
    for p, name in ((first, "Ann"), (second, "Bob")):
        p.parent.mkdir(parents=True)
        p.write_text(f"FirstName,Phone\n{name},1\n", encoding="utf-8")

    result = process_files([first, second], agents, output_directory=temp_workdir / "out")

    assert result.success_files == 2
    paths = [Path(s.output_path) for s in result.file_stats]
    assert [p.name for p in paths] == ["leads-distribution.json", "leads-2-distribution.json"]
    first_names = [
        json.loads(p.read_text(encoding="utf-8"))["distributedLists"][0]["items"][0]["firstName"]
        for p in paths
    ]
    assert first_names == ["Ann", "Bob"]
