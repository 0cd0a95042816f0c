from __future__ import annotations

import time
from pathlib import Path

from list_distributor.ingest.reader import parse_file
from list_distributor.models.agent import Agent
from list_distributor.services.distributor import distribute

"""Throughput smoke test: chunked CSV read + distribution stays fast.

Budgets are lenient so CI machines pass; the point is catching accidental
quadratic behavior (per-row DataFrame access, list re-slicing per agent).
"""

ROWS = 20_000
AGENTS = 7


def test_csv_parse_and_distribute_budget(tmp_path: Path):
    csv_path = tmp_path / "big.csv"
    csv_path.write_text(
        "FirstName,Phone,Notes\n" + "".join(f"Name{i},+1555{i:07d},n{i}\n" for i in range(ROWS)),
        encoding="utf-8",
    )
    agents = [Agent(id=f"a{i}", name=f"Agent {i}", email=f"a{i}@example.com") for i in range(AGENTS)]

    start = time.perf_counter()
    records = parse_file(csv_path, chunk_size=1000)
    assignments = distribute(records, agents)
    elapsed = time.perf_counter() - start

    assert len(records) == ROWS
    assert sum(a.item_count for a in assignments) == ROWS
    assert elapsed < 10.0, f"parse+distribute too slow: {elapsed:.3f}s"
    throughput = ROWS / elapsed
    assert throughput > 2_000
