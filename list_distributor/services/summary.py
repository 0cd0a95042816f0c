from __future__ import annotations

from ..models.run_result import RunResult

"""SUMMARY line rendering.

Format (single line, fixed key order):
SUMMARY files={total} success={success} failed={failed} records={records}
agents={agents} elapsed_sec={elapsed}
"""


def _format_number(value: float) -> str:
    """Integers without decimals, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_body(result: RunResult) -> str:
    """SUMMARY fields without the label; the SUMMARY log level prints the label."""
    return (
        f"files={result.total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"agents={result.agent_count} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)}"
    )


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a CLI run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = RunResult(success_files=2, failed_files=1, total_records=10,
        ...               agent_count=3, start_time=t, end_time=t, elapsed_seconds=2.0)
        >>> render_summary_line(r)
        'SUMMARY files=3 success=2 failed=1 records=10 agents=3 elapsed_sec=2'
    """
    return f"SUMMARY {render_summary_body(result)}"
