from __future__ import annotations

import argparse
import sys
from contextlib import closing
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import AppConfig, ConfigError, load_config, resolve_config_path
from ..ingest.reader import iter_frames, parse_file, resolve_header_mapping
from ..logging.init import enable_debug, log_summary, setup_logging
from ..models.errors import DistributionError
from ..services.orchestrator import process_files
from ..services.summary import render_summary_body

"""CLI entrypoint.

Distributes one or more contact files over the active agents of the configured
roster:

    python -m list_distributor.cli contacts.csv leads.xlsx

Exit codes:
- 0: every file distributed
- 1: fatal startup error (config missing / invalid)
- 2: at least one file failed (unsupported, unreadable, no valid rows, no agents)
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path) -> None:
    """Load ``.env`` (if present) without overriding variables already set."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Distribute contact lists (CSV / Excel) across active agents")
    p.add_argument("files", nargs="+", help="CSV / XLS / XLSX files to distribute")
    p.add_argument("--config", help="Config YAML (default: $LIST_DISTRIBUTOR_CONFIG or config/distribute.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dry-run", action="store_true", help="Distribute but do not write distribution records")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print resolved columns and the first records of each file, then exit",
    )
    return p.parse_args(argv)


def _inspect_data(paths: list[Path], cfg: AppConfig) -> int:
    for path in paths:
        print(f"FILE: {path.name}")
        try:
            with closing(iter_frames(path, chunk_size=cfg.csv_chunk_size)) as frames:
                first_frame = next(frames, None)
            headers = [] if first_frame is None else list(first_frame.columns)
            records = parse_file(path, chunk_size=cfg.csv_chunk_size)
        except DistributionError as e:
            print(f"  read_error: {e.kind.value} {e.message}")
            continue
        print(f"  columns={headers}")
        print(f"  mapping={resolve_header_mapping(headers)}")
        print(f"  records={len(records)}")
        print("    sample_records=", [r.to_dict() for r in records[:INSPECT_SAMPLE_ROWS]])
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no argv is given (an empty list means "no args")
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    paths = [Path(f) for f in args.files]
    if args.inspect_data:
        return _inspect_data(paths, cfg)

    agents = cfg.active_agents()
    logger.info(f"Distributing {len(paths)} file(s) across {len(agents)} active agent(s)")
    if not agents:
        logger.warning("no active agents configured; every file will fail")

    result = process_files(
        paths,
        agents,
        output_directory=Path(cfg.output_directory),
        chunk_size=cfg.csv_chunk_size,
        dry_run=args.dry_run,
    )
    for stat in result.file_stats or []:
        if stat.status == "success":
            target = stat.output_path or "(dry-run)"
            logger.info(f"{stat.file_name}: records={stat.records} -> {target}")
        else:
            logger.error(f"{stat.file_name}: {stat.error_type}")

    log_summary(render_summary_body(result))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
