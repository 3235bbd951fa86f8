"""CLI entrypoint for the Mexico power-plant ingestion pipeline."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from mexgen.classify.ownership import ClassificationPattern, PatternStore
from mexgen.common.config_loader import DEFAULT_CONFIG_DIR, IngestConfig, load_config
from mexgen.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS
from mexgen.common.errors import PipelineError
from mexgen.common.ids import generate_run_id
from mexgen.common.logging import build_logger, log_event
from mexgen.common.models import Sector
from mexgen.pipeline.export import write_plants_csv, write_plants_json
from mexgen.pipeline.ingest import ingest_catalog, run_ingestion
from mexgen.pipeline.reports import write_ingest_report

PATTERN_ACTIONS = ("list", "add", "remove", "reset")


def parse_args(argv: list[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config-dir", default=str(DEFAULT_CONFIG_DIR))
    common.add_argument("--overlay-config-dir", default=None)
    common.add_argument("--data-dir", default="./data")
    common.add_argument("--run-id", default=None)
    common.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])

    parser = argparse.ArgumentParser(prog="mexgen", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True, metavar="{" + ",".join(COMMANDS) + "}")

    ingest = commands.add_parser("ingest", parents=[common], help="normalize a plant CSV or the fallback catalog")
    ingest.add_argument("source", nargs="?", default=None, help="CSV path or URL; default CSV when omitted")
    ingest.add_argument("--catalog", action="store_true", help="use the hardcoded fallback catalog")
    ingest.add_argument("--format", default="csv", choices=["csv", "json"])

    patterns = commands.add_parser("patterns", parents=[common], help="edit the public/private classification patterns")
    patterns.add_argument("action", choices=PATTERN_ACTIONS)
    patterns.add_argument("substring", nargs="?", default=None)
    patterns.add_argument("sector", nargs="?", default=None, choices=[Sector.PUBLIC.value, Sector.PRIVATE.value])

    return parser.parse_args(argv)


def _load_config(args: argparse.Namespace) -> IngestConfig:
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    return load_config(Path(args.config_dir), overlay_config_dir=overlay_config_dir)


def run_ingest(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id(args.command)
    data_dir = Path(args.data_dir)
    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    config = _load_config(args)

    log_event(logger, "stage start", run_id=run_id, stage="ingest", event="STAGE_START", status="ok")
    if args.catalog:
        result = ingest_catalog(config=config)
    else:
        result = run_ingestion(args.source, config=config)

    out_path = data_dir / "out" / f"plants.{args.format}"
    if args.format == "json":
        write_plants_json(out_path, result.records)
    else:
        write_plants_csv(out_path, result.records)
    write_ingest_report(data_dir, result, run_id=run_id, bbox=config.bbox_wgs84)

    log_event(
        logger,
        "stage end",
        run_id=run_id,
        stage="ingest",
        source=result.resource,
        event="STAGE_END",
        status="partial" if result.rows_rejected else "ok",
        rows_in=result.rows_in,
        rows_out=result.rows_out,
        rows_rejected=result.rows_rejected,
    )
    if result.rows_rejected:
        return EXIT_PARTIAL
    return EXIT_SUCCESS


def run_patterns(args: argparse.Namespace) -> int:
    store = PatternStore(_load_config(args).patterns_store)

    if args.action == "reset":
        snapshot = store.reset()
    elif args.action == "list":
        snapshot = store.load()
    else:
        if not args.substring:
            raise SystemExit(f"patterns {args.action} needs a substring")
        current = [p for p in store.load() if p.substring.lower() != args.substring.strip().lower()]
        if args.action == "add":
            if not args.sector:
                raise SystemExit("patterns add needs a sector (public or private)")
            current.append(ClassificationPattern.from_dict({"substring": args.substring, "sector": args.sector}))
        snapshot = store.save(current)

    payload = {"customized": snapshot.customized, "patterns": [p.to_dict() for p in snapshot]}
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return EXIT_SUCCESS


def run_command(args: argparse.Namespace) -> int:
    if args.command == "ingest":
        return run_ingest(args)
    if args.command == "patterns":
        return run_patterns(args)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        return run_command(args)
    except PipelineError as exc:
        print(f"{exc.error_code}: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
