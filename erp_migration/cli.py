"""Command-line interface for the migration runtime."""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .adapters.factory import create_adapter
from .config import AdapterSettings, RunConfig
from .errors import ErpMigrationError
from .loaders.api_loader import TargetApiLoader
from .models.migration import RunResult, SourceGateway, SourceMode
from .objects.registry import MigrationObjectRegistry

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="ERP Migration - Run declarative migration objects from ECC or Infor sources"
    )
    parser.add_argument("--env-file", help="Path to a .env file (default: ./.env if present)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # List objects
    list_parser = subparsers.add_parser("list", help="List registered migration objects")
    list_parser.add_argument("--json", action="store_true", help="Print full metadata as JSON")

    # Execution waves
    waves_parser = subparsers.add_parser("waves", help="Show dependency-ordered execution waves")
    waves_parser.add_argument("object_ids", nargs="*", help="Objects to plan (default: all)")

    # Run migration
    run_parser = subparsers.add_parser("run", help="Run migration objects")
    run_parser.add_argument("object_ids", nargs="*", help="Objects to run (default: all)")
    run_parser.add_argument("--live", action="store_true", help="Extract from the configured source ERP")
    run_parser.add_argument("--sequential", action="store_true", help="Run one object at a time")
    run_parser.add_argument("--concurrency", type=int, help="Max objects running at once")
    run_parser.add_argument("--batch-size", type=int, help="Records per load batch")
    run_parser.add_argument("--error-rate", type=float, help="Simulated load failure rate (mock mode)")
    run_parser.add_argument("--target-url", help="Base URL of the target API (live mode)")
    run_parser.add_argument("--dry-run", action="store_true", help="Post nothing to the target")
    run_parser.add_argument("--output", "-o", help="Write the JSON run report to this file")
    run_parser.add_argument("--json", action="store_true", help="Print the JSON run report")

    # Source health
    subparsers.add_parser("health", help="Check the configured source adapter")

    args = parser.parse_args(argv)

    if args.env_file:
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    try:
        run_config = RunConfig.from_env()
        # Set up logging
        log_level = logging.DEBUG if args.verbose else getattr(logging, run_config.log_level)
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        if args.command == "list":
            return list_objects(args)
        elif args.command == "waves":
            return show_waves(args)
        elif args.command == "run":
            return run_migration(args, run_config)
        elif args.command == "health":
            return check_health(args)
        parser.print_help()
        return 0
    except ErpMigrationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.details:
            print(json.dumps(e.details, indent=2, default=str), file=sys.stderr)
        return 2


def list_objects(args) -> int:
    """Print the registered migration objects."""
    registry = MigrationObjectRegistry()
    objects = registry.list_objects()

    if args.json:
        print(json.dumps(objects, indent=2, default=str))
        return 0

    print(f"\n=== {len(objects)} Migration Objects ===\n")
    for obj in objects:
        print(
            f"  {obj['object_id']:<22} {obj['name']:<28} "
            f"{obj['source_table'] or '-':<16} -> {obj['target_entity']:<28} "
            f"{obj['mapping_count']:>3} rules"
        )
    return 0


def show_waves(args) -> int:
    """Print the execution waves."""
    registry = MigrationObjectRegistry()
    waves = registry.get_execution_waves(args.object_ids or None)

    print("\n=== Execution Waves ===")
    for i, wave in enumerate(waves, 1):
        print(f"\nWave {i} ({len(wave)} objects):")
        for object_id in wave:
            print(f"  - {object_id}")
    return 0


def _build_gateway(args, run_config: RunConfig) -> SourceGateway:
    """Mock gateway, or a connected live adapter plus the target loader."""
    if not args.live:
        return SourceGateway.mock()

    settings = AdapterSettings.from_env()
    settings.mode = SourceMode.LIVE
    adapter = create_adapter(settings)
    adapter.connect()

    loader = None
    target_url = args.target_url or run_config.target_url
    if target_url:
        loader = TargetApiLoader(
            base_url=target_url,
            api_key=run_config.target_api_key,
            dry_run=args.dry_run or run_config.dry_run,
            batch_size=args.batch_size or run_config.batch_size,
        )
    else:
        logger.warning("No target URL configured; load phases will fail in live mode")
    return SourceGateway.live(adapter, loader)


def _print_summary(result: RunResult) -> None:
    print("\n" + "=" * 60)
    print("MIGRATION RUN COMPLETE")
    print("=" * 60)
    print(f"Mode: {result.mode.value}")
    print(f"Objects: {result.stats.total}  Completed: {result.stats.completed}  Failed: {result.stats.failed}")
    if result.stats.cancelled:
        print(f"Cancelled; not run: {', '.join(result.stats.not_run)}")
    print(f"Duration: {result.stats.total_duration_ms / 1000:.2f} seconds")

    for obj in result.results:
        line = (
            f"  {obj.object_id:<22} {obj.status.value:<22} "
            f"extracted={obj.stats.extracted_records:<5} loaded={obj.stats.loaded_records:<5}"
        )
        if obj.error:
            line += f" error={obj.error}"
        print(line)


def run_migration(args, run_config: RunConfig) -> int:
    """Run the selected objects and report."""
    registry = MigrationObjectRegistry()
    gateway = _build_gateway(args, run_config)

    options: Dict[str, Any] = {
        "object_ids": args.object_ids or None,
        "parallel": run_config.parallel and not args.sequential,
        "max_concurrency": args.concurrency or run_config.max_concurrency,
        "batch_size": args.batch_size or run_config.batch_size,
        "load_error_rate": args.error_rate if args.error_rate is not None else run_config.load_error_rate,
    }
    try:
        result = registry.run_all_sync(gateway, **options)
    finally:
        if gateway.adapter is not None:
            gateway.adapter.disconnect()

    report = result.to_dict()
    if args.output:
        with open(args.output, "w") as f:
            json.dump(report, f, indent=2, default=str)
        print(f"Report saved to {args.output}")

    if args.json:
        print(json.dumps(report, indent=2, default=str))
    else:
        _print_summary(result)

    return 0 if result.success else 1


def check_health(args) -> int:
    """Connect to the configured source and print its health and system info."""
    settings = AdapterSettings.from_env()
    adapter = create_adapter(settings)
    adapter.connect()
    try:
        report = {
            "settings": settings.to_dict(),
            "health": adapter.health_check(),
            "system": adapter.get_system_info(),
        }
    finally:
        adapter.disconnect()

    print(json.dumps(report, indent=2, default=str))
    return 0 if report["health"].get("ok") else 1


if __name__ == "__main__":
    sys.exit(main())
