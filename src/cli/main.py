"""Photosnap CLI entry points.
This module exposes commands for syncing and inspecting region snapshots.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import PhotoSnapConfig
from core.constants import DEFAULT_ENV_FILE
from core.errors import PhotoSnapError
from core.logging_config import configure_logging, get_logger
from store.region_sdk import PhotoSnapClient

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="photosnap",
        description="Sync regional Flickr photo metadata snapshots",
    )
    parser.add_argument(
        "--env-file",
        default=str(DEFAULT_ENV_FILE),
        help="Dotenv file providing FLICKR_API_KEY and PHOTOSNAP_* settings",
    )
    parser.add_argument("--ingest-dir", help="Override PHOTOSNAP_INGEST_DIR for this command")
    parser.add_argument("--output-dir", help="Override PHOTOSNAP_OUTPUT_DIR for this command")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Override PHOTOSNAP_LOG_LEVEL for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_sync_command(subparsers)
    _add_plan_command(subparsers)
    subparsers.add_parser("regions", help="List regions with an ingest file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the photosnap CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        configure_logging(config.log_level)
        client = PhotoSnapClient(config)
        try:
            return _dispatch(parser, client, args)
        finally:
            client.close()
    except PhotoSnapError as error:
        _LOGGER.error("command_failed", error_type=error.__class__.__name__, error=str(error))
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: PhotoSnapClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "sync":
        return _run_sync_command(client, args)
    if args.command == "plan":
        return _run_plan_command(client, args)
    if args.command == "regions":
        return _run_regions_command(client)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> PhotoSnapConfig:
    """Build config from env with command-line overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured runtime config.
    """
    config = PhotoSnapConfig.from_env(Path(args.env_file))
    overrides: dict[str, Any] = {}
    if args.ingest_dir:
        overrides["ingest_dir"] = Path(args.ingest_dir).expanduser()
    if args.output_dir:
        overrides["output_dir"] = Path(args.output_dir).expanduser()
    if args.log_level:
        overrides["log_level"] = args.log_level
    for name in ("fetch_workers", "region_workers", "calls_per_second"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    return replace(config, **overrides) if overrides else config


def _run_sync_command(client: PhotoSnapClient, args: argparse.Namespace) -> int:
    """Handle sync command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when any region failed.
    """
    report = client.sync(args.region or None)
    for result in report.results:
        print(
            f"{result.region}\t"
            f"{result.entry_count}\t"
            f"reused={result.reused_count}\t"
            f"fetched={len(result.fetched_ids)}\t"
            f"skipped={','.join(result.skipped_ids) or '-'}"
        )
    for region, message in report.failures.items():
        print(f"{region}\tFAILED\t{message}")
    return 0 if report.succeeded else 1


def _run_plan_command(client: PhotoSnapClient, args: argparse.Namespace) -> int:
    """Handle plan command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for plan in client.plan(args.region or None):
        print(
            f"{plan.region}\t"
            f"ids={len(plan.photo_ids)}\t"
            f"hits={len(plan.hit_ids)}\t"
            f"misses={len(plan.miss_ids)}"
        )
        if args.show_misses:
            for photo_id in plan.miss_ids:
                print(f"  {photo_id}")
    return 0


def _run_regions_command(client: PhotoSnapClient) -> int:
    """Handle regions command."""
    for region in client.regions():
        print(region)
    return 0


def _add_sync_command(subparsers: Any) -> None:
    """Register sync subcommand."""
    parser = subparsers.add_parser("sync", help="Fetch missing photos and rewrite snapshots")
    parser.add_argument(
        "--region",
        action="append",
        help="Region to sync; repeat for several. Defaults to every region",
    )
    parser.add_argument(
        "--fetch-workers", type=_positive_int, help="Concurrent fetches per region"
    )
    parser.add_argument(
        "--region-workers", type=_positive_int, help="Regions synced concurrently"
    )
    parser.add_argument(
        "--calls-per-second",
        type=_positive_float,
        help="Global Flickr call rate shared by all workers",
    )


def _add_plan_command(subparsers: Any) -> None:
    """Register plan subcommand."""
    parser = subparsers.add_parser("plan", help="Show hits and misses without calling Flickr")
    parser.add_argument("--region", action="append", help="Region to plan; repeat for several")
    parser.add_argument("--show-misses", action="store_true", help="List every id to fetch")


def _positive_int(raw_value: str) -> int:
    value = int(raw_value)
    if value < 1:
        raise argparse.ArgumentTypeError("expected an integer of at least 1")
    return value


def _positive_float(raw_value: str) -> float:
    value = float(raw_value)
    if not math.isfinite(value) or value <= 0:
        raise argparse.ArgumentTypeError("expected a finite positive number")
    return value
