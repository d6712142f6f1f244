"""Command-line entry point for note-sync.

Exposes the caller-facing operations of the export engine:

    sync     Sync every enabled destination, stop on the first error
    test     Sync and report the first enabled destination
    status   Sync every enabled destination and report each result
    folders  List Apple Notes folders
    check    Check that Apple Notes can be automated
    init     Write a starter config file

Exit codes: 0 success, 1 sync failure, 2 configuration error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from . import __version__
from .config import load_config
from .config_loader import ensure_config
from .config_schema import UnifiedConfig
from .file_handler import read_note
from .logger import setup_logging
from .sync import (
    NO_TARGETS_MESSAGE,
    SUCCESS_MESSAGE,
    SyncError,
    SyncService,
    format_outcomes,
    outcomes_to_json,
    test_response_to_json,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SYNC_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def cmd_sync(service: SyncService, config: UnifiedConfig, args: argparse.Namespace) -> int:
    content = read_note(config.note.path)
    if not config.sync.is_any_enabled():
        print(NO_TARGETS_MESSAGE)
        return EXIT_OK
    try:
        service.sync_all(content, config.sync)
    except SyncError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_SYNC_FAILED
    print(SUCCESS_MESSAGE)
    return EXIT_OK


def cmd_test(service: SyncService, config: UnifiedConfig, args: argparse.Namespace) -> int:
    content = read_note(config.note.path)
    response = service.test_sync(content, config.sync)
    if args.json:
        _print_json(test_response_to_json(response))
    elif response.target:
        print(f"{response.target}: {response.message}")
    else:
        print(response.message)
    return EXIT_OK if response.success else EXIT_SYNC_FAILED


def cmd_status(service: SyncService, config: UnifiedConfig, args: argparse.Namespace) -> int:
    content = read_note(config.note.path)
    outcomes = service.sync_outcomes(content, config.sync)
    if args.json:
        _print_json(outcomes_to_json(outcomes))
    else:
        print(format_outcomes(outcomes))
    return EXIT_OK if all(o.success for o in outcomes) else EXIT_SYNC_FAILED


def cmd_folders(service: SyncService, config: UnifiedConfig, args: argparse.Namespace) -> int:
    try:
        folders = service.list_collections(config.sync)
    except SyncError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_SYNC_FAILED
    if args.json:
        _print_json(folders)
    else:
        for name in folders:
            print(name)
    return EXIT_OK


def cmd_check(service: SyncService, config: UnifiedConfig, args: argparse.Namespace) -> int:
    try:
        service.check_availability(config.sync)
    except SyncError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_SYNC_FAILED
    print("Apple Notes is available")
    return EXIT_OK


_COMMANDS = {
    "sync": cmd_sync,
    "test": cmd_test,
    "status": cmd_status,
    "folders": cmd_folders,
    "check": cmd_check,
}


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="note-sync",
        description="Export the note to Markdown and Apple Notes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sync using discovered config (.note_sync/config.yml or env vars)
  note-sync sync

  # Check which destinations succeed, as JSON
  note-sync status --json

  # Sync a specific note file with an explicit config
  note-sync --note ~/note.txt --config ./sync.yml sync
        """,
    )
    parser.add_argument("--note", help="Path to the note file (overrides config)")
    parser.add_argument("--config", help="Explicit YAML config file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--debug-format",
        choices=("text", "json"),
        default="text",
        help="Log output format (default: text)",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument(
        "--version",
        action="version",
        version=f"note-sync version {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("sync", help="Sync now, stop on the first error")
    for name, help_text in (
        ("test", "Sync and report the first enabled destination"),
        ("status", "Sync and report every enabled destination"),
        ("folders", "List Apple Notes folders"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--json", action="store_true", help="Print JSON")
    subparsers.add_parser("check", help="Check Apple Notes automation access")
    init = subparsers.add_parser("init", help="Write a starter config file")
    init.add_argument("path", nargs="?", help="Where to write it")
    return parser


def main(argv: list[str] | None = None, service: SyncService | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    load_dotenv()

    if args.command == "init":
        setup_logging(debug=args.debug, debug_format=args.debug_format)
        path = ensure_config(Path(args.path).expanduser() if args.path else None)
        print(f"Config file: {path}")
        return EXIT_OK

    try:
        config = load_config(note_path=args.note, config_file=args.config)
    except (ValueError, FileNotFoundError, yaml.YAMLError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(
        debug=args.debug,
        log_file=args.log_file or config.logging.file,
        debug_format=args.debug_format,
        level=config.logging.level,
    )

    logger.debug("Running command: %s", args.command)
    service = service or SyncService()
    try:
        return _COMMANDS[args.command](service, config, args)
    except OSError as exc:
        print(f"Failed to read note: {exc}", file=sys.stderr)
        return EXIT_SYNC_FAILED


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
