#!/usr/bin/env python3
"""
devtoolsctl - Apollo Devtools operational CLI

A lightweight CLI for working with recorded cache data:
- Replaying snapshots through a recording session (devtoolsctl replay)
- Inspecting a cache extract (devtoolsctl cache)
- Health checks (devtoolsctl doctor)
- Version info (devtoolsctl version)
"""

import argparse
import asyncio
import json
import sys
from typing import Any, List

import httpx

from apollo_devtools import __version__, get_api_url
from apollo_devtools.cache import build_cache_objects, filter_cache_objects, get_cache_size
from apollo_devtools.recent_activity.session import RecordingSession


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colorize(text: str, color: str) -> str:
    """Colorize text if stdout is a TTY."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def read_snapshots(path: str) -> List[List[Any]]:
    """
    Read a JSON Lines file with one snapshot (a JSON array) per line.

    Blank lines are skipped.

    Raises:
        ValueError: If a line is not a JSON array
    """
    snapshots = []
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                snapshot = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"line {line_number}: invalid JSON ({e.msg})") from e
            if not isinstance(snapshot, list):
                raise ValueError(f"line {line_number}: expected a JSON array")
            snapshots.append(snapshot)
    return snapshots


def cmd_replay(args) -> int:
    """
    Replay recorded snapshots and print the detected changes.

    Returns:
        Exit code (0 on success, 1 if the input cannot be read)
    """
    try:
        snapshots = read_snapshots(args.file)
    except (OSError, ValueError) as e:
        print(colorize(f"✗ Cannot read {args.file}: {e}", Colors.RED), file=sys.stderr)
        return 1

    session = RecordingSession(args.target, max_events=args.max_events)
    session.start()

    for tick, snapshot in enumerate(snapshots, start=1):
        activities = session.record(snapshot) or []
        for activity in activities:
            record = activity.model_dump(mode="json")
            record["tick"] = tick
            print(json.dumps(record))

    session.stop()
    return 0


def cmd_cache(args) -> int:
    """
    Print the entries of a cache extract with their sizes.

    Returns:
        Exit code (0 on success, 1 if the extract cannot be read)
    """
    try:
        with open(args.file, "r", encoding="utf-8") as f:
            extract = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(colorize(f"✗ Cannot read {args.file}: {e}", Colors.RED), file=sys.stderr)
        return 1

    if not isinstance(extract, dict):
        print(colorize("✗ Cache extract must be a JSON object", Colors.RED), file=sys.stderr)
        return 1

    objects = build_cache_objects(extract)
    for obj in filter_cache_objects(objects, args.search):
        print(f"{obj.key:<50} {obj.value_size:>8} B")

    print(colorize(f"\nApollo cache (overall size {get_cache_size(objects)} B)", Colors.BOLD))
    return 0


async def check_api(api_url: str, timeout: float = 5.0) -> tuple[str, str]:
    """
    Check if the devtools API is reachable and healthy.

    Returns:
        (status, message) where status is "OK", "WARN", or "ERROR"
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(f"{api_url.rstrip('/')}/health")
            if response.status_code == 200:
                return "OK", "API is healthy"
            else:
                return "WARN", f"API returned status {response.status_code}"
    except httpx.ConnectError:
        return "ERROR", "Cannot connect to API (connection refused)"
    except httpx.TimeoutException:
        return "ERROR", "API connection timeout"
    except httpx.HTTPError as e:
        return "ERROR", f"Unexpected error: {e}"


def format_check_result(name: str, status: str, message: str, width: int = 40) -> str:
    """Format a check result line."""
    padding = " " * max(1, width - len(name))

    if status == "OK":
        status_str = colorize("[OK]", Colors.GREEN)
    elif status == "WARN":
        status_str = colorize("[WARN]", Colors.YELLOW)
    else:  # ERROR
        status_str = colorize("[ERROR]", Colors.RED)

    return f"{name}:{padding}{status_str} {message}"


async def cmd_doctor(args) -> int:
    """
    Run health checks and print a summary.

    Returns:
        Exit code (0 on success, non-zero on critical failure)
    """
    api_url = args.url or get_api_url()

    status, message = await check_api(api_url, timeout=args.timeout)
    print(format_check_result(f"API ({api_url})", status, message))

    if status == "ERROR":
        print(colorize("✗ One or more critical checks failed", Colors.RED))
        return 1

    print(colorize("✓ All critical checks passed", Colors.GREEN))
    return 0


def cmd_version(args) -> int:
    """
    Print version information.

    Returns:
        Exit code (always 0)
    """
    print(f"devtoolsctl version {__version__}")
    print("Apollo Devtools - GraphQL client cache inspector")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for devtoolsctl."""
    parser = argparse.ArgumentParser(
        description="Apollo Devtools operational CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  devtoolsctl replay snapshots.jsonl   # Print changes between recorded snapshots
  devtoolsctl cache extract.json       # List cache entries with sizes
  devtoolsctl doctor                   # Check the devtools API
  devtoolsctl version                  # Show version information

Environment variables:
  DEVTOOLS_API_URL                     # API URL (default: http://localhost:8000)
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # replay command
    replay_parser = subparsers.add_parser(
        "replay",
        help="Replay snapshots (JSON Lines) and print recent activity"
    )
    replay_parser.add_argument("file", help="JSON Lines file, one snapshot array per line")
    replay_parser.add_argument(
        "--target",
        default="cache",
        help="Name of the recorded target (default: cache)"
    )
    replay_parser.add_argument(
        "--max-events",
        type=int,
        default=None,
        help="Maximum number of events kept by the session"
    )

    # cache command
    cache_parser = subparsers.add_parser(
        "cache",
        help="List the entries of a cache extract"
    )
    cache_parser.add_argument("file", help="JSON file with the cache extract")
    cache_parser.add_argument(
        "--search",
        default="",
        help="Only show entries whose key contains this text"
    )

    # doctor command
    doctor_parser = subparsers.add_parser(
        "doctor",
        help="Check that the devtools API is reachable"
    )
    doctor_parser.add_argument("--url", default=None, help="API URL")
    doctor_parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Timeout for HTTP requests in seconds (default: 5.0)"
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information"
    )

    return parser


def main(argv=None):
    """Main entry point for devtoolsctl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handlers
    if args.command == "replay":
        return cmd_replay(args)
    elif args.command == "cache":
        return cmd_cache(args)
    elif args.command == "doctor":
        return asyncio.run(cmd_doctor(args))
    elif args.command == "version":
        return cmd_version(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
