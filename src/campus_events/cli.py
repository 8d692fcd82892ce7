"""Command-line interface for Campus Events.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

import structlog

from campus_events import __version__
from campus_events.cache import EventCache
from campus_events.config import Settings, get_settings
from campus_events.models import RawEvent
from campus_events.refresh import RefreshService, build_classifier
from campus_events.sheets.client import SheetsClient
from campus_events.utils import configure_logging

logger = structlog.get_logger()


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="campus-events", description="Campus Events")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Listen address (default: settings host)")
    serve_parser.add_argument("--port", type=int, default=None, help="Listen port (default: settings port)")

    subparsers.add_parser(
        "check-env",
        help="Report which configuration values are set (secrets are not printed)",
    )

    sheet_parser = subparsers.add_parser("test-sheet", help="Fetch the sheet and show the first row")
    sheet_parser.add_argument("--range", dest="range_", default=None, help="A1 range (default: settings sheet_range)")

    refresh_parser = subparsers.add_parser("refresh", help="Classify the sheet once and print JSON")
    refresh_parser.add_argument(
        "--offline",
        action="store_true",
        help="Use keyword heuristics only; never call the remote classifier",
    )
    refresh_parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=None,
        help="Maximum number of rows to classify (default: settings max_events)",
    )

    classify_parser = subparsers.add_parser("classify", help="Classify one event given on the command line")
    classify_parser.add_argument("--title", required=True)
    classify_parser.add_argument("--date", default="", help='Free-text date, e.g. "sept 26 6:00pm"')
    classify_parser.add_argument("--location", default="")
    classify_parser.add_argument("--org", default="")
    classify_parser.add_argument("--description", default="")
    classify_parser.add_argument("--url", default="")
    classify_parser.add_argument(
        "--offline",
        action="store_true",
        help="Use keyword heuristics only; never call the remote classifier",
    )

    return parser


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from campus_events.api import create_app

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("server_starting", host=host, port=port)
    uvicorn.run(create_app(settings), host=host, port=port)
    return 0


def _cmd_check_env(settings: Settings) -> int:
    key = settings.google_private_key
    has_begin = "BEGIN PRIVATE KEY" in key
    has_escaped_newline = "\\n" in key
    decoded_multiline = "\n" in settings.decoded_private_key

    print(f"OPENAI_API_KEY set: {bool(settings.openai_api_key)}")
    print(f"OPENAI_MODEL: {settings.openai_model}")
    print(f"GOOGLE_CLIENT_EMAIL: {settings.google_client_email or '(missing)'}")
    print(f"Has BEGIN in private key: {has_begin}")
    print(f"Has literal \\n: {has_escaped_newline}")
    print(f"Decoded contains newlines: {decoded_multiline}")
    if settings.google_service_account_file is not None:
        print(f"GOOGLE_SERVICE_ACCOUNT_FILE: {settings.google_service_account_file}")
    print(f"SHEET_ID: {settings.sheet_id or '(missing)'}")
    print(f"SHEET_RANGE: {settings.sheet_range}")
    print(f"REFRESH_TOKEN set: {bool(settings.refresh_token)}")
    print(f"MAX_EVENTS: {settings.max_events if settings.max_events is not None else '(all)'}")
    return 0


async def _cmd_test_sheet(args: argparse.Namespace, settings: Settings) -> int:
    rows = await SheetsClient(settings).get_rows(args.range_)
    print(f"Rows found: {len(rows)}")
    print(f"First row sample: {rows[0] if rows else None}")
    return 0


async def _cmd_refresh(args: argparse.Namespace, settings: Settings) -> int:
    if args.limit is not None:
        settings = settings.model_copy(update={"max_events": args.limit})
    service = RefreshService(
        EventCache(),
        classifier=build_classifier(settings, offline=args.offline),
        settings=settings,
    )
    try:
        results = await service.refresh()
    finally:
        await service.close()
    print(json.dumps([e.model_dump(mode="json") for e in results], indent=2))
    return 0


async def _cmd_classify(args: argparse.Namespace, settings: Settings) -> int:
    event = RawEvent(
        title=args.title,
        date=args.date,
        location=args.location,
        org=args.org,
        description=args.description,
        url=args.url,
    )
    classifier = build_classifier(settings, offline=args.offline)
    try:
        classification, source = await classifier.classify_with_source(event)
    finally:
        await classifier.close()
    print(json.dumps({"source": source.value, **classification.model_dump(mode="json")}, indent=2))
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Campus Events CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    parser = _build_parser()
    parsed = parser.parse_args(args)

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("campus_events_started", version=__version__, command=parsed.command)

    if parsed.command == "serve":
        return _cmd_serve(parsed, settings)
    if parsed.command == "check-env":
        return _cmd_check_env(settings)
    if parsed.command == "test-sheet":
        return asyncio.run(_cmd_test_sheet(parsed, settings))
    if parsed.command == "refresh":
        return asyncio.run(_cmd_refresh(parsed, settings))
    if parsed.command == "classify":
        return asyncio.run(_cmd_classify(parsed, settings))

    logger.error("unknown_command", command=parsed.command)
    return 2


if __name__ == "__main__":
    sys.exit(main())
