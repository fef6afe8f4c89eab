from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .bootstrap import build_desk
from .cli import add_common_arguments, CommonArgs
from .desk import NewsDesk
from .exceptions import StorageError
from .formatters import TextFormatter
from .models import SearchOutcome, Success, outcome_to_pretty_json


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="newsdesk", description="Search NewsAPI and revisit recent queries.")
    add_common_arguments(parser)
    sub = parser.add_subparsers(dest="command", required=True)
    search = sub.add_parser("search", help="Search news articles")
    search.add_argument("query", help="Keyword or phrase to search for")
    search.add_argument("--no-record", action="store_true", help="Do not add the query to recent searches")
    search.add_argument("--format", choices=["json", "text"], default="text")
    recent = sub.add_parser("recent", help="List recent searches, newest first")
    recent.add_argument("--format", choices=["json", "text"], default="text")
    sub.add_parser("clear-recent", help="Forget all recent searches")
    return parser


def _write_outcome(outcome: SearchOutcome, fmt: str) -> None:
    if fmt == "json":
        sys.stdout.write(outcome_to_pretty_json(outcome) + "\n")
    else:
        sys.stdout.write(TextFormatter().format_outcome(outcome) + "\n")


async def _try_record(desk: NewsDesk, query: str) -> int | None:
    """Add *query* to recent searches; return 3 on StorageError, else None."""
    try:
        await desk.ledger.arecord(query)
        return None
    except StorageError as exc:
        sys.stderr.write(f"failed to record recent search: {exc}\n")
        return 3


async def _run_search(desk: NewsDesk, args: argparse.Namespace) -> int:
    """Search once, print the outcome and record the query on success."""
    outcome = await desk.search(args.query, record=False)
    if outcome is None:
        sys.stderr.write("newsdesk: query must not be blank\n")
        return 1
    code = None
    if isinstance(outcome, Success) and not args.no_record:
        code = await _try_record(desk, args.query.strip())
    _write_outcome(outcome, args.format)
    if code is not None:
        return code
    return 0 if isinstance(outcome, Success) else 2


async def _run_recent(desk: NewsDesk, args: argparse.Namespace) -> int:
    queries = await desk.recent()
    if args.format == "json":
        sys.stdout.write(json.dumps({"total": len(queries), "queries": queries}, ensure_ascii=False) + "\n")
    else:
        sys.stdout.write(TextFormatter().format_recent(queries) + "\n")
    return 0


async def _dispatch(common: CommonArgs, args: argparse.Namespace) -> int:
    desk = build_desk(
        api_key=common.api_key, db_path=common.db_path,
        base_url=common.base_url, timeout_seconds=common.timeout_seconds,
    )
    try:
        if args.command == "search":
            return await _run_search(desk, args)
        if args.command == "recent":
            return await _run_recent(desk, args)
        await desk.clear_recent()
        return 0
    finally:
        await desk.aclose()


def main(argv: list[str] | None = None) -> int:
    """Run one newsdesk command and return its exit code."""
    args = _build_parser().parse_args(argv)
    common = CommonArgs.from_namespace(args)
    _configure_logging(common.log_level)
    try:
        return asyncio.run(_dispatch(common, args))
    except StorageError as exc:
        sys.stderr.write(f"storage error: {exc}\n")
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
