"""Shared CLI argument definitions for newsdesk.

Both ``__main__.py`` and the HTTP app read the same settings (``--api-key``,
``--base-url``, ``--db-path``, ``--timeout``, ``--log-level``).  This module
is the single source of truth for those argument names, their corresponding
environment variables, and their defaults.

Object construction is handled by ``bootstrap``.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass

from .constants import DEFAULT_BASE_URL, DEFAULT_DB_PATH, DEFAULT_TIMEOUT_SECONDS

# Environment variable names
ENV_API_KEY   = "NEWSAPI_KEY"
ENV_BASE_URL  = "NEWSAPI_BASE_URL"
ENV_DB_PATH   = "NEWSDESK_DB_PATH"
ENV_TIMEOUT   = "NEWSDESK_TIMEOUT"
ENV_LOG_LEVEL = "NEWSDESK_LOG_LEVEL"

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def env_timeout_seconds() -> float:
    """Return $NEWSDESK_TIMEOUT as seconds; unparsable or non-positive values give 15."""
    try:
        timeout = float(os.environ.get(ENV_TIMEOUT, str(DEFAULT_TIMEOUT_SECONDS)))
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return timeout if timeout > 0 else DEFAULT_TIMEOUT_SECONDS


def _add_api_key_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--api-key",
        default=os.environ.get(ENV_API_KEY, ""),
        help="NewsAPI key (or set NEWSAPI_KEY)",
    )


def _add_base_url_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--base-url",
        default=os.environ.get(ENV_BASE_URL, DEFAULT_BASE_URL),
        help="NewsAPI base URL (default: https://newsapi.org/v2/ or NEWSAPI_BASE_URL)",
    )


def _add_db_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--db-path",
        default=os.environ.get(ENV_DB_PATH, DEFAULT_DB_PATH),
        help="SQLite file holding recent searches (default: ./data/newsdesk.db or NEWSDESK_DB_PATH)",
    )


def _add_timeout_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--timeout",
        type=float,
        default=env_timeout_seconds(),
        help="Request timeout in seconds (default: 15 or NEWSDESK_TIMEOUT)",
    )


def _add_log_level_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default=os.environ.get(ENV_LOG_LEVEL, _DEFAULT_LOG_LEVEL).upper(),
        help="Logging verbosity on stderr (default: WARNING or NEWSDESK_LOG_LEVEL)",
    )


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the five shared arguments to *parser*.

    Defaults are resolved from environment variables at call time, so tests
    can monkeypatch env before calling this to control behaviour.
    """
    _add_api_key_argument(parser)
    _add_base_url_argument(parser)
    _add_db_path_argument(parser)
    _add_timeout_argument(parser)
    _add_log_level_argument(parser)


@dataclass(frozen=True, slots=True)
class CommonArgs:
    """Typed, validated view of the common CLI arguments."""

    api_key:         str
    base_url:        str
    db_path:         str
    timeout_seconds: float
    log_level:       str

    @staticmethod
    def from_namespace(ns: argparse.Namespace) -> "CommonArgs":
        """Build a ``CommonArgs`` from a parsed ``argparse.Namespace``."""
        timeout = float(ns.timeout)
        return CommonArgs(
            api_key=(ns.api_key or "").strip(),
            base_url=ns.base_url,
            db_path=ns.db_path,
            timeout_seconds=timeout if timeout > 0 else DEFAULT_TIMEOUT_SECONDS,
            log_level=ns.log_level,
        )
