"""Composition root for newsdesk.

Builds the client, search service, key-value store, ledger and facade from
plain settings.  Nothing here is a module-level singleton: each caller owns
what it builds and closes it when done.
"""

from __future__ import annotations

from pathlib import Path

import httpx

from .api_client import NewsAPIClient, NewsAPIConfig
from .constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, RECENTS_REGION
from .desk import NewsDesk
from .recent import RecentQueryLedger
from .search import SearchService
from .storage import SQLiteKeyValueStore


def build_search_service(
    *,
    api_key: str | None,
    base_url: str = DEFAULT_BASE_URL,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SearchService:
    """Construct a ``SearchService`` backed by a fresh ``NewsAPIClient``."""
    config = NewsAPIConfig(base_url=base_url, timeout_seconds=timeout_seconds)
    client = NewsAPIClient(api_key, config=config, transport=transport)
    return SearchService(source=client)


def build_ledger(db_path: str | Path) -> RecentQueryLedger:
    """Construct a ledger over an initialised SQLite store at *db_path*."""
    store = SQLiteKeyValueStore(db_path, region=RECENTS_REGION)
    store.init_db()
    return RecentQueryLedger(store)


def build_desk(
    *,
    api_key: str | None,
    db_path: str | Path,
    base_url: str = DEFAULT_BASE_URL,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> NewsDesk:
    ledger = build_ledger(db_path)
    service = build_search_service(
        api_key=api_key, base_url=base_url, timeout_seconds=timeout_seconds, transport=transport,
    )
    return NewsDesk(service=service, ledger=ledger)
