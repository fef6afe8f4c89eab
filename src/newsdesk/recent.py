"""Persisted ledger of recent successful search queries.

The ledger is a most-recent-first list of at most ``MAX_RECENT_QUERIES``
strings, stored as a JSON array under one key of a ``KeyValueStore``.
Entries are unique under case-insensitive comparison; re-recording a query
moves it to the front and keeps the newest spelling.

Reads never fail on bad data: an absent key, malformed JSON or a non-array
value all read as an empty ledger.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from typing import Any

from .constants import MAX_RECENT_QUERIES, RECENTS_KEY
from .protocols import KeyValueStore

_log = logging.getLogger(__name__)


def _decode_entries(raw: str | None) -> list[str]:
    """Parse a stored JSON array into non-blank strings; bad data reads as ``[]``."""
    if raw is None:
        return []
    try:
        decoded: Any = json.loads(raw)
    except ValueError:
        _log.debug("recent queries value is not valid JSON; treating as empty")
        return []
    if not isinstance(decoded, list):
        _log.debug("recent queries value is not a JSON array; treating as empty")
        return []
    return [item for item in decoded if isinstance(item, str) and item.strip()]


def _promote(entries: list[str], query: str, *, limit: int) -> list[str]:
    """Return *entries* with *query* moved to the front, case-insensitively unique."""
    lowered = query.lower()
    rest = [entry for entry in entries if entry.lower() != lowered]
    return [query, *rest][:limit]


class RecentQueryLedger:
    """Bounded, deduplicated, most-recent-first history of search queries.

    ``record`` hands its read-modify-write to ``KeyValueStore.update``, which
    is atomic in the store, so concurrent callers never lose an entry even
    through separate ledger instances on the same store.  One
    ``threading.Lock`` per instance also orders calls made on this instance.
    The ``a``-prefixed coroutines run the same operations in a worker thread
    for callers on an event loop.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = RECENTS_KEY,
        max_entries: int = MAX_RECENT_QUERIES,
    ) -> None:
        self._store = store
        self._key = key
        self._max_entries = max(int(max_entries), 1)
        self._lock = threading.Lock()

    def list(self) -> list[str]:
        """Return the stored queries, most recent first."""
        with self._lock:
            return self._read()

    def record(self, query: str) -> None:
        """Put the trimmed *query* at the front; blank input is ignored."""
        trimmed = query.strip()
        if not trimmed:
            return
        with self._lock:
            self._store.update(self._key, lambda raw: self._promoted_json(raw, trimmed))

    def clear(self) -> None:
        """Drop the stored entry entirely."""
        with self._lock:
            self._store.remove(self._key)

    async def alist(self) -> list[str]:
        return await asyncio.to_thread(self.list)

    async def arecord(self, query: str) -> None:
        await asyncio.to_thread(self.record, query)

    async def aclear(self) -> None:
        await asyncio.to_thread(self.clear)

    def _promoted_json(self, raw: str | None, query: str) -> str:
        entries = _decode_entries(raw)[: self._max_entries]
        return json.dumps(_promote(entries, query, limit=self._max_entries), ensure_ascii=False)

    def _read(self) -> list[str]:
        return _decode_entries(self._store.get(self._key))[: self._max_entries]
