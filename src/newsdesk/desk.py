from __future__ import annotations

import logging

from .models import SearchOutcome, Success
from .recent import RecentQueryLedger
from .search import SearchService

_log = logging.getLogger(__name__)


class NewsDesk:
    """Orchestrating facade over ``SearchService`` and ``RecentQueryLedger``.

    This is what a screen talks to: it trims the query, skips blank input,
    runs one search and records the query in the ledger only when the search
    succeeds.  A failed search leaves the ledger untouched.

    ``StorageError`` from the ledger write is not caught here; the outcome
    of the search itself is never turned into an exception.
    """

    def __init__(self, *, service: SearchService, ledger: RecentQueryLedger) -> None:
        self._service = service
        self._ledger = ledger

    @property
    def ledger(self) -> RecentQueryLedger:
        return self._ledger

    async def search(self, query: str, *, record: bool = True) -> SearchOutcome | None:
        """Search for the trimmed *query*; ``None`` when there is nothing to search."""
        trimmed = query.strip()
        if not trimmed:
            return None
        outcome = await self._service.search(trimmed)
        if record and isinstance(outcome, Success):
            await self._ledger.arecord(trimmed)
            _log.debug("recorded recent query %r", trimmed)
        return outcome

    async def recent(self) -> list[str]:
        return await self._ledger.alist()

    async def clear_recent(self) -> None:
        await self._ledger.aclear()

    async def aclose(self) -> None:
        await self._service.aclose()
