from __future__ import annotations

import logging

from .exceptions import ConfigurationError, SearchError, ServerError, TransportError
from .models import Failure, SearchOutcome, Success
from .protocols import ArticleSource

_log = logging.getLogger(__name__)

CONFIG_ERROR_MESSAGE = (
    "Missing NewsAPI key. Set NEWSAPI_KEY (or pass --api-key) and try again."
)

STATUS_MESSAGES: dict[int, str] = {
    400: "Invalid query. Please refine your keyword and try again.",
    401: "Unauthorized response from NewsAPI. Check that your API key is valid.",
    426: "NewsAPI plan upgrade required for this request.",
    429: "Rate limit reached. Please wait a minute and retry.",
}


def network_error_message(reason: str) -> str:
    return f"Network error: {reason or 'check your connection'}"


def server_error_message(status_code: int, server_message: str) -> str:
    known = STATUS_MESSAGES.get(status_code)
    if known is not None:
        return known
    return f"NewsAPI error {status_code}: {server_message}"


def unexpected_error_message(exc: BaseException) -> str:
    return f"Unexpected error: {str(exc) or 'please try again'}"


class SearchService:
    """Use-case facade: run one news search and classify the result.

    The caller injects the ``ArticleSource`` (normally a ``NewsAPIClient``),
    so a fake transport can stand in during tests.

    Invariant: ``search`` never raises.  Every failure path, including
    unexpected exceptions, yields a ``Failure`` whose message is fit to show
    the user.  Only articles with a non-blank title and url are returned.
    """

    def __init__(self, *, source: ArticleSource) -> None:
        self._source = source

    async def search(self, query: str) -> SearchOutcome:
        """Query the source once; *query* is sent verbatim."""
        try:
            candidates = await self._source.search_everything(query)
        except SearchError as exc:
            return Failure(self._failure_message(exc))
        except Exception as exc:
            _log.exception("unexpected failure while searching %r", query)
            return Failure(unexpected_error_message(exc))
        articles = [article for article in candidates if article.is_displayable]
        _log.debug("search %r kept %d of %d articles", query, len(articles), len(candidates))
        return Success.of(articles)

    @staticmethod
    def _failure_message(exc: SearchError) -> str:
        if isinstance(exc, ConfigurationError):
            _log.warning("search skipped: API key is not configured")
            return CONFIG_ERROR_MESSAGE
        if isinstance(exc, TransportError):
            _log.warning("search transport failure: %s", exc.reason or "no reason given")
            return network_error_message(exc.reason)
        if isinstance(exc, ServerError):
            _log.warning("search rejected with status %d", exc.status_code)
            return server_error_message(exc.status_code, exc.server_message)
        _log.warning("search response could not be decoded: %s", exc)
        return unexpected_error_message(exc)

    async def aclose(self) -> None:
        await self._source.aclose()
