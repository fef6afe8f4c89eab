"""NewsAPI ``/everything`` client.

Authentication is a static API key sent as the ``apiKey`` query parameter.
Language, sort order and page size are fixed; only the query text varies per
call.  The client performs exactly one request per call and never retries.

Every failure is raised as a ``SearchError`` subclass so that
``SearchService`` can turn it into a user-facing message.  An empty key is
rejected with ``ConfigurationError`` *before* the transport is touched.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import httpx

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    SEARCH_LANGUAGE,
    SEARCH_PAGE_SIZE,
    SEARCH_SORT_BY,
)
from .exceptions import ConfigurationError, DecodeError, ServerError, TransportError
from .models import Article

_log = logging.getLogger(__name__)

EVERYTHING_PATH = "everything"


@dataclass(frozen=True, slots=True)
class NewsAPIConfig:
    """Immutable client configuration."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


class NewsAPIClient:
    """Async HTTP client for NewsAPI's ``everything`` endpoint.

    The client owns one ``httpx.AsyncClient``.  Pass ``transport`` to
    substitute a fake (``httpx.MockTransport``) in tests.  Release the
    connection pool with ``aclose()`` or by using the client as an async
    context manager.
    """

    source_name = "newsapi"

    def __init__(
        self,
        api_key: str | None,
        *,
        config: NewsAPIConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._config = config or NewsAPIConfig()
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            transport=transport,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "NewsAPIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def search_everything(self, query: str) -> list[Article]:
        """Return every article candidate for *query*, unfiltered.

        Raises:
            ConfigurationError: No API key; no request was sent.
            TransportError: The request did not complete.
            ServerError: Non-2xx response.
            DecodeError: 2xx response with an unusable body.
        """
        if not self.has_api_key:
            raise ConfigurationError("NewsAPI key is not configured")
        payload = await self._execute_request(self._params(query))
        return self._build_articles(payload)

    def _params(self, query: str) -> dict[str, Any]:
        return {
            "q": query,
            "language": SEARCH_LANGUAGE,
            "sortBy": SEARCH_SORT_BY,
            "pageSize": SEARCH_PAGE_SIZE,
            "apiKey": self._api_key,
        }

    async def _execute_request(self, params: dict[str, Any]) -> dict[str, Any]:
        """GET the endpoint; return the decoded JSON object."""
        _log.debug("GET %s q=%r", EVERYTHING_PATH, params["q"])
        try:
            response = await self._client.get(EVERYTHING_PATH, params=params)
        except httpx.TransportError as exc:
            raise TransportError(str(exc)) from exc
        if not response.is_success:
            raise ServerError(response.status_code, self._server_message(response))
        return self._parse_json(response)

    @staticmethod
    def _server_message(response: httpx.Response) -> str:
        """Prefer NewsAPI's ``message`` field; fall back to the reason phrase."""
        try:
            body = response.json()
        except ValueError:
            body = None
        message = body.get("message") if isinstance(body, dict) else None
        if isinstance(message, str) and message.strip():
            return message.strip()
        return response.reason_phrase

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict[str, Any]:
        """Unpack a JSON object from *response* or raise ``DecodeError``."""
        try:
            body = response.json()
        except ValueError as exc:
            raise DecodeError("NewsAPI returned a non-JSON response") from exc
        if not isinstance(body, dict):
            raise DecodeError("NewsAPI response is not a JSON object")
        return body

    @staticmethod
    def _build_articles(payload: dict[str, Any]) -> list[Article]:
        raw = payload.get("articles")
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise DecodeError("NewsAPI 'articles' field is not a list")
        return [Article.from_dict(item) for item in raw if isinstance(item, dict)]
