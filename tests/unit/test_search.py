from __future__ import annotations

import httpx
import pytest

from newsdesk.api_client import NewsAPIClient, NewsAPIConfig
from newsdesk.exceptions import ConfigurationError, DecodeError, ServerError, TransportError
from newsdesk.models import Article, Failure, Success
from newsdesk.search import (
    CONFIG_ERROR_MESSAGE,
    STATUS_MESSAGES,
    SearchService,
    network_error_message,
    server_error_message,
)


class _FakeSource:
    def __init__(self, *, articles: list[Article] | None = None, raises: BaseException | None = None) -> None:
        self._articles = articles or []
        self._raises = raises
        self.source_name = "fake"
        self.queries: list[str] = []
        self.closed = False

    async def search_everything(self, query: str) -> list[Article]:
        self.queries.append(query)
        if self._raises is not None:
            raise self._raises
        return self._articles

    async def aclose(self) -> None:
        self.closed = True


class _CountingHandler:
    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        return self._response


def _service_over(handler, *, api_key: str = "key") -> SearchService:
    client = NewsAPIClient(
        api_key,
        config=NewsAPIConfig(base_url="https://newsapi.test/v2/"),
        transport=httpx.MockTransport(handler),
    )
    return SearchService(source=client)


# Filtering

@pytest.mark.asyncio
async def test_search_keeps_only_articles_with_title_and_url(newsapi_success_payload: dict) -> None:
    service = _service_over(lambda _: httpx.Response(200, json=newsapi_success_payload))
    try:
        outcome = await service.search("news")
    finally:
        await service.aclose()

    assert isinstance(outcome, Success)
    assert [a.title for a in outcome.articles] == [
        "Solar storms light up northern skies",
        "Markets steady ahead of rate decision",
    ]


@pytest.mark.asyncio
async def test_search_empty_result_is_success() -> None:
    service = SearchService(source=_FakeSource(articles=[Article(title=" ", url="https://x")]))
    outcome = await service.search("nothing")
    assert outcome == Success(articles=())


@pytest.mark.asyncio
async def test_search_preserves_server_order() -> None:
    articles = [Article(title=f"T{i}", url=f"https://x/{i}") for i in range(3)]
    outcome = await SearchService(source=_FakeSource(articles=articles)).search("q")
    assert isinstance(outcome, Success)
    assert [a.title for a in outcome.articles] == ["T0", "T1", "T2"]


@pytest.mark.asyncio
async def test_search_passes_query_verbatim() -> None:
    source = _FakeSource()
    await SearchService(source=source).search("  Mars rover ")
    assert source.queries == ["  Mars rover "]


# Configuration

@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", ["", "   "])
async def test_missing_key_fails_without_network_call(api_key: str) -> None:
    handler = _CountingHandler(httpx.Response(200, json={"articles": []}))
    service = _service_over(handler, api_key=api_key)
    try:
        outcome = await service.search("anything")
    finally:
        await service.aclose()

    assert outcome == Failure(CONFIG_ERROR_MESSAGE)
    assert handler.calls == 0


@pytest.mark.asyncio
async def test_configuration_error_maps_to_fixed_message() -> None:
    service = SearchService(source=_FakeSource(raises=ConfigurationError("no key")))
    assert await service.search("q") == Failure(CONFIG_ERROR_MESSAGE)


# Status-code mapping

@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 401, 426, 429])
async def test_known_status_codes_map_to_category_message(status: int) -> None:
    service = _service_over(lambda _: httpx.Response(status, json={"message": "server text"}))
    try:
        outcome = await service.search("q")
    finally:
        await service.aclose()

    assert outcome == Failure(STATUS_MESSAGES[status])


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [403, 404, 500, 503])
async def test_other_status_codes_use_generic_message(status: int) -> None:
    service = _service_over(lambda _: httpx.Response(status, json={"message": "server text"}))
    try:
        outcome = await service.search("q")
    finally:
        await service.aclose()

    assert outcome == Failure(f"NewsAPI error {status}: server text")


def test_status_message_table_covers_expected_codes() -> None:
    assert set(STATUS_MESSAGES) == {400, 401, 426, 429}
    assert "Invalid query" in STATUS_MESSAGES[400]
    assert "API key" in STATUS_MESSAGES[401]
    assert "upgrade" in STATUS_MESSAGES[426]
    assert "Rate limit" in STATUS_MESSAGES[429]


def test_server_error_message_generic_form() -> None:
    assert server_error_message(500, "Internal Server Error") == "NewsAPI error 500: Internal Server Error"


# Transport and unexpected failures

@pytest.mark.asyncio
async def test_transport_error_includes_reason() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection reset by peer", request=request)

    service = _service_over(handler)
    try:
        outcome = await service.search("q")
    finally:
        await service.aclose()

    assert outcome == Failure("Network error: connection reset by peer")


@pytest.mark.asyncio
async def test_transport_error_without_reason_uses_hint() -> None:
    service = SearchService(source=_FakeSource(raises=TransportError("")))
    assert await service.search("q") == Failure("Network error: check your connection")


def test_network_error_message_hint() -> None:
    assert network_error_message("") == "Network error: check your connection"


@pytest.mark.asyncio
async def test_decode_error_maps_to_unexpected_message() -> None:
    service = _service_over(lambda _: httpx.Response(200, content=b"<html>"))
    try:
        outcome = await service.search("q")
    finally:
        await service.aclose()

    assert isinstance(outcome, Failure)
    assert outcome.message.startswith("Unexpected error:")


@pytest.mark.asyncio
async def test_arbitrary_exception_never_escapes() -> None:
    service = SearchService(source=_FakeSource(raises=RuntimeError("kaboom")))
    assert await service.search("q") == Failure("Unexpected error: kaboom")


@pytest.mark.asyncio
async def test_exception_without_text_uses_retry_hint() -> None:
    service = SearchService(source=_FakeSource(raises=KeyError()))
    assert await service.search("q") == Failure("Unexpected error: please try again")


@pytest.mark.asyncio
async def test_server_error_from_source_uses_table() -> None:
    service = SearchService(source=_FakeSource(raises=ServerError(429, "slow down")))
    assert await service.search("q") == Failure(STATUS_MESSAGES[429])


@pytest.mark.asyncio
async def test_decode_error_from_source_is_failure() -> None:
    service = SearchService(source=_FakeSource(raises=DecodeError("bad body")))
    assert await service.search("q") == Failure("Unexpected error: bad body")


@pytest.mark.asyncio
async def test_aclose_closes_source() -> None:
    source = _FakeSource()
    await SearchService(source=source).aclose()
    assert source.closed is True
