from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import Article


@runtime_checkable
class ArticleSource(Protocol):
    """Abstraction for a remote index that answers a news query."""

    source_name: str

    async def search_everything(self, query: str) -> list[Article]:
        ...

    async def aclose(self) -> None:
        ...


@runtime_checkable
class KeyValueStore(Protocol):
    """A durable string-to-string store scoped to one named region."""

    region: str

    def get(self, key: str) -> str | None:
        ...

    def put(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...

    def update(self, key: str, transform: Callable[[str | None], str | None]) -> None:
        ...
