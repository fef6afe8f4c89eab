"""Core domain models for newsdesk.

``Article``, ``Success`` and ``Failure`` are immutable frozen dataclasses.
A ``SearchOutcome`` is produced once per search call and handed to the
caller to drive its view state; it is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Union
import json


def _optional_text(raw: Any) -> str | None:
    """Return *raw* when it is a string, else ``None``."""
    return raw if isinstance(raw, str) else None


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True, slots=True)
class Article:
    """A single news search result.

    Every field is optional because NewsAPI may send ``null`` for any of
    them.  Only articles with a non-blank ``title`` *and* ``url`` are shown
    to the user; see ``is_displayable``.
    """

    title: str | None = None
    description: str | None = None
    url: str | None = None
    source_name: str | None = None

    @property
    def is_displayable(self) -> bool:
        """``True`` when both ``title`` and ``url`` are present and non-blank."""
        return not _is_blank(self.title) and not _is_blank(self.url)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "source_name": self.source_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Article":
        """Build an ``Article`` from one element of NewsAPI's ``articles`` array."""
        source = data.get("source")
        source_name = source.get("name") if isinstance(source, dict) else None
        return cls(
            title=_optional_text(data.get("title")),
            description=_optional_text(data.get("description")),
            url=_optional_text(data.get("url")),
            source_name=_optional_text(source_name),
        )


@dataclass(frozen=True, slots=True)
class Success:
    """A completed search.  ``articles`` may be empty; that is not an error."""

    articles: tuple[Article, ...]

    @classmethod
    def of(cls, articles: Iterable[Article]) -> "Success":
        return cls(articles=tuple(articles))

    @property
    def is_empty(self) -> bool:
        return not self.articles


@dataclass(frozen=True, slots=True)
class Failure:
    """A failed search carrying a message fit to show the user."""

    message: str


SearchOutcome = Union[Success, Failure]


def outcome_to_dict(outcome: SearchOutcome) -> dict[str, Any]:
    if isinstance(outcome, Success):
        return {
            "status": "ok",
            "total": len(outcome.articles),
            "articles": [a.to_dict() for a in outcome.articles],
        }
    return {"status": "error", "message": outcome.message}


def outcome_to_pretty_json(outcome: SearchOutcome) -> str:
    return json.dumps(outcome_to_dict(outcome), indent=2, sort_keys=True, ensure_ascii=False)
