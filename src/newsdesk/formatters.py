"""Presentation formatters for newsdesk outputs."""

from __future__ import annotations

from .models import Article, Failure, SearchOutcome


class TextFormatter:
    """Render outcomes and recent queries as plain terminal text."""

    def format_outcome(self, outcome: SearchOutcome) -> str:
        if isinstance(outcome, Failure):
            return f"error: {outcome.message}"
        if outcome.is_empty:
            return "No articles found."
        return "\n\n".join(self._article_block(i, a) for i, a in enumerate(outcome.articles, start=1))

    def format_recent(self, queries: list[str]) -> str:
        if not queries:
            return "No recent searches."
        return "\n".join(f"{i}. {q}" for i, q in enumerate(queries, start=1))

    @staticmethod
    def _article_block(index: int, article: Article) -> str:
        lines = [f"{index}. {(article.title or '').strip()}"]
        if article.source_name and article.source_name.strip():
            lines.append(f"   Source: {article.source_name.strip()}")
        if article.description and article.description.strip():
            lines.append(f"   {article.description.strip()}")
        lines.append(f"   {(article.url or '').strip()}")
        return "\n".join(lines)
