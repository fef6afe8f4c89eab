from .api_client import NewsAPIClient, NewsAPIConfig
from .desk import NewsDesk
from .models import Article, Failure, SearchOutcome, Success
from .recent import RecentQueryLedger
from .search import SearchService
from .storage import InMemoryKeyValueStore, SQLiteKeyValueStore

__all__ = [
    "Article",
    "Failure",
    "InMemoryKeyValueStore",
    "NewsAPIClient",
    "NewsAPIConfig",
    "NewsDesk",
    "RecentQueryLedger",
    "SQLiteKeyValueStore",
    "SearchOutcome",
    "SearchService",
    "Success",
]
