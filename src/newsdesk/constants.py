"""Domain-wide constants and default values."""

DEFAULT_BASE_URL = "https://newsapi.org/v2/"
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_DB_PATH = "./data/newsdesk.db"

SEARCH_LANGUAGE = "en"
SEARCH_SORT_BY = "publishedAt"
SEARCH_PAGE_SIZE = 20

RECENTS_REGION = "recent_searches_prefs"
RECENTS_KEY = "recents"
MAX_RECENT_QUERIES = 10
