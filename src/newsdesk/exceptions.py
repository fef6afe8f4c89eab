"""Exception hierarchy for newsdesk.

All exceptions raised by this library are subclasses of ``NewsDeskError``
so callers can catch the entire family with a single ``except`` clause when
need be.

Hierarchy::

    NewsDeskError
    ├── SearchError             – any failure while talking to NewsAPI
    │   ├── ConfigurationError  – no API key configured; nothing was sent
    │   ├── TransportError      – DNS, timeout, connection reset
    │   ├── ServerError         – non-2xx status; carries code and message
    │   └── DecodeError         – 2xx response whose body is not usable JSON
    └── StorageError            – key-value store read/write failure

``SearchService`` converts every ``SearchError`` into a ``Failure`` value;
these exceptions never reach UI callers.
"""


class NewsDeskError(Exception):
    """Base exception for all newsdesk errors."""


class SearchError(NewsDeskError):
    """Raised when a news search cannot produce a list of articles."""


class ConfigurationError(SearchError):
    """Raised before any request is sent when the API key is missing."""


class TransportError(SearchError):
    """Raised when the request never produced an HTTP response.

    ``reason`` is the underlying transport message, or ``""`` when the
    transport gave none.
    """

    def __init__(self, reason: str = "") -> None:
        super().__init__(reason or "transport failure")
        self.reason = reason


class ServerError(SearchError):
    """Raised when NewsAPI answers with a non-2xx status.

    Attributes:
        status_code: The HTTP status code.
        server_message: NewsAPI's ``message`` field, or the reason phrase.
    """

    def __init__(self, status_code: int, server_message: str = "") -> None:
        super().__init__(f"NewsAPI returned status {status_code}: {server_message}")
        self.status_code = status_code
        self.server_message = server_message


class DecodeError(SearchError):
    """Raised when a successful response body cannot be decoded."""


class StorageError(NewsDeskError):
    """Raised when a key-value store read or write fails.

    Wraps ``sqlite3.Error`` so callers receive a single typed exception
    regardless of the backend failure mode.
    """
