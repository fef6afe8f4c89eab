import json
import sys
from pathlib import Path

import pytest


# Allow running tests without an installed wheel by adding src/ to sys.path.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def newsapi_success_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "newsapi_response_success.json").read_text(encoding="utf-8"))


@pytest.fixture
def newsapi_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point every newsdesk setting at test values; return the DB path."""
    db_path = tmp_path / "newsdesk.db"
    monkeypatch.setenv("NEWSAPI_KEY", "test-key")
    monkeypatch.setenv("NEWSAPI_BASE_URL", "https://newsapi.test/v2/")
    monkeypatch.setenv("NEWSDESK_DB_PATH", str(db_path))
    monkeypatch.delenv("NEWSDESK_TIMEOUT", raising=False)
    monkeypatch.delenv("NEWSDESK_LOG_LEVEL", raising=False)
    return db_path
