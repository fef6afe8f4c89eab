from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

from fastapi import FastAPI, HTTPException, Query, Response

from .bootstrap import build_desk, build_ledger
from .cli import ENV_API_KEY, ENV_BASE_URL, ENV_DB_PATH, env_timeout_seconds
from .constants import DEFAULT_BASE_URL, DEFAULT_DB_PATH
from .desk import NewsDesk
from .exceptions import StorageError
from .models import Failure, outcome_to_dict

app = FastAPI(title="newsdesk API", version="1.0.0")


def _load_env_file(path: str = ".env") -> None:
    env_path = Path(path)
    if not env_path.exists() or not env_path.is_file():
        return
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip()
        if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in {"\"", "'"}:
            cleaned = cleaned[1:-1]
        os.environ[key] = cleaned


_load_env_file()


def _db_path() -> str:
    return os.environ.get(ENV_DB_PATH, DEFAULT_DB_PATH)


def _build_desk() -> NewsDesk:
    return build_desk(
        api_key=os.environ.get(ENV_API_KEY, ""),
        db_path=_db_path(),
        base_url=os.environ.get(ENV_BASE_URL, DEFAULT_BASE_URL),
        timeout_seconds=env_timeout_seconds(),
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/search")
async def search(q: Annotated[str, Query(min_length=1, max_length=500)]) -> dict[str, object]:
    try:
        desk = _build_desk()
        try:
            outcome = await desk.search(q)
        finally:
            await desk.aclose()
    except StorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    if outcome is None:
        raise HTTPException(status_code=422, detail="query must not be blank")
    if isinstance(outcome, Failure):
        raise HTTPException(status_code=503, detail=outcome.message)
    return outcome_to_dict(outcome)


@app.get("/recent")
def recent() -> dict[str, object]:
    try:
        queries = build_ledger(_db_path()).list()
    except StorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return {"total": len(queries), "queries": queries}


@app.delete("/recent", status_code=204)
def clear_recent() -> Response:
    try:
        build_ledger(_db_path()).clear()
    except StorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return Response(status_code=204)
