from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, AsyncIterator

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from catalog.search import filter_countries
from catalog.state import CatalogState
from collector.api_client import CountriesClient, FetchError
from utils.config import load_api_config
from utils.logging import get_logger

logger = get_logger(component="read_api")

_state: CatalogState | None = None


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    global _state
    yield
    if _state is not None:
        await _state.aclose()
        _state = None
        logger.info("catalog_state_closed")


app = FastAPI(title="countries-read-api", version="v1", lifespan=_lifespan)


def _get_state() -> CatalogState:
    global _state
    if _state is None:
        cfg = load_api_config()
        _state = CatalogState(CountriesClient(url=cfg.url, timeout_seconds=cfg.timeout_seconds))
        logger.info("catalog_state_created", url=cfg.url, timeout_seconds=cfg.timeout_seconds)
    return _state


def _error_response(err: FetchError) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"ok": False, "error": err.kind, "title": err.title, "message": str(err)},
    )


@app.get("/v1/health")
async def health() -> dict:
    state = _get_state()
    err = state.last_error
    return {
        "ok": True,
        "countries": len(state.countries),
        "last_error": err.kind if err is not None else None,
    }


@app.get("/v1/countries")
async def countries(q: str = "") -> Any:
    state = _get_state()
    err = await state.ensure_loaded()
    if err is not None:
        return _error_response(err)
    # per-request query; the state's own query belongs to a single screen
    items = filter_countries(state.countries, q)
    return {"ok": True, "query": q, "count": len(items), "items": [asdict(c) for c in items]}


@app.post("/v1/countries/refresh")
async def refresh() -> Any:
    state = _get_state()
    outcome = await state.refresh()
    if outcome.error is not None:
        return _error_response(outcome.error)
    return {"ok": True, "applied": outcome.applied, "count": outcome.count}


@app.get("/v1/countries/{code}")
async def country_detail(code: str) -> dict[str, Any]:
    state = _get_state()
    err = await state.ensure_loaded()
    if err is not None:
        return _error_response(err)
    c = state.get(code)
    if c is None:
        raise HTTPException(status_code=404, detail="country_not_found")
    return {"ok": True, "item": asdict(c)}
