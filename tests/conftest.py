from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from collector.api_client import CountriesClient

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures" / "api_responses"


@pytest.fixture
def countries_payload() -> list[dict[str, Any]]:
    return json.loads((FIXTURES_DIR / "countries_sample.json").read_text(encoding="utf-8"))


@pytest.fixture
def make_client() -> Callable[..., CountriesClient]:
    """
    Build a CountriesClient whose transport is served by `handler` (httpx.MockTransport).
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> CountriesClient:
        return CountriesClient(url="https://countries.test/countries.json", transport=httpx.MockTransport(handler))

    return _make
