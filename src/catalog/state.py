from __future__ import annotations

import asyncio
from dataclasses import dataclass
from threading import Lock

from catalog.search import filter_countries
from collector.api_client import CountriesClient, FetchError
from transforms.countries import CountryRecord, find_by_code
from utils.logging import get_logger

logger = get_logger(component="catalog_state")


@dataclass(frozen=True)
class RefreshOutcome:
    seq: int
    applied: bool
    count: int
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogState:
    """
    Owned state of a countries list screen: full list, current query, last error.

    - refresh(): one fetch; only the most recently started refresh may apply its result
    - the full list is replaced wholesale under a single-writer lock
    - a failed refresh keeps the previous list
    - ensure_loaded(): single-flight first load, concurrent callers share it
    """

    def __init__(self, client: CountriesClient) -> None:
        self._client = client
        self._lock = Lock()
        self._load_lock = asyncio.Lock()
        self._countries: list[CountryRecord] = []
        self._query = ""
        self._last_error: FetchError | None = None
        self._loaded = False
        self._seq = 0

    @property
    def countries(self) -> list[CountryRecord]:
        with self._lock:
            return list(self._countries)

    @property
    def query(self) -> str:
        with self._lock:
            return self._query

    @property
    def last_error(self) -> FetchError | None:
        with self._lock:
            return self._last_error

    @property
    def loaded(self) -> bool:
        with self._lock:
            return self._loaded

    @property
    def filtered(self) -> list[CountryRecord]:
        with self._lock:
            countries, query = self._countries, self._query
        return filter_countries(countries, query)

    def set_query(self, query: str) -> list[CountryRecord]:
        with self._lock:
            self._query = query
        return self.filtered

    def get(self, code: str) -> CountryRecord | None:
        with self._lock:
            countries = self._countries
        return find_by_code(countries, code)

    async def ensure_loaded(self) -> FetchError | None:
        """
        Load the list once. Returns the error of the failed first load, None when loaded.
        """
        if self.loaded:
            return None
        async with self._load_lock:
            while not self.loaded:
                outcome = await self.refresh()
                if outcome.applied:
                    return outcome.error
                # overtaken by a newer refresh that failed or has not landed yet
                if self.last_error is not None:
                    return self.last_error
        return None

    async def aclose(self) -> None:
        await self._client.aclose()

    async def refresh(self) -> RefreshOutcome:
        with self._lock:
            self._seq += 1
            seq = self._seq

        result = await self._client.fetch_countries()

        with self._lock:
            latest = self._seq
            if seq != latest:
                stale = True
            else:
                stale = False
                if result.error is None:
                    self._countries = list(result.countries or [])
                    self._loaded = True
                self._last_error = result.error
            count = len(self._countries)

        if stale:
            logger.info("countries_refresh_stale", seq=seq, latest_seq=latest)
            return RefreshOutcome(seq=seq, applied=False, count=count, error=result.error)

        if result.error is not None:
            logger.warning(
                "countries_refresh_failed",
                seq=seq,
                error=result.error.kind,
                message=str(result.error),
                kept=count,
            )
            return RefreshOutcome(seq=seq, applied=True, count=count, error=result.error)

        logger.info("countries_refreshed", seq=seq, count=count, url=self._client.url)
        return RefreshOutcome(seq=seq, applied=True, count=count)
