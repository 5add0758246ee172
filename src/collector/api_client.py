from __future__ import annotations

from dataclasses import dataclass

import httpx

from transforms.countries import CountryRecord, transform_countries

DEFAULT_COUNTRIES_URL = (
    "https://gist.githubusercontent.com/peymano-wmt/32dcb892b06648910ddd40406e37fdab"
    "/raw/db25946fd77c5873b0303b858e861ce724e0dcd0/countries.json"
)


class FetchError(Exception):
    kind = "fetch_error"
    title = "Error"


class TransportError(FetchError):
    kind = "transport_error"
    title = "Network Error"

    def __init__(self, cause: str) -> None:
        super().__init__(f"Request failed: {cause}")
        self.cause = cause


class ServerError(FetchError):
    kind = "server_error"
    title = "Server Error"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Unexpected status code: {status_code}")
        self.status_code = status_code


class EmptyBodyError(FetchError):
    kind = "empty_body"
    title = "Data Error"

    def __init__(self) -> None:
        super().__init__("No data received")


class DecodeError(FetchError):
    kind = "decode_error"
    title = "Parsing Error"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to parse country data: {detail}")
        self.detail = detail


@dataclass(frozen=True)
class FetchResult:
    countries: list[CountryRecord] | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> list[CountryRecord]:
        if self.error is not None:
            raise self.error
        return list(self.countries or [])


class CountriesClient:
    """
    Countries list client
    - GET-only, single request per fetch, no retries
    - Async httpx
    - Failures are returned inside FetchResult, never raised
    """

    def __init__(
        self,
        *,
        url: str = DEFAULT_COUNTRIES_URL,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        self._url = url
        self._timeout = float(timeout_seconds)
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            transport=transport,
        )

    @property
    def url(self) -> str:
        return self._url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> CountriesClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def fetch_countries(self) -> FetchResult:
        try:
            countries = await self._fetch()
        except FetchError as e:
            return FetchResult(error=e)
        return FetchResult(countries=countries)

    async def _fetch(self) -> list[CountryRecord]:
        try:
            resp = await self._client.get(self._url)
        except httpx.HTTPError as e:
            # Covers timeouts, connect/DNS/TLS failures and unsupported schemes.
            raise TransportError(str(e) or type(e).__name__) from e
        except httpx.InvalidURL as e:
            raise TransportError(str(e)) from e

        if not 200 <= resp.status_code <= 299:
            raise ServerError(resp.status_code)

        # b"" is present-but-invalid JSON (DecodeError); only a JSON null counts as no data.
        try:
            payload = resp.json()
        except ValueError as e:
            raise DecodeError(str(e)) from e

        if payload is None:
            raise EmptyBodyError()

        try:
            return transform_countries(payload)
        except ValueError as e:
            raise DecodeError(str(e)) from e
