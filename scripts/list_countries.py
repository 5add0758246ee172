from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))

from catalog.search import filter_countries  # noqa: E402
from collector.api_client import CountriesClient  # noqa: E402
from transforms.countries import CountryRecord, find_by_code  # noqa: E402
from utils.config import load_api_config  # noqa: E402
from utils.logging import get_logger, setup_logging  # noqa: E402

logger = get_logger(component="list_countries")


def format_row(c: CountryRecord) -> str:
    return f"{c.name}, {c.region}  {c.code}\n    {c.capital}"


def format_detail(c: CountryRecord) -> str:
    return "\n".join(
        [
            f"Name:    {c.name}",
            f"Region:  {c.region}",
            f"Code:    {c.code}",
            f"Capital: {c.capital}",
        ]
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch the countries list and print it (or one country).")
    p.add_argument("--query", default="", help="Search by name or capital (case-insensitive).")
    p.add_argument("--code", default=None, help="Print the detail block for this country code.")
    p.add_argument("--config", default=None, help="Path to api.yaml (default: config/api.yaml).")
    return p.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(json_console=False)

    cfg = load_api_config(args.config)
    async with CountriesClient(url=cfg.url, timeout_seconds=cfg.timeout_seconds) as client:
        result = await client.fetch_countries()

    if result.error is not None:
        logger.warning("countries_fetch_failed", error=result.error.kind)
        print(f"❌ {result.error.title}: {result.error}")
        return 1

    countries = result.unwrap()

    if args.code:
        c = find_by_code(countries, args.code)
        if c is None:
            print(f"❌ Country not found: {args.code}")
            return 2
        print(format_detail(c))
        return 0

    rows = filter_countries(countries, args.query)
    for c in rows:
        print(format_row(c))
    logger.info("countries_listed", total=len(countries), shown=len(rows), query=args.query)
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
