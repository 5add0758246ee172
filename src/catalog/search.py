from __future__ import annotations

from typing import Iterable

from transforms.countries import CountryRecord


def filter_countries(countries: Iterable[CountryRecord], query: str) -> list[CountryRecord]:
    """
    Case-insensitive substring match on name or capital.

    - empty query -> full list (copy)
    - whitespace is matched literally (no strip)
    - region/code are never matched
    """
    if not query:
        return list(countries)

    needle = query.lower()
    return [c for c in countries if needle in c.name.lower() or needle in c.capital.lower()]
