from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr, TypeAdapter


@dataclass(frozen=True, order=True)
class CountryRecord:
    name: str
    region: str
    code: str
    capital: str


class CountryIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # StrictStr: "code": 56 fails instead of becoming "56"
    name: StrictStr
    region: StrictStr
    code: StrictStr
    capital: StrictStr

    def to_record(self) -> CountryRecord:
        return CountryRecord(name=self.name, region=self.region, code=self.code, capital=self.capital)


_COUNTRY_LIST = TypeAdapter(list[CountryIn])


def transform_countries(payload: Any) -> list[CountryRecord]:
    """
    RAW JSON array -> list[CountryRecord], server order kept.

    All-or-nothing: one malformed item fails the whole list
    (pydantic.ValidationError, a ValueError subclass).
    """
    items = _COUNTRY_LIST.validate_python(payload)
    return [c.to_record() for c in items]


def find_by_code(countries: list[CountryRecord], code: str) -> CountryRecord | None:
    wanted = code.lower()
    for c in countries:
        if c.code.lower() == wanted:
            return c
    return None
