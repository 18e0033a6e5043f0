from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterator, KeysView

_YEAR_RE = re.compile(r"([0-9]{4})")
_MINUTES_RE = re.compile(r"([0-9]+)\s*min")
_OMDB_DATE_FORMATS = ("%d %b %Y", "%Y-%m-%d")


def parse_omdb_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    raw = value.strip()
    for fmt in _OMDB_DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        raw = value.replace(",", "").strip()
        if raw.isdigit():
            return int(raw)
    return None


def _as_float(value: Any) -> float | None:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _split_names(value: Any) -> list[str]:
    if not isinstance(value, str):
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class OmdbRecord:
    """
    One OMDb title as returned by the API, with "N/A" already mapped to None.

    Field names are the API's own (`Title`, `imdbRating`, `DVD`, ...). The typed
    accessors convert on read; the underlying values stay as the service sent them.
    """

    fields: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def keys(self) -> KeysView[str]:
        return self.fields.keys()

    def as_dict(self) -> dict[str, Any]:
        return dict(self.fields)

    @property
    def title(self) -> str | None:
        return self.fields.get("Title")

    @property
    def imdb_id(self) -> str | None:
        return self.fields.get("imdbID")

    @property
    def media_type(self) -> str | None:
        return self.fields.get("Type")

    @property
    def year(self) -> int | None:
        # Series report ranges such as "2008–2013".
        value = self.fields.get("Year")
        if isinstance(value, str):
            match = _YEAR_RE.search(value)
            if match:
                return int(match.group(1))
        return _as_int(value)

    @property
    def runtime_minutes(self) -> int | None:
        value = self.fields.get("Runtime")
        if isinstance(value, str):
            match = _MINUTES_RE.search(value)
            if match:
                return int(match.group(1))
        return None

    @property
    def imdb_rating(self) -> float | None:
        return _as_float(self.fields.get("imdbRating"))

    @property
    def imdb_votes(self) -> int | None:
        return _as_int(self.fields.get("imdbVotes"))

    @property
    def metascore(self) -> int | None:
        return _as_int(self.fields.get("Metascore"))

    @property
    def released(self) -> date | None:
        return parse_omdb_date(self.fields.get("Released"))

    @property
    def dvd(self) -> date | None:
        return parse_omdb_date(self.fields.get("DVD"))

    @property
    def genres(self) -> list[str]:
        return _split_names(self.fields.get("Genre"))

    @property
    def actors(self) -> list[str]:
        return _split_names(self.fields.get("Actors"))

    @property
    def directors(self) -> list[str]:
        return _split_names(self.fields.get("Director"))

    @property
    def writers(self) -> list[str]:
        return _split_names(self.fields.get("Writer"))

    @property
    def countries(self) -> list[str]:
        return _split_names(self.fields.get("Country"))

    @property
    def languages(self) -> list[str]:
        return _split_names(self.fields.get("Language"))

    @property
    def ratings(self) -> dict[str, str]:
        out: dict[str, str] = {}
        value = self.fields.get("Ratings")
        if not isinstance(value, list):
            return out
        for item in value:
            if not isinstance(item, dict):
                continue
            source = item.get("Source")
            rating = item.get("Value")
            if isinstance(source, str) and isinstance(rating, str):
                out[source] = rating
        return out


@dataclass(frozen=True)
class _OmdbTable:
    rows: tuple[OmdbRecord, ...] = ()
    error: str | None = None

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[OmdbRecord]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> OmdbRecord:
        return self.rows[index]

    @property
    def empty(self) -> bool:
        return not self.rows

    @property
    def columns(self) -> list[str]:
        return list(dict.fromkeys(key for row in self.rows for key in row.keys()))

    def to_dicts(self) -> list[dict[str, Any]]:
        return [row.as_dict() for row in self.rows]


@dataclass(frozen=True)
class OmdbResult(_OmdbTable):
    """
    Exact-match lookup result: zero rows (not found / rejected) or exactly one.

    This is the variant the detailed formatter accepts.
    """

    @property
    def record(self) -> OmdbRecord | None:
        return self.rows[0] if self.rows else None

    def __str__(self) -> str:
        from omdb_lookup.formatting import format_omdb_result

        return format_omdb_result(self)


@dataclass(frozen=True)
class OmdbSearchResults(_OmdbTable):
    """
    One page (up to 10 rows) of a free-text search.

    `total_results` is the service's match count across all pages, when reported.
    """

    total_results: int | None = None
    page: int = 1
