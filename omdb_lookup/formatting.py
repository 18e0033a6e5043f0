from __future__ import annotations

import shutil
import sys
import textwrap
from typing import Any, TextIO

from omdb_lookup.models.omdb import OmdbRecord, OmdbResult, OmdbSearchResults, parse_omdb_date

# Display order for every field the API is known to return.
CANONICAL_FIELDS = (
    "Title",
    "Year",
    "Rated",
    "Released",
    "Runtime",
    "Genre",
    "Director",
    "Writer",
    "Actors",
    "Plot",
    "Language",
    "Country",
    "Awards",
    "Poster",
    "Ratings",
    "Metascore",
    "imdbRating",
    "imdbVotes",
    "imdbID",
    "Type",
    "totalSeasons",
    "seriesID",
    "Season",
    "Episode",
    "tomatoMeter",
    "tomatoImage",
    "tomatoRating",
    "tomatoReviews",
    "tomatoFresh",
    "tomatoRotten",
    "tomatoConsensus",
    "tomatoUserMeter",
    "tomatoUserRating",
    "tomatoUserReviews",
    "tomatoURL",
    "DVD",
    "BoxOffice",
    "Production",
    "Website",
)
DATE_FIELDS = frozenset({"Released", "DVD"})
HIDDEN_FIELDS = frozenset({"Response"})

MIN_WRAP_WIDTH = 20


def default_width() -> int:
    return max(MIN_WRAP_WIDTH, shutil.get_terminal_size().columns - 10)


def _display_value(name: str, value: Any) -> str:
    if name in DATE_FIELDS:
        parsed = parse_omdb_date(value)
        if parsed is not None:
            return parsed.isoformat()
    if name == "Ratings" and isinstance(value, list):
        parts = []
        for item in value:
            if isinstance(item, dict) and item.get("Source") and item.get("Value"):
                parts.append(f"{item['Source']}: {item['Value']}")
        return "; ".join(parts)
    return str(value)


def present_fields(record: OmdbRecord) -> list[str]:
    return [
        name
        for name in CANONICAL_FIELDS
        if name not in HIDDEN_FIELDS and record.get(name) is not None and _display_value(name, record[name])
    ]


def format_omdb_record(record: OmdbRecord, *, width: int | None = None) -> str:
    names = present_fields(record)
    if not names:
        return ""

    wrap_width = width if width is not None else default_width()
    label_width = 2 + max(len(name) for name in names)
    indent = " " * label_width

    lines: list[str] = []
    for name in names:
        label = f"{name}: ".ljust(label_width)
        lines.append(
            textwrap.fill(
                _display_value(name, record[name]),
                width=wrap_width,
                initial_indent=label,
                subsequent_indent=indent,
                break_long_words=False,
                break_on_hyphens=False,
            )
        )
    return "\n".join(lines)


def format_omdb_result(result: OmdbResult | OmdbRecord, *, width: int | None = None) -> str:
    """
    Render a single OMDb record as labelled, wrapped lines for a terminal.

    Only fields with a value are shown, in `CANONICAL_FIELDS` order. Multi-row search
    pages are not supported; print their rows individually instead.
    """

    if isinstance(result, OmdbSearchResults):
        raise TypeError("format_omdb_result() takes a single-record result, not search results.")
    if isinstance(result, OmdbRecord):
        return format_omdb_record(result, width=width)
    if result.record is None:
        return ""
    return format_omdb_record(result.record, width=width)


def print_omdb_result(
    result: OmdbResult | OmdbRecord,
    *,
    width: int | None = None,
    file: TextIO | None = None,
) -> None:
    text = format_omdb_result(result, width=width)
    if text:
        print(text, file=file or sys.stdout)
