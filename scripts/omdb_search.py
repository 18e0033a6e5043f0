#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys

import requests

from omdb_lookup.formatting import format_omdb_result
from omdb_lookup.integrations.omdb.client import (
    OMDB_MEDIA_TYPES,
    OMDB_PAGE_SIZE,
    OMDB_PLOT_LENGTHS,
    find_by_id,
    find_by_title,
    search_by_title,
)
from omdb_lookup.models.omdb import OmdbSearchResults


def _add_lookup_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--type", dest="media_type", default=None, help="movie, series, episode or game.")
    parser.add_argument("--year", default=None, help="Year of release.")
    parser.add_argument("--plot", choices=OMDB_PLOT_LENGTHS, default="short", help="Plot length.")
    parser.add_argument("--tomatoes", action="store_true", help="Include Rotten Tomatoes ratings.")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="omdb_search",
        description="Look up titles in the OMDb API.",
    )
    parser.add_argument("--api-key", default=None, help="OMDb API key (defaults to OMDB_API_KEY).")
    parser.add_argument("--width", type=int, default=None, help="Wrap width for record output.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    title = sub.add_parser("title", help="Best match for a title.")
    title.add_argument("title")
    _add_lookup_args(title)
    title.add_argument("--season", type=int, default=None, help="Season number (requires --episode).")
    title.add_argument("--episode", type=int, default=None, help="Episode number (requires --season).")

    by_id = sub.add_parser("id", help="Lookup by IMDb id (tt...).")
    by_id.add_argument("imdb_id")
    _add_lookup_args(by_id)

    search = sub.add_parser("search", help=f"Search titles, {OMDB_PAGE_SIZE} per page.")
    search.add_argument("term")
    search.add_argument(
        "--type",
        dest="media_type",
        default=None,
        help=f"One of: {', '.join(OMDB_MEDIA_TYPES)}.",
    )
    search.add_argument("--year", default=None, help="Year of release.")
    search.add_argument("--page", type=int, default=1, help=f"Result page (1 = first {OMDB_PAGE_SIZE} matches).")

    return parser.parse_args(argv)


def _print_search(results: OmdbSearchResults) -> None:
    for row in results:
        imdb_id = row.get("imdbID") or "-"
        year = row.get("Year") or "-"
        media_type = row.get("Type") or "-"
        print(f"{imdb_id:<11} {year:<9} {media_type:<8} {row.get('Title') or ''}")
    total = results.total_results if results.total_results is not None else "?"
    print(f"page={results.page} rows={len(results)} total={total}")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    session = requests.Session()
    try:
        if args.command == "search":
            results = search_by_title(
                args.term,
                media_type=args.media_type,
                year=args.year,
                page=args.page,
                api_key=args.api_key,
                session=session,
            )
            if results.empty:
                return 1
            _print_search(results)
            return 0

        if args.command == "title":
            result = find_by_title(
                args.title,
                media_type=args.media_type,
                season=args.season,
                episode=args.episode,
                year=args.year,
                plot=args.plot,
                include_tomatoes=args.tomatoes,
                api_key=args.api_key,
                session=session,
            )
        else:
            result = find_by_id(
                args.imdb_id,
                media_type=args.media_type,
                year=args.year,
                plot=args.plot,
                include_tomatoes=args.tomatoes,
                api_key=args.api_key,
                session=session,
            )
    except RuntimeError as exc:  # OmdbClientError, or no OMDB_API_KEY
        print(f"ERROR: {exc}")
        return 2

    if result.empty:
        return 1
    print(format_omdb_result(result, width=args.width))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
