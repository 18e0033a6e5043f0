from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from omdb_lookup.models.omdb import OmdbRecord, OmdbResult, OmdbSearchResults
from omdb_lookup.settings import OmdbSettings, get_settings, require_api_key

logger = logging.getLogger(__name__)

OMDB_MEDIA_TYPES = ("movie", "series", "episode", "game")
OMDB_PLOT_LENGTHS = ("short", "full")
OMDB_PAGE_SIZE = 10
OMDB_NA = "N/A"


class OmdbQueryError(ValueError):
    """Raised by the query builders when arguments are rejected before any request."""


class OmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _compact(params: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


def build_title_query(
    title: str,
    *,
    media_type: str | None = None,
    season: int | str | None = None,
    episode: int | str | None = None,
    year: int | str | None = None,
    plot: str = "short",
    include_tomatoes: bool = False,
    api_key: str | None = None,
) -> dict[str, Any]:
    if media_type is not None and media_type not in OMDB_MEDIA_TYPES:
        raise OmdbQueryError('"type" must be one of "movie", "series", "episode" or "game"')
    if (season is None) != (episode is None):
        raise OmdbQueryError('Both "season" and "episode" must be specified if one is.')

    return _compact(
        {
            "t": title,
            "type": media_type,
            "y": year,
            "plot": plot,
            "r": "json",
            "tomatoes": _flag(include_tomatoes),
            "apikey": api_key,
            "Season": season,
            "Episode": episode,
        }
    )


def build_id_query(
    imdb_id: str,
    *,
    media_type: str | None = None,
    year: int | str | None = None,
    plot: str = "short",
    include_tomatoes: bool = False,
    api_key: str | None = None,
) -> dict[str, Any]:
    return _compact(
        {
            "i": imdb_id,
            "type": media_type,
            "y": year,
            "plot": plot,
            "r": "json",
            "tomatoes": _flag(include_tomatoes),
            "apikey": api_key,
        }
    )


def build_search_query(
    term: str,
    *,
    media_type: str | None = None,
    year: int | str | None = None,
    page: int = 1,
    api_key: str | None = None,
) -> dict[str, Any]:
    # `media_type` is passed through unchecked here; the service answers bad values itself.
    if int(page) < 1:
        raise OmdbQueryError(f'"page" must be 1 or greater, got {page!r}')
    return _compact(
        {
            "s": term,
            "type": media_type,
            "y": year,
            "page": int(page),
            "r": "json",
            "apikey": api_key,
        }
    )


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any],
    timeout_seconds: float,
) -> dict[str, Any]:
    headers = {"accept": "application/json"}
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise OmdbClientError(f"OMDb request failed: {exc}") from exc

    if resp.status_code != 200:
        raise OmdbClientError(
            f"OMDb request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise OmdbClientError(
            "OMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise OmdbClientError("OMDb returned unexpected JSON shape (not an object).")
    return payload


def normalize_omdb_value(value: Any) -> Any:
    """
    Replace the service's "N/A" placeholder with None, recursing into objects and arrays.
    """

    if isinstance(value, str):
        return None if value == OMDB_NA else value
    if isinstance(value, dict):
        return {key: normalize_omdb_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize_omdb_value(item) for item in value]
    return value


def is_api_failure(payload: Mapping[str, Any]) -> bool:
    return str(payload.get("Response")) == "False"


def _api_error(payload: Mapping[str, Any]) -> str:
    error = payload.get("Error")
    return error if isinstance(error, str) and error else "OMDb returned no results."


def _fetch(
    params: dict[str, Any],
    *,
    session: requests.Session | None,
    settings: OmdbSettings,
) -> dict[str, Any]:
    session = session or requests.Session()
    logger.debug(f"OMDb GET {settings.base_url} params={sorted(k for k in params if k != 'apikey')}")
    return _request_json(session, settings.base_url, params=params, timeout_seconds=settings.timeout_seconds)


def _single_result(payload: dict[str, Any]) -> OmdbResult:
    if is_api_failure(payload):
        error = _api_error(payload)
        logger.warning(error)
        return OmdbResult(error=error)
    return OmdbResult(rows=(OmdbRecord(normalize_omdb_value(payload)),))


def find_by_title(
    title: str,
    *,
    media_type: str | None = None,
    season: int | str | None = None,
    episode: int | str | None = None,
    year: int | str | None = None,
    plot: str = "short",
    include_tomatoes: bool = False,
    api_key: str | None = None,
    session: requests.Session | None = None,
    settings: OmdbSettings | None = None,
) -> OmdbResult:
    """
    Fetch the best match for `title`.

    The service considers up to 10 candidates but only the first is returned. `season`
    and `episode` narrow a series lookup and must be given together. Rejected arguments
    and "not found" answers come back as an empty result with `error` set; HTTP-level
    failures raise `OmdbClientError`.
    """

    settings = settings or get_settings()
    try:
        params = build_title_query(
            title,
            media_type=media_type,
            season=season,
            episode=episode,
            year=year,
            plot=plot,
            include_tomatoes=include_tomatoes,
        )
    except OmdbQueryError as exc:
        logger.warning(str(exc))
        return OmdbResult(error=str(exc))

    params["apikey"] = require_api_key(api_key, settings=settings)
    payload = _fetch(params, session=session, settings=settings)
    return _single_result(payload)


def find_by_id(
    imdb_id: str,
    *,
    media_type: str | None = None,
    year: int | str | None = None,
    plot: str = "short",
    include_tomatoes: bool = False,
    api_key: str | None = None,
    session: requests.Session | None = None,
    settings: OmdbSettings | None = None,
) -> OmdbResult:
    """
    Fetch a title by IMDb id (e.g. `tt1285016`).

    The id is sent as given; malformed ids are reported by the service as an empty
    result with its error text.
    """

    settings = settings or get_settings()
    params = build_id_query(
        imdb_id,
        media_type=media_type,
        year=year,
        plot=plot,
        include_tomatoes=include_tomatoes,
        api_key=require_api_key(api_key, settings=settings),
    )
    payload = _fetch(params, session=session, settings=settings)
    return _single_result(payload)


def search_by_title(
    term: str,
    *,
    media_type: str | None = None,
    year: int | str | None = None,
    page: int = 1,
    api_key: str | None = None,
    session: requests.Session | None = None,
    settings: OmdbSettings | None = None,
) -> OmdbSearchResults:
    """
    Lightweight search returning one page of up to 10 matches.

    Callers wanting more than 10 matches request `page=2`, `page=3`, ... themselves.
    """

    settings = settings or get_settings()
    try:
        params = build_search_query(term, media_type=media_type, year=year, page=page)
    except OmdbQueryError as exc:
        logger.warning(str(exc))
        return OmdbSearchResults(error=str(exc), page=page)

    params["apikey"] = require_api_key(api_key, settings=settings)
    payload = _fetch(params, session=session, settings=settings)

    items = payload.get("Search")
    if not isinstance(items, list):
        error = _api_error(payload)
        logger.warning(error)
        return OmdbSearchResults(error=error, page=int(page))

    rows = tuple(OmdbRecord(normalize_omdb_value(item)) for item in items if isinstance(item, dict))
    total = payload.get("totalResults")
    return OmdbSearchResults(
        rows=rows,
        total_results=int(total) if isinstance(total, str) and total.isdigit() else None,
        page=int(page),
    )
