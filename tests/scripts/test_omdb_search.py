from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from omdb_lookup.integrations.omdb.client import OmdbClientError
from omdb_lookup.models.omdb import OmdbRecord, OmdbResult, OmdbSearchResults


def test_title_command_prints_formatted_record(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    from scripts import omdb_search as mod

    find_mock = MagicMock(return_value=OmdbResult(rows=(OmdbRecord({"Title": "Lost", "Year": "2004–2010"}),)))
    monkeypatch.setattr(mod, "find_by_title", find_mock)

    code = mod.main(["--api-key", "k", "--width", "40", "title", "Lost", "--season", "1", "--episode", "2"])

    assert code == 0
    assert capsys.readouterr().out == "Title: Lost\nYear:  2004–2010\n"
    _, kwargs = find_mock.call_args
    assert kwargs["season"] == 1
    assert kwargs["episode"] == 2
    assert kwargs["api_key"] == "k"
    assert kwargs["plot"] == "short"


def test_id_command_returns_1_for_empty_result(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    from scripts import omdb_search as mod

    monkeypatch.setattr(mod, "find_by_id", lambda *args, **kwargs: OmdbResult(error="Incorrect IMDb ID."))

    assert mod.main(["id", "tt-bogus", "--tomatoes"]) == 1
    assert capsys.readouterr().out == ""


def test_search_command_prints_rows_and_summary(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    from scripts import omdb_search as mod

    page = OmdbSearchResults(
        rows=(
            OmdbRecord({"Title": "Heat", "Year": "1995", "imdbID": "tt0113277", "Type": "movie"}),
            OmdbRecord({"Title": "Heat", "Year": "1986", "imdbID": "tt0093164", "Type": None}),
        ),
        total_results=57,
        page=2,
    )
    search_mock = MagicMock(return_value=page)
    monkeypatch.setattr(mod, "search_by_title", search_mock)

    assert mod.main(["search", "heat", "--page", "2", "--type", "documentary"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("tt0113277")
    assert out[0].endswith("Heat")
    assert "-" in out[1].split()
    assert out[-1] == "page=2 rows=2 total=57"
    _, kwargs = search_mock.call_args
    assert kwargs["page"] == 2
    assert kwargs["media_type"] == "documentary"


def test_client_error_exits_with_2(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    from scripts import omdb_search as mod

    def boom(*args, **kwargs):  # noqa: ANN002, ANN003
        raise OmdbClientError("OMDb request failed with HTTP 401.", status_code=401)

    monkeypatch.setattr(mod, "find_by_title", boom)

    assert mod.main(["title", "Heat"]) == 2
    assert capsys.readouterr().out == "ERROR: OMDb request failed with HTTP 401.\n"
