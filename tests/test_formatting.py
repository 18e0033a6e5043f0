from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from omdb_lookup.formatting import CANONICAL_FIELDS, format_omdb_result, print_omdb_result
from omdb_lookup.integrations.omdb.client import normalize_omdb_value
from omdb_lookup.models.omdb import OmdbRecord, OmdbResult, OmdbSearchResults


def _result(**fields) -> OmdbResult:  # noqa: ANN003
    return OmdbResult(rows=(OmdbRecord(dict(fields)),))


def test_formats_present_fields_in_canonical_order() -> None:
    result = _result(Released="16 Jul 2010", Year="2010", Title="Inception", Response="True")

    text = format_omdb_result(result, width=60)

    assert text.splitlines() == [
        "Title:    Inception",
        "Year:     2010",
        "Released: 2010-07-16",
    ]


def test_skips_absent_fields_and_response() -> None:
    result = _result(Title="Heat", Plot=None, Website=None, Response="True")
    assert format_omdb_result(result, width=60) == "Title: Heat"


def test_wraps_values_with_continuation_indent() -> None:
    plot = "A thief who steals corporate secrets through the use of dream-sharing technology is given a task."
    result = _result(Title="Inception", Plot=plot)

    lines = format_omdb_result(result, width=40).splitlines()

    assert lines[0] == "Title: Inception"
    plot_lines = lines[1:]
    assert len(plot_lines) > 1
    assert plot_lines[0].startswith("Plot:  A thief")
    for line in plot_lines:
        assert len(line) <= 40
    for line in plot_lines[1:]:
        assert line.startswith(" " * 7)
        assert line[7] != " "
    assert " ".join(line[7:] for line in plot_lines) == plot


def test_unparseable_date_is_shown_as_given() -> None:
    result = _result(Title="Lost Film", DVD="sometime in 2003")
    assert "DVD:   sometime in 2003" in format_omdb_result(result, width=80)


def test_renders_fixture_with_ratings() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    payload = json.loads((repo_root / "tests" / "fixtures" / "omdb" / "title_inception.json").read_text(encoding="utf-8"))
    result = OmdbResult(rows=(OmdbRecord(normalize_omdb_value(payload)),))

    lines = format_omdb_result(result, width=100).splitlines()
    labels = [line.split(":", 1)[0] for line in lines if not line.startswith(" ")]

    assert labels == [name for name in CANONICAL_FIELDS if name in labels]
    assert "Production" not in labels
    assert "tomatoMeter" not in labels
    assert any("Rotten Tomatoes: 87%" in line for line in lines)
    assert any(line.startswith("DVD:") and "2010-12-07" in line for line in lines)


def test_accepts_bare_record_and_empty_result() -> None:
    assert format_omdb_result(OmdbRecord({"Title": "Heat"}), width=40) == "Title: Heat"
    assert format_omdb_result(OmdbResult(), width=40) == ""


def test_rejects_search_results() -> None:
    with pytest.raises(TypeError):
        format_omdb_result(OmdbSearchResults(rows=(OmdbRecord({"Title": "Heat"}),)))


def test_print_omdb_result_writes_to_file() -> None:
    buf = io.StringIO()
    print_omdb_result(_result(Title="Heat", Year="1995"), width=40, file=buf)
    assert buf.getvalue() == "Title: Heat\nYear:  1995\n"

    buf = io.StringIO()
    print_omdb_result(OmdbResult(error="Movie not found!"), file=buf)
    assert buf.getvalue() == ""


def test_str_of_result_uses_formatter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("omdb_lookup.formatting.default_width", lambda: 40)
    assert str(_result(Title="Heat")) == "Title: Heat"
