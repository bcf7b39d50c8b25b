"""Unit tests for core/info.py"""

from datetime import date

import pytest

from gemsite.core.errors import InfoError
from gemsite.core.info import parse_info
from gemsite.core.models import Change


def test_parse_info_full_block():
    """parse_info reads title, dates and flags and stops at the blank line."""
    lines = [
        "My Title",
        "Written 2021-02-04",
        "Updated 2021-03-09 Added templates",
        "Updated 2021-04-01",
        "Private",
        "Unlisted",
        "",
        "Body",
    ]
    res = parse_info(lines)
    info = res.data
    assert info.title == "My Title"
    assert info.created == date(2021, 2, 4)
    assert info.changes == (
        Change(date(2021, 3, 9), "Added templates"),
        Change(date(2021, 4, 1), None),
    )
    assert info.private and info.unlisted
    assert res.new_pos == 6
    assert lines[res.new_pos] == ""


def test_parse_info_updated_is_last_change():
    info = parse_info(["T", "Written 2021-01-01", "Updated 2021-02-01", "Updated 2021-03-01"]).data
    assert info.updated == date(2021, 3, 1)


def test_parse_info_no_body():
    """A document with only metadata ends at len(lines)."""
    res = parse_info(["T", "Written 2021-01-01"])
    assert res.new_pos == 2
    assert res.data.changes == ()
    assert res.data.updated is None


def test_parse_info_missing_written():
    with pytest.raises(InfoError, match="Written"):
        parse_info(["T", "Private", ""])


def test_parse_info_empty_document():
    with pytest.raises(InfoError):
        parse_info([])


def test_parse_info_unexpected_line_reports_line():
    """Unrecognised metadata is fatal and names the 1-based line and its text."""
    with pytest.raises(InfoError) as exc:
        parse_info(["T", "Written 2021-01-01", "Draft", ""])
    assert exc.value.line == 3
    assert exc.value.text == "Draft"
    assert "line 3" in str(exc.value)


def test_parse_info_bad_date_reports_line():
    with pytest.raises(InfoError) as exc:
        parse_info(["T", "Written sometime"])
    assert exc.value.line == 2
