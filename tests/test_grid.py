"""Tests for Airtable grid row merging and listing extraction."""

from datetime import date

from jobdaemon.adapters.internlist.columns import is_placeholder, resolve_columns
from jobdaemon.adapters.internlist.grid import (
    GridRow,
    PaneRow,
    grid_row_identity,
    grid_row_to_listing,
    merge_panes,
)
from jobdaemon.core.models import Source

HEADERS = {
    "fld1": "Position Title",
    "fld2": "Date",
    "fld3": "Apply",
    "fld4": "Work Model",
    "fld5": "Location",
    "fld6": "Company",
    "fld7": "Salary",
}


def _left(row_id, title):
    return PaneRow(row_id=row_id, cells={"fld1": title})


def _right(row_id, company, posted="11/26/2025", href=None):
    return PaneRow(
        row_id=row_id,
        cells={
            "fld2": posted,
            "fld3": "Apply",
            "fld4": "Hybrid",
            "fld5": "New York, NY",
            "fld6": company,
            "fld7": "$40/hr",
        },
        links={"fld3": href} if href else {},
    )


def test_merge_only_emits_rows_with_both_halves_in_left_order():
    left = [_left("recA", "Intern A"), _left("recB", "Intern B"), _left("recC", "Intern C")]
    right = [_right("recC", "Gamma"), _right("recB", "Beta"), _right("recD", "Delta")]

    rows = merge_panes(left, right, HEADERS)

    assert [row.row_id for row in rows] == ["recB", "recC"]
    assert rows[0].title == "Intern B"
    assert rows[0].values["Company"] == "Beta"
    assert rows[0].values["Position Title"] == "Intern B"


def test_merge_maps_links_to_header_names():
    rows = merge_panes(
        [_left("recA", "Intern A")],
        [_right("recA", "Acme", href="https://jobs.example.com/1")],
        HEADERS,
    )

    assert rows[0].links == {"Apply": "https://jobs.example.com/1"}


def test_grid_row_becomes_a_listing():
    row = merge_panes(
        [_left("recA", "Software Engineering Intern")],
        [_right("recA", "Acme", href="https://jobs.example.com/1?utm_source=intern-list.com")],
        HEADERS,
    )[0]

    listing = grid_row_to_listing(row, date(2025, 11, 26))

    assert listing.title == "Software Engineering Intern"
    assert listing.company == "Acme"
    assert listing.link == "https://jobs.example.com/1"
    assert listing.id == "https://jobs.example.com/1"
    assert listing.date == "2025-11-26"
    assert listing.work_model == "Hybrid"
    assert listing.salary == "$40/hr"
    assert listing.source is Source.INTERNLIST


def test_grid_row_without_link_is_dropped():
    row = GridRow(row_id="recA", title="Intern", values={"Position Title": "Intern"}, links={})
    assert grid_row_to_listing(row, date(2025, 11, 26)) is None


def test_link_falls_back_to_any_absolute_href():
    row = GridRow(
        row_id="recA",
        title="Intern",
        values={"Position Title": "Intern", "Company": "Acme"},
        links={"Company": "https://acme.example.com/careers/7"},
    )

    listing = grid_row_to_listing(row, date(2025, 11, 26))
    assert listing.link == "https://acme.example.com/careers/7"


def test_row_identity_is_the_canonical_link():
    tagged = merge_panes(
        [_left("recA", "Intern")],
        [_right("recA", "Acme", href="https://jobs.example.com/1?utm_source=intern-list.com")],
        HEADERS,
    )[0]
    retagged = merge_panes(
        [_left("recZ", "Intern")],
        [_right("recZ", "Acme", href="https://jobs.example.com/1?ref=Simplify")],
        HEADERS,
    )[0]
    unlinked = GridRow(row_id="recB", title="Intern", values={"Position Title": "Intern"}, links={})

    assert grid_row_identity(tagged) == grid_row_identity(retagged) == "https://jobs.example.com/1"
    assert grid_row_identity(unlinked) == "row:recB"


def test_resolve_columns_handles_header_variants():
    columns = resolve_columns(["\ufeffJob Title", "Company Name", "Date Posted", "Apply Link", "Remote/Onsite"])

    assert columns["title"] == "\ufeffJob Title"
    assert columns["company"] == "Company Name"
    assert columns["date"] == "Date Posted"
    assert columns["link"] == "Apply Link"
    assert columns["work_model"] == "Remote/Onsite"
    assert "salary" not in columns


def test_placeholders():
    assert is_placeholder(None)
    assert is_placeholder(" N/A ")
    assert is_placeholder("-")
    assert not is_placeholder("Acme")
