"""
Tests for the InternList CSV export: parsing, download polling and the
adapter's cleanup. The browser is replaced by fakes.
"""

import logging
from datetime import date

import pytest

from jobdaemon.adapters.internlist import adapter as adapter_module
from jobdaemon.adapters.internlist.adapter import InternListExportAdapter
from jobdaemon.adapters.internlist.csv_parsing import parse_export
from jobdaemon.adapters.internlist.download import (
    clear_downloads,
    find_completed_download,
    wait_for_download,
)
from jobdaemon.browser.manager import BrowserManager
from jobdaemon.core.models import UNKNOWN, Source

TODAY = date(2025, 11, 26)

EXPORT_CSV = (
    "Position Title,Company Name,Date Posted,Apply Link,Work Model,Location,Salary\n"
    "Software Engineering Intern,Acme,2025-11-26,https://jobs.acme.com/1?utm_source=intern-list.com,Remote,NYC,$45/hr\n"
    "Data Intern,Globex,11/26/25,https://globex.example.com/jobs/2,,Austin,\n"
    "Hardware Intern,Initech,sometime last week,https://initech.example.com/3,Onsite,,\n"
    "Ghost Intern,N/A,2025-11-26,https://ghost.example.com/4,,,\n"
    ",Nameless,2025-11-26,https://nameless.example.com/5,,,\n"
    "Old Intern,Umbrella,11/01/2025,https://umbrella.example.com/6,,,\n"
)


class NoSleep:
    async def __call__(self, seconds):
        pass


def _write_export(directory, name="Grid view.csv", content=EXPORT_CSV):
    path = directory / name
    path.write_text(content, encoding="utf-8-sig")
    return path


def test_parse_export_maps_columns_by_header(tmp_path):
    listings = parse_export(_write_export(tmp_path), TODAY)

    assert [listing.title for listing in listings] == [
        "Software Engineering Intern",
        "Data Intern",
        "Hardware Intern",
        "Old Intern",
    ]

    first = listings[0]
    assert first.company == "Acme"
    assert first.link == "https://jobs.acme.com/1"
    assert first.work_model == "Remote"
    assert first.salary == "$45/hr"
    assert first.source is Source.INTERNLIST_EXPORT


def test_parse_export_normalizes_dates(tmp_path):
    listings = parse_export(_write_export(tmp_path), TODAY)
    dates = {listing.title: listing.date for listing in listings}

    assert dates["Software Engineering Intern"] == "2025-11-26"
    assert dates["Data Intern"] == "2025-11-26"
    # unrecognized dates default to today
    assert dates["Hardware Intern"] == "2025-11-26"
    assert dates["Old Intern"] == "2025-11-01"


def test_parse_export_fills_blank_optional_columns(tmp_path):
    listings = parse_export(_write_export(tmp_path), TODAY)
    data = next(listing for listing in listings if listing.title == "Data Intern")

    assert data.work_model == UNKNOWN
    assert data.salary == UNKNOWN


def test_parse_export_warns_about_missing_columns(tmp_path, caplog):
    path = _write_export(tmp_path, content="Role,Employer\nIntern,Acme\n")

    with caplog.at_level(logging.WARNING):
        listings = parse_export(path, TODAY)

    assert "link" in caplog.text
    assert len(listings) == 1
    assert listings[0].link == ""
    assert not listings[0].is_valid


def test_unrecognized_dates_are_reported_once_per_export(tmp_path, caplog):
    content = (
        "Position Title,Company,Date,Apply\n"
        "A,Acme,Nov 26,https://example.com/a\n"
        "B,Acme,,https://example.com/b\n"
        "C,Acme,yesterday,https://example.com/c\n"
        "D,Acme,11/26/2025,https://example.com/d\n"
    )

    with caplog.at_level(logging.WARNING):
        listings = parse_export(_write_export(tmp_path, content=content), TODAY)

    assert [listing.date for listing in listings] == ["2025-11-26"] * 4
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "3 export rows" in warnings[0].getMessage()


def test_partial_downloads_are_ignored(tmp_path):
    (tmp_path / "Grid view.csv.crdownload").write_text("partial")
    (tmp_path / "empty.csv").write_text("")

    assert find_completed_download(tmp_path) is None


def test_clear_downloads_removes_exports_and_partials(tmp_path):
    _write_export(tmp_path)
    (tmp_path / "x.csv.part").write_text("partial")
    (tmp_path / "notes.txt").write_text("keep")

    clear_downloads(tmp_path)

    assert sorted(path.name for path in tmp_path.iterdir()) == ["notes.txt"]


@pytest.mark.asyncio
async def test_trigger_is_reissued_until_download_appears(tmp_path):
    triggers = []

    async def trigger():
        triggers.append(1)
        if len(triggers) == 2:
            _write_export(tmp_path)

    found = await wait_for_download(tmp_path, trigger, attempts=3, poll_seconds=3, sleep=NoSleep())

    assert found is not None
    assert found.name == "Grid view.csv"
    assert len(triggers) == 2


@pytest.mark.asyncio
async def test_gives_up_after_all_attempts(tmp_path):
    triggers = []

    async def trigger():
        triggers.append(1)
        raise RuntimeError("button not found")

    found = await wait_for_download(
        tmp_path / "downloads", trigger, attempts=3, poll_seconds=2, sleep=NoSleep()
    )

    assert found is None
    assert len(triggers) == 3


class FakePage:
    def __init__(self):
        self.closed = False
        self.handlers = {}

    def on(self, event, handler):
        self.handlers[event] = handler

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_browser(monkeypatch):
    page = FakePage()

    async def new_page():
        return page

    async def open_grid_frame(_page):
        return object()

    monkeypatch.setattr(BrowserManager, "new_page", new_page)
    monkeypatch.setattr(adapter_module, "open_grid_frame", open_grid_frame)
    return page


@pytest.mark.asyncio
async def test_export_adapter_parses_and_cleans_up(tmp_path, monkeypatch, fake_browser):
    async def fake_wait(directory, trigger):
        return _write_export(directory)

    monkeypatch.setattr(adapter_module, "wait_for_download", fake_wait)
    adapter = InternListExportAdapter(download_dir=tmp_path, clock=lambda: TODAY)

    result = await adapter.fetch()

    assert result.ok
    # only rows posted today survive the freshness filter
    assert [listing.title for listing in result.listings] == [
        "Software Engineering Intern",
        "Data Intern",
        "Hardware Intern",
    ]
    assert fake_browser.closed
    assert "download" in fake_browser.handlers
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_export_adapter_cleans_up_when_parsing_fails(tmp_path, monkeypatch, fake_browser):
    async def fake_wait(directory, trigger):
        return _write_export(directory)

    def broken_parse(path, current, source):
        raise ValueError("malformed export")

    monkeypatch.setattr(adapter_module, "wait_for_download", fake_wait)
    monkeypatch.setattr(adapter_module, "parse_export", broken_parse)
    adapter = InternListExportAdapter(download_dir=tmp_path, clock=lambda: TODAY)

    result = await adapter.fetch()

    assert not result.ok
    assert "malformed export" in result.error
    assert fake_browser.closed
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_export_adapter_fails_when_nothing_downloads(tmp_path, monkeypatch, fake_browser):
    async def fake_wait(directory, trigger):
        return None

    monkeypatch.setattr(adapter_module, "wait_for_download", fake_wait)
    adapter = InternListExportAdapter(download_dir=tmp_path, clock=lambda: TODAY)

    result = await adapter.fetch()

    assert not result.ok
    assert result.listings == []
    assert fake_browser.closed
