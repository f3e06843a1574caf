"""Tests for the SQLite seen-store."""

import sqlite3

import pytest

from jobdaemon.core.models import JobListing, Source
from jobdaemon.store.seen_store import SeenStore, SeenStoreError


def _listing(link="https://example.com/jobs/1", title="Intern"):
    return JobListing.create(title=title, link=link, company="Acme", source=Source.GITHUB)


@pytest.fixture
def store(tmp_path):
    store = SeenStore(tmp_path / "jobs.db")
    yield store
    store.close()


def test_has_is_false_before_and_true_after_record(store):
    listing = _listing()

    assert not store.has(listing.id)
    store.record(listing)
    assert store.has(listing.id)


def test_record_is_idempotent(store):
    listing = _listing()

    store.record(listing)
    store.record(listing)
    store.record(listing)

    assert store.has(listing.id)
    assert store.count() == 1


def test_first_snapshot_is_never_overwritten(tmp_path):
    path = tmp_path / "jobs.db"
    store = SeenStore(path)
    store.record(_listing(title="Original Title"))
    store.record(_listing(title="Renamed Title"))
    store.close()

    with sqlite3.connect(path) as conn:
        rows = conn.execute("SELECT title, source, first_seen_at FROM jobs").fetchall()

    assert len(rows) == 1
    assert rows[0][0] == "Original Title"
    assert rows[0][1] == "GitHub"
    assert rows[0][2]


def test_entries_survive_a_restart(tmp_path):
    path = tmp_path / "data" / "jobs.db"
    first = SeenStore(path)
    first.record(_listing())
    first.close()

    second = SeenStore(path)
    try:
        assert second.has("https://example.com/jobs/1")
        assert not second.has("https://example.com/jobs/2")
    finally:
        second.close()


def test_unavailable_store_raises_seen_store_error(tmp_path):
    # A directory cannot be opened as a database file
    store = SeenStore(tmp_path)

    with pytest.raises(SeenStoreError):
        store.has("anything")
