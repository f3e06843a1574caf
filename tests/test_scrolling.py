"""Tests for the bounded scroll-and-re-scrape loop."""

from dataclasses import dataclass
from typing import List

import pytest

from jobdaemon.adapters.internlist.scrolling import collect_by_scrolling
from jobdaemon.core.links import normalize_link


@dataclass
class Row:
    row_id: str


class ScriptedPane:
    """
    Replays a fixed number of new rows per iteration. Each view also repeats
    the previous batch, the way a virtualized grid keeps rows near the
    viewport mounted.
    """

    def __init__(self, new_per_iteration: List[int]):
        self.new_per_iteration = new_per_iteration
        self.views = 0
        self.scrolls = 0
        self._next_id = 0
        self._previous: List[Row] = []

    async def visible_rows(self):
        index = self.views
        self.views += 1
        count = self.new_per_iteration[index] if index < len(self.new_per_iteration) else 0
        fresh = []
        for _ in range(count):
            self._next_id += 1
            fresh.append(Row(f"rec{self._next_id}"))
        view = self._previous + fresh
        if fresh:
            self._previous = fresh
        return view

    async def scroll_forward(self):
        self.scrolls += 1


class NoSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.mark.asyncio
async def test_stops_after_idle_limit_and_returns_rows_oldest_first():
    pane = ScriptedPane([3, 3, 3, 3])
    sleep = NoSleep()

    rows = await collect_by_scrolling(
        pane, max_iterations=30, idle_limit=5, settle_seconds=1.5, sleep=sleep
    )

    assert pane.views == 9
    assert pane.scrolls == 8
    assert sleep.calls == [1.5] * 8
    assert [row.row_id for row in rows] == [f"rec{n}" for n in range(12, 0, -1)]


@pytest.mark.asyncio
async def test_never_exceeds_iteration_cap():
    pane = ScriptedPane([2] * 100)

    rows = await collect_by_scrolling(
        pane, max_iterations=30, idle_limit=5, settle_seconds=0, sleep=NoSleep()
    )

    assert pane.views == 30
    assert pane.scrolls == 29
    assert len(rows) == 60


@pytest.mark.asyncio
async def test_new_rows_reset_the_idle_counter():
    pane = ScriptedPane([3, 0, 0, 0, 0, 2])

    rows = await collect_by_scrolling(
        pane, max_iterations=30, idle_limit=5, settle_seconds=0, sleep=NoSleep()
    )

    assert pane.views == 11
    assert len(rows) == 5


@pytest.mark.asyncio
async def test_empty_pane_stops_after_idle_limit():
    pane = ScriptedPane([])

    rows = await collect_by_scrolling(
        pane, max_iterations=30, idle_limit=5, settle_seconds=0, sleep=NoSleep()
    )

    assert rows == []
    assert pane.views == 5


@dataclass
class LinkedRow:
    row_id: str
    link: str


class RepeatingPostingPane:
    """Every view mounts a new grid row, but all of them point at one posting."""

    def __init__(self):
        self.views = 0

    async def visible_rows(self):
        self.views += 1
        tag = "intern-list.com" if self.views % 2 else "Simplify"
        return [LinkedRow(f"rec{self.views}", f"https://jobs.example.com/1?utm_source={tag}")]

    async def scroll_forward(self):
        pass


@pytest.mark.asyncio
async def test_rows_are_identified_by_the_given_key():
    pane = RepeatingPostingPane()

    rows = await collect_by_scrolling(
        pane,
        max_iterations=30,
        idle_limit=5,
        settle_seconds=0,
        sleep=NoSleep(),
        key=lambda row: normalize_link(row.link),
    )

    assert [row.row_id for row in rows] == ["rec1"]
    assert pane.views == 6
