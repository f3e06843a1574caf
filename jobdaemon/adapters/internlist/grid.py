"""
Row extraction from the virtualized Airtable grid.

The grid renders two independently virtualized panes: the frozen left pane
holds the primary field (the position title) and the right pane holds every
other column. Each pane only mounts the rows near the viewport, so a row is
complete only when both halves are mounted at the same time.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from playwright.async_api import Frame

from jobdaemon.adapters.internlist.columns import pick, resolve_columns
from jobdaemon.adapters.internlist.config import SCROLL_STEP_RATIO, WHEEL_FALLBACK_PX
from jobdaemon.adapters.internlist.selectors import (
    LEFT_ROW_SELECTOR,
    RIGHT_ROW_SELECTOR,
    CELL_SELECTOR,
    HEADER_CELL_SELECTOR,
    SCROLL_CONTAINER_SELECTORS,
    EXTRACT_PANES_SCRIPT,
    SCROLL_SCRIPT,
)
from jobdaemon.core.freshness import normalize_date
from jobdaemon.core.links import is_absolute_url, normalize_link
from jobdaemon.core.models import JobListing, Source

logger = logging.getLogger(__name__)


@dataclass
class PaneRow:
    """One mounted half-row: column id -> text, column id -> href."""

    row_id: str
    cells: Dict[str, str] = field(default_factory=dict)
    links: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_script(cls, raw: dict) -> "PaneRow":
        return cls(
            row_id=raw.get("rowId") or "",
            cells=raw.get("cells") or {},
            links=raw.get("links") or {},
        )


@dataclass
class GridRow:
    """A complete row, keyed by header name."""

    row_id: str
    title: str
    values: Dict[str, str]
    links: Dict[str, str]


def merge_panes(
    left: List[PaneRow], right: List[PaneRow], headers: Dict[str, str]
) -> List[GridRow]:
    """
    Correlate left and right halves by row id, in left-pane order.
    Rows with only one half mounted are not emitted.
    """
    right_by_id = {row.row_id: row for row in right if row.row_id}
    rows: List[GridRow] = []

    for half in left:
        other = right_by_id.get(half.row_id)
        if not half.row_id or other is None:
            continue

        title = next((text for text in half.cells.values() if text), "")
        values: Dict[str, str] = {}
        links: Dict[str, str] = {}
        for pane in (half, other):
            for column_id, text in pane.cells.items():
                values[headers.get(column_id, column_id)] = text
            for column_id, href in pane.links.items():
                links[headers.get(column_id, column_id)] = href

        rows.append(GridRow(row_id=half.row_id, title=title, values=values, links=links))

    return rows


def _row_link(row: GridRow, columns: Dict[str, str]) -> Optional[str]:
    header = columns.get("link")
    if header and is_absolute_url(row.links.get(header)):
        return row.links[header]
    if header and is_absolute_url(row.values.get(header)):
        return row.values[header]
    return next((href for href in row.links.values() if is_absolute_url(href)), None)


def grid_row_date(row: GridRow) -> Optional[str]:
    return pick(row.values, resolve_columns(row.values.keys()), "date")


def grid_row_identity(row: GridRow) -> str:
    """
    Canonical application link of the row, so the same posting mounted under
    another campaign tag is not counted twice. Rows without a link fall back
    to their Airtable row id.
    """
    link = _row_link(row, resolve_columns(row.values.keys()))
    return normalize_link(link) if link else f"row:{row.row_id}"


def grid_row_to_listing(
    row: GridRow, current: date, source: Source = Source.INTERNLIST
) -> Optional[JobListing]:
    columns = resolve_columns(row.values.keys())
    title = pick(row.values, columns, "title") or row.title
    link = _row_link(row, columns)
    if not title or not link:
        return None

    return JobListing.create(
        title=title,
        link=link,
        company=pick(row.values, columns, "company"),
        location=pick(row.values, columns, "location"),
        date=normalize_date(grid_row_date(row), current),
        salary=pick(row.values, columns, "salary"),
        work_model=pick(row.values, columns, "work_model"),
        source=source,
    )


class AirtableGridPane:
    """
    Scrollable view over the grid inside the embedded Airtable frame.
    """

    def __init__(self, frame: Frame):
        self.frame = frame

    async def visible_rows(self) -> List[GridRow]:
        raw = await self.frame.evaluate(
            EXTRACT_PANES_SCRIPT,
            {
                "left": LEFT_ROW_SELECTOR,
                "right": RIGHT_ROW_SELECTOR,
                "cell": CELL_SELECTOR,
                "header": HEADER_CELL_SELECTOR,
            },
        )
        left = [PaneRow.from_script(item) for item in raw.get("left", [])]
        right = [PaneRow.from_script(item) for item in raw.get("right", [])]
        return merge_panes(left, right, raw.get("headers", {}))

    async def scroll_forward(self) -> None:
        scrolled = await self.frame.evaluate(
            SCROLL_SCRIPT, [SCROLL_CONTAINER_SELECTORS, SCROLL_STEP_RATIO]
        )
        if not scrolled:
            logger.debug("No scroll container found, falling back to mouse wheel")
            await self.frame.page.mouse.wheel(0, WHEEL_FALLBACK_PX)
