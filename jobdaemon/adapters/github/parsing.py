"""
Row extraction from rendered README tables.
No network access here, only HTML in and listings out.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from jobdaemon.core.links import is_absolute_url
from jobdaemon.core.models import JobListing, Source
from jobdaemon.adapters.github.config import (
    ROW_SELECTOR,
    COMPANY_COLUMN,
    TITLE_COLUMN,
    LOCATION_COLUMN,
    LINK_COLUMN,
    AGE_COLUMN,
    MIN_COLUMNS,
    CONTINUATION_MARKER,
)

logger = logging.getLogger(__name__)


def _cell_text(cells: List[Tag], index: int) -> Optional[str]:
    if index >= len(cells):
        return None
    return cells[index].get_text(" ", strip=True)


def _first_absolute_link(scope: Tag) -> Optional[str]:
    for anchor in scope.find_all("a", href=True):
        href = anchor["href"].strip()
        if is_absolute_url(href):
            return href
    return None


def extract_application_link(row: Tag, cells: List[Tag]) -> Optional[str]:
    """
    First well-formed absolute URL in the row.
    The application cell is searched before the rest of the row.
    """
    if LINK_COLUMN < len(cells):
        link = _first_absolute_link(cells[LINK_COLUMN])
        if link:
            return link
    return _first_absolute_link(row)


def parse_table(html: str, source: Source = Source.GITHUB) -> List[JobListing]:
    soup = BeautifulSoup(html, "html.parser")
    listings: List[JobListing] = []
    previous_company: Optional[str] = None
    dropped = 0

    for row in soup.select(ROW_SELECTOR):
        cells = row.find_all("td")
        if len(cells) < MIN_COLUMNS:
            continue

        company = _cell_text(cells, COMPANY_COLUMN)
        if company == CONTINUATION_MARKER:
            company = previous_company
        else:
            previous_company = company

        title = _cell_text(cells, TITLE_COLUMN)
        link = extract_application_link(row, cells)
        if not title or not link:
            dropped += 1
            continue

        listings.append(
            JobListing.create(
                title=title,
                link=link,
                company=company,
                location=_cell_text(cells, LOCATION_COLUMN),
                date=_cell_text(cells, AGE_COLUMN),
                source=source,
            )
        )

    if dropped:
        logger.debug(f"Dropped {dropped} rows without a role or application link")
    return listings
