"""
Parsing of the InternList CSV export.
Columns are mapped by header name, never by position.
"""

import csv
import logging
from datetime import date
from pathlib import Path
from typing import List

from jobdaemon.adapters.internlist.columns import is_placeholder, pick, resolve_columns
from jobdaemon.core.freshness import normalize_date, parse_date
from jobdaemon.core.models import JobListing, Source

logger = logging.getLogger(__name__)


def parse_export(
    path: Path, current: date, source: Source = Source.INTERNLIST_EXPORT
) -> List[JobListing]:
    """
    Read the export into listings. Rows whose title or company is a
    placeholder are rejected; missing optional columns only degrade display.
    """
    listings: List[JobListing] = []
    rejected = 0
    undated = 0

    with open(path, newline="", encoding="utf-8-sig") as fh:
        reader = csv.DictReader(fh)
        columns = resolve_columns(reader.fieldnames or [])
        missing = [name for name in ("title", "company", "link") if name not in columns]
        if missing:
            logger.warning(f"Export is missing expected columns: {', '.join(missing)}")

        for values in reader:
            title = pick(values, columns, "title")
            company = pick(values, columns, "company")
            if is_placeholder(title) or is_placeholder(company):
                rejected += 1
                continue

            raw_date = pick(values, columns, "date")
            if parse_date(raw_date) is None:
                undated += 1

            listings.append(
                JobListing.create(
                    title=title,
                    link=pick(values, columns, "link"),
                    company=company,
                    location=pick(values, columns, "location"),
                    date=normalize_date(raw_date, current),
                    salary=pick(values, columns, "salary"),
                    work_model=pick(values, columns, "work_model"),
                    source=source,
                )
            )

    if undated:
        logger.warning(f"{undated} export rows had no recognizable date, treated as today")
    if rejected:
        logger.debug(f"Rejected {rejected} export rows with placeholder title/company")
    logger.info(f"Parsed {len(listings)} rows from {path.name}")
    return listings
