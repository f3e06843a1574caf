"""
InternList adapters.

Both read the Airtable view embedded on intern-list.com and need a scripted
browser session:

- InternListGridAdapter scrolls the virtualized grid and re-scrapes the
  mounted rows until no new rows appear.
- InternListExportAdapter clicks the view's "Download CSV" action and parses
  the downloaded file.

Freshness policy for both: EXACT_DATE. The view's Date column holds absolute
dates, normalized to ISO and compared with today.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from playwright.async_api import Download, Frame

from jobdaemon.adapters.base import SourceAdapter
from jobdaemon.adapters.internlist.csv_parsing import parse_export
from jobdaemon.adapters.internlist.download import clear_downloads, wait_for_download
from jobdaemon.adapters.internlist.grid import (
    AirtableGridPane,
    grid_row_date,
    grid_row_identity,
    grid_row_to_listing,
)
from jobdaemon.adapters.internlist.navigation import click_first, open_grid_frame
from jobdaemon.adapters.internlist.scrolling import collect_by_scrolling
from jobdaemon.adapters.internlist.selectors import (
    DOWNLOAD_CSV_SELECTORS,
    VIEW_MENU_SELECTORS,
)
from jobdaemon.browser.manager import BrowserManager
from jobdaemon.config.settings import settings
from jobdaemon.core.freshness import FreshnessPolicy, parse_date, today
from jobdaemon.core.models import JobListing, Source

logger = logging.getLogger(__name__)


class InternListGridAdapter(SourceAdapter):
    source = Source.INTERNLIST
    freshness_policy = FreshnessPolicy.EXACT_DATE

    def __init__(self, name: str = "internlist", clock: Callable[[], date] = today):
        super().__init__(name, clock)

    async def _collect(self) -> List[JobListing]:
        async with BrowserManager.page() as page:
            frame = await open_grid_frame(page)
            rows = await collect_by_scrolling(AirtableGridPane(frame), key=grid_row_identity)

        undated = sum(1 for row in rows if parse_date(grid_row_date(row)) is None)
        if undated:
            logger.warning(
                f"[{self.name}] {undated} grid rows had no recognizable date, treated as today"
            )

        current = self.clock()
        listings = []
        for row in rows:
            listing = grid_row_to_listing(row, current, self.source)
            if listing is not None:
                listings.append(listing)
        return listings


class InternListExportAdapter(SourceAdapter):
    source = Source.INTERNLIST_EXPORT
    freshness_policy = FreshnessPolicy.EXACT_DATE

    def __init__(
        self,
        name: str = "internlist_export",
        download_dir: Optional[Path] = None,
        clock: Callable[[], date] = today,
    ):
        super().__init__(name, clock)
        self.download_dir = Path(download_dir or settings.DOWNLOAD_DIR)

    async def _save_download(self, download: Download) -> None:
        target = self.download_dir / (download.suggested_filename or "export.csv")
        partial = target.with_name(target.name + ".part")
        try:
            await download.save_as(partial)
            partial.replace(target)
        except Exception as e:
            logger.warning(f"[{self.name}] Failed to save download: {e}")
            partial.unlink(missing_ok=True)

    async def _trigger_export(self, frame: Frame) -> None:
        # Optional: some layouts show the export action without a menu
        await click_first(frame, VIEW_MENU_SELECTORS, "view menu")
        if not await click_first(frame, DOWNLOAD_CSV_SELECTORS, "Download CSV"):
            raise RuntimeError("Download CSV action not found")

    async def _collect(self) -> List[JobListing]:
        clear_downloads(self.download_dir)

        try:
            async with BrowserManager.page() as page:
                page.on("download", self._save_download)
                frame = await open_grid_frame(page)
                exported = await wait_for_download(
                    self.download_dir, lambda: self._trigger_export(frame)
                )
            if exported is None:
                raise RuntimeError(
                    f"No export downloaded after {settings.DOWNLOAD_ATTEMPTS} attempts"
                )
            return parse_export(exported, self.clock(), self.source)
        finally:
            clear_downloads(self.download_dir)
            logger.debug(f"[{self.name}] Download directory cleaned")
