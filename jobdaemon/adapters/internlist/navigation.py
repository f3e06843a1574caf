"""
Getting from the InternList landing page to the embedded Airtable grid.
"""

import logging
from typing import List

from playwright.async_api import Frame, Page

from jobdaemon.adapters.internlist.config import BASE_URL
from jobdaemon.adapters.internlist.selectors import EMBED_FRAME_SELECTOR, ROW_SELECTOR
from jobdaemon.config.settings import settings
from jobdaemon.core.retry import with_retry

logger = logging.getLogger(__name__)


class GridNotFoundError(RuntimeError):
    pass


@with_retry()
async def open_grid_frame(page: Page) -> Frame:
    """
    Load the landing page and return the Airtable frame once grid rows are mounted.
    """
    logger.info(f"Navigating to {BASE_URL}")
    await page.goto(BASE_URL, wait_until="domcontentloaded", timeout=settings.NAVIGATION_TIMEOUT)

    handle = await page.wait_for_selector(
        EMBED_FRAME_SELECTOR, timeout=settings.NAVIGATION_TIMEOUT
    )
    frame = await handle.content_frame() if handle else None
    if frame is None:
        raise GridNotFoundError("Embedded Airtable frame not found")

    await frame.wait_for_selector(ROW_SELECTOR, timeout=settings.NAVIGATION_TIMEOUT)
    logger.info("Airtable grid mounted")
    return frame


async def click_first(frame: Frame, selectors: List[str], description: str) -> bool:
    """
    Click the first selector that matches a visible element.
    Returns False when none did.
    """
    for selector in selectors:
        try:
            locator = frame.locator(selector).first
            if await locator.count() > 0 and await locator.is_visible():
                await locator.click(timeout=settings.SELECTOR_TIMEOUT)
                return True
        except Exception as e:
            logger.debug(f"Selector '{selector}' failed for {description}: {e}")
            continue

    logger.warning(f"All selectors failed for {description}")
    return False
