import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from jobdaemon.browser.launch import create_browser, create_context
from jobdaemon.browser.user_agent import UserAgentProvider

logger = logging.getLogger(__name__)


class BrowserManager:
    """
    Process-wide Playwright session for the interactive sources.

    Nothing is launched until the first page is requested, so a deployment
    that only enables HTTP sources never starts a browser. A browser that
    crashed or disconnected between runs is relaunched on the next request.
    """

    _playwright: Optional[Playwright] = None
    _browser: Optional[Browser] = None
    _context: Optional[BrowserContext] = None
    _lock: Optional[asyncio.Lock] = None

    @classmethod
    async def initialize(cls):
        if cls._lock is None:
            cls._lock = asyncio.Lock()

        async with cls._lock:
            if cls._playwright is None:
                cls._playwright = await async_playwright().start()
                logger.info("Playwright started.")

            if cls._browser is not None and not cls._browser.is_connected():
                logger.warning("Browser disconnected, relaunching")
                cls._browser = None
                cls._context = None

            if cls._browser is None:
                cls._browser = await create_browser(cls._playwright)

            if cls._context is None:
                user_agent = UserAgentProvider.get_random()
                logger.info(f"Browser context user agent: {user_agent}")
                cls._context = await create_context(cls._browser, user_agent)

    @classmethod
    async def new_page(cls) -> Page:
        await cls.initialize()
        return await cls._context.new_page()

    @classmethod
    @asynccontextmanager
    async def page(cls) -> AsyncIterator[Page]:
        """A fresh page that is closed when the block exits, however it exits."""
        page = await cls.new_page()
        try:
            yield page
        finally:
            await page.close()

    @classmethod
    async def close(cls):
        """
        Tears down whatever part of the session was started.
        """
        if cls._context:
            await cls._context.close()
            cls._context = None

        if cls._browser:
            await cls._browser.close()
            cls._browser = None
            logger.info("Browser closed.")

        if cls._playwright:
            await cls._playwright.stop()
            cls._playwright = None
            logger.info("Playwright stopped.")
