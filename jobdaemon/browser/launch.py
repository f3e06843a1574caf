"""
Browser and context construction for the interactive sources.
"""

import logging
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Playwright

from jobdaemon.config.settings import settings

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
    "--no-sandbox",
    "--mute-audio",
]


async def create_browser(playwright: Playwright) -> Browser:
    """
    Launch Chromium, or the system Chrome when BROWSER_CHANNEL is set.
    """
    browser = await playwright.chromium.launch(
        channel=settings.BROWSER_CHANNEL,
        headless=settings.HEADLESS,
        args=LAUNCH_ARGS,
    )
    logger.info(
        f"Browser launched (Channel: {settings.BROWSER_CHANNEL or 'chromium'}, "
        f"Headless: {settings.HEADLESS})"
    )
    return browser


async def create_context(
    browser: Browser,
    user_agent: Optional[str] = None,
) -> BrowserContext:
    """
    Create a context that accepts downloads (needed by the CSV export source)
    and uses a large viewport so the virtualized grid mounts more rows per screen.
    """
    context_config = {
        "viewport": {"width": 1600, "height": 1000},
        "locale": "en-US",
        "timezone_id": settings.TIMEZONE,
        "accept_downloads": True,
        "ignore_https_errors": settings.IGNORE_HTTPS_ERRORS,
    }
    if user_agent:
        context_config["user_agent"] = user_agent

    context = await browser.new_context(**context_config)
    context.set_default_navigation_timeout(settings.NAVIGATION_TIMEOUT)
    context.set_default_timeout(settings.SELECTOR_TIMEOUT)

    logger.info("Browser context created")
    return context
