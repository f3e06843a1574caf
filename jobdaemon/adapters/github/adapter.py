"""
GitHubTableAdapter - static README table source.

Fetches the rendered repository page over plain HTTP (no browser needed) and
maps fixed column positions to listing fields.

Freshness policy: RELATIVE_TOKEN. The Age column is relative ("0d", "5h",
"2mo"), so only hour/minute ages, today/now tokens and zero-day ages pass.
"""

import logging
from datetime import date
from typing import Callable, List, Optional

import httpx

from jobdaemon.adapters.base import SourceAdapter
from jobdaemon.adapters.github.parsing import parse_table
from jobdaemon.browser.user_agent import UserAgentProvider
from jobdaemon.config.settings import settings
from jobdaemon.core.freshness import FreshnessPolicy, today
from jobdaemon.core.models import JobListing, Source
from jobdaemon.core.retry import with_retry

logger = logging.getLogger(__name__)


@with_retry()
async def fetch_html(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url)
    response.raise_for_status()
    return response.text


class GitHubTableAdapter(SourceAdapter):
    source = Source.GITHUB
    freshness_policy = FreshnessPolicy.RELATIVE_TOKEN

    def __init__(
        self,
        name: str,
        url: str,
        clock: Callable[[], date] = today,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(name, clock)
        self.url = url
        self._transport = transport

    async def _collect(self) -> List[JobListing]:
        headers = {"User-Agent": UserAgentProvider.get_random()}
        async with httpx.AsyncClient(
            headers=headers,
            timeout=settings.HTTP_TIMEOUT,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            logger.info(f"[{self.name}] Loading {self.url}")
            html = await fetch_html(client, self.url)

        listings = parse_table(html, self.source)
        logger.info(f"[{self.name}] Parsed {len(listings)} table rows with links")
        return listings
