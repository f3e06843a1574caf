"""
Discord webhook notifier: one rich message per listing plus one @everyone
ping per batch.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

import httpx

from jobdaemon.config.settings import settings
from jobdaemon.core.models import JobListing
from jobdaemon.core.results import DispatchResult
from jobdaemon.notify.base import Notifier

logger = logging.getLogger(__name__)

EMBED_COLOR = 0x9B59FF
DIVIDER = "⋆⁺₊⋆ ━━━━━━━━━━━━━━━━━━⊱༒︎ • ༒︎⊰━━━━━━━━━━━━━━━━━━ ⋆⁺₊⋆"


def build_listing_payload(listing: JobListing, is_test: bool = False) -> dict:
    prefix = "**[TEST]** " if is_test else ""
    source_label = f"From {listing.source.value}" if listing.source else "Unknown Source"
    fields = [
        ("Company", listing.company),
        ("Location", listing.location),
        ("Work Model", listing.work_model),
        ("Date Posted", listing.date),
        ("Salary", listing.salary),
    ]

    content = "\n".join(
        [
            DIVIDER,
            "",
            f"{prefix}**New Internship** ({source_label})",
            f"**Role:** {listing.title}",
            *(f"**{name}:** {value}" for name, value in fields),
            f"**Link:** {listing.link}",
            "",
            DIVIDER,
        ]
    )

    return {
        "content": content,
        "embeds": [
            {
                "title": listing.title[:256],
                "url": listing.link,
                "description": "New SWE internship posted!",
                "color": EMBED_COLOR,
                "fields": [
                    {"name": name, "value": value or "N/A", "inline": False}
                    for name, value in fields
                ],
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        ],
    }


def format_ping_timestamp(moment: datetime) -> str:
    """``[November 26, 2025 | 3:07PM]``"""
    hour = moment.hour % 12 or 12
    ampm = "PM" if moment.hour >= 12 else "AM"
    return f"[{moment:%B} {moment.day}, {moment.year} | {hour}:{moment:%M}{ampm}]"


class DiscordNotifier(Notifier):
    def __init__(
        self,
        webhook_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = webhook_url if webhook_url is not None else settings.DISCORD_WEBHOOK_URL
        self._transport = transport

    async def _post(self, payload: dict, what: str) -> DispatchResult:
        if not self.webhook_url:
            logger.error("DISCORD_WEBHOOK_URL is not configured")
            return DispatchResult.failure("webhook not configured")

        try:
            async with httpx.AsyncClient(
                timeout=settings.HTTP_TIMEOUT, transport=self._transport
            ) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Failed to send Discord {what}: status={e.response.status_code} "
                f"body={e.response.text[:200]}"
            )
            return DispatchResult.failure(f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to send Discord {what}: {e}")
            return DispatchResult.failure(str(e))

        return DispatchResult.success()

    async def dispatch(self, listing: JobListing) -> DispatchResult:
        return await self._post(build_listing_payload(listing), "notification")

    async def announce(self, count: int) -> DispatchResult:
        stamp = format_ping_timestamp(datetime.now(ZoneInfo(settings.TIMEZONE)))
        return await self._post(
            {"content": f"@everyone\n\n**New Internship Postings {stamp}**"}, "ping"
        )

    async def dispatch_test(self, listing: JobListing) -> DispatchResult:
        """Same message, marked as a test, for checking the webhook by hand."""
        return await self._post(build_listing_payload(listing, is_test=True), "test notification")
