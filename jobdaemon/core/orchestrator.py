"""
Single-flight run controller.

A run aggregates all sources, keeps the listings the seen-store does not know
yet, persists each one before dispatching it, and sends one summary at the
end. Ticks arriving while a run is in progress are no-ops.

Failure scope inside a run:
- source failures are absorbed by the adapters,
- seen-store failures abort the run (nothing more is marked seen, so the
  next tick retries from scratch),
- dispatch failures only affect the listing being dispatched.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional

from jobdaemon.config.settings import settings
from jobdaemon.core.aggregator import Aggregator
from jobdaemon.core.models import JobListing
from jobdaemon.core.results import DispatchResult, RunReport
from jobdaemon.notify.base import Notifier, SummarySender
from jobdaemon.store.seen_store import SeenStore, SeenStoreError

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Orchestrator:
    def __init__(
        self,
        aggregator: Aggregator,
        store: SeenStore,
        notifier: Notifier,
        summary: SummarySender,
        dispatch_delay: float = settings.DISPATCH_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.aggregator = aggregator
        self.store = store
        self.notifier = notifier
        self.summary = summary
        self.dispatch_delay = dispatch_delay
        self._sleep = sleep
        self._running = False
        self.last_report: Optional[RunReport] = None

    @property
    def running(self) -> bool:
        return self._running

    async def tick(self) -> RunReport:
        """
        Scheduler entry point. Never raises.
        """
        # No await between the check and the set: atomic with respect to other ticks
        if self._running:
            logger.info("Previous run still in progress, skipping this tick")
            return RunReport(started_at=_now(), finished_at=_now(), skipped=True)
        self._running = True

        report = RunReport(started_at=_now())
        logger.info("Running job scrape...")
        try:
            await self._run(report)
        except SeenStoreError as e:
            report.error = f"Seen-store unavailable: {e}"
            logger.error(f"Run aborted, seen-store unavailable: {e}")
        except Exception as e:
            report.error = str(e)
            logger.exception(f"Run failed: {e}")
        finally:
            report.finished_at = _now()
            self.last_report = report
            self._running = False

        logger.info(
            f"Run finished: {report.discovered} discovered, {len(report.new_ids)} new, "
            f"{len(report.dispatch_failures)} dispatch failures"
        )
        return report

    async def _run(self, report: RunReport) -> None:
        listings = await self.aggregator.aggregate()
        report.discovered = len(listings)

        new_listings = [listing for listing in listings if not self.store.has(listing.id)]
        logger.info(
            f"{len(new_listings)} new of {len(listings)} listings "
            f"({len(listings) - len(new_listings)} already seen)"
        )
        if not new_listings:
            return

        await self._deliver(self.notifier.announce(len(new_listings)), "batch announcement")

        for index, listing in enumerate(new_listings):
            if index:
                await self._sleep(self.dispatch_delay)

            # Recorded before delivery: at most one notification attempt per id
            self.store.record(listing)
            report.new_ids.append(listing.id)
            logger.info(f"New job detected: {listing.title} ({listing.company})")

            if not await self._deliver(self.notifier.dispatch(listing), listing.id):
                report.dispatch_failures.append(listing.id)

        await self._deliver(self.summary.send_summary(list(new_listings)), "summary")

    async def _deliver(self, call: Awaitable[DispatchResult], what: str) -> bool:
        try:
            result = await call
        except Exception as e:
            logger.error(f"Delivery of {what} raised: {e}")
            return False
        if not result.ok:
            logger.warning(f"Delivery of {what} failed: {result.reason}")
        return result.ok
