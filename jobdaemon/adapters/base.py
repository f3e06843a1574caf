import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, List

from jobdaemon.core.freshness import FreshnessPolicy, filter_fresh, today
from jobdaemon.core.models import JobListing, Source
from jobdaemon.core.results import FetchResult

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """
    Abstract base class for all source adapters.

    Subclasses implement ``_collect`` (navigation, parsing, pagination) and
    declare the freshness policy their source supports. ``fetch`` is the only
    public entry point and never raises: any failure degrades to an empty
    result for this source so the other sources keep running.
    """

    source: Source
    freshness_policy: FreshnessPolicy

    def __init__(self, name: str, clock: Callable[[], date] = today):
        self.name = name
        self.clock = clock

    @abstractmethod
    async def _collect(self) -> List[JobListing]:
        """
        Gather every listing currently exposed by the source, fresh or not.
        May raise; ``fetch`` absorbs the failure.
        """
        pass

    async def fetch(self) -> FetchResult:
        logger.info(f"[{self.name}] Fetching listings...")
        try:
            listings = await self._collect()
        except Exception as e:
            logger.error(f"[{self.name}] Source failed, skipping this run: {e}")
            return FetchResult.failure(self.name, str(e))

        if not listings:
            logger.warning(f"[{self.name}] Source returned no listings")
            return FetchResult(source=self.name)

        fresh = filter_fresh(listings, self.freshness_policy, self.clock(), self.name)
        logger.info(
            f"[{self.name}] {len(fresh)} fresh of {len(listings)} listings collected"
        )
        return FetchResult(source=self.name, listings=fresh)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
