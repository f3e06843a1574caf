import logging
from typing import Dict, List, Sequence

from jobdaemon.adapters.base import SourceAdapter
from jobdaemon.core.models import JobListing

logger = logging.getLogger(__name__)


class Aggregator:
    """
    Runs every registered adapter in turn and merges their output into one
    candidate set with at most one listing per id.
    """

    def __init__(self, adapters: Sequence[SourceAdapter]):
        self.adapters = list(adapters)

    async def aggregate(self) -> List[JobListing]:
        merged: Dict[str, JobListing] = {}
        invalid = 0

        for adapter in self.adapters:
            try:
                result = await adapter.fetch()
            except Exception as e:
                # fetch() is not supposed to raise; treat a misbehaving adapter as empty
                logger.error(f"[{getattr(adapter, 'name', adapter)}] Adapter raised: {e}")
                continue

            for listing in result.listings:
                if not listing.is_valid:
                    invalid += 1
                    continue
                # last occurrence wins; insertion order of the first is kept
                merged[listing.id] = listing

        if invalid:
            logger.info(f"Excluded {invalid} listings without a title or link")
        logger.info(
            f"Aggregated {len(merged)} unique listings from {len(self.adapters)} sources"
        )
        return list(merged.values())
