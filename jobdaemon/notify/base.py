from abc import ABC, abstractmethod
from typing import Sequence

from jobdaemon.core.models import JobListing
from jobdaemon.core.results import DispatchResult


class Notifier(ABC):
    """
    Real-time channel for individual listings.
    Implementations never raise; delivery problems come back as a failed result.
    """

    @abstractmethod
    async def dispatch(self, listing: JobListing) -> DispatchResult:
        pass

    async def announce(self, count: int) -> DispatchResult:
        """Heads-up sent once before a batch of dispatches."""
        return DispatchResult.success()


class SummarySender(ABC):
    """
    End-of-run digest channel. Called at most once per run with a non-empty batch.
    """

    @abstractmethod
    async def send_summary(self, listings: Sequence[JobListing]) -> DispatchResult:
        pass
