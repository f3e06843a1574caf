"""
Retries for transient network and browser failures inside a single fetch.
A source that still fails after its retries is skipped for the run by the
adapter; the next scheduled run starts over.
"""

import asyncio
import functools
import logging
import random
from typing import Any, Awaitable, Callable, Coroutine, Tuple, Type, TypeVar

import httpx
from playwright.async_api import Error as PlaywrightError

from jobdaemon.config.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_ERRORS: Tuple[Type[BaseException], ...] = (
    PlaywrightError,
    httpx.TransportError,
    asyncio.TimeoutError,
)


def backoff_delay(failures: int, base_delay: float, max_delay: float) -> float:
    """Exponential delay after ``failures`` failed attempts, capped, plus up to 50% jitter."""
    delay = min(base_delay * (2 ** (failures - 1)), max_delay)
    return delay + random.uniform(0, 0.5 * delay)


def with_retry(
    max_retries: int = settings.MAX_RETRIES,
    base_delay: float = settings.RETRY_BASE_DELAY,
    max_delay: float = settings.RETRY_MAX_DELAY,
    retry_on: Tuple[Type[BaseException], ...] = RETRYABLE_ERRORS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
):
    """
    Retry the decorated coroutine up to ``max_retries`` times on ``retry_on``.
    Other exceptions propagate on the first occurrence.
    """

    def decorator(
        func: Callable[..., Coroutine[Any, Any, T]],
    ) -> Callable[..., Coroutine[Any, Any, T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            failures = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    failures += 1
                    if failures > max_retries:
                        logger.error(
                            f"{func.__name__} still failing after {max_retries} retries: {e}"
                        )
                        raise

                    wait = backoff_delay(failures, base_delay, max_delay)
                    logger.warning(
                        f"{func.__name__} failed ({e}); retry {failures}/{max_retries} "
                        f"in {wait:.2f}s"
                    )
                    await sleep(wait)

        return wrapper

    return decorator
