"""
Bounded scroll-and-re-scrape loop for virtualized, infinitely scrolling views.

Termination: stop after ``idle_limit`` consecutive iterations that surface no
new row identities (content exhausted or scroll stuck), and never run more than
``max_iterations`` iterations.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Protocol, Sequence, Set

from jobdaemon.config.settings import settings

logger = logging.getLogger(__name__)


class HasRowId(Protocol):
    row_id: str


class ScrollablePane(Protocol):
    async def visible_rows(self) -> Sequence[HasRowId]: ...

    async def scroll_forward(self) -> None: ...


def row_id_key(row: HasRowId) -> str:
    return row.row_id


async def collect_by_scrolling(
    pane: ScrollablePane,
    max_iterations: int = settings.SCROLL_MAX_ITERATIONS,
    idle_limit: int = settings.SCROLL_IDLE_LIMIT,
    settle_seconds: float = settings.SCROLL_SETTLE_SECONDS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    key: Callable[[Any], str] = row_id_key,
) -> List:
    """
    Scroll through the pane collecting each row once, identified by ``key``
    (the row id unless the caller maps rows to a listing identifier).

    Rows are returned reversed: the view lists newest first, so the result is
    in original-post order.
    """
    seen: Set[str] = set()
    collected: List = []
    idle = 0
    iteration = 0

    for iteration in range(1, max_iterations + 1):
        new_rows = 0
        for row in await pane.visible_rows():
            identity = key(row)
            if identity in seen:
                continue
            seen.add(identity)
            collected.append(row)
            new_rows += 1

        logger.debug(
            f"Scroll iteration {iteration}: {new_rows} new rows ({len(collected)} total)"
        )

        idle = idle + 1 if new_rows == 0 else 0
        if idle >= idle_limit:
            logger.info(
                f"No new rows for {idle} consecutive iterations, stopping after "
                f"iteration {iteration}"
            )
            break

        if iteration < max_iterations:
            await pane.scroll_forward()
            await sleep(settle_seconds)
    else:
        logger.warning(f"Scroll loop hit the {max_iterations}-iteration cap")

    logger.info(f"Collected {len(collected)} rows in {iteration} iterations")
    collected.reverse()
    return collected
