"""
Waiting for a triggered browser download to land in the download directory.
Downloads can silently fail to start, so the trigger is re-issued on every
attempt until a completed file shows up.
"""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional

from jobdaemon.adapters.internlist.config import EXPORT_SUFFIX, PARTIAL_SUFFIXES
from jobdaemon.config.settings import settings

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 1.0


def find_completed_download(directory: Path, suffix: str = EXPORT_SUFFIX) -> Optional[Path]:
    """Newest non-partial file with ``suffix`` in ``directory``, if any."""
    if not directory.is_dir():
        return None
    candidates = [
        path
        for path in directory.iterdir()
        if path.is_file()
        and path.name.lower().endswith(suffix)
        and not path.name.lower().endswith(PARTIAL_SUFFIXES)
        and path.stat().st_size > 0
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda path: path.stat().st_mtime)


def clear_downloads(directory: Path, suffix: str = EXPORT_SUFFIX) -> None:
    """Remove leftovers of earlier runs so a stale export is never parsed."""
    if not directory.is_dir():
        return
    for path in directory.iterdir():
        name = path.name.lower()
        if path.is_file() and (name.endswith(suffix) or name.endswith(PARTIAL_SUFFIXES)):
            path.unlink(missing_ok=True)


async def wait_for_download(
    directory: Path,
    trigger: Callable[[], Awaitable[None]],
    attempts: int = settings.DOWNLOAD_ATTEMPTS,
    poll_seconds: float = settings.DOWNLOAD_POLL_SECONDS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    poll_interval: float = POLL_INTERVAL_SECONDS,
) -> Optional[Path]:
    """
    Fire ``trigger`` and poll ``directory`` for up to ``poll_seconds``; repeat
    for ``attempts`` attempts. Returns the completed file, or None.
    """
    directory.mkdir(parents=True, exist_ok=True)

    for attempt in range(1, attempts + 1):
        logger.info(f"Triggering export download (attempt {attempt}/{attempts})")
        try:
            await trigger()
        except Exception as e:
            logger.warning(f"Export trigger failed on attempt {attempt}: {e}")

        waited = 0.0
        while waited < poll_seconds:
            found = find_completed_download(directory)
            if found:
                logger.info(f"Export downloaded: {found.name}")
                return found
            await sleep(poll_interval)
            waited += poll_interval

        found = find_completed_download(directory)
        if found:
            logger.info(f"Export downloaded: {found.name}")
            return found
        logger.warning(f"No completed download after {poll_seconds:.0f}s (attempt {attempt})")

    return None
