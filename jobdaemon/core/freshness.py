"""
Freshness policies deciding whether a listing counts as "posted today".

Two policies exist and they are not interchangeable; every adapter declares
the one it uses:

- EXACT_DATE: the listing date, normalized to ISO ``YYYY-MM-DD``, must equal today.
- RELATIVE_TOKEN: the listing carries a relative age marker expressed in
  hours/minutes (``3h``, ``45 mins ago``), a ``today``/``now`` token, or a
  zero-day age (``0d``).
"""

import logging
import re
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from jobdaemon.config.settings import settings

logger = logging.getLogger(__name__)


class FreshnessPolicy(str, Enum):
    EXACT_DATE = "exact-date"
    RELATIVE_TOKEN = "relative-token"


HOUR_MINUTE_PATTERN = re.compile(
    r"\b\d+\s*(?:h|hr|hrs|hour|hours|m|min|mins|minute|minutes)\b", re.IGNORECASE
)
TODAY_TOKEN_PATTERN = re.compile(r"\b(?:today|now)\b", re.IGNORECASE)
ZERO_DAY_PATTERN = re.compile(r"^\s*0\s*d(?:ays?)?\b", re.IGNORECASE)

SLASH_DATE_FORMATS = ("%m/%d/%y", "%m/%d/%Y")
ISO_DATE_FORMAT = "%Y-%m-%d"


def today(tz_name: Optional[str] = None) -> date:
    """Current calendar day in the configured timezone."""
    return datetime.now(ZoneInfo(tz_name or settings.TIMEZONE)).date()


def parse_date(raw: Optional[str]) -> Optional[str]:
    """ISO form of ``MM/DD/YY``, ``MM/DD/YYYY`` or ``YYYY-MM-DD``; None otherwise."""
    value = (raw or "").strip()
    for fmt in (ISO_DATE_FORMAT,) + SLASH_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date().isoformat()
        except ValueError:
            continue
    return None


def normalize_date(raw: Optional[str], current: date) -> str:
    """
    Normalize to ISO; unrecognized values default to ``current``.
    Each fallback is logged at debug level; callers report a per-fetch count.
    """
    parsed = parse_date(raw)
    if parsed is None:
        value = (raw or "").strip()
        logger.debug(f"Unrecognized date format '{value}', assuming {current.isoformat()}")
        return current.isoformat()
    return parsed


def is_fresh_exact(value: Optional[str], current: date) -> bool:
    return (value or "").strip() == current.isoformat()


def is_fresh_relative(marker: Optional[str]) -> bool:
    if not marker:
        return False
    return bool(
        HOUR_MINUTE_PATTERN.search(marker)
        or TODAY_TOKEN_PATTERN.search(marker)
        or ZERO_DAY_PATTERN.search(marker)
    )


def is_fresh(value: Optional[str], policy: FreshnessPolicy, current: date) -> bool:
    if policy is FreshnessPolicy.EXACT_DATE:
        return is_fresh_exact(value, current)
    return is_fresh_relative(value)


def filter_fresh(
    listings: Iterable, policy: FreshnessPolicy, current: date, source_name: str = ""
) -> List:
    """Keep fresh listings; stale ones are dropped without per-listing logs."""
    listings = list(listings)
    fresh = [listing for listing in listings if is_fresh(listing.date, policy, current)]
    logger.debug(
        f"[{source_name}] freshness ({policy.value}): kept {len(fresh)}/{len(listings)}"
    )
    return fresh
