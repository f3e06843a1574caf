from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional

from jobdaemon.core.links import derive_listing_id, normalize_link

UNKNOWN = "Unknown"


class Source(str, Enum):
    """One tag per adapter variant."""

    INTERNLIST = "InternList"
    INTERNLIST_EXPORT = "InternList CSV"
    GITHUB = "GitHub"


@dataclass(frozen=True)
class JobListing:
    """
    Canonical listing model shared by adapters, the store and the notifiers.
    Fields are read-only facts about a posting as first observed.
    """

    id: str
    title: str
    link: str
    company: str = UNKNOWN
    location: str = UNKNOWN
    date: str = UNKNOWN
    salary: str = UNKNOWN
    work_model: str = UNKNOWN
    source: Optional[Source] = None

    @classmethod
    def create(
        cls,
        title: str,
        link: Optional[str],
        company: Optional[str] = None,
        location: Optional[str] = None,
        date: Optional[str] = None,
        salary: Optional[str] = None,
        work_model: Optional[str] = None,
        source: Optional[Source] = None,
    ) -> "JobListing":
        """
        Build a listing from raw scraped values.
        Blank optional values collapse to UNKNOWN, the link is normalized and
        the id is derived from it.
        """
        canonical = normalize_link(link) if link else ""
        title = _clean(title, "")
        company = _clean(company)
        return cls(
            id=derive_listing_id(canonical, company, title),
            title=title,
            link=canonical,
            company=company,
            location=_clean(location),
            date=_clean(date),
            salary=_clean(salary),
            work_model=_clean(work_model),
            source=source,
        )

    @property
    def is_valid(self) -> bool:
        return bool(self.id and self.title and self.link)

    def to_record(self) -> dict:
        """Flat dict of descriptive fields, as persisted by the seen-store."""
        record = asdict(self)
        record["source"] = self.source.value if self.source else None
        return record


def _clean(value: Optional[str], default: str = UNKNOWN) -> str:
    if value is None:
        return default
    value = " ".join(str(value).split())
    return value or default
