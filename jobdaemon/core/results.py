"""
Result values for best-effort calls.
Adapters and notifiers report failures through these instead of raising,
so callers branch on data.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from jobdaemon.core.models import JobListing


@dataclass
class FetchResult:
    source: str
    listings: List[JobListing] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, source: str, reason: str) -> "FetchResult":
        return cls(source=source, listings=[], error=reason)


@dataclass(frozen=True)
class DispatchResult:
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> "DispatchResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "DispatchResult":
        return cls(ok=False, reason=reason)


@dataclass
class RunReport:
    """Outcome of one orchestrator run (or of a skipped tick)."""

    started_at: datetime
    finished_at: Optional[datetime] = None
    discovered: int = 0
    new_ids: List[str] = field(default_factory=list)
    dispatch_failures: List[str] = field(default_factory=list)
    error: Optional[str] = None
    skipped: bool = False

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "discovered": self.discovered,
            "new": len(self.new_ids),
            "dispatch_failures": len(self.dispatch_failures),
            "error": self.error,
            "skipped": self.skipped,
        }
