"""
==============================================================================
Snapshot Schemas Module
==============================================================================

Read-only models published to the display sink after every recompute.

Status Values:
-------------
- perfect:    the only code seen, and seen often enough
- single:     the only code inside the statistical cluster
- cluster:    one of several codes inside the cluster
- garbage-<k>: outside the cluster, k stddevs below the leading count
- waiting:    not enough signal yet
- invalid:    rejected observation (invalid checksum or high error score)

==============================================================================
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EntryStatus(str, Enum):
    """Classification status of a distinct code."""
    PERFECT = "perfect"
    SINGLE = "single"
    CLUSTER = "cluster"
    WAITING = "waiting"
    INVALID = "invalid"

    @staticmethod
    def garbage(tier: int) -> str:
        """Status label for a code outside the cluster."""
        return f"garbage-{tier}"


def rank_key(code: str, count: int):
    """Sort key: count descending, then code ascending."""
    return (-count, code)


class ClassifiedEntry(BaseModel):
    """A distinct code with its count and display status."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Normalized code")
    count: int = Field(..., ge=1, description="Observation count")
    status: str = Field(..., description="Classification status")


class SessionTiming(BaseModel):
    """
    Counters and timing for one scanning session.

    Attributes:
        accepted_total: Observations recorded in the accepted table
        rejected_total: Observations recorded in the rejected table
        started_at: Clock reading (ms) of the first observation, if any
        elapsed_ms: Milliseconds between the first and latest observation
    """

    model_config = ConfigDict(frozen=True)

    accepted_total: int = Field(default=0, ge=0)
    rejected_total: int = Field(default=0, ge=0)
    started_at: Optional[float] = Field(default=None)
    elapsed_ms: float = Field(default=0.0, ge=0.0)

    @property
    def observation_total(self) -> int:
        """All observations recorded in the session."""
        return self.accepted_total + self.rejected_total

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed session time in seconds."""
        return self.elapsed_ms / 1000


class ScanSnapshot(BaseModel):
    """
    Everything the display layer needs after one recompute.

    Attributes:
        session_id: Session the snapshot belongs to (increases on restart)
        ranked_entries: Accepted codes, ranked and classified
        rejected_entries: Rejected code -> count
        timing: Session counters and timing
        should_continue_scanning: False once the classification converged
        scanning: Whether the session is still accepting observations
    """

    model_config = ConfigDict(frozen=True)

    session_id: int = Field(..., ge=0)
    ranked_entries: List[ClassifiedEntry] = Field(default_factory=list)
    rejected_entries: Dict[str, int] = Field(default_factory=dict)
    timing: SessionTiming = Field(default_factory=SessionTiming)
    should_continue_scanning: bool = Field(default=True)
    scanning: bool = Field(default=True)

    @property
    def invalid_entries(self) -> List[ClassifiedEntry]:
        """Rejected codes as ranked entries with the ``invalid`` status."""
        return [
            ClassifiedEntry(code=code, count=count, status=EntryStatus.INVALID.value)
            for code, count in sorted(
                self.rejected_entries.items(),
                key=lambda item: rank_key(*item)
            )
        ]

    @property
    def best_code(self) -> Optional[str]:
        """The converged code, or None while the scan is undecided."""
        if self.should_continue_scanning or not self.ranked_entries:
            return None
        return self.ranked_entries[0].code
