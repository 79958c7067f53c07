"""Analytics query job models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class QueryState(Enum):
    """Lifecycle states of an analytics query job."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class JobStatus:
    """Snapshot of a job as reported by the analytics provider.

    Attributes:
        state: Provider state mapped to QueryState (never TIMED_OUT).
        rows: Result rows when the job completed.
        error: Provider error message when the job failed.
        raw_state: Provider-specific state string, for logging.
    """

    state: QueryState
    rows: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
    raw_state: str | None = None


@dataclass
class QueryJob:
    """One submitted analytics job, owned by a single poll loop.

    Attributes:
        job_id: Provider-issued job identifier.
        state: Current lifecycle state.
        attempts: Status checks performed so far.
    """

    job_id: str
    state: QueryState = QueryState.PENDING
    attempts: int = 0
