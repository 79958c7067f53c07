"""Pydantic models for Dune Analytics execution API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DuneQueryState:
    """Dune query execution states."""

    PENDING = "QUERY_STATE_PENDING"
    EXECUTING = "QUERY_STATE_EXECUTING"
    COMPLETED = "QUERY_STATE_COMPLETED"
    COMPLETED_PARTIAL = "QUERY_STATE_COMPLETED_PARTIAL"
    FAILED = "QUERY_STATE_FAILED"
    CANCELLED = "QUERY_STATE_CANCELLED"
    EXPIRED = "QUERY_STATE_EXPIRED"

    # Partial results are still returned as a completed job
    COMPLETED_STATES = frozenset({COMPLETED, COMPLETED_PARTIAL})
    TERMINAL_FAILURES = frozenset({FAILED, CANCELLED, EXPIRED})


class ExecutionResponse(BaseModel):
    """Response of ``POST /query/{query_id}/execute``."""

    model_config = ConfigDict(extra="ignore")

    execution_id: str
    state: str | None = None


class ExecutionResult(BaseModel):
    """Result block of a completed execution."""

    model_config = ConfigDict(extra="ignore")

    rows: list[dict[str, Any]] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class ExecutionResultsResponse(BaseModel):
    """Response of ``GET /execution/{execution_id}/results``."""

    model_config = ConfigDict(extra="ignore")

    execution_id: str | None = None
    state: str
    result: ExecutionResult | None = None
    error: str | dict[str, Any] | None = None

    @property
    def error_message(self) -> str:
        """Provider error text, whether reported as a string or an object."""
        if isinstance(self.error, dict):
            return str(self.error.get("message") or self.error.get("type") or "Unknown error")
        return self.error or "Unknown error"
