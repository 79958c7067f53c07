"""Analytics query execution: submit a wallet job and poll to completion.

State machine:

    PENDING --provider completed--> COMPLETED  (rows returned)
    PENDING --provider failed-----> FAILED     (UpstreamStatusError)
    PENDING --attempt cap reached--> TIMED_OUT (QueryTimeoutError)

The attempt cap bounds the only open-ended wait in the system. There is no
retry beyond the poll cadence: a transport failure while submitting or
polling ends the call.
"""

import asyncio
from typing import Protocol

import structlog
from pydantic import ValidationError as PydanticValidationError

from wallet_analyzer.core.exceptions import (
    ExternalServiceError,
    QueryTimeoutError,
    UpstreamStatusError,
    UpstreamSubmissionError,
)
from wallet_analyzer.core.wallet.validator import normalize_wallet_address, shorten
from wallet_analyzer.data.models.query import JobStatus, QueryJob, QueryState
from wallet_analyzer.data.models.transaction import TransactionRecord

log = structlog.get_logger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_MAX_POLL_ATTEMPTS = 30


class AnalyticsProvider(Protocol):
    """Capability of an asynchronous analytics backend."""

    async def submit(self, wallet_address: str) -> str:
        """Start a wallet query and return its job id."""
        ...

    async def status(self, job_id: str) -> JobStatus:
        """Report the current state of a job."""
        ...


class QueryExecutionClient:
    """Runs one analytics job per call and returns the wallet's transactions.

    Each execute() call owns its QueryJob, so concurrent calls share no
    mutable state.

    Example:
        executor = QueryExecutionClient(DuneClient(api_key, query_id))
        transactions = await executor.execute("0xd8da6bf2...")
    """

    def __init__(
        self,
        provider: AnalyticsProvider,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        self.provider = provider
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts

    async def execute(self, wallet_address: str) -> list[TransactionRecord]:
        """Fetch all transactions of a wallet, newest first.

        Args:
            wallet_address: 0x-prefixed 40-hex address.

        Returns:
            Transaction records (empty list if the wallet has none).

        Raises:
            InvalidAddressError: If the address is malformed (no network call made).
            UpstreamSubmissionError: If the job cannot be submitted.
            UpstreamStatusError: If polling fails, the job fails, or rows are malformed.
            QueryTimeoutError: If the job is still pending after max_attempts polls.
        """
        address = normalize_wallet_address(wallet_address)
        job = await self._submit(address)
        return await self._poll(job)

    async def _submit(self, wallet_address: str) -> QueryJob:
        try:
            job_id = await self.provider.submit(wallet_address)
        except ExternalServiceError as e:
            log.error("query_submission_failed", wallet_address=shorten(wallet_address), error=str(e))
            raise UpstreamSubmissionError(f"Failed to execute analytics query: {e}") from e

        log.info("query_submitted", job_id=job_id, wallet_address=shorten(wallet_address))
        return QueryJob(job_id=job_id)

    async def _poll(self, job: QueryJob) -> list[TransactionRecord]:
        while job.attempts < self.max_attempts:
            job.attempts += 1
            status = await self._fetch_status(job)

            match status.state:
                case QueryState.COMPLETED:
                    job.state = QueryState.COMPLETED
                    records = self._parse_rows(job, status)
                    log.info(
                        "query_completed",
                        job_id=job.job_id,
                        attempts=job.attempts,
                        row_count=len(records),
                    )
                    return records

                case QueryState.FAILED:
                    job.state = QueryState.FAILED
                    log.warning("query_failed", job_id=job.job_id, error=status.error)
                    raise UpstreamStatusError(
                        f"Query failed: {status.error or 'Unknown error'}", job_id=job.job_id
                    )

                case QueryState.PENDING:
                    log.debug(
                        "query_pending",
                        job_id=job.job_id,
                        attempt=job.attempts,
                        max_attempts=self.max_attempts,
                        provider_state=status.raw_state,
                    )
                    if job.attempts < self.max_attempts:
                        await asyncio.sleep(self.poll_interval)

                case QueryState.TIMED_OUT:
                    # Providers never report this state; it is assigned below
                    raise UpstreamStatusError(
                        f"Unexpected provider state: {status.raw_state}", job_id=job.job_id
                    )

        job.state = QueryState.TIMED_OUT
        log.error("query_timed_out", job_id=job.job_id, attempts=job.attempts)
        raise QueryTimeoutError(
            f"Query execution timeout after {job.attempts} status checks", job_id=job.job_id
        )

    async def _fetch_status(self, job: QueryJob) -> JobStatus:
        try:
            return await self.provider.status(job.job_id)
        except ExternalServiceError as e:
            log.error("query_status_failed", job_id=job.job_id, attempt=job.attempts, error=str(e))
            raise UpstreamStatusError(f"Failed to get query results: {e}", job_id=job.job_id) from e

    @staticmethod
    def _parse_rows(job: QueryJob, status: JobStatus) -> list[TransactionRecord]:
        try:
            return [TransactionRecord.model_validate(row) for row in status.rows]
        except PydanticValidationError as e:
            log.error("query_rows_malformed", job_id=job.job_id, error_count=e.error_count())
            raise UpstreamStatusError(
                f"Malformed transaction rows in query result: {e.error_count()} error(s)",
                job_id=job.job_id,
            ) from e
