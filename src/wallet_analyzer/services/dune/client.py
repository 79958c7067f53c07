"""Dune Analytics API client for wallet transaction queries.

Implements the analytics provider capability: submit a saved query for a
wallet, then report the status (and rows) of the resulting execution.

API Documentation: https://docs.dune.com/api-reference/executions
"""

import structlog
from pydantic import ValidationError as PydanticValidationError

from wallet_analyzer.core.exceptions import ExternalServiceError
from wallet_analyzer.core.wallet.validator import shorten
from wallet_analyzer.data.models.query import JobStatus, QueryState
from wallet_analyzer.services.base import BaseAPIClient
from wallet_analyzer.services.dune.models import (
    DuneQueryState,
    ExecutionResponse,
    ExecutionResultsResponse,
)

log = structlog.get_logger(__name__)

SERVICE_NAME = "dune"


class DuneClient(BaseAPIClient):
    """Async client for the Dune execution API.

    Attributes:
        query_id: Saved query taking a ``wallet_address`` parameter.

    Example:
        client = DuneClient(api_key="...", query_id=5267326)
        job_id = await client.submit("0xd8da6bf26964af9d7eed9e03e53415d37aa96045")
        status = await client.status(job_id)
        await client.close()
    """

    DEFAULT_BASE_URL = "https://api.dune.com/api/v1"

    def __init__(
        self,
        api_key: str,
        query_id: int,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize DuneClient.

        Args:
            api_key: Dune API key sent as ``X-Dune-API-Key``.
            query_id: Saved query to execute.
            base_url: Dune API base URL.
            timeout: Request timeout in seconds.
        """
        if not api_key:
            msg = "Dune API key is required"
            raise ValueError(msg)

        self.query_id = query_id
        super().__init__(
            base_url=base_url,
            service=SERVICE_NAME,
            timeout=timeout,
            headers={"X-Dune-API-Key": api_key, "Content-Type": "application/json"},
        )
        log.info("dune_client_initialized", base_url=base_url, query_id=query_id)

    async def submit(self, wallet_address: str) -> str:
        """Start an execution of the wallet query.

        Returns:
            The provider execution id.

        Raises:
            ExternalServiceError: If the request fails or no execution id is returned.
        """
        log.info("dune_query_submitting", wallet_address=shorten(wallet_address), query_id=self.query_id)

        response = await self.post(
            f"/query/{self.query_id}/execute",
            json={"query_parameters": {"wallet_address": wallet_address}},
        )
        payload = await self._json(response)

        try:
            execution = ExecutionResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise ExternalServiceError(
                service=SERVICE_NAME,
                message="No execution ID returned from Dune API",
                status_code=response.status_code,
            ) from e

        log.info("dune_query_submitted", execution_id=execution.execution_id)
        return execution.execution_id

    async def status(self, job_id: str) -> JobStatus:
        """Fetch the execution state, with rows once completed.

        Raises:
            ExternalServiceError: If the request fails or the payload is malformed.
        """
        response = await self.get(f"/execution/{job_id}/results")
        payload = await self._json(response)

        try:
            results = ExecutionResultsResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise ExternalServiceError(
                service=SERVICE_NAME,
                message=f"Malformed execution results for {job_id}",
                status_code=response.status_code,
            ) from e

        log.debug("dune_execution_state", execution_id=job_id, state=results.state)

        if results.state in DuneQueryState.COMPLETED_STATES:
            rows = results.result.rows if results.result else []
            return JobStatus(state=QueryState.COMPLETED, rows=rows, raw_state=results.state)

        if results.state in DuneQueryState.TERMINAL_FAILURES:
            return JobStatus(
                state=QueryState.FAILED,
                error=results.error_message,
                raw_state=results.state,
            )

        return JobStatus(state=QueryState.PENDING, raw_state=results.state)
