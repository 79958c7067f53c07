"""Wallet analyzer exception hierarchy.

This module defines the base exception class and specialized exceptions
for the error categories surfaced by the analytics tools.
"""


class WalletAnalyzerError(Exception):
    """Base exception for all wallet analyzer errors.

    Every error raised by the core, the provider adapters and the tool
    layer inherits from this class so the tool boundary can convert it
    into a single user-visible message.
    """

    pass


class ConfigurationError(WalletAnalyzerError):
    """Raised when configuration is invalid or missing.

    Example:
        raise ConfigurationError("Missing required env var: DUNE_API_KEY")
    """

    pass


class ValidationError(WalletAnalyzerError):
    """Raised when tool input fails validation.

    Validation errors are always raised before any network call is made.
    """

    pass


class InvalidAddressError(ValidationError):
    """Raised when a wallet address is not ``0x`` followed by 40 hex characters.

    Attributes:
        address: The rejected address (if available).
    """

    def __init__(self, message: str = "Invalid Ethereum address format", address: str | None = None) -> None:
        super().__init__(message)
        self.address = address


class InvalidAmountError(ValidationError):
    """Raised when a swap amount is not a positive decimal number."""

    pass


class UnknownTokenError(ValidationError):
    """Raised when a token symbol or address cannot be resolved.

    Attributes:
        token: The token string that failed to resolve.
        supported: Symbols the resolver knows about.
    """

    def __init__(self, token: str, supported: list[str]) -> None:
        self.token = token
        self.supported = supported
        super().__init__(
            f"Unknown token: {token}. Please use token address or common symbols: "
            f"{', '.join(supported)}"
        )


class UnknownToolError(ValidationError):
    """Raised when the dispatcher receives a tool name it does not expose."""

    pass


class EmptyTransactionSetError(WalletAnalyzerError):
    """Raised when statistics are requested for an empty transaction set.

    Callers are expected to check for an empty set and report
    "no transactions" before computing statistics.
    """

    def __init__(self, message: str = "Cannot compute statistics for an empty transaction set") -> None:
        super().__init__(message)


class ExternalServiceError(WalletAnalyzerError):
    """Raised when an external HTTP service call fails.

    Attributes:
        service: Name of the external service that failed.
        status_code: HTTP status code if available, None otherwise.

    Example:
        raise ExternalServiceError(service="dune", message="Rate limited", status_code=429)
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class QuoteError(ExternalServiceError):
    """Raised when the swap-quote provider fails or returns a malformed quote."""

    pass


class QueryExecutionError(WalletAnalyzerError):
    """Base class for failures of the analytics query job.

    Attributes:
        job_id: Provider-issued job identifier, when one was obtained.
    """

    def __init__(self, message: str, job_id: str | None = None) -> None:
        super().__init__(message)
        self.job_id = job_id


class UpstreamSubmissionError(QueryExecutionError):
    """Raised when submitting the analytics job fails."""

    pass


class UpstreamStatusError(QueryExecutionError):
    """Raised when polling fails or the provider reports a failed job."""

    pass


class QueryTimeoutError(QueryExecutionError):
    """Raised when the job is still pending after the maximum number of polls."""

    pass
