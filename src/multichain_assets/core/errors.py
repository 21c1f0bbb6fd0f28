"""Error taxonomy for the asset gateway."""

from typing import Any


class AssetGatewayError(Exception):
    """
    Base class for errors surfaced to gateway callers.

    Attributes
    ----------
    status_code : int
        HTTP status the error translates to
    retryable : bool
        Whether the caller may retry the same request

    """

    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(AssetGatewayError):
    """Missing or malformed address, or an unsupported chain parameter."""

    status_code = 400


class ChainNotFoundError(InvalidInputError):
    """Chain identifier is not present in the registry."""

    def __init__(self, chain: str) -> None:
        super().__init__(f"Unsupported chain: {chain}")
        self.chain = chain


class RateLimitedError(AssetGatewayError):
    """
    Upstream signaled throttling (HTTP 429).

    Parameters
    ----------
    message : str
        Caller-facing message
    retry_after : float
        Suggested delay in seconds before retrying

    """

    status_code = 429
    retryable = True

    def __init__(self, message: str, retry_after: float) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class UpstreamError(AssetGatewayError):
    """Transport failure or RPC-level error from the chain endpoint."""

    status_code = 500


class UpstreamHTTPError(UpstreamError):
    """Upstream answered with a non-2xx status other than 429."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


class RPCResponseError(UpstreamError):
    """HTTP 200 response whose JSON-RPC envelope carries an ``error`` object."""

    def __init__(self, message: str, rpc_error: Any) -> None:
        super().__init__(message)
        self.rpc_error = rpc_error


class UpstreamTimeoutError(UpstreamError):
    """Outbound call exceeded the configured timeout."""

    retryable = True


class UpstreamTransportError(UpstreamError):
    """Connection-level failure before a response was received."""

    retryable = True
