"""HTTP transport for chain RPC endpoints with outcome classification."""

import json
import logging
import math
from typing import Any

import httpx

from multichain_assets.core.errors import (
    RateLimitedError,
    RPCResponseError,
    UpstreamError,
    UpstreamHTTPError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class RPCClient:
    """
    Issues single outbound calls to chain endpoints.

    Every call ends in exactly one of: a decoded JSON body, a
    ``RateLimitedError`` (HTTP 429), an ``UpstreamHTTPError`` (other non-2xx),
    an ``RPCResponseError`` (JSON-RPC ``error`` in a 200 response), or a
    timeout/transport error. Nothing is retried here.

    Parameters
    ----------
    client : httpx.AsyncClient
        Shared HTTP client; its lifetime is owned by the caller
    timeout : float
        Timeout in seconds applied to each call
    default_retry_after : float
        Retry delay reported on 429 when the upstream sends no Retry-After

    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float = 10.0,
        default_retry_after: float = 2.0,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.default_retry_after = default_retry_after

    async def jsonrpc_request(self, url: str, method: str, params: list[Any], label: str) -> dict[str, Any]:
        """
        Send a JSON-RPC 2.0 request.

        Parameters
        ----------
        url : str
            Endpoint URL
        method : str
            RPC method name (e.g., 'suix_getOwnedObjects')
        params : list[Any]
            Method parameters
        label : str
            Chain name used in error messages

        Returns
        -------
        dict[str, Any]
            Full response envelope (``jsonrpc``, ``id``, ``result``)

        Raises
        ------
        RPCResponseError
            If the envelope carries an ``error`` object

        """
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        logger.debug("%s JSON-RPC %s -> %s", label, method, url)
        body = await self._send("POST", url, label, json=payload)

        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            detail = error.get("message") if isinstance(error, dict) else None
            msg = f"{label} RPC error: {detail or json.dumps(error)}"
            raise RPCResponseError(msg, rpc_error=error)

        if not isinstance(body, dict):
            msg = f"{label} RPC returned a non-object response"
            raise UpstreamError(msg)

        return body

    async def get_json(self, url: str, label: str) -> Any:
        """
        Send a REST GET request.

        Parameters
        ----------
        url : str
            Full URL
        label : str
            Chain name used in error messages

        Returns
        -------
        Any
            Decoded JSON body

        """
        logger.debug("%s GET %s", label, url)
        return await self._send("GET", url, label)

    async def _send(self, method: str, url: str, label: str, **kwargs: Any) -> Any:
        try:
            response = await self.client.request(
                method,
                url,
                headers=JSON_HEADERS,
                timeout=self.timeout,
                **kwargs,
            )
        except httpx.TimeoutException as e:
            msg = f"{label} RPC request timed out after {self.timeout:g}s"
            raise UpstreamTimeoutError(msg) from e
        except httpx.TransportError as e:
            msg = f"{label} RPC request failed: {e}"
            raise UpstreamTransportError(msg) from e
        except httpx.HTTPError as e:
            msg = f"{label} RPC request failed: {e}"
            raise UpstreamError(msg) from e

        self._raise_for_status(response, label)

        try:
            return response.json()
        except ValueError as e:
            msg = f"{label} RPC returned invalid JSON"
            raise UpstreamError(msg) from e

    def _raise_for_status(self, response: httpx.Response, label: str) -> None:
        if response.status_code == 429:
            retry_after = self._parse_retry_after(response.headers.get("Retry-After"))
            msg = "Rate limit exceeded"
            logger.warning("%s RPC rate limited; retry after %.1fs", label, retry_after)
            raise RateLimitedError(msg, retry_after=retry_after)

        if not response.is_success:
            msg = f"{label} RPC error: {response.status_code}"
            raise UpstreamHTTPError(msg, status=response.status_code)

    def _parse_retry_after(self, value: str | None) -> float:
        """Seconds from a Retry-After header; HTTP-date and garbage fall back to the default."""
        if value:
            try:
                seconds = float(value)
            except ValueError:
                return self.default_retry_after
            if seconds >= 0 and math.isfinite(seconds):
                return seconds
        return self.default_retry_after
