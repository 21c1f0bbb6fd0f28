"""Bounded retry with exponential backoff for upstream calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from multichain_assets.core.errors import AssetGatewayError, RateLimitedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryConfig:
    """
    Configuration for retry behavior.

    Parameters
    ----------
    max_retries : int
        Maximum number of retry attempts (0 disables retrying)
    base_delay : float
        Initial delay in seconds before first retry
    max_delay : float
        Maximum delay between retries
    exponential_base : float
        Base for exponential backoff calculation

    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2.0,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    def get_delay(self, attempt: int, error: Exception | None = None) -> float:
        """
        Calculate delay for a given retry attempt using exponential backoff.

        A rate-limit error's ``retry_after`` is used as a floor.

        Parameters
        ----------
        attempt : int
            Current attempt number (0-indexed)
        error : Exception | None
            Error that triggered the retry

        Returns
        -------
        float
            Delay in seconds

        """
        delay = self.base_delay * (self.exponential_base**attempt)
        if isinstance(error, RateLimitedError):
            delay = max(delay, error.retry_after)
        return min(delay, self.max_delay)

    def __repr__(self) -> str:
        return (
            f"RetryConfig(max_retries={self.max_retries}, base_delay={self.base_delay}, "
            f"max_delay={self.max_delay}, exponential_base={self.exponential_base})"
        )


def is_retryable(error: BaseException) -> bool:
    """Only gateway errors flagged retryable (429, timeouts, transport) are retried."""
    return isinstance(error, AssetGatewayError) and error.retryable


async def call_with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    config: RetryConfig,
    **kwargs: Any,
) -> T:
    """
    Await ``func`` and retry retryable gateway errors.

    Parameters
    ----------
    func : Callable[..., Awaitable[T]]
        Coroutine function to call
    *args : Any
        Positional arguments for ``func``
    config : RetryConfig
        Retry configuration
    **kwargs : Any
        Keyword arguments for ``func``

    Returns
    -------
    T
        Result of the first successful call

    Raises
    ------
    AssetGatewayError
        The last error once retries are exhausted, or immediately when it is
        not retryable

    """
    for attempt in range(config.max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except AssetGatewayError as e:
            if not is_retryable(e) or attempt == config.max_retries:
                raise

            delay = config.get_delay(attempt, e)
            logger.debug(
                "Upstream call failed (attempt %d/%d): %s; retrying in %.1fs",
                attempt + 1,
                config.max_retries + 1,
                e,
                delay,
            )
            await asyncio.sleep(delay)

    msg = "unreachable: retry loop exited without result"
    raise AssertionError(msg)
