"""Tests for bounded retry."""

import pytest

from multichain_assets.core.errors import (
    InvalidInputError,
    RateLimitedError,
    UpstreamHTTPError,
    UpstreamTimeoutError,
)
from multichain_assets.rpc.retry import RetryConfig, call_with_retry, is_retryable

NO_DELAY = RetryConfig(max_retries=2, base_delay=0.0, max_delay=0.0)


class Flaky:
    """Coroutine callable failing a fixed number of times."""

    def __init__(self, failures):
        self.failures = list(failures)
        self.calls = 0

    async def __call__(self, value):
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return value


def test_get_delay_backoff():
    """Test exponential backoff capped at max_delay."""
    config = RetryConfig(base_delay=1.0, max_delay=5.0, exponential_base=2.0)

    assert config.get_delay(0) == 1.0
    assert config.get_delay(1) == 2.0
    assert config.get_delay(2) == 4.0
    assert config.get_delay(5) == 5.0


def test_get_delay_honors_retry_after():
    """Test that an upstream retry hint is a floor on the delay."""
    config = RetryConfig(base_delay=1.0, max_delay=30.0)

    assert config.get_delay(0, RateLimitedError("Rate limit exceeded", retry_after=7.0)) == 7.0
    assert config.get_delay(4, RateLimitedError("Rate limit exceeded", retry_after=7.0)) == 16.0
    assert config.get_delay(0, RateLimitedError("Rate limit exceeded", retry_after=90.0)) == 30.0


def test_is_retryable():
    """Test which errors are retried."""
    assert is_retryable(RateLimitedError("Rate limit exceeded", retry_after=1.0))
    assert is_retryable(UpstreamTimeoutError("timed out"))
    assert not is_retryable(UpstreamHTTPError("Sui RPC error: 500", status=500))
    assert not is_retryable(InvalidInputError("Address is required"))
    assert not is_retryable(ValueError("nope"))


@pytest.mark.asyncio
async def test_retries_until_success():
    """Test that retryable errors are retried."""
    func = Flaky([UpstreamTimeoutError("t"), RateLimitedError("Rate limit exceeded", retry_after=0.0)])

    assert await call_with_retry(func, "ok", config=NO_DELAY) == "ok"
    assert func.calls == 3


@pytest.mark.asyncio
async def test_gives_up_after_max_retries():
    """Test that the last error escapes once retries are exhausted."""
    func = Flaky([UpstreamTimeoutError("t1"), UpstreamTimeoutError("t2"), UpstreamTimeoutError("t3")])

    with pytest.raises(UpstreamTimeoutError, match="t3"):
        await call_with_retry(func, "ok", config=NO_DELAY)
    assert func.calls == 3


@pytest.mark.asyncio
async def test_non_retryable_raises_immediately():
    """Test that permanent errors are not retried."""
    func = Flaky([UpstreamHTTPError("Sui RPC error: 502", status=502)])

    with pytest.raises(UpstreamHTTPError):
        await call_with_retry(func, "ok", config=NO_DELAY)
    assert func.calls == 1


@pytest.mark.asyncio
async def test_zero_retries_is_single_attempt():
    """Test the default gateway policy."""
    func = Flaky([RateLimitedError("Rate limit exceeded", retry_after=0.0)])

    with pytest.raises(RateLimitedError):
        await call_with_retry(func, "ok", config=RetryConfig(max_retries=0))
    assert func.calls == 1


def test_repr():
    """Test RetryConfig representation."""
    assert repr(RetryConfig(max_retries=0)).startswith("RetryConfig(max_retries=0,")
