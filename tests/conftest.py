"""Pytest configuration for multichain-assets tests."""

import pytest

# Import all adapters to trigger auto-registration
from multichain_assets import adapters  # noqa: F401
from multichain_assets.core.registry import AdapterRegistry
from multichain_assets.data.loader import Settings, load_settings
from multichain_assets.rpc.retry import RetryConfig


@pytest.fixture
def settings() -> Settings:
    """Settings from the shipped chains.yaml, ignoring the process environment."""
    return load_settings(environ={})


@pytest.fixture
def retry_settings() -> Settings:
    """Settings with gateway retries enabled and no backoff delay."""
    base = load_settings(environ={})
    return Settings(
        registry=base.registry,
        request_timeout=base.request_timeout,
        default_retry_after=0.0,
        retry=RetryConfig(max_retries=2, base_delay=0.0, max_delay=0.0),
    )


@pytest.fixture
def restore_adapters():
    """Snapshot the adapter registry and restore it after the test."""
    saved = dict(AdapterRegistry._adapters)
    yield
    AdapterRegistry._adapters.clear()
    AdapterRegistry._adapters.update(saved)
