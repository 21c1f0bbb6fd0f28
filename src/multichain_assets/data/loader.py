"""Chain configuration loader and process settings."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from multichain_assets.core.chains import ChainRegistry
from multichain_assets.core.models import ChainConfig, KnownToken, NativeAsset, RPCStyle
from multichain_assets.rpc.retry import RetryConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRY_AFTER = 2.0

TIMEOUT_ENV = "MULTICHAIN_ASSETS_TIMEOUT"
RETRY_AFTER_ENV = "MULTICHAIN_ASSETS_RETRY_AFTER"
MAX_RETRIES_ENV = "MULTICHAIN_ASSETS_MAX_RETRIES"


def load_chains() -> dict[str, Any]:
    """
    Load the default chain definitions from chains.yaml.

    Returns
    -------
    dict[str, Any]
        Raw configuration with a top-level ``chains`` mapping

    """
    path = Path(__file__).parent / "chains.yaml"
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def get_chain_config(chain: str) -> dict[str, Any]:
    """
    Get the raw configuration for a specific chain.

    Parameters
    ----------
    chain : str
        Chain name (e.g., 'sui', 'aptos')

    Returns
    -------
    dict[str, Any]
        Raw chain entry from chains.yaml

    Raises
    ------
    KeyError
        If chain is not found in configuration

    """
    return load_chains()["chains"][chain]


def get_all_supported_chains() -> list[str]:
    """
    Get list of all chain names defined in chains.yaml.

    Returns
    -------
    list[str]
        List of chain names

    """
    return list(load_chains()["chains"].keys())


def get_rpc_endpoint(chain: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Resolve the RPC base URL for a chain.

    The variable named by the chain's ``rpc_env`` wins over the documented
    public default.

    Parameters
    ----------
    chain : str
        Chain name
    environ : Mapping[str, str] | None
        Environment to read (default: ``os.environ``)

    Returns
    -------
    str
        RPC base URL without a trailing slash

    """
    return _resolve_rpc_url(chain, get_chain_config(chain), os.environ if environ is None else environ)


def _resolve_rpc_url(chain: str, raw: dict[str, Any], environ: Mapping[str, str]) -> str:
    env_key = raw.get("rpc_env")
    override = environ.get(env_key, "").strip() if env_key else ""
    if override:
        logger.debug("Using %s for %s RPC endpoint", env_key, chain)
        return override.rstrip("/")
    return raw["rpc_url"].rstrip("/")


def build_chain_config(chain: str, raw: dict[str, Any], environ: Mapping[str, str]) -> ChainConfig:
    """
    Build a ``ChainConfig`` from a chains.yaml entry.

    Parameters
    ----------
    chain : str
        Chain name
    raw : dict[str, Any]
        Raw chain entry
    environ : Mapping[str, str]
        Environment used for RPC URL overrides

    Returns
    -------
    ChainConfig
        Validated, immutable chain configuration

    """
    known_tokens = {
        identity: KnownToken(**token) for identity, token in (raw.get("known_tokens") or {}).items()
    }
    return ChainConfig(
        chain_id=chain,
        name=raw["name"],
        rpc_url=_resolve_rpc_url(chain, raw, environ),
        rpc_style=RPCStyle(raw["rpc_style"]),
        address_pattern=raw["address_pattern"],
        native=NativeAsset(**raw["native"]),
        default_token_decimals=raw["default_token_decimals"],
        known_tokens=known_tokens,
        supports_nfts=raw.get("supports_nfts", False),
    )


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration, built once at startup.

    Attributes
    ----------
    registry : ChainRegistry
        Chain registry with environment overrides applied
    request_timeout : float
        Timeout in seconds for each outbound RPC call
    default_retry_after : float
        Retry delay reported on 429 when the upstream gives none
    retry : RetryConfig
        Gateway retry policy (``max_retries=0`` disables retries)

    """

    registry: ChainRegistry
    request_timeout: float = DEFAULT_TIMEOUT
    default_retry_after: float = DEFAULT_RETRY_AFTER
    retry: RetryConfig = field(default_factory=lambda: RetryConfig(max_retries=0))


def _env_number(environ: Mapping[str, str], key: str, default: float, cast: type = float) -> Any:
    value = environ.get(key, "").strip()
    if not value:
        return default
    try:
        number = cast(value)
    except ValueError as e:
        msg = f"{key} must be a number, got {value!r}"
        raise ValueError(msg) from e
    if number < 0:
        msg = f"{key} must not be negative, got {value!r}"
        raise ValueError(msg)
    return number


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build ``Settings`` from chains.yaml and the environment.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Environment to read (default: ``os.environ``)

    Returns
    -------
    Settings
        Immutable settings

    Raises
    ------
    ValueError
        If a numeric environment variable is malformed

    """
    environ = os.environ if environ is None else environ
    chains = {name: build_chain_config(name, raw, environ) for name, raw in load_chains()["chains"].items()}
    return Settings(
        registry=ChainRegistry(chains),
        request_timeout=_env_number(environ, TIMEOUT_ENV, DEFAULT_TIMEOUT),
        default_retry_after=_env_number(environ, RETRY_AFTER_ENV, DEFAULT_RETRY_AFTER),
        retry=RetryConfig(max_retries=_env_number(environ, MAX_RETRIES_ENV, 0, cast=int)),
    )
