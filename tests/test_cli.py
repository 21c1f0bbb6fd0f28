"""Tests for the command-line interface."""

import json

from typer.testing import CliRunner

from multichain_assets.cli import main as cli
from multichain_assets.core.errors import UpstreamError
from multichain_assets.core.models import AggregationResult, NftItem, TokenBalance

from fakes import SUI_ADDRESS, SUI_NATIVE

runner = CliRunner()

RESULT = AggregationResult(
    balances=[
        TokenBalance(
            identity=SUI_NATIVE,
            symbol="SUI",
            name="Sui",
            decimals=9,
            raw_balance=2**70,
            chain="sui",
            verified=True,
        )
    ],
    nfts=[NftItem(id="0xnft", type="0x5::art::Art")],
)


def _fake_fetch(result=RESULT, error=None):
    calls = []

    async def fetch(settings, address, chain, include_nfts):
        calls.append((address, chain, include_nfts))
        if error is not None:
            raise error
        return result

    return fetch, calls


def test_list_chains():
    """Test the chain listing."""
    result = runner.invoke(cli.app, ["list-chains"])

    assert result.exit_code == 0
    assert "sui" in result.stdout
    assert "solana" in result.stdout


def test_assets_json(monkeypatch):
    """Test JSON output in the HTTP response format."""
    fetch, calls = _fake_fetch()
    monkeypatch.setattr(cli, "_fetch_assets", fetch)

    result = runner.invoke(cli.app, ["assets", SUI_ADDRESS, "--chain", "sui", "--nfts", "--format", "json"])

    assert result.exit_code == 0
    assert calls == [(SUI_ADDRESS, "sui", True)]
    body = json.loads(result.stdout)
    assert body["balances"][0]["balance"] == str(2**70)
    assert body["nfts"][0]["id"] == "0xnft"


def test_assets_table(monkeypatch):
    """Test table output."""
    fetch, _ = _fake_fetch()
    monkeypatch.setattr(cli, "_fetch_assets", fetch)

    result = runner.invoke(cli.app, ["assets", SUI_ADDRESS, "-c", "sui"])

    assert result.exit_code == 0
    assert "SUI" in result.stdout
    assert "0xnft" in result.stdout


def test_assets_invalid_chain_exits_2():
    """Test that invalid input fails before any network call."""
    result = runner.invoke(cli.app, ["assets", SUI_ADDRESS, "--chain", "solana", "--format", "json"])

    assert result.exit_code == 2
    assert "Invalid chain parameter" in result.stdout


def test_assets_upstream_error_exits_1(monkeypatch):
    """Test upstream failure exit code."""
    fetch, _ = _fake_fetch(error=UpstreamError("Sui RPC error: 502"))
    monkeypatch.setattr(cli, "_fetch_assets", fetch)

    result = runner.invoke(cli.app, ["assets", SUI_ADDRESS, "--chain", "sui", "--format", "json"])

    assert result.exit_code == 1
    assert "Sui RPC error: 502" in result.stdout


def test_invalid_configuration_exits_1(monkeypatch):
    """Test that malformed numeric settings are reported."""
    monkeypatch.setenv("MULTICHAIN_ASSETS_TIMEOUT", "soon")

    result = runner.invoke(cli.app, ["list-chains"])

    assert result.exit_code == 1
    assert "MULTICHAIN_ASSETS_TIMEOUT" in result.stdout
