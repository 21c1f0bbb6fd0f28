"""Tests for Pydantic data models and the wire schema."""

import json
import math

import pytest
from pydantic import ValidationError

from multichain_assets.core.models import (
    AggregationResult,
    AssetsResponse,
    BalanceOut,
    ChainConfig,
    NativeAsset,
    NftItem,
    RPCStyle,
    TokenBalance,
    TokenOut,
)


def _balance(raw: int, decimals: int = 9, **kwargs) -> TokenBalance:
    fields = {
        "identity": "0x2::sui::SUI",
        "symbol": "SUI",
        "name": "Sui",
        "decimals": decimals,
        "raw_balance": raw,
        "chain": "sui",
        "verified": True,
    }
    fields.update(kwargs)
    return TokenBalance(**fields)


def test_ui_amount_is_derived_from_raw_balance():
    """Test that the display amount follows the raw balance."""
    balance = _balance(1_500_000_000)
    assert balance.ui_amount == 1.5

    balance.raw_balance = 3
    balance.decimals = 1
    assert balance.ui_amount == 0.3


def test_ui_amount_of_huge_balance():
    """Test that huge raw balances still produce a finite display amount."""
    balance = _balance(2**100, decimals=18)
    assert balance.ui_amount == pytest.approx(2**100 / 10**18)


def test_ui_amount_beyond_float_range():
    """Test that an amount too large for a float keeps the exact balance on the wire."""
    balance = _balance(10**400, decimals=0)
    assert balance.ui_amount == math.inf

    body = AggregationResult(balances=[balance]).to_response().to_wire()
    assert body["balances"][0]["balance"] == str(10**400)
    assert body["balances"][0]["uiAmount"] is None
    json.dumps(body, allow_nan=False)


def test_chain_config_address_validation():
    """Test full-match address validation."""
    config = ChainConfig(
        chain_id="ethereum",
        name="Ethereum",
        rpc_url="https://rpc.example",
        rpc_style=RPCStyle.JSONRPC,
        address_pattern="0x[a-fA-F0-9]{40}",
        native=NativeAsset(symbol="ETH", name="Ether", decimals=18, identity="0x" + "0" * 40),
        default_token_decimals=18,
    )

    assert config.is_valid_address("0x" + "Ab" * 20)
    assert not config.is_valid_address("0x" + "Ab" * 20 + "00")
    assert not config.is_valid_address("xx0x" + "Ab" * 20)
    assert not config.is_valid_address("")


def test_wire_format_uses_camel_case():
    """Test the response body layout."""
    result = AggregationResult(balances=[_balance(10**9, decimals_assumed=False)])
    body = result.to_response().to_wire()

    assert body == {
        "balances": [
            {
                "token": {
                    "symbol": "SUI",
                    "name": "Sui",
                    "decimals": 9,
                    "address": "0x2::sui::SUI",
                    "chain": "sui",
                    "verified": True,
                    "decimalsAssumed": False,
                },
                "balance": "1000000000",
                "uiAmount": 1.0,
            }
        ]
    }


def test_nfts_key_omitted_unless_requested():
    """Test that 'not requested' and 'none found' stay distinguishable."""
    not_requested = AggregationResult(balances=[]).to_response().to_wire()
    none_found = AggregationResult(balances=[], nfts=[]).to_response().to_wire()

    assert "nfts" not in not_requested
    assert none_found["nfts"] == []


def test_wire_round_trip_keeps_exact_balance():
    """Test that balances beyond float precision survive serialization."""
    raw = 2**100 + 1
    result = AggregationResult(
        balances=[_balance(raw, decimals=18)],
        nfts=[NftItem(id="0xabc", type="0x5::nft::Nft", content={"fields": {"name": "x"}})],
    )

    text = json.dumps(result.to_response().to_wire())
    parsed = AssetsResponse.model_validate(json.loads(text)).to_result()

    assert parsed.balances[0].raw_balance == raw
    assert parsed.balances[0].verified is True
    assert parsed.nfts[0].id == "0xabc"
    assert '"1267650600228229401496703205377"' in text


@pytest.mark.parametrize("value", ["1.5", "-1", "1e18", "", "١٢"])
def test_balance_must_be_integer_text(value):
    """Test that the wire balance only accepts decimal integer text."""
    token = TokenOut(symbol="X", name="X", decimals=0, address="x", chain="sei", verified=False)
    with pytest.raises(ValidationError):
        BalanceOut(token=token, balance=value, ui_amount=0.0)
