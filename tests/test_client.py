import json

import pytest

import btc_recovery
from btc_recovery import RecoveryClient
from btc_recovery.config import DEFAULT_CONFIG, resolve
from btc_recovery.constants import Environment
from btc_recovery.providers import HTTPProvider
from btc_recovery.types.transaction import TransactionInfo

from conftest import FakeProvider

FEE_URL = "https://fees.test/recommended"


def test_coin_metadata():
    client = RecoveryClient(FakeProvider())
    assert (client.chain, client.family, client.full_name) == ("btc", "btc", "Bitcoin")
    assert client.supports_block_target()
    assert client.supports_p2sh_p2wsh()
    assert client.supports_p2wsh()


def test_from_config_builds_provider():
    config = resolve({"env": "prod", "timeout": 2500, "disable_proxy": True}, DEFAULT_CONFIG)
    client = RecoveryClient.from_config(config)

    provider = client.provider
    assert isinstance(provider, HTTPProvider)
    assert provider.environment is Environment.PROD
    assert provider.endpoint == "https://api.smartbit.com.au/v1/blockchain"
    assert provider.timeout.total == 2.5
    assert provider.trust_env is False


def test_from_config_custom_network():
    config = resolve({"env": "custom", "custom_bitcoin_network": "testnet"}, DEFAULT_CONFIG)
    client = RecoveryClient.from_config(config)
    assert client.provider.endpoint == "https://testnet-api.smartbit.com.au/v1/blockchain"


def test_connect_uses_given_config():
    config = resolve({"env": "staging"}, DEFAULT_CONFIG)
    client = btc_recovery.connect(config)
    assert client.provider.endpoint == "https://api.smartbit.com.au/v1/blockchain"
    assert not client.is_connected


@pytest.mark.asyncio
async def test_shortcuts_share_one_provider(legacy_tx):
    raw, txid = legacy_tx
    provider = FakeProvider({
        FEE_URL: json.dumps({"hourFee": 12}),
        "/address/mzBc4XEFSdzCDcTxAgf6EZXgsZWpztRhef": {
            "success": True,
            "address": {"total": {"transaction_count": 0, "balance_int": 0}},
        },
        "/decodetx": {"success": True, "transaction": {"TxId": txid}},
    })

    async with RecoveryClient(provider, fee_source_url=FEE_URL) as client:
        assert client.is_connected
        assert await client.get_recovery_fee_per_byte() == 12
        info = await client.get_address_info("mzBc4XEFSdzCDcTxAgf6EZXgsZWpztRhef")
        decoded = await client.verify_recovery_transaction(TransactionInfo(raw.hex()))

    assert not client.is_connected
    assert not info.is_used
    assert decoded.txid == txid
    assert [verb for verb, _, _ in provider.calls] == ["GET", "GET", "POST"]


def test_repr():
    assert repr(RecoveryClient(FakeProvider())) == (
        "<RecoveryClient chain=btc provider=FakeProvider connected=False>"
    )
