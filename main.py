"""
Bitcoin Recovery Client Usage Examples

This file demonstrates the recovery workflow: size fees, gather address
state, then verify a candidate recovery transaction before handing it on.
"""

import asyncio
import logging
import sys

from btc_recovery import (
    RecoveryClient,
    RecoveryIntegrityError,
    TransactionInfo,
    load_config,
)
from btc_recovery.utils.logging import configure_logging


async def fee_example(client: RecoveryClient) -> None:
    """Example 1: Recommended fee rate."""
    print("\n=== Fee Recommendation Example ===")

    estimate = await client.get_recommended_fee()
    print(f"Fee rate: {estimate.satoshis_per_byte} sat/byte ({estimate.source.value})")


async def address_example(client: RecoveryClient, address: str) -> None:
    """Example 2: Address summary and unspent outputs."""
    print("\n=== Address Example ===")

    info = await client.get_address_info(address)
    print(f"Address: {info.address}")
    print(f"Transactions: {info.transaction_count}")
    print(f"Balance: {info.total_balance} sats")

    unspents = await client.get_unspent_outputs(address)
    print(f"Unspent outputs: {len(unspents)}")
    for utxo in unspents[:5]:
        print(f"  {utxo}")


async def verify_example(client: RecoveryClient, transaction_hex: str) -> None:
    """Example 3: Verify a recovery transaction."""
    print("\n=== Recovery Verification Example ===")

    try:
        decoded = await client.verify_recovery_transaction(
            TransactionInfo(transaction_hex=transaction_hex)
        )
    except RecoveryIntegrityError as e:
        print(f"REJECTED: {e}")
        print(f"  explorer: {e.reported_txid}")
        print(f"  local:    {e.computed_txid}")
        return

    print(f"Verified txid: {decoded.txid}")


async def main() -> None:
    """Run examples."""
    config = load_config()
    configure_logging(config)

    address = sys.argv[1] if len(sys.argv) > 1 else "2N8ryDAob6Qn8uCsWvkkQDhyeCQTqybGUFe"

    async with RecoveryClient.from_config(config) as client:
        await fee_example(client)
        await address_example(client, address)

        if len(sys.argv) > 2:
            await verify_example(client, sys.argv[2])


if __name__ == "__main__":
    logging.captureWarnings(True)
    asyncio.run(main())
