"""Example: increment the counter with a local wallet and read it back."""

from __future__ import annotations

import asyncio
import logging
import os

from aptos_sdk.account import Account
from dotenv import load_dotenv

from sponsored_counter import AccountWallet, SponsoredCounterClient

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

AMOUNT = 1


async def main() -> None:
    """Submit a sponsored increment signed by a locally held key."""

    private_key = os.getenv("APTOS_PRIVATE_KEY")
    if not private_key:
        raise ValueError("APTOS_PRIVATE_KEY not found in environment variables")

    contract_address = os.getenv("COUNTER_CONTRACT_ADDRESS")
    if not contract_address:
        raise ValueError("COUNTER_CONTRACT_ADDRESS not found in environment variables")

    client = SponsoredCounterClient(
        contract_address=contract_address,
        sponsor_url=os.getenv("SPONSOR_URL", "http://localhost:3000"),
        network=os.getenv("APTOS_NETWORK", "testnet"),
    )
    wallet = AccountWallet(Account.load_key(private_key))
    address = str(wallet.address)

    try:
        before = await client.get_counter_value(address)
        logging.info("Counter for %s before increment: %s", address, before)

        tx_hash = await client.submit_with_wallet("increment", AMOUNT, address, wallet)
        logging.info("Increment confirmed: %s", tx_hash)

        after = await client.get_counter_value(address)
        logging.info("Counter for %s after increment: %s", address, after)
    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(main())
