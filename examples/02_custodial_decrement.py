"""Example: decrement the counter through a custodial digest signer."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any

import requests
from dotenv import load_dotenv

from sponsored_counter import FailureKind, RemoteDigestSigner, SponsoredCounterClient

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

AMOUNT = 1


def make_digest_signer(signer_url: str, api_key: str):
    """Return a signer that forwards digests to a custodial signing service."""

    session = requests.Session()
    session.headers["Authorization"] = f"Bearer {api_key}"

    async def sign_digest(*, address: str, chain_type: str, digest: str) -> dict[str, Any]:
        def _post() -> dict[str, Any]:
            response = session.post(
                signer_url,
                json={"address": address, "chainType": chain_type, "hash": digest},
                timeout=10.0,
            )
            response.raise_for_status()
            return response.json()

        return await asyncio.to_thread(_post)

    return sign_digest


async def main() -> None:
    """Submit a sponsored decrement signed by a custodial wallet service."""

    contract_address = os.getenv("COUNTER_CONTRACT_ADDRESS")
    wallet_address = os.getenv("WALLET_ADDRESS")
    public_key = os.getenv("WALLET_PUBLIC_KEY")
    signer_url = os.getenv("SIGNER_URL")
    if not (contract_address and wallet_address and public_key and signer_url):
        raise ValueError(
            "COUNTER_CONTRACT_ADDRESS, WALLET_ADDRESS, WALLET_PUBLIC_KEY and SIGNER_URL "
            "must be set in environment variables"
        )

    client = SponsoredCounterClient(
        contract_address=contract_address,
        sponsor_url=os.getenv("SPONSOR_URL", "http://localhost:3000"),
        network=os.getenv("APTOS_NETWORK", "testnet"),
    )
    signer = RemoteDigestSigner(
        make_digest_signer(signer_url, os.getenv("SIGNER_API_KEY", "")),
        public_key,
        timeout=30.0,
    )

    try:
        response = await client.decrement(AMOUNT, wallet_address, signer)
        if not response.success:
            if response.failure is FailureKind.ON_CHAIN:
                logging.error("Decrement aborted on-chain: %s", response.raw_response)
            else:
                logging.error("Decrement failed at %s: %s", response.failure, response.error)
            return

        logging.info("Decrement confirmed: %s", response.transaction_hash)
        logging.info("Counter now: %s", await client.get_counter_value(wallet_address))
    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(main())
