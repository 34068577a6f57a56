"""Wait for sponsored transactions to reach finality."""

from __future__ import annotations

import logging

from .chain import ChainClient
from .exceptions import OnChainFailure
from .types import ExecutedTransaction

logger = logging.getLogger(__name__)


class ConfirmationWaiter:
    """Turn a submitted hash into a successful executed transaction or an error."""

    def __init__(self, chain: ChainClient) -> None:
        self._chain = chain

    async def wait(self, transaction_hash: str) -> ExecutedTransaction:
        logger.info("Waiting for transaction confirmation: %s", transaction_hash)
        executed = await self._chain.wait_for_transaction(transaction_hash)

        if not executed.success:
            raise OnChainFailure(
                "Transaction failed on-chain",
                transaction_hash=transaction_hash,
                vm_status=executed.vm_status,
                details={"version": executed.version},
            )

        logger.info(
            "Transaction confirmed: %s version=%s", transaction_hash, executed.version
        )
        return executed
