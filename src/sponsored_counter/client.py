"""Sponsored counter client that routes submissions through the gas sponsor."""

from __future__ import annotations

import logging
import time

import requests
from aptos_sdk.account_address import AccountAddress

from .chain import AptosRestClient, ChainClient
from .config import (
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_EXPIRATION_SECONDS,
    DEFAULT_MAX_GAS_AMOUNT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    CounterClientConfig,
)
from .confirmation import ConfirmationWaiter
from .exceptions import SponsoredCounterError
from .reader import CounterReader
from .signers import DigestSigner, LocalWalletSigner, RemoteDigestSigner, TransactionSigner, Wallet
from .sponsor import SponsorshipClient
from .transactions import TransactionBuilder
from .types import CounterAction, CounterResponse
from .utils import get_counter_function, parse_action

logger = logging.getLogger(__name__)


class SponsoredCounterClient:
    """Mutate and read the on-chain counter without the sender paying gas."""

    def __init__(
        self,
        contract_address: str,
        sponsor_url: str,
        *,
        node_url: str | None = None,
        network: str = "testnet",
        chain_id: int | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS,
        max_gas_amount: int = DEFAULT_MAX_GAS_AMOUNT,
        gas_unit_price: int | None = None,
        chain: ChainClient | None = None,
        session: requests.Session | None = None,
    ) -> None:
        config = CounterClientConfig(
            contract_address=contract_address,
            sponsor_url=sponsor_url,
            node_url=node_url,
            network=network,
            chain_id=chain_id,
            request_timeout=request_timeout,
            confirmation_timeout=confirmation_timeout,
            poll_interval=poll_interval,
            expiration_seconds=expiration_seconds,
            max_gas_amount=max_gas_amount,
            gas_unit_price=gas_unit_price,
        ).with_defaulted_urls()

        self._config = config
        self._session = session or requests.Session()
        self._chain = chain or AptosRestClient(config, self._session)
        self._builder = TransactionBuilder(config, self._chain)
        self._sponsor = SponsorshipClient(config, self._session)
        self._waiter = ConfirmationWaiter(self._chain)
        self._reader = CounterReader(config, self._chain)

    @property
    def config(self) -> CounterClientConfig:
        return self._config

    def close(self) -> None:
        self._session.close()

    def get_counter_function(self, action: CounterAction | str) -> str:
        return get_counter_function(action, self._config.contract_address)

    # ------------------------------------------------------------------
    # Submission flows
    # ------------------------------------------------------------------
    async def submit(
        self,
        action: CounterAction | str,
        amount: int,
        sender: str | AccountAddress,
        signer: TransactionSigner,
        *,
        expiration_timestamp: int | None = None,
    ) -> str:
        """Build, sign, sponsor and confirm one counter transaction.

        Returns:
            The transaction hash, only once the chain reports success.

        Raises:
            InvalidInputError: Arguments rejected before any network call.
            SigningError: The signer refused or returned a malformed signature.
            SponsorshipError: The backend rejected the request.
            UnconfirmedError: Finality not reached within the confirmation timeout.
            OnChainFailure: The transaction finalized unsuccessfully.
        """
        try:
            transaction = await self._builder.build(
                action, amount, sender, expiration_timestamp=expiration_timestamp
            )
            logger.info("Transaction built for %s, requesting signature", transaction.function)

            authenticator = await signer.sign(transaction)
            logger.info("Transaction signed, sending for sponsorship")

            transaction_hash = await self._sponsor.sponsor(transaction, authenticator)
            await self._waiter.wait(transaction_hash)
            return transaction_hash
        except SponsoredCounterError as exc:
            logger.error("Error submitting %s transaction: %s", action, exc)
            raise

    async def submit_custodial(
        self,
        action: CounterAction | str,
        amount: int,
        wallet_address: str,
        public_key: str,
        sign_digest: DigestSigner,
        *,
        signer_timeout: float | None = None,
    ) -> str:
        """Submit with a custodial signer that signs the transaction digest."""
        signer = RemoteDigestSigner(sign_digest, public_key, timeout=signer_timeout)
        return await self.submit(action, amount, wallet_address, signer)

    async def submit_with_wallet(
        self,
        action: CounterAction | str,
        amount: int,
        wallet_address: str,
        wallet: Wallet,
    ) -> str:
        """Submit with a local wallet that signs the full transaction."""
        expiration = int(time.time()) + self._config.expiration_seconds
        return await self.submit(
            action,
            amount,
            wallet_address,
            LocalWalletSigner(wallet),
            expiration_timestamp=expiration,
        )

    # ------------------------------------------------------------------
    # Response wrappers
    # ------------------------------------------------------------------
    async def execute(
        self,
        action: CounterAction | str,
        amount: int,
        sender: str | AccountAddress,
        signer: TransactionSigner,
    ) -> CounterResponse:
        """Like submit(), but report taxonomy errors as a failed response."""
        try:
            counter_action = parse_action(action)
            transaction_hash = await self.submit(counter_action, amount, sender, signer)
        except SponsoredCounterError as exc:
            return CounterResponse(
                success=False,
                action=action if isinstance(action, CounterAction) else None,
                amount=amount,
                error=str(exc),
                failure=exc.kind,
                raw_response={"details": exc.details},
            )

        return CounterResponse(
            success=True,
            action=counter_action,
            amount=amount,
            transaction_hash=transaction_hash,
        )

    async def increment(
        self, amount: int, sender: str | AccountAddress, signer: TransactionSigner
    ) -> CounterResponse:
        return await self.execute(CounterAction.INCREMENT, amount, sender, signer)

    async def decrement(
        self, amount: int, sender: str | AccountAddress, signer: TransactionSigner
    ) -> CounterResponse:
        return await self.execute(CounterAction.DECREMENT, amount, sender, signer)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def get_counter_value(self, address: str) -> int | None:
        return await self._reader.get_value(address)
