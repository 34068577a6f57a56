"""Fee-payer transaction envelope and builder for counter entry functions."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from aptos_sdk.account_address import AccountAddress
from aptos_sdk.bcs import Deserializer, Serializer
from aptos_sdk.transactions import (
    EntryFunction,
    FeePayerRawTransaction,
    RawTransaction,
    TransactionArgument,
    TransactionPayload,
)

from .chain import ChainClient
from .config import CounterClientConfig
from .constants import COUNTER_MODULE
from .exceptions import InvalidInputError
from .types import CounterAction
from .utils import parse_action, parse_address, strip_hex_prefix, to_u64

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnsignedTransaction:
    """Raw transaction with a reserved, still unassigned, fee-payer slot.

    Serialises as the raw transaction followed by an optional fee-payer
    address, which is the layout the sponsorship backend deserialises.
    """

    raw_transaction: RawTransaction
    fee_payer_address: AccountAddress | None = None
    with_fee_payer: bool = True

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def sender(self) -> AccountAddress:
        return self.raw_transaction.sender

    @property
    def entry_function(self) -> EntryFunction:
        return self.raw_transaction.payload.value

    @property
    def function(self) -> str:
        entry = self.entry_function
        return f"{entry.module.address}::{entry.module.name}::{entry.function}"

    @property
    def arguments(self) -> list[int]:
        """Decoded u64 arguments of the entry function."""
        return [Deserializer(arg).u64() for arg in self.entry_function.args]

    @property
    def expiration_timestamp(self) -> int:
        return self.raw_transaction.expiration_timestamps_secs

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------
    def fee_payer_transaction(self) -> FeePayerRawTransaction:
        return FeePayerRawTransaction(self.raw_transaction, [], self.fee_payer_address)

    def signing_message(self) -> bytes:
        """Return the prefixed BCS message the sender must sign."""
        return self.fee_payer_transaction().keyed()

    # ------------------------------------------------------------------
    # BCS
    # ------------------------------------------------------------------
    def serialize(self, serializer: Serializer) -> None:
        serializer.struct(self.raw_transaction)
        serializer.bool(self.fee_payer_address is not None)
        if self.fee_payer_address is not None:
            serializer.struct(self.fee_payer_address)

    @staticmethod
    def deserialize(deserializer: Deserializer) -> UnsignedTransaction:
        raw_transaction = RawTransaction.deserialize(deserializer)
        fee_payer = None
        if deserializer.bool():
            fee_payer = AccountAddress.deserialize(deserializer)
        return UnsignedTransaction(raw_transaction, fee_payer)

    def to_bytes(self) -> bytes:
        serializer = Serializer()
        self.serialize(serializer)
        return serializer.output()

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    @classmethod
    def from_bytes(cls, data: bytes) -> UnsignedTransaction:
        deserializer = Deserializer(data)
        transaction = cls.deserialize(deserializer)
        if deserializer.remaining() != 0:
            raise ValueError(f"{deserializer.remaining()} trailing bytes after transaction")
        return transaction

    @classmethod
    def from_hex(cls, value: str) -> UnsignedTransaction:
        return cls.from_bytes(bytes.fromhex(strip_hex_prefix(value)))


class TransactionBuilder:
    """Build unsigned fee-payer transactions targeting the counter module."""

    def __init__(self, config: CounterClientConfig, chain: ChainClient) -> None:
        self._config = config
        self._chain = chain

    async def build(
        self,
        action: CounterAction | str,
        amount: int,
        sender: str | AccountAddress,
        *,
        expiration_timestamp: int | None = None,
        with_fee_payer: bool = True,
    ) -> UnsignedTransaction:
        counter_action = parse_action(action)
        amount = to_u64(amount)
        sender_address = parse_address(sender, field="sender")

        if not with_fee_payer:
            raise InvalidInputError(
                "Counter transactions must reserve a fee payer",
                field="with_fee_payer",
                value=with_fee_payer,
            )

        now = int(time.time())
        if expiration_timestamp is None:
            expiration_timestamp = now + self._config.expiration_seconds
        elif expiration_timestamp <= now:
            raise InvalidInputError(
                "Expiration timestamp must be in the future",
                field="expiration_timestamp",
                value=expiration_timestamp,
            )

        payload = TransactionPayload(
            EntryFunction.natural(
                f"{self._config.contract_address}::{COUNTER_MODULE}",
                counter_action.entry_function,
                [],
                [TransactionArgument(amount, Serializer.u64)],
            )
        )

        sequence_number = await self._chain.get_sequence_number(str(sender_address))
        chain_id = self._config.chain_id
        if chain_id is None:
            chain_id = await self._chain.get_chain_id()
        gas_unit_price = self._config.gas_unit_price
        if gas_unit_price is None:
            gas_unit_price = await self._chain.estimate_gas_price()

        raw_transaction = RawTransaction(
            sender_address,
            sequence_number,
            payload,
            self._config.max_gas_amount,
            gas_unit_price,
            expiration_timestamp,
            chain_id,
        )

        logger.debug(
            "Built %s(%s) for %s seq=%s expires=%s",
            counter_action.entry_function,
            amount,
            sender_address,
            sequence_number,
            expiration_timestamp,
        )
        return UnsignedTransaction(raw_transaction)
