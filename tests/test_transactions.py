"""Tests for the fee-payer transaction builder."""

from __future__ import annotations

import asyncio
import time

import pytest
from fakes import CONTRACT_ADDRESS, FakeChain

from sponsored_counter.config import CounterClientConfig
from sponsored_counter.exceptions import InvalidInputError
from sponsored_counter.transactions import TransactionBuilder, UnsignedTransaction
from sponsored_counter.types import CounterAction

SENDER = "0xABC"
SENDER_LONG = "0x" + "abc".rjust(64, "0")


def _builder(chain: FakeChain | None = None, **overrides) -> tuple[TransactionBuilder, FakeChain]:
    chain = chain or FakeChain()
    config = CounterClientConfig(
        contract_address=CONTRACT_ADDRESS,
        sponsor_url="https://sponsor.example",
        node_url="https://node.example/v1",
        **overrides,
    ).with_defaulted_urls()
    return TransactionBuilder(config, chain), chain


def _build(builder: TransactionBuilder, *args, **kwargs) -> UnsignedTransaction:
    return asyncio.run(builder.build(*args, **kwargs))


@pytest.mark.parametrize("action", list(CounterAction))
@pytest.mark.parametrize("amount", [0, 1, 5, 2**64 - 1])
def test_envelope_reserves_fee_payer_and_future_expiration(action, amount) -> None:
    builder, _ = _builder()
    before = int(time.time())

    transaction = _build(builder, action, amount, SENDER)

    assert transaction.with_fee_payer is True
    assert transaction.fee_payer_address is None
    assert transaction.expiration_timestamp > before
    assert transaction.arguments == [amount]


def test_increment_targets_add_counter() -> None:
    builder, chain = _builder()

    transaction = _build(builder, "increment", 5, SENDER)

    assert transaction.function == f"{CONTRACT_ADDRESS}::counter::add_counter"
    assert transaction.arguments == [5]
    assert str(transaction.sender) == SENDER_LONG
    assert transaction.raw_transaction.sequence_number == 7
    assert transaction.raw_transaction.chain_id == 2
    assert transaction.raw_transaction.gas_unit_price == 100
    assert ("sequence_number", SENDER_LONG) in chain.calls


def test_decrement_targets_subtract_counter() -> None:
    builder, _ = _builder()

    transaction = _build(builder, CounterAction.DECREMENT, 3, SENDER)

    assert transaction.function == f"{CONTRACT_ADDRESS}::counter::subtract_counter"


def test_default_expiration_is_five_minutes() -> None:
    builder, _ = _builder()
    before = int(time.time())

    transaction = _build(builder, "increment", 1, SENDER)

    assert before + 300 <= transaction.expiration_timestamp <= int(time.time()) + 300


def test_explicit_expiration_is_used() -> None:
    builder, _ = _builder()
    expiration = int(time.time()) + 60

    transaction = _build(builder, "increment", 1, SENDER, expiration_timestamp=expiration)

    assert transaction.expiration_timestamp == expiration


def test_pinned_chain_id_and_gas_skip_lookups() -> None:
    builder, chain = _builder(chain_id=4, gas_unit_price=150)

    transaction = _build(builder, "increment", 1, SENDER)

    assert transaction.raw_transaction.chain_id == 4
    assert transaction.raw_transaction.gas_unit_price == 150
    assert [name for name, _ in chain.calls] == ["sequence_number"]


@pytest.mark.parametrize("amount", [-1, 2**64, 1.5, True])
def test_invalid_amount_fails_before_network(amount) -> None:
    builder, chain = _builder()

    with pytest.raises(InvalidInputError) as excinfo:
        _build(builder, "increment", amount, SENDER)

    assert excinfo.value.field == "amount"
    assert chain.calls == []


@pytest.mark.parametrize("sender", ["", "0xnothex", "0x" + "f" * 65])
def test_malformed_sender_fails_before_network(sender) -> None:
    builder, chain = _builder()

    with pytest.raises(InvalidInputError) as excinfo:
        _build(builder, "increment", 1, sender)

    assert excinfo.value.field == "sender"
    assert chain.calls == []


def test_past_expiration_rejected() -> None:
    builder, _ = _builder()

    with pytest.raises(InvalidInputError):
        _build(builder, "increment", 1, SENDER, expiration_timestamp=int(time.time()) - 1)


def test_sponsorship_cannot_be_disabled() -> None:
    builder, _ = _builder()

    with pytest.raises(InvalidInputError):
        _build(builder, "increment", 1, SENDER, with_fee_payer=False)


def test_serialization_round_trip_preserves_fields() -> None:
    builder, _ = _builder()
    transaction = _build(builder, "increment", 5, SENDER)

    serialized = transaction.to_hex()
    restored = UnsignedTransaction.from_hex(serialized)

    assert serialized.startswith("0x")
    assert str(restored.sender) == str(transaction.sender)
    assert restored.function == transaction.function
    assert restored.arguments == [5]
    assert restored.expiration_timestamp == transaction.expiration_timestamp
    assert restored.fee_payer_address is None
    assert restored.to_hex() == serialized


def test_trailing_bytes_rejected() -> None:
    builder, _ = _builder()
    transaction = _build(builder, "increment", 5, SENDER)

    with pytest.raises(ValueError):
        UnsignedTransaction.from_hex(transaction.to_hex() + "00")


def test_signing_message_uses_fee_payer_prefix() -> None:
    import hashlib

    builder, _ = _builder()
    transaction = _build(builder, "increment", 5, SENDER)

    prefix = hashlib.sha3_256(b"APTOS::RawTransactionWithData").digest()
    message = transaction.signing_message()

    assert message.startswith(prefix)
    # Raw transaction bytes, without the trailing fee-payer option tag.
    assert transaction.to_bytes()[:-1] in message
    assert message.endswith(bytes(32))
