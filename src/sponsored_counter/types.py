"""Type definitions and data models for the sponsored counter client."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CounterAction(str, Enum):
    """Counter mutations exposed by the contract."""

    INCREMENT = "increment"
    DECREMENT = "decrement"

    @property
    def entry_function(self) -> str:
        return _ENTRY_FUNCTIONS[self]


_ENTRY_FUNCTIONS = {
    CounterAction.INCREMENT: "add_counter",
    CounterAction.DECREMENT: "subtract_counter",
}


class FailureKind(str, Enum):
    """Stage at which a submission failed."""

    INVALID_INPUT = "invalid_input"
    SIGNING = "signing"
    SPONSORSHIP = "sponsorship"
    UNCONFIRMED = "unconfirmed"
    ON_CHAIN = "on_chain"


@dataclass(frozen=True)
class SponsorshipRequest:
    """Hex-encoded BCS payload handed to the sponsorship backend."""

    serialized_transaction: str
    sender_signature: str

    def to_dict(self) -> dict[str, str]:
        return {
            "serializedTransaction": self.serialized_transaction,
            "senderSignature": self.sender_signature,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SponsorshipRequest":
        return cls(
            serialized_transaction=str(data["serializedTransaction"]),
            sender_signature=str(data["senderSignature"]),
        )


@dataclass
class ExecutedTransaction:
    """Finalized transaction record as reported by the fullnode."""

    transaction_hash: str
    success: bool
    vm_status: str | None = None
    version: int | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, record: Mapping[str, Any]) -> "ExecutedTransaction":
        version = record.get("version")
        return cls(
            transaction_hash=str(record.get("hash", "")),
            success=bool(record.get("success", False)),
            vm_status=record.get("vm_status"),
            version=int(version) if version is not None else None,
            raw_response=dict(record),
        )


@dataclass
class CounterResponse:
    """Outcome of a counter submission."""

    success: bool
    action: CounterAction | None = None
    amount: int | None = None
    transaction_hash: str | None = None
    error: str | None = None
    failure: FailureKind | None = None
    raw_response: dict[str, Any] | None = None
