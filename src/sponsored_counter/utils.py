"""Utility functions for the sponsored counter client."""

from aptos_sdk.account_address import AccountAddress

from .constants import COUNTER_MODULE, ED25519_PUBLIC_KEY_LENGTH, U64_MAX
from .exceptions import InvalidInputError
from .types import CounterAction


def strip_hex_prefix(value: str) -> str:
    """Remove a single leading 0x from a hex string."""
    return value[2:] if value.startswith("0x") else value


def normalize_public_key(public_key: str) -> str:
    """Return an Ed25519 public key as bare hex.

    Custodial signers report keys with a leading scheme byte (33 bytes); that
    byte is dropped so the key can be rebuilt as a 32-byte Ed25519 key.
    """
    clean = strip_hex_prefix(public_key)
    if len(clean) == (ED25519_PUBLIC_KEY_LENGTH + 1) * 2:
        clean = clean[2:]
    return clean


def to_u64(value: int, field: str = "amount") -> int:
    """Validate a Move u64 argument."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError("Value must be an integer", field=field, value=value)

    if value < 0:
        raise InvalidInputError("Value cannot be negative", field=field, value=value)

    if value > U64_MAX:
        raise InvalidInputError("Value exceeds u64 maximum", field=field, value=value)

    return value


def parse_address(address: str | AccountAddress, field: str = "address") -> AccountAddress:
    """Parse an account address, accepting short and unprefixed hex."""
    if isinstance(address, AccountAddress):
        return address

    if not address:
        raise InvalidInputError("No wallet address provided", field=field, value=address)

    if not isinstance(address, str):
        raise InvalidInputError("Address must be a hex string", field=field, value=address)

    try:
        return AccountAddress.from_str_relaxed(address)
    except (ValueError, RuntimeError) as exc:
        raise InvalidInputError(
            f"Malformed account address: {address}",
            field=field,
            value=address,
            details={"error": str(exc)},
        ) from exc


def parse_action(action: CounterAction | str) -> CounterAction:
    """Coerce an action name to CounterAction."""
    if isinstance(action, CounterAction):
        return action

    try:
        return CounterAction(str(action).lower())
    except ValueError:
        raise InvalidInputError(
            f"Invalid counter action: {action}. Must be increment or decrement",
            field="action",
            value=action,
        ) from None


def get_counter_function(action: CounterAction | str, contract_address: str) -> str:
    """Return the fully qualified entry function for an action."""
    entry = parse_action(action).entry_function
    return f"{contract_address}::{COUNTER_MODULE}::{entry}"
