"""Sender signing strategies for sponsored counter transactions."""

from __future__ import annotations

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from typing import Any, Protocol

from aptos_sdk import ed25519
from aptos_sdk.account import Account
from aptos_sdk.account_address import AccountAddress
from aptos_sdk.authenticator import AccountAuthenticator, Ed25519Authenticator
from aptos_sdk.bcs import Deserializer, Serializer
from nacl.exceptions import CryptoError
from nacl.signing import VerifyKey

from .constants import ED25519_PUBLIC_KEY_LENGTH, ED25519_SIGNATURE_LENGTH
from .exceptions import SigningError
from .transactions import UnsignedTransaction
from .utils import normalize_public_key, strip_hex_prefix

logger = logging.getLogger(__name__)


class DigestSigner(Protocol):
    """Remote custodial signer that signs a precomputed digest."""

    def __call__(
        self, *, address: str, chain_type: str, digest: str
    ) -> Awaitable[Mapping[str, Any] | str]:
        """Sign ``digest`` on behalf of ``address``.

        Returns:
            The hex signature, or a mapping carrying it under ``signature``.
        """
        ...


class Wallet(Protocol):
    """Local wallet able to sign a full transaction."""

    def sign_transaction(
        self, transaction: UnsignedTransaction
    ) -> AccountAuthenticator | Awaitable[AccountAuthenticator]:
        ...


class TransactionSigner(ABC):
    """Produce a sender authenticator for an unsigned transaction."""

    @abstractmethod
    async def sign(self, transaction: UnsignedTransaction) -> AccountAuthenticator:
        pass


class RemoteDigestSigner(TransactionSigner):
    """Sign through a custodial service that only sees the signing digest."""

    def __init__(
        self,
        sign_digest: DigestSigner,
        public_key: str,
        *,
        chain_type: str = "aptos",
        timeout: float | None = None,
    ) -> None:
        self._sign_digest = sign_digest
        self._public_key = public_key
        self._chain_type = chain_type
        self._timeout = timeout

    async def sign(self, transaction: UnsignedTransaction) -> AccountAuthenticator:
        digest = "0x" + transaction.signing_message().hex()
        address = str(transaction.sender)

        try:
            result = await asyncio.wait_for(
                self._sign_digest(address=address, chain_type=self._chain_type, digest=digest),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            raise SigningError(
                f"Remote signer timed out after {self._timeout}s",
                details={"address": address},
            ) from exc
        except SigningError:
            raise
        except Exception as exc:
            raise SigningError(
                "Remote signer rejected the signing request",
                details={"address": address, "error": str(exc)},
            ) from exc

        signature = result.get("signature") if isinstance(result, Mapping) else result
        if not isinstance(signature, str) or not signature:
            raise SigningError(
                "Remote signer returned no signature",
                details={"address": address, "response": result},
            )

        logger.debug("Remote signer returned signature for %s", address)
        return build_authenticator(self._public_key, signature)


class LocalWalletSigner(TransactionSigner):
    """Sign by handing the whole transaction to a wallet."""

    def __init__(self, wallet: Wallet) -> None:
        self._wallet = wallet

    async def sign(self, transaction: UnsignedTransaction) -> AccountAuthenticator:
        try:
            result = self._wallet.sign_transaction(transaction)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            raise SigningError(
                "Wallet rejected the signing request",
                details={"sender": str(transaction.sender), "error": str(exc)},
            ) from exc

        if not isinstance(result, AccountAuthenticator):
            raise SigningError(
                "Wallet returned a malformed authenticator",
                details={"type": type(result).__name__},
            )
        return result


class AccountWallet:
    """Wallet backed by a locally held Ed25519 account."""

    def __init__(self, account: Account) -> None:
        self._account = account

    @property
    def address(self) -> AccountAddress:
        return self._account.address()

    @property
    def public_key(self) -> ed25519.PublicKey:
        return self._account.public_key()

    def sign_transaction(self, transaction: UnsignedTransaction) -> AccountAuthenticator:
        signature = self._account.sign(transaction.signing_message())
        return AccountAuthenticator(Ed25519Authenticator(self._account.public_key(), signature))


def build_authenticator(public_key: str, signature: str) -> AccountAuthenticator:
    """Rebuild an Ed25519 authenticator from hex key and signature strings."""

    try:
        key_bytes = bytes.fromhex(normalize_public_key(public_key))
        signature_bytes = bytes.fromhex(strip_hex_prefix(signature))
    except ValueError as exc:
        raise SigningError("Public key or signature is not valid hex") from exc

    if len(key_bytes) != ED25519_PUBLIC_KEY_LENGTH:
        raise SigningError(
            f"Public key must be {ED25519_PUBLIC_KEY_LENGTH} bytes, got {len(key_bytes)}",
            details={"public_key": public_key},
        )
    if len(signature_bytes) != ED25519_SIGNATURE_LENGTH:
        raise SigningError(
            f"Signature must be {ED25519_SIGNATURE_LENGTH} bytes, got {len(signature_bytes)}",
            details={"signature": signature},
        )

    try:
        verify_key = VerifyKey(key_bytes)
    except (CryptoError, ValueError) as exc:
        raise SigningError("Public key is not a valid Ed25519 key") from exc

    return AccountAuthenticator(
        Ed25519Authenticator(ed25519.PublicKey(verify_key), ed25519.Signature(signature_bytes))
    )


def serialize_authenticator(authenticator: AccountAuthenticator) -> str:
    serializer = Serializer()
    authenticator.serialize(serializer)
    return "0x" + serializer.output().hex()


def deserialize_authenticator(value: str) -> AccountAuthenticator:
    return AccountAuthenticator.deserialize(Deserializer(bytes.fromhex(strip_hex_prefix(value))))
