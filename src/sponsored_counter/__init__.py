"""Sponsored Counter - gas-less counter transactions on Aptos.

This library builds fee-payer transactions for the counter contract, collects
the sender signature from a custodial signer or a local wallet, hands both to
a sponsorship backend and waits for the chain to confirm the result.
"""

from .chain import AptosRestClient, ChainClient
from .client import SponsoredCounterClient
from .config import CounterClientConfig
from .confirmation import ConfirmationWaiter
from .exceptions import (
    ChainClientError,
    InvalidInputError,
    OnChainFailure,
    SigningError,
    SponsoredCounterError,
    SponsorshipError,
    UnconfirmedError,
)
from .reader import CounterReader, fetch_counter_value
from .signers import (
    AccountWallet,
    LocalWalletSigner,
    RemoteDigestSigner,
    TransactionSigner,
    build_authenticator,
    deserialize_authenticator,
    serialize_authenticator,
)
from .sponsor import SponsorshipClient, build_sponsorship_request
from .transactions import TransactionBuilder, UnsignedTransaction
from .types import (
    CounterAction,
    CounterResponse,
    ExecutedTransaction,
    FailureKind,
    SponsorshipRequest,
)
from .utils import (
    get_counter_function,
    normalize_public_key,
    strip_hex_prefix,
    to_u64,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "SponsoredCounterClient",
    "CounterClientConfig",
    # Stages
    "TransactionBuilder",
    "UnsignedTransaction",
    "TransactionSigner",
    "RemoteDigestSigner",
    "LocalWalletSigner",
    "AccountWallet",
    "SponsorshipClient",
    "ConfirmationWaiter",
    "CounterReader",
    "ChainClient",
    "AptosRestClient",
    # Types
    "CounterAction",
    "CounterResponse",
    "ExecutedTransaction",
    "FailureKind",
    "SponsorshipRequest",
    # Exceptions
    "SponsoredCounterError",
    "InvalidInputError",
    "SigningError",
    "SponsorshipError",
    "UnconfirmedError",
    "OnChainFailure",
    "ChainClientError",
    # Helpers
    "build_authenticator",
    "build_sponsorship_request",
    "deserialize_authenticator",
    "serialize_authenticator",
    "fetch_counter_value",
    "get_counter_function",
    "normalize_public_key",
    "strip_hex_prefix",
    "to_u64",
]
