"""Exception hierarchy for the sponsored counter client."""

from typing import Any

from .types import FailureKind


class SponsoredCounterError(Exception):
    """Base exception for all sponsored counter errors."""

    kind: FailureKind | None = None

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(SponsoredCounterError):
    """Raised when arguments are rejected before any network call."""

    kind = FailureKind.INVALID_INPUT

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class SigningError(SponsoredCounterError):
    """Raised when the remote signer or wallet refuses or returns garbage."""

    kind = FailureKind.SIGNING


class SponsorshipError(SponsoredCounterError):
    """Raised when the sponsorship backend rejects or cannot be reached."""

    kind = FailureKind.SPONSORSHIP

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class UnconfirmedError(SponsoredCounterError):
    """Raised when a submitted transaction never reaches finality."""

    kind = FailureKind.UNCONFIRMED

    def __init__(
        self,
        message: str,
        transaction_hash: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.transaction_hash = transaction_hash


class OnChainFailure(SponsoredCounterError):
    """Raised when a finalized transaction is marked unsuccessful."""

    kind = FailureKind.ON_CHAIN

    def __init__(
        self,
        message: str,
        transaction_hash: str | None = None,
        vm_status: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.transaction_hash = transaction_hash
        self.vm_status = vm_status


class ChainClientError(SponsoredCounterError):
    """Raised when the fullnode REST API cannot serve a request."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code
