"""Client for the gas sponsorship backend."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests
from aptos_sdk.authenticator import AccountAuthenticator

from .config import CounterClientConfig
from .constants import SPONSOR_ENDPOINT, SPONSOR_FALLBACK_ERROR
from .exceptions import SponsorshipError
from .signers import serialize_authenticator
from .transactions import UnsignedTransaction
from .types import SponsorshipRequest

logger = logging.getLogger(__name__)


def build_sponsorship_request(
    transaction: UnsignedTransaction, authenticator: AccountAuthenticator
) -> SponsorshipRequest:
    """Serialise a transaction and its sender authenticator for the backend."""
    return SponsorshipRequest(
        serialized_transaction=transaction.to_hex(),
        sender_signature=serialize_authenticator(authenticator),
    )


class SponsorshipClient:
    """Hand signed transactions to the backend that pays gas and submits them."""

    def __init__(
        self,
        config: CounterClientConfig,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self._config.sponsor_url.rstrip('/')}{SPONSOR_ENDPOINT}"

    async def sponsor(
        self, transaction: UnsignedTransaction, authenticator: AccountAuthenticator
    ) -> str:
        """Submit for sponsorship and return the transaction hash."""
        return await self.submit(build_sponsorship_request(transaction, authenticator))

    async def submit(self, request: SponsorshipRequest) -> str:
        return await asyncio.to_thread(self._post, request)

    def _post(self, request: SponsorshipRequest) -> str:
        url = self.endpoint
        logger.debug("Requesting sponsorship from %s", url)

        try:
            response = self._session.post(
                url,
                json=request.to_dict(),
                timeout=self._config.request_timeout,
                headers={"Content-Type": "application/json"},
            )
        except requests.RequestException as exc:
            raise SponsorshipError(
                SPONSOR_FALLBACK_ERROR,
                endpoint=url,
                details={"error": str(exc)},
            ) from exc

        body = _json_or_none(response)

        if not (200 <= response.status_code < 300):
            detail = body.get("details") if isinstance(body, dict) else None
            message = detail if isinstance(detail, str) and detail else SPONSOR_FALLBACK_ERROR
            raise SponsorshipError(
                message,
                endpoint=url,
                status_code=response.status_code,
                details={"body": body},
            )

        transaction_hash = body.get("transactionHash") if isinstance(body, dict) else None
        if not isinstance(transaction_hash, str) or not transaction_hash:
            raise SponsorshipError(
                "Unable to get transaction hash from backend",
                endpoint=url,
                status_code=response.status_code,
                details={"body": body},
            )

        logger.info("Transaction sponsored and submitted: %s", transaction_hash)
        return transaction_hash


def _json_or_none(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
