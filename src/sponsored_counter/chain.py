"""Aptos fullnode REST helpers used by the builder, waiter and reader."""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import requests

from .config import CounterClientConfig
from .exceptions import ChainClientError, UnconfirmedError
from .types import ExecutedTransaction

logger = logging.getLogger(__name__)


class ChainClient(ABC):
    """Read access to the chain needed by the sponsored counter flows."""

    @abstractmethod
    async def get_sequence_number(self, address: str) -> int:
        pass

    @abstractmethod
    async def get_chain_id(self) -> int:
        pass

    @abstractmethod
    async def estimate_gas_price(self) -> int:
        pass

    @abstractmethod
    async def view(
        self, function: str, type_arguments: Sequence[str], arguments: Sequence[Any]
    ) -> list[Any]:
        pass

    @abstractmethod
    async def wait_for_transaction(self, transaction_hash: str) -> ExecutedTransaction:
        pass


class AptosRestClient(ChainClient):
    """ChainClient backed by the fullnode REST API."""

    def __init__(
        self,
        config: CounterClientConfig,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.resolved_node_url
        self._session = session or requests.Session()
        self._chain_id: int | None = config.chain_id

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Chain state
    # ------------------------------------------------------------------
    async def get_sequence_number(self, address: str) -> int:
        response = await self._request("GET", f"/accounts/{address}", allow_missing=True)
        if response is None:
            # Accounts are created lazily; a sponsored first transaction starts at zero.
            return 0
        return int(response["sequence_number"])

    async def get_chain_id(self) -> int:
        if self._chain_id is None:
            ledger = await self._request("GET", "")
            self._chain_id = int(ledger["chain_id"])
        return self._chain_id

    async def estimate_gas_price(self) -> int:
        estimate = await self._request("GET", "/estimate_gas_price")
        return int(estimate["gas_estimate"])

    async def view(
        self, function: str, type_arguments: Sequence[str], arguments: Sequence[Any]
    ) -> list[Any]:
        payload = {
            "function": function,
            "type_arguments": list(type_arguments),
            "arguments": list(arguments),
        }
        logger.debug("View call %s args=%s", function, payload["arguments"])
        result = await self._request("POST", "/view", json=payload)
        if not isinstance(result, list):
            raise ChainClientError(
                "View call returned a non-list result",
                endpoint=f"{self._base_url}/view",
                details={"result": result},
            )
        return result

    # ------------------------------------------------------------------
    # Finality
    # ------------------------------------------------------------------
    async def wait_for_transaction(self, transaction_hash: str) -> ExecutedTransaction:
        timeout = self._config.confirmation_timeout
        interval = self._config.poll_interval
        deadline = time.monotonic() + timeout
        attempt = 0

        while True:
            attempt += 1
            try:
                record = await self._request(
                    "GET", f"/transactions/by_hash/{transaction_hash}", allow_missing=True
                )
            except ChainClientError as exc:
                logger.debug("Transaction poll error (attempt %s): %s", attempt, exc)
                record = None

            if record is not None and record.get("type") != "pending_transaction":
                logger.debug(
                    "Transaction %s finalized after %s polls (success=%s)",
                    transaction_hash,
                    attempt,
                    record.get("success"),
                )
                return ExecutedTransaction.from_json(record)

            if time.monotonic() + interval > deadline:
                break
            await asyncio.sleep(interval)

        raise UnconfirmedError(
            f"Transaction {transaction_hash} not confirmed within {timeout:.0f}s",
            transaction_hash=transaction_hash,
            details={"polls": attempt},
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        allow_missing: bool = False,
    ) -> Any:
        return await asyncio.to_thread(
            self._request_sync, method, path, json=json, allow_missing=allow_missing
        )

    def _request_sync(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        allow_missing: bool = False,
    ) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(
                method, url, json=json, timeout=self._config.request_timeout
            )
        except requests.RequestException as exc:
            raise ChainClientError(
                f"Fullnode request failed: {method} {path or '/'}",
                endpoint=url,
                details={"error": str(exc)},
            ) from exc

        if response.status_code == 404 and allow_missing:
            return None

        if not (200 <= response.status_code < 300):
            raise ChainClientError(
                f"Fullnode responded with HTTP {response.status_code}",
                endpoint=url,
                status_code=response.status_code,
                details={"body": _safe_json(response)},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ChainClientError(
                "Fullnode returned a non-JSON body",
                endpoint=url,
                status_code=response.status_code,
            ) from exc


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
