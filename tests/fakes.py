"""Test doubles shared by the sponsored counter tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import requests
from requests import Session

from sponsored_counter.chain import ChainClient
from sponsored_counter.types import ExecutedTransaction

CONTRACT_ADDRESS = "0x" + "c0ffee".rjust(64, "0")


class DummyResponse:
    def __init__(self, payload: Any, *, status_code: int = 200, text: str | None = None) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text

    def json(self) -> Any:
        if self.text is not None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class DummySession(Session):
    """Session returning queued responses in order."""

    def __init__(self, *responses: DummyResponse | Exception) -> None:
        super().__init__()
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def _next(self) -> DummyResponse:
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url: str, json: Any = None, timeout: float | None = None, headers: Any = None):  # type: ignore[override]
        self.calls.append({"method": "POST", "url": url, "json": json, "timeout": timeout})
        return self._next()

    def request(self, method: str, url: str, json: Any = None, timeout: float | None = None):  # type: ignore[override]
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        return self._next()


class FakeChain(ChainClient):
    """In-memory chain answering builder, waiter and reader queries."""

    def __init__(
        self,
        *,
        sequence_number: int = 7,
        chain_id: int = 2,
        gas_price: int = 100,
        executed: ExecutedTransaction | Exception | None = None,
        view_result: list[Any] | Exception | None = None,
    ) -> None:
        self.sequence_number = sequence_number
        self.chain_id = chain_id
        self.gas_price = gas_price
        self.executed = executed
        self.view_result = view_result if view_result is not None else ["0"]
        self.calls: list[tuple[str, Any]] = []

    async def get_sequence_number(self, address: str) -> int:
        self.calls.append(("sequence_number", address))
        return self.sequence_number

    async def get_chain_id(self) -> int:
        self.calls.append(("chain_id", None))
        return self.chain_id

    async def estimate_gas_price(self) -> int:
        self.calls.append(("gas_price", None))
        return self.gas_price

    async def view(
        self, function: str, type_arguments: Sequence[str], arguments: Sequence[Any]
    ) -> list[Any]:
        self.calls.append(("view", (function, list(type_arguments), list(arguments))))
        if isinstance(self.view_result, Exception):
            raise self.view_result
        return self.view_result

    async def wait_for_transaction(self, transaction_hash: str) -> ExecutedTransaction:
        self.calls.append(("wait", transaction_hash))
        if isinstance(self.executed, Exception):
            raise self.executed
        if self.executed is None:
            return ExecutedTransaction(transaction_hash=transaction_hash, success=True)
        return self.executed


def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
