"""Configuration containers for the sponsored counter client."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .constants import get_node_url
from .exceptions import InvalidInputError
from .utils import parse_address

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_CONFIRMATION_TIMEOUT = 20.0
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_EXPIRATION_SECONDS = 5 * 60
DEFAULT_MAX_GAS_AMOUNT = 100_000


@dataclass(frozen=True)
class CounterClientConfig:
    """Aggregated configuration used to construct the counter client."""

    contract_address: str
    sponsor_url: str = ""
    node_url: str | None = None
    network: str = "testnet"
    chain_id: int | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS
    max_gas_amount: int = DEFAULT_MAX_GAS_AMOUNT
    gas_unit_price: int | None = None

    def with_defaulted_urls(self) -> CounterClientConfig:
        """Return a copy with the node URL resolved and the contract address normalised."""

        if self.node_url is None:
            try:
                node_url = get_node_url(self.network)
            except ValueError as exc:
                raise InvalidInputError(str(exc), field="network", value=self.network) from exc
        else:
            node_url = self.node_url.rstrip("/")

        if self.expiration_seconds <= 0:
            raise InvalidInputError(
                "Expiration window must be positive",
                field="expiration_seconds",
                value=self.expiration_seconds,
            )

        contract = parse_address(self.contract_address, field="contract_address")

        return replace(
            self,
            contract_address=str(contract),
            sponsor_url=self.sponsor_url.rstrip("/"),
            node_url=node_url,
        )

    @property
    def resolved_node_url(self) -> str:
        if self.node_url is not None:
            return self.node_url.rstrip("/")
        return get_node_url(self.network)
