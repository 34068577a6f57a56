"""Read-only access to the counter value."""

from __future__ import annotations

import logging

from .chain import ChainClient
from .config import CounterClientConfig
from .constants import COUNTER_MODULE, GET_COUNTER_FUNCTION
from .utils import parse_address

logger = logging.getLogger(__name__)


class CounterReader:
    """Fetch the counter through the get_counter view function."""

    def __init__(self, config: CounterClientConfig, chain: ChainClient) -> None:
        self._function = f"{config.contract_address}::{COUNTER_MODULE}::{GET_COUNTER_FUNCTION}"
        self._chain = chain

    @property
    def function(self) -> str:
        return self._function

    async def get_value(self, address: str) -> int | None:
        """Return the counter for ``address``, or None if it cannot be read.

        The value is display-only, so every failure is logged and swallowed.
        """
        try:
            owner = parse_address(address)
            result = await self._chain.view(self._function, [], [str(owner)])
            return int(result[0])
        except Exception as exc:
            logger.error("Error fetching counter value for %s: %s", address, exc)
            return None


async def fetch_counter_value(
    config: CounterClientConfig, chain: ChainClient, address: str
) -> int | None:
    return await CounterReader(config, chain).get_value(address)
