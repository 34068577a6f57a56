"""Constants and mappings for the sponsored counter client."""

from enum import Enum

COUNTER_MODULE = "counter"
GET_COUNTER_FUNCTION = "get_counter"
SPONSOR_ENDPOINT = "/api/sponsor-transaction"
SPONSOR_FALLBACK_ERROR = "Failed to sponsor transaction"

U64_MAX = 2**64 - 1
ED25519_PUBLIC_KEY_LENGTH = 32
ED25519_SIGNATURE_LENGTH = 64


class Network(str, Enum):
    """Aptos fullnode REST endpoints."""

    MAINNET = "https://fullnode.mainnet.aptoslabs.com/v1"
    TESTNET = "https://fullnode.testnet.aptoslabs.com/v1"
    DEVNET = "https://fullnode.devnet.aptoslabs.com/v1"


def get_node_url(network: str) -> str:
    """Get the fullnode URL for a network name.

    Args:
        network: Network name (e.g., "testnet", "mainnet")

    Returns:
        Fullnode REST base URL

    Raises:
        ValueError: If network is not known
    """
    try:
        return Network[network.upper()].value
    except KeyError:
        raise ValueError(f"Unknown network: {network}") from None
