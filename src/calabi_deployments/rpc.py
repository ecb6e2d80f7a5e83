"""JSON-RPC helpers for calabi-deployments."""

import logging
from typing import Any, List, Optional

import requests

from .constants import NETWORK_CONFIG
from .exceptions import ChainMismatchError, NetworkNotFoundError

logger = logging.getLogger(__name__)


def rpc_request(
    rpc_url: str, method: str, params: Optional[List[Any]] = None, timeout: float = 30
) -> Any:
    """
    Make a single JSON-RPC call.

    Args:
        rpc_url: RPC endpoint URL
        method: JSON-RPC method, e.g. "eth_chainId"
        params: Method parameters
        timeout: Request timeout in seconds

    Returns:
        The "result" member of the response

    Raises:
        KeyError: If RPC response is missing the result
        ValueError: If RPC returns an error
        RuntimeError: If network error occurs
    """
    try:
        response = requests.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": method,
                "params": params or [],
                "id": 1,
            },
            timeout=timeout,
        )

        if response.status_code != 200:
            raise RuntimeError(f"RPC request failed with status {response.status_code}")

        result = response.json()

        if "error" in result:
            raise ValueError(f"RPC error: {result['error']}")

        return result["result"]

    except requests.RequestException as e:
        raise RuntimeError(f"Network error during RPC call: {e}") from e


def get_chain_id(rpc_url: str) -> int:
    """Get the chain ID served by an RPC endpoint."""
    return int(rpc_request(rpc_url, "eth_chainId"), 16)


def check_chain_id(rpc_url: str, network: str) -> int:
    """
    Verify that an RPC endpoint serves the configured chain for a network.

    Args:
        rpc_url: RPC endpoint URL
        network: Network name from NETWORK_CONFIG

    Returns:
        The chain ID

    Raises:
        NetworkNotFoundError: If network is not configured
        ChainMismatchError: If the endpoint reports another chain
    """
    if network not in NETWORK_CONFIG:
        raise NetworkNotFoundError(f"Network '{network}' not configured")

    expected = NETWORK_CONFIG[network]["chain_id"]
    actual = get_chain_id(rpc_url)
    if actual != expected:
        raise ChainMismatchError(
            f"RPC endpoint {rpc_url} serves chain {actual}, "
            f"but network '{network}' is chain {expected}"
        )

    logger.info("Connected to %s (chain %d)", NETWORK_CONFIG[network]["chain_name"], actual)
    return actual
