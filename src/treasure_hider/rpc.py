"""Minimal Ethereum JSON-RPC client.

Only what the loot order needs: the sell token balance of the treasure chest,
read with ``eth_call`` to ``balanceOf`` (or ``eth_getBalance`` for the native
token sentinel). One blocking round-trip per command, no retries.
"""

import itertools
import logging
from typing import Any, List, Optional

import httpx
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import (
    decode_hex,
    function_signature_to_4byte_selector,
    is_hex,
)

from .errors import NetworkError
from .utils import checksum_address

logger = logging.getLogger(__name__)

BALANCE_OF_SIGNATURE = "balanceOf(address)"

# Native token sentinel used by CoW Protocol for ETH / xDAI
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"


class RpcClient:
    """Synchronous JSON-RPC client over HTTP.

    Example:
        ```python
        with RpcClient("http://localhost:8545") as rpc:
            balance = rpc.get_token_balance(token, owner)
        ```
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            url: JSON-RPC endpoint of the node
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self._ids = itertools.count(1)
        self._http_client = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http_client.close()

    def call(self, method: str, params: List[Any]) -> Any:
        """Perform a JSON-RPC request and return its ``result``.

        Raises:
            NetworkError: On transport failure, HTTP error or JSON-RPC error
        """
        request = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }
        logger.debug("JSON-RPC %s %s", method, params)

        try:
            response = self._http_client.post(
                self.url,
                headers={"Content-Type": "application/json"},
                json=request,
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"JSON-RPC request to {self.url} failed: {e}") from e

        if not response.is_success:
            raise NetworkError(
                f"JSON-RPC request failed: {response.status_code} {response.text}"
            )

        try:
            server_response = response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON-RPC response: {response.text}") from e

        if "error" in server_response:
            error = server_response["error"]
            if isinstance(error, dict):
                raise NetworkError(
                    f"JSON-RPC error: {error.get('message')} (code: {error.get('code')})"
                )
            raise NetworkError(f"JSON-RPC error: {error}")

        if "result" not in server_response:
            raise NetworkError("JSON-RPC response has no result")

        return server_response["result"]

    def get_balance(self, address: str) -> int:
        """Native balance of ``address`` at the latest block."""
        result = self.call(
            "eth_getBalance", [checksum_address("account address", address), "latest"]
        )
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise NetworkError(f"Invalid eth_getBalance result: {result!r}") from e

    def get_token_balance(self, token: str, owner: str) -> int:
        """ERC20 ``balanceOf(owner)`` at the latest block."""
        calldata = function_signature_to_4byte_selector(BALANCE_OF_SIGNATURE) + encode(
            ["address"], [checksum_address("owner address", owner)]
        )
        result = self.call(
            "eth_call",
            [
                {"to": checksum_address("token address", token), "data": "0x" + calldata.hex()},
                "latest",
            ],
        )
        if not isinstance(result, str) or not is_hex(result):
            raise NetworkError(f"Invalid balanceOf result: {result!r}")
        try:
            (balance,) = decode(["uint256"], decode_hex(result))
        except (DecodingError, ValueError) as e:
            raise NetworkError(f"Invalid balanceOf result: {result!r}") from e
        return balance


def get_sell_token_balance(rpc: RpcClient, sell_token_address: str, address: str) -> int:
    """Balance of the sell token held by the treasure chest.

    Args:
        rpc: Connected JSON-RPC client
        sell_token_address: Token to sell to pay out the reward
        address: Address of the treasure chest Safe

    Returns:
        Balance in token decimals
    """
    if sell_token_address.lower() == NATIVE_TOKEN_ADDRESS.lower():
        balance = rpc.get_balance(address)
    else:
        balance = rpc.get_token_balance(sell_token_address, address)
    logger.info("Sell token %s balance of %s: %d", sell_token_address, address, balance)
    return balance
