"""
JSON-RPC Client for EVM chains.

Lightweight alternative to web3.py: uses httpx for HTTP transport.
Supports balance queries, read-only calls, raw transaction submission and
receipt polling. Transport failures and node errors are raised as
``NetworkError`` subclasses.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from ..errors import NetworkError, RpcError


class RpcClient:
    """Read-capable connection to a single RPC endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._request_id = 0

    def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            RpcError: If the node answers with an error object
            NetworkError: If the request cannot be completed
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": self._request_id,
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.url, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise NetworkError(f"{method} failed: {exc}") from exc
        except ValueError as exc:
            raise NetworkError(f"{method} returned invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise NetworkError(f"{method} returned an unexpected payload: {data!r}")

        if data.get("error"):
            error = data["error"]
            if isinstance(error, dict):
                raise RpcError(
                    f"RPC error: {error.get('message', error)}",
                    code=error.get("code"),
                )
            raise RpcError(f"RPC error: {error}")

        return data.get("result")

    # ---- Typed helpers ----

    def get_balance(self, address: str, block: str = "latest") -> int:
        """Get ETH balance in wei."""
        return hex_to_int(self.request("eth_getBalance", [address, block]))

    def get_nonce(self, address: str, block: str = "pending") -> int:
        return hex_to_int(self.request("eth_getTransactionCount", [address, block]))

    def get_gas_price(self) -> int:
        return hex_to_int(self.request("eth_gasPrice", []))

    def get_chain_id(self) -> int:
        return hex_to_int(self.request("eth_chainId", []))

    def estimate_gas(self, tx: dict) -> int:
        return hex_to_int(self.request("eth_estimateGas", [tx]))

    def call(self, tx: dict, block: str = "latest") -> str:
        """Execute a read-only call and return the raw 0x-hex result."""
        return self.request("eth_call", [tx, block]) or "0x"

    def send_raw_transaction(self, raw_tx: str) -> str:
        """
        Send a signed raw transaction.

        Args:
            raw_tx: 0x-prefixed hex encoded signed transaction

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        return self.request("eth_sendRawTransaction", [raw_tx])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[dict]:
        return self.request("eth_getTransactionReceipt", [tx_hash])

    def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: int = 120,
        poll_interval: float = 2.0,
    ) -> dict:
        """
        Wait for a transaction receipt.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds
            poll_interval: Polling interval in seconds

        Returns:
            Transaction receipt dict

        Raises:
            NetworkError: If the receipt is not found within timeout
        """
        start = time.time()
        while True:
            receipt = self.get_transaction_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if time.time() - start >= timeout:
                break
            time.sleep(poll_interval)

        raise NetworkError(f"Transaction {tx_hash} not confirmed within {timeout}s")


def hex_to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 16) if value.startswith("0x") else int(value)
        except ValueError:
            pass
    raise NetworkError(f"Expected a hex quantity, got {value!r}")
