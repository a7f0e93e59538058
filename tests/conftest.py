"""Shared fixtures: a scripted JSON-RPC node and an AppContext wired to it."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from chainctl.config import AppConfig, ConnectionConfig
from chainctl.context import AppContext

# Well-known throwaway key from the eth-account documentation.
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
RECIPIENT = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
CONTRACT = "0x1111111111111111111111111111111111111111"


class RpcFailure:
    def __init__(self, message: str, code: int = -32000) -> None:
        self.message = message
        self.code = code


class FakeNode:
    """Answers JSON-RPC requests from a method -> result table.

    Values may be plain results, ``RpcFailure`` instances, or callables
    taking the request params.
    """

    def __init__(self, responses: Optional[dict[str, Any]] = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, list]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method, params = body["method"], body["params"]
        self.calls.append((method, params))

        result = self.responses.get(method, RpcFailure(f"method not found: {method}", -32601))
        if callable(result) and not isinstance(result, RpcFailure):
            result = result(params)
        if isinstance(result, RpcFailure):
            payload = {"jsonrpc": "2.0", "id": body["id"], "error": {"code": result.code, "message": result.message}}
        else:
            payload = {"jsonrpc": "2.0", "id": body["id"], "result": result}
        return httpx.Response(200, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]


@pytest.fixture()
def fake_node() -> FakeNode:
    return FakeNode(
        {
            "eth_chainId": "0x74c",
            "eth_getBalance": hex(15 * 10**17),
            "eth_getTransactionCount": "0x3",
            "eth_gasPrice": hex(10**9),
            "eth_estimateGas": hex(21_000),
            "eth_sendRawTransaction": "0xdeadbeef",
            "eth_getTransactionReceipt": {"transactionHash": "0xdeadbeef", "status": "0x1"},
        }
    )


@pytest.fixture()
def make_app(tmp_path: Path, fake_node: FakeNode) -> Callable[..., AppContext]:
    def _make(private_key: Optional[str] = TEST_PRIVATE_KEY, **overrides: Any) -> AppContext:
        config = AppConfig(
            connection=ConnectionConfig(
                rpc_url="https://example-rpc",
                private_key=private_key,
            ),
            root=tmp_path,
            confirm_timeout=overrides.pop("confirm_timeout", 0),
            **overrides,
        )
        return AppContext.from_config(config, transport=fake_node.transport)

    return _make
