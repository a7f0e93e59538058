"""
Contract binding - call functions on a deployed contract.

The function is resolved against the ABI before anything touches the
network. ``view``/``pure`` functions run through ``eth_call``; anything
else is signed by the wallet and broadcast.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from ..errors import ConfigError, ValidationError
from .abi import (
    coerce_args,
    decode_result,
    encode_call,
    find_function,
    is_read_only,
    render_value,
    to_checksum_address,
)
from .rpc import RpcClient
from .wallet import PendingTransaction, Wallet


@dataclass
class CallResult:
    function: str
    read_only: bool
    value: Any = None
    pending: Optional[PendingTransaction] = None

    def render(self) -> str:
        if self.pending is not None:
            return self.pending.hash
        return render_value(self.value)


class Contract:
    def __init__(
        self,
        address: str,
        abi: Sequence[dict],
        runner: Union[Wallet, RpcClient],
    ) -> None:
        try:
            self.address = to_checksum_address(address)
        except ValueError as exc:
            raise ValidationError(str(exc)) from None
        self.abi = list(abi)
        if isinstance(runner, Wallet):
            self.wallet: Optional[Wallet] = runner
            self.rpc = runner.rpc
        else:
            self.wallet = None
            self.rpc = runner

    def get_function(self, name: str, arg_count: Optional[int] = None) -> dict:
        return find_function(self.abi, name, arg_count)

    def read(self, entry: dict, args: Sequence[Any]) -> Any:
        """Run a function with eth_call and decode its outputs."""
        tx = {"to": self.address, "data": encode_call(entry, args)}
        if self.wallet is not None:
            tx["from"] = self.wallet.address

        data = self.rpc.call(tx)
        if data in ("0x", "") and entry.get("outputs"):
            raise ValidationError(
                f"{entry['name']} returned no data; is {self.address} a contract?"
            )
        return decode_result(entry, data)

    def transact(self, entry: dict, args: Sequence[Any], value: int = 0) -> PendingTransaction:
        """Sign and broadcast a state-changing call."""
        if self.wallet is None:
            raise ConfigError(
                f"Private key not found! {entry['name']} changes state and needs a signing key."
            )
        calldata = encode_call(entry, args)
        tx = self.wallet.build_transaction(to=self.address, value=value, data=calldata)
        return self.wallet.send_transaction(tx)

    def invoke(self, name: str, raw_args: Sequence[Any], value: int = 0) -> CallResult:
        """
        Call ``name`` with positional command-line arguments.

        Args:
            name: Function name
            raw_args: Argument strings, coerced to the declared input types
            value: Wei to send along (state-changing calls only)

        Returns:
            CallResult holding the decoded value, or the pending transaction
        """
        entry = self.get_function(name, len(raw_args))
        args = coerce_args(entry, raw_args)

        if is_read_only(entry):
            return CallResult(function=name, read_only=True, value=self.read(entry, args))

        pending = self.transact(entry, args, value=value)
        return CallResult(function=name, read_only=False, pending=pending)
