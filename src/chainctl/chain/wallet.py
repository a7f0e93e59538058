"""
Wallet - a private key bound to an RPC connection.

Uses eth-account for signing and the httpx-based RpcClient for nonce,
gas and submission. Transactions are legacy (gasPrice) transactions using
whatever price the node reports.
"""

from __future__ import annotations

from typing import Any, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import ConfigError, TransactionFailedError, ValidationError
from .abi import to_checksum_address
from .rpc import RpcClient, hex_to_int


class PendingTransaction:
    """A broadcast transaction whose inclusion has not been observed yet."""

    def __init__(self, tx_hash: str, rpc: RpcClient) -> None:
        self.hash = tx_hash
        self._rpc = rpc

    def wait(self, timeout: int = 120, poll_interval: float = 2.0) -> dict:
        """
        Block until the transaction is mined.

        Returns:
            Transaction receipt dict

        Raises:
            NetworkError: If no receipt shows up within ``timeout``
            TransactionFailedError: If the receipt reports a revert
        """
        receipt = self._rpc.wait_for_receipt(self.hash, timeout=timeout, poll_interval=poll_interval)
        status = receipt.get("status")
        if status is not None and hex_to_int(status) == 0:
            raise TransactionFailedError(f"Transaction {self.hash} reverted", tx_hash=self.hash)
        return receipt

    def __repr__(self) -> str:
        return f"PendingTransaction({self.hash})"


class Wallet:
    """Signing-capable connection. The key is only parsed on first use."""

    def __init__(
        self,
        private_key: str,
        rpc: RpcClient,
        chain_id: Optional[int] = None,
    ) -> None:
        self._private_key = private_key
        self.rpc = rpc
        self._chain_id = chain_id
        self._account: Optional[LocalAccount] = None

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            try:
                self._account = Account.from_key(self._private_key)
            except ValueError as exc:
                raise ConfigError(f"Invalid PRIVATE_KEY: {exc}") from None
        return self._account

    @property
    def address(self) -> str:
        """0x-prefixed checksummed Ethereum address."""
        return self.account.address

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.rpc.get_chain_id()
        return self._chain_id

    def get_balance(self) -> int:
        return self.rpc.get_balance(self.address)

    def build_transaction(
        self,
        to: Optional[str] = None,
        value: int = 0,
        data: str = "0x",
        gas: Optional[int] = None,
    ) -> dict:
        """
        Build an unsigned legacy transaction.

        Args:
            to: Recipient or contract address (None for contract creation)
            value: ETH value in wei
            data: 0x-prefixed calldata
            gas: Gas limit (default: eth_estimateGas)

        Returns:
            Unsigned transaction dict
        """
        tx: dict[str, Any] = {"value": value}
        if to is not None:
            try:
                tx["to"] = to_checksum_address(to)
            except ValueError as exc:
                raise ValidationError(str(exc)) from None
        if data and data != "0x":
            tx["data"] = data

        if gas is None:
            estimate = {"from": self.address, "value": hex(value)}
            if "to" in tx:
                estimate["to"] = tx["to"]
            if "data" in tx:
                estimate["data"] = tx["data"]
            gas = self.rpc.estimate_gas(estimate)

        tx.update(
            {
                "nonce": self.rpc.get_nonce(self.address),
                "gas": gas,
                "gasPrice": self.rpc.get_gas_price(),
                "chainId": self.chain_id,
            }
        )
        return tx

    def send_transaction(self, tx: dict) -> PendingTransaction:
        """Sign a transaction and broadcast it; does not wait for a receipt."""
        try:
            signed = self.account.sign_transaction(tx)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Cannot sign transaction: {exc}") from None

        raw_tx = "0x" + bytes(signed.raw_transaction).hex()
        tx_hash = self.rpc.send_raw_transaction(raw_tx)
        return PendingTransaction(tx_hash, self.rpc)

    def transfer(self, to: str, value: int) -> PendingTransaction:
        """Send ``value`` wei to ``to``."""
        return self.send_transaction(self.build_transaction(to=to, value=value))
