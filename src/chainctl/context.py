"""
Application context built once per invocation and handed to every command.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import httpx

from .chain.rpc import RpcClient
from .chain.wallet import Wallet
from .config import AppConfig
from .errors import ConfigError
from .forge import Forge
from .txlog import TransactionLog


@dataclass
class AppContext:
    config: AppConfig
    rpc: RpcClient
    wallet: Optional[Wallet]
    txlog: TransactionLog
    forge: Forge

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "AppContext":
        conn = config.connection
        rpc = RpcClient(conn.rpc_url, timeout=conn.timeout, transport=transport)
        wallet = (
            Wallet(conn.private_key, rpc, chain_id=conn.chain_id)
            if conn.private_key
            else None
        )
        return cls(
            config=config,
            rpc=rpc,
            wallet=wallet,
            txlog=TransactionLog(config.log_path),
            forge=Forge(config.forge_bin, cwd=config.root),
        )

    def require_wallet(self) -> Wallet:
        if self.wallet is None:
            raise ConfigError("Private key not found! Please set PRIVATE_KEY in .env.")
        return self.wallet

    @property
    def runner(self) -> Union[Wallet, RpcClient]:
        return self.wallet if self.wallet is not None else self.rpc
