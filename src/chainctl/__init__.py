__all__ = [
    # Configuration
    "AppConfig",
    "ConnectionConfig",
    "load_config",
    "AppContext",
    # Chain access
    "RpcClient",
    "Wallet",
    "PendingTransaction",
    "Contract",
    "CallResult",
    "format_ether",
    "parse_ether",
    # Tooling
    "Forge",
    "DeploymentResult",
    "TransactionLog",
    # Errors
    "ChainctlError",
    "ConfigError",
    "ValidationError",
    "FunctionNotFoundError",
    "ArgumentError",
    "NetworkError",
    "RpcError",
    "TransactionFailedError",
    "SubprocessError",
]

from .config import AppConfig, ConnectionConfig, load_config
from .context import AppContext
from .chain.rpc import RpcClient
from .chain.wallet import PendingTransaction, Wallet
from .chain.contract import CallResult, Contract
from .chain.units import format_ether, parse_ether
from .forge import DeploymentResult, Forge
from .txlog import TransactionLog
from .errors import (
    ArgumentError,
    ChainctlError,
    ConfigError,
    FunctionNotFoundError,
    NetworkError,
    RpcError,
    SubprocessError,
    TransactionFailedError,
    ValidationError,
)
