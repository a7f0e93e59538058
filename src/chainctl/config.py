"""
Configuration loading.

Values come from the process environment, optionally seeded from a
``.env`` file in the project root (the directory holding ``out/`` and
``transactions.log``). Reachability of the RPC URL and the shape of the
private key are not checked here: they surface when a command first uses
them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from .errors import ConfigError

# Default RPC endpoint (Soneium mainnet)
DEFAULT_RPC_URL = "https://rpc.soneium.org"
DEFAULT_RPC_TIMEOUT = 30.0
DEFAULT_CONFIRM_TIMEOUT = 120
DEFAULT_FORGE_BIN = "forge"

LOG_FILE_NAME = "transactions.log"
ARTIFACTS_DIR_NAME = "out"


@dataclass(frozen=True)
class ConnectionConfig:
    rpc_url: str = DEFAULT_RPC_URL
    private_key: Optional[str] = None
    chain_id: Optional[int] = None
    timeout: float = DEFAULT_RPC_TIMEOUT

    @property
    def has_signer(self) -> bool:
        return bool(self.private_key)


@dataclass(frozen=True)
class AppConfig:
    connection: ConnectionConfig
    root: Path
    forge_bin: str = DEFAULT_FORGE_BIN
    confirm_timeout: int = DEFAULT_CONFIRM_TIMEOUT

    @property
    def log_path(self) -> Path:
        return self.root / LOG_FILE_NAME

    @property
    def artifacts_dir(self) -> Path:
        return self.root / ARTIFACTS_DIR_NAME


def normalize_private_key(value: Optional[str]) -> Optional[str]:
    """Strip whitespace and ensure a 0x prefix; empty values become None."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not value.startswith("0x"):
        value = "0x" + value
    return value


def _env_number(name: str, default: Any, cast: Callable[[str], Any] = float) -> Any:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def load_config(
    root: Optional[Path] = None,
    rpc_url: Optional[str] = None,
) -> AppConfig:
    """
    Build the application configuration.

    Args:
        root: Project root (default: $CHAINCTL_ROOT or the current directory)
        rpc_url: Explicit RPC URL, overriding $RPC_URL

    Returns:
        Frozen AppConfig

    Raises:
        ConfigError: If a numeric setting cannot be parsed
    """
    if root is None:
        root = Path(os.environ.get("CHAINCTL_ROOT") or Path.cwd())
    root = Path(root).expanduser().resolve()

    env_path = root / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)

    connection = ConnectionConfig(
        rpc_url=rpc_url or os.environ.get("RPC_URL") or DEFAULT_RPC_URL,
        private_key=normalize_private_key(os.environ.get("PRIVATE_KEY", "")),
        chain_id=_env_number("CHAIN_ID", None, cast=lambda v: int(v, 0)),
        timeout=_env_number("RPC_TIMEOUT", DEFAULT_RPC_TIMEOUT),
    )

    return AppConfig(
        connection=connection,
        root=root,
        forge_bin=os.environ.get("FORGE_BIN") or DEFAULT_FORGE_BIN,
        confirm_timeout=_env_number("CONFIRM_TIMEOUT", DEFAULT_CONFIRM_TIMEOUT, cast=int),
    )
