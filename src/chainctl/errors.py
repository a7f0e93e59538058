"""
Error taxonomy for chainctl.

Every failure a command can report is a ``ChainctlError`` subclass tagged
with a ``kind`` and an ``exit_code`` so the CLI boundary (and tests) can
tell a missing key apart from a reverted call or a failed ``forge`` run.
"""

from __future__ import annotations

from typing import Optional


class ChainctlError(RuntimeError):
    kind: str = "error"
    exit_code: int = 1


class ConfigError(ChainctlError):
    """Missing or unusable local configuration (e.g. no private key)."""

    kind = "config"
    exit_code = 2


class ValidationError(ChainctlError):
    """Input or ABI shape rejected before the unsafe action was attempted."""

    kind = "validation"
    exit_code = 3


class FunctionNotFoundError(ValidationError):
    pass


class ArgumentError(ValidationError):
    pass


class NetworkError(ChainctlError):
    """RPC transport failure or an error returned by the node."""

    kind = "network"
    exit_code = 4


class RpcError(NetworkError):
    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code


class TransactionFailedError(NetworkError):
    def __init__(self, message: str, tx_hash: Optional[str] = None) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


class SubprocessError(ChainctlError):
    """The external build tool could not be run or exited non-zero."""

    kind = "subprocess"
    exit_code = 5

    def __init__(
        self,
        message: str,
        output: str = "",
        returncode: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.output = output
        self.returncode = returncode
