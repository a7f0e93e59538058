"""
Forge - thin wrapper around Foundry's ``forge`` binary.

``forge inspect`` is read-only; ``forge create --broadcast`` deploys for
real. Both run synchronously with no timeout.
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .chain.abi import parse_abi_json
from .errors import SubprocessError

_DEPLOYED_TO = re.compile(r"Deployed to:\s*(0x[0-9a-fA-F]{40})")
_TX_HASH = re.compile(r"Transaction hash:\s*(0x[0-9a-fA-F]{64})")


@dataclass(frozen=True)
class DeploymentResult:
    output: str
    address: Optional[str] = None
    tx_hash: Optional[str] = None

    @classmethod
    def from_output(cls, output: str) -> "DeploymentResult":
        address = _DEPLOYED_TO.search(output)
        tx_hash = _TX_HASH.search(output)
        return cls(
            output=output,
            address=address.group(1) if address else None,
            tx_hash=tx_hash.group(1) if tx_hash else None,
        )


class Forge:
    def __init__(self, binary: str = "forge", cwd: Optional[Path] = None) -> None:
        self.binary = binary
        self.cwd = cwd

    def _run(self, args: list[str], combine_output: bool) -> str:
        try:
            result = subprocess.run(
                args,
                cwd=self.cwd,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if combine_output else subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError:
            raise SubprocessError(
                f"{self.binary} not found. Install Foundry or set FORGE_BIN."
            ) from None
        except subprocess.CalledProcessError as exc:
            output = (exc.stdout or "") + (exc.stderr or "")
            raise SubprocessError(
                f"{args[0]} {args[1]} exited with status {exc.returncode}",
                output=output,
                returncode=exc.returncode,
            ) from None
        return result.stdout

    def inspect_abi(self, contract_path: str, contract_name: str) -> list[dict]:
        """
        Fetch a contract's ABI via ``forge inspect <path>:<name> abi``.

        Raises:
            SubprocessError: If forge fails
            ValidationError: If the output is not a JSON array
        """
        stdout = self._run(
            [self.binary, "inspect", f"{contract_path}:{contract_name}", "abi"],
            combine_output=False,
        )
        return parse_abi_json(stdout)

    def create_command(
        self,
        rpc_url: str,
        private_key: str,
        contract_path: str,
        contract_name: str,
        constructor_args: Sequence[str] = (),
    ) -> list[str]:
        command = [
            self.binary,
            "create",
            "--rpc-url",
            rpc_url,
            "--private-key",
            private_key,
            f"{contract_path}:{contract_name}",
            "--broadcast",
        ]
        if constructor_args:
            command += ["--constructor-args", *constructor_args]
        return command

    def create(self, command: list[str]) -> DeploymentResult:
        """Run a ``forge create`` command line and parse what it printed."""
        return DeploymentResult.from_output(self._run(command, combine_output=True))
