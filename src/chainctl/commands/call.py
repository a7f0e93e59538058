"""
Call - invoke a function on a deployed contract.

The ABI comes from, in order of preference:
1. --abi PATH (a Foundry artifact or any JSON object with an ``abi`` key)
2. --abi-name NAME, resolved to out/NAME.sol/NAME.json
3. The first artifact found under out/ (warns, since it ignores the contract)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import click

from ..chain.abi import (
    artifact_path,
    discover_abi_file,
    load_artifact_abi,
    require_artifacts_dir,
)
from ..chain.contract import CallResult, Contract
from ..chain.units import parse_ether
from ..console import fail, step, success, warn
from ..context import AppContext
from ..errors import ValidationError
from ..utils import join_or_none


def resolve_abi_file(
    app: AppContext,
    abi_file: Optional[Path] = None,
    abi_name: Optional[str] = None,
) -> Path:
    if abi_file is not None:
        return abi_file

    out_dir = require_artifacts_dir(app.config.artifacts_dir)
    if abi_name:
        return artifact_path(out_dir, abi_name)

    detected = discover_abi_file(out_dir)
    if detected is None:
        raise ValidationError(
            "No ABI file found! Please provide the correct ABI file path with --abi."
        )
    warn(f"Auto-detected ABI: {detected} (pass --abi or --abi-name to choose another contract)")
    return detected


def call_function(
    app: AppContext,
    contract_address: str,
    function_name: str,
    args: Sequence[str] = (),
    abi_file: Optional[Path] = None,
    abi_name: Optional[str] = None,
    value: Optional[str] = None,
) -> CallResult:
    abi = load_artifact_abi(resolve_abi_file(app, abi_file, abi_name))
    contract = Contract(contract_address, abi, app.runner)
    wei = parse_ether(value) if value else 0

    step(f"Calling function {function_name}...")
    result = contract.invoke(function_name, list(args), value=wei)
    if wei and result.read_only:
        warn(f"{function_name} is read-only; ignoring --value {value}")
    message = f"Called {function_name} on {contract_address} with args {join_or_none(args)}"

    if result.pending is not None:
        click.echo(f"  TX: {result.pending.hash}")
        app.txlog.record(message)
        result.pending.wait(timeout=app.config.confirm_timeout)
        success("Function executed successfully!")
    else:
        success("Function executed successfully!")
        app.txlog.record(message)

    click.secho(f"\nResult: {result.render()}\n", fg="green")
    return result


@click.command()
@click.argument("contract_address")
@click.argument("function_name")
@click.argument("args", nargs=-1)
@click.option(
    "--abi",
    "abi_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="ABI file (JSON object with an 'abi' key)",
)
@click.option("--abi-name", default=None, help="Contract name for ABI loading from out/")
@click.option("--value", default=None, help="ETH to send with a payable function")
@click.pass_obj
def call(
    app: AppContext,
    contract_address: str,
    function_name: str,
    args: tuple[str, ...],
    abi_file: Optional[Path],
    abi_name: Optional[str],
    value: Optional[str],
) -> None:
    """
    Call a function on an existing contract.

    ARGS are matched to the function's parameters by position.
    """
    try:
        call_function(
            app,
            contract_address,
            function_name,
            args,
            abi_file=abi_file,
            abi_name=abi_name,
            value=value,
        )
    except Exception as exc:
        fail("Error calling contract function!", exc)
