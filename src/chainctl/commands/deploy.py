"""
Deploy - deploy a Solidity contract with `forge create`.

Flow:
1. Inspect the contract ABI (`forge inspect <path>:<name> abi`)
2. If the constructor takes inputs, require --constructor-args
3. Run `forge create ... --broadcast`
4. Record the deployment in the transaction log
"""

from __future__ import annotations

from typing import Sequence

import click

from ..chain.abi import describe_inputs, find_constructor
from ..console import fail, step, success, warn
from ..context import AppContext
from ..errors import ValidationError
from ..forge import DeploymentResult
from ..utils import join_or_none


def deploy_contract(
    app: AppContext,
    contract_path: str,
    contract_name: str,
    constructor_args: Sequence[str] = (),
) -> DeploymentResult:
    app.require_wallet()
    private_key = app.config.connection.private_key

    step("Checking contract constructor...")
    abi = app.forge.inspect_abi(contract_path, contract_name)
    constructor = find_constructor(abi)

    args: list[str] = []
    if constructor and constructor.get("inputs"):
        if not constructor_args:
            raise ValidationError(
                "Contract requires constructor arguments. Missing constructor arguments! "
                f"Use: --constructor-args {describe_inputs(constructor)}"
            )
        args = list(constructor_args)
    elif constructor_args:
        warn(f"{contract_name} takes no constructor arguments; ignoring {' '.join(constructor_args)}")

    command = app.forge.create_command(
        app.config.connection.rpc_url,
        private_key,
        contract_path,
        contract_name,
        args,
    )
    success("Constructor check complete!")

    step("Deploying contract...")
    result = app.forge.create(command)
    success("Contract deployed successfully!")
    click.secho(result.output.rstrip(), fg="blue")
    if result.address:
        click.echo(f"  Address: {result.address}")
    if result.tx_hash:
        click.echo(f"  TX: {result.tx_hash}")

    app.txlog.record(
        f"Deployed contract: {contract_path}:{contract_name} with args: {join_or_none(args)}"
    )
    return result


@click.command()
@click.argument("contract_path")
@click.argument("contract_name")
@click.argument("values", nargs=-1)
@click.option(
    "--constructor-args",
    "with_constructor_args",
    is_flag=True,
    help="Pass the values that follow as constructor arguments (use -- before negative numbers).",
)
@click.pass_obj
def deploy(
    app: AppContext,
    contract_path: str,
    contract_name: str,
    values: tuple[str, ...],
    with_constructor_args: bool,
) -> None:
    """
    Deploy a smart contract using Forge.

    CONTRACT_PATH is the Solidity file, CONTRACT_NAME the contract inside it.
    """
    if values and not with_constructor_args:
        raise click.UsageError(
            f"Unexpected arguments: {' '.join(values)}. Pass constructor values after --constructor-args."
        )

    try:
        deploy_contract(app, contract_path, contract_name, values)
    except Exception as exc:
        fail("Deployment failed.", exc)
