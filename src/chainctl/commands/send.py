"""
Send - transfer ETH from the configured wallet.

Flow:
1. Convert the decimal amount to wei (truncating past 18 decimals)
2. Sign and broadcast a value transfer
3. Record the hash in the transaction log before waiting
4. Wait for the receipt
"""

from __future__ import annotations

import click

from ..chain.units import parse_ether
from ..chain.wallet import PendingTransaction
from ..console import fail, step, success
from ..context import AppContext


def send_value(app: AppContext, to: str, amount: str) -> PendingTransaction:
    wallet = app.require_wallet()
    value = parse_ether(amount)

    step("Sending transaction...")
    pending = wallet.transfer(to, value)
    success(f"Transaction sent! Hash: {pending.hash}")
    app.txlog.record(f"Sent {amount} ETH to {to} - Hash: {pending.hash}")

    pending.wait(timeout=app.config.confirm_timeout)
    success("Transaction confirmed!")
    return pending


@click.command()
@click.argument("to")
@click.argument("amount")
@click.pass_obj
def send(app: AppContext, to: str, amount: str) -> None:
    """
    Send ETH to another address.

    TO is the recipient address, AMOUNT the ETH amount as a decimal string.
    """
    try:
        send_value(app, to, amount)
    except Exception as exc:
        fail("Transaction failed.", exc)
