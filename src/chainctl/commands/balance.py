"""
Balance - show the ETH balance of the configured wallet.
"""

from __future__ import annotations

import click

from ..chain.units import format_ether
from ..console import fail, step, success
from ..context import AppContext


def fetch_balance(app: AppContext) -> int:
    """Return the wallet balance in wei. Needs a key for the address only."""
    wallet = app.require_wallet()
    step("Fetching balance...")
    return wallet.get_balance()


@click.command()
@click.pass_obj
def balance(app: AppContext) -> None:
    """Check wallet balance."""
    try:
        wei = fetch_balance(app)
    except Exception as exc:
        fail("Failed to fetch balance.", exc)

    success(f"Balance: {format_ether(wei)} ETH")
