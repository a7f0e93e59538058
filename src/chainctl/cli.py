"""
chainctl CLI

Command-line client for Ethereum-compatible chains.

Configuration is read from the environment (or a .env file in the project
root): RPC_URL selects the node, PRIVATE_KEY enables signing.

Commands:
  balance   - Show wallet balance
  send      - Send ETH to an address
  deploy    - Deploy a contract with forge
  call      - Call a function on a deployed contract
  whoami    - Show current wallet address
  info      - Show configuration
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from .config import load_config
from .console import fail
from .context import AppContext


# ============ Constants ============

VERSION = "1.0.0"


# ============ Banner ============


def _print_banner() -> None:
    border = click.style("  ◆ ═══════════════════════════════ ◆", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo(
        click.style("        C H A I N C T L", fg="bright_white", bold=True)
        + click.style(f"   v{VERSION}", dim=True)
    )
    click.echo(border)
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="chainctl")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root holding .env, out/ and transactions.log (default: $CHAINCTL_ROOT or cwd)",
)
@click.option("--rpc-url", default=None, help="RPC endpoint (overrides $RPC_URL)")
@click.pass_context
def cli(ctx: click.Context, root: Optional[Path], rpc_url: Optional[str]) -> None:
    """chainctl: wallet and contract tooling for EVM chains."""
    if ctx.obj is None:
        try:
            ctx.obj = AppContext.from_config(load_config(root=root, rpc_url=rpc_url))
        except Exception as exc:
            fail("Invalid configuration.", exc)

    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.balance import balance
from .commands.call import call
from .commands.deploy import deploy
from .commands.send import send

cli.add_command(balance)
cli.add_command(send)
cli.add_command(deploy)
cli.add_command(call)


# ============ Identity ============


@cli.command()
@click.pass_obj
def whoami(app: AppContext) -> None:
    """Show current wallet identity."""
    try:
        address = app.require_wallet().address
    except Exception as exc:
        fail("No wallet configured.", exc)
    click.echo(f"Address: {address}")


# ============ Info ============


@cli.command()
@click.pass_obj
def info(app: AppContext) -> None:
    """Show configuration."""
    _print_banner()

    config = app.config
    if app.wallet is None:
        address = click.style("not configured", fg="yellow") + click.style(
            "  (set PRIVATE_KEY)", dim=True
        )
    else:
        try:
            address = click.style(app.wallet.address, fg="bright_white")
        except Exception as exc:
            address = click.style(f"invalid ({exc})", fg="red")

    out_dir = config.artifacts_dir
    out_text = str(out_dir) if out_dir.is_dir() else f"{out_dir} (missing, run forge build)"

    rows = [
        ("RPC URL:  ", config.connection.rpc_url),
        ("Chain ID: ", str(config.connection.chain_id or "from node")),
        ("Artifacts:", out_text),
        ("Log file: ", str(config.log_path)),
        ("Forge:    ", config.forge_bin),
    ]
    click.echo(click.style("  Address:   ", dim=True) + address)
    for label, value in rows:
        click.echo(click.style(f"  {label}  ", dim=True) + click.style(value, fg="bright_white"))
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """chainctl CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass  # Fallback: old Python or non-tty
    cli()


if __name__ == "__main__":
    main()
