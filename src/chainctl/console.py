"""Console output helpers shared by the commands."""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from .errors import ChainctlError, SubprocessError


def step(message: str) -> None:
    click.secho(message, fg="cyan")


def success(message: str) -> None:
    click.secho(message, fg="green")


def warn(message: str) -> None:
    click.secho(message, fg="yellow", err=True)


def fail(headline: str, exc: BaseException) -> NoReturn:
    """Report a command failure on stderr and exit.

    ``ChainctlError`` exits with its own code and is prefixed by its kind;
    anything else is reported as unexpected and exits with 1.
    """
    click.secho(headline, fg="red", err=True)
    if isinstance(exc, ChainctlError):
        click.secho(f"{exc.kind.capitalize()} error: {exc}", fg="red", err=True)
        if isinstance(exc, SubprocessError) and exc.output:
            click.echo(exc.output.rstrip(), err=True)
        sys.exit(exc.exit_code)

    click.secho(f"Unexpected error: {exc}", fg="red", err=True)
    sys.exit(1)
