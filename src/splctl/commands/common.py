"""Helpers shared by the command modules."""

from __future__ import annotations

import logging
import sys
from typing import NoReturn, Optional

import click
from solders.keypair import Keypair

from ..config import Settings
from ..errors import RpcError
from ..utils import explorer_tx_url
from ..wallet.keypair import load_keypair

LOGGER = logging.getLogger(__name__)

pass_settings = click.make_pass_decorator(Settings)


def missing_arguments(usage: str) -> None:
    """Report missing positional arguments. Not treated as a failure."""
    click.secho(f"Missing arguments: {usage}", fg="red", err=True)


def fail(exc: BaseException, action: Optional[str] = None) -> NoReturn:
    """Print an error (plus program logs, if any) and exit non-zero."""
    if action:
        click.secho(f"Failed to {action}.", fg="red", err=True)
    click.secho(f"Error: {exc}", fg="red", err=True)
    if isinstance(exc, RpcError) and exc.logs:
        click.echo(click.style("  Program logs:", dim=True), err=True)
        for line in exc.logs:
            click.echo(click.style(f"    {line}", dim=True), err=True)
    LOGGER.debug("Command failed", exc_info=exc)
    sys.exit(getattr(exc, "exit_code", 1))


def load_wallet(settings: Settings) -> Keypair:
    return load_keypair(settings.keypair_path)


def echo_field(label: str, value: object) -> None:
    click.echo(click.style(f"  {label:<10}", dim=True) + str(value))


def echo_transaction(signature: str, settings: Settings) -> None:
    echo_field("TX:", signature)
    echo_field("Explorer:", explorer_tx_url(signature, settings.cluster, settings.rpc_url))
