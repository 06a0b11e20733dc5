"""
Create - create a new SPL token with Metaplex metadata.

A fresh mint keypair is generated locally and co-signs the transaction.
The wallet pays, and becomes mint and freeze authority.
"""

from __future__ import annotations

from typing import Optional

import click

from ..config import Settings
from ..chain.token import create_token
from .common import echo_field, echo_transaction, fail, load_wallet, missing_arguments, pass_settings


@click.command()
@click.argument("name", required=False)
@click.argument("symbol", required=False)
@click.argument("uri", required=False)
@pass_settings
def create(
    settings: Settings,
    name: Optional[str],
    symbol: Optional[str],
    uri: Optional[str],
) -> None:
    """Create a new token with NAME, SYMBOL and metadata URI.

    \b
    Example:
      splctl create "My Token" MTK https://example.com/metadata.json
    """
    if not name or not symbol or not uri:
        missing_arguments("create <name> <symbol> <uri>")
        return

    try:
        wallet = load_wallet(settings)
        click.echo(f"=== Create Token: {name} ({symbol}) ===")
        click.echo()
        echo_field("Payer:", wallet.pubkey())
        echo_field("URI:", uri)

        result = create_token(settings, wallet, name, symbol, uri)
    except Exception as exc:
        fail(exc, "create token")

    echo_field("Mint:", result.mint)
    click.echo()
    click.secho("  Token created successfully!", fg="green", bold=True)
    echo_transaction(result.signature, settings)
    click.echo()
