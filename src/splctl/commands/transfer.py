"""
Transfer - move whole tokens from the wallet to a recipient.

Debits the wallet's associated token account and credits the
recipient's, creating it if needed.
"""

from __future__ import annotations

from typing import Optional

import click

from ..config import Settings
from ..chain.token import transfer_tokens
from ..chain.accounts import get_associated_token_address
from ..wallet.keypair import parse_pubkey
from .common import echo_field, echo_transaction, fail, load_wallet, missing_arguments, pass_settings


@click.command()
@click.argument("mint_address", required=False)
@click.argument("recipient", required=False)
@click.argument("amount", required=False, type=int)
@pass_settings
def transfer(
    settings: Settings,
    mint_address: Optional[str],
    recipient: Optional[str],
    amount: Optional[int],
) -> None:
    """Transfer AMOUNT tokens of MINT_ADDRESS to RECIPIENT."""
    if not mint_address or not recipient or amount is None:
        missing_arguments("transfer <mint_address> <recipient> <amount>")
        return

    try:
        mint_key = parse_pubkey(mint_address, "mint address")
        recipient_key = parse_pubkey(recipient, "recipient")
        wallet = load_wallet(settings)

        click.echo(f"=== Transfer {amount} tokens ===")
        click.echo()
        echo_field("Mint:", mint_key)
        echo_field("From:", get_associated_token_address(mint_key, wallet.pubkey()))
        echo_field("To:", get_associated_token_address(mint_key, recipient_key))

        result = transfer_tokens(settings, wallet, mint_key, recipient_key, amount)
    except Exception as exc:
        fail(exc, "transfer tokens")

    click.echo()
    click.secho("  Tokens transferred successfully!", fg="green", bold=True)
    echo_transaction(result.signature, settings)
    click.echo()
