"""
Mint - mint whole tokens to a recipient.

The wallet must be the mint authority. The recipient's associated token
account is created on demand by the program.
"""

from __future__ import annotations

from typing import Optional

import click

from ..config import Settings
from ..chain.token import mint_token
from ..wallet.keypair import parse_pubkey
from .common import echo_field, echo_transaction, fail, load_wallet, missing_arguments, pass_settings


@click.command()
@click.argument("mint_address", required=False)
@click.argument("recipient", required=False)
@click.argument("amount", required=False, type=int)
@pass_settings
def mint(
    settings: Settings,
    mint_address: Optional[str],
    recipient: Optional[str],
    amount: Optional[int],
) -> None:
    """Mint AMOUNT tokens of MINT_ADDRESS to RECIPIENT."""
    if not mint_address or not recipient or amount is None:
        missing_arguments("mint <mint_address> <recipient> <amount>")
        return

    try:
        mint_key = parse_pubkey(mint_address, "mint address")
        recipient_key = parse_pubkey(recipient, "recipient")
        wallet = load_wallet(settings)

        click.echo(f"=== Mint {amount} tokens ===")
        click.echo()
        echo_field("Mint:", mint_key)
        echo_field("To:", recipient_key)
        echo_field("Authority:", wallet.pubkey())

        result = mint_token(settings, wallet, mint_key, recipient_key, amount)
    except Exception as exc:
        fail(exc, "mint tokens")

    echo_field("Account:", result.token_account)
    click.echo()
    click.secho("  Tokens minted successfully!", fg="green", bold=True)
    echo_transaction(result.signature, settings)
    click.echo()
