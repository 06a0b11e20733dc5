"""
Balance - token and native SOL balance queries.

Both default to the local wallet when no address is given.
"""

from __future__ import annotations

from typing import Optional

import click

from ..config import Settings
from ..chain.accounts import get_associated_token_address
from ..chain.token import get_sol_balance, get_token_balance
from ..utils import format_amount
from ..wallet.keypair import parse_pubkey
from .common import echo_field, fail, load_wallet, missing_arguments, pass_settings


@click.command()
@click.argument("mint_address", required=False)
@click.argument("owner", required=False)
@pass_settings
def balance(
    settings: Settings,
    mint_address: Optional[str],
    owner: Optional[str],
) -> None:
    """Show the MINT_ADDRESS balance of OWNER (default: wallet)."""
    if not mint_address:
        missing_arguments("balance <mint_address> [owner]")
        return

    try:
        mint_key = parse_pubkey(mint_address, "mint address")
        owner_key = (
            parse_pubkey(owner, "owner") if owner else load_wallet(settings).pubkey()
        )
        amount = get_token_balance(settings, mint_key, owner_key)
    except Exception as exc:
        fail(exc)

    echo_field("Owner:", owner_key)
    echo_field("Account:", get_associated_token_address(mint_key, owner_key))
    click.echo(
        click.style("  Token balance: ", dim=True)
        + click.style(format_amount(amount), fg="bright_white", bold=True)
    )


@click.command("sol-balance")
@click.argument("address", required=False)
@pass_settings
def sol_balance(settings: Settings, address: Optional[str]) -> None:
    """Show the SOL balance of ADDRESS (default: wallet)."""
    try:
        key = parse_pubkey(address) if address else load_wallet(settings).pubkey()
        amount = get_sol_balance(settings, key)
    except Exception as exc:
        fail(exc)

    echo_field("Address:", key)
    click.echo(
        click.style("  SOL balance: ", dim=True)
        + click.style(f"{format_amount(amount)} SOL", fg="bright_white", bold=True)
    )
