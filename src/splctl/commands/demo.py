"""
Demo - scripted end-to-end run against the configured cluster.

Flow:
1. Create a token (Demo Token / DEMO)
2. Wait, then mint 1000 tokens to the wallet
3. Wait, then transfer 100 tokens to a freshly generated recipient
4. Print both final balances
"""

from __future__ import annotations

import time

import click
from solders.keypair import Keypair

from ..config import Settings
from ..chain.token import create_token, get_token_balance, mint_token, transfer_tokens
from ..utils import format_amount
from .common import echo_field, echo_transaction, fail, load_wallet, pass_settings

DEMO_NAME = "Demo Token"
DEMO_SYMBOL = "DEMO"
DEMO_URI = "https://example.com/demo-token.json"
DEMO_MINT_AMOUNT = 1000
DEMO_TRANSFER_AMOUNT = 100


def _step(number: int, text: str) -> None:
    click.echo()
    click.secho(f"  [{number}/4] {text}", fg="cyan", bold=True)


@click.command()
@click.option(
    "--delay",
    default=2.0,
    type=click.FloatRange(min=0),
    show_default=True,
    help="Seconds to wait between transactions",
)
@pass_settings
def demo(settings: Settings, delay: float) -> None:
    """Run create -> mint -> transfer -> balance as one scripted sequence."""
    click.echo("=== splctl demo ===")

    try:
        wallet = load_wallet(settings)
        echo_field("Wallet:", wallet.pubkey())

        _step(1, f"Creating token {DEMO_NAME} ({DEMO_SYMBOL})")
        created = create_token(settings, wallet, DEMO_NAME, DEMO_SYMBOL, DEMO_URI)
        echo_field("Mint:", created.mint)
        echo_transaction(created.signature, settings)
        time.sleep(delay)

        _step(2, f"Minting {DEMO_MINT_AMOUNT} tokens to self")
        minted = mint_token(
            settings, wallet, created.mint, wallet.pubkey(), DEMO_MINT_AMOUNT
        )
        echo_field("Account:", minted.token_account)
        echo_transaction(minted.signature, settings)
        time.sleep(delay)

        recipient = Keypair().pubkey()
        _step(3, f"Transferring {DEMO_TRANSFER_AMOUNT} tokens")
        echo_field("Recipient:", recipient)
        sent = transfer_tokens(
            settings, wallet, created.mint, recipient, DEMO_TRANSFER_AMOUNT
        )
        echo_transaction(sent.signature, settings)

        _step(4, "Final balances")
        sender_balance = get_token_balance(settings, created.mint, wallet.pubkey())
        recipient_balance = get_token_balance(settings, created.mint, recipient)
    except Exception as exc:
        fail(exc, "run demo")

    echo_field("Sender:", f"{format_amount(sender_balance)} tokens")
    echo_field("Recipient:", f"{format_amount(recipient_balance)} tokens")
    click.echo()
    click.secho("  Demo completed successfully!", fg="green", bold=True)
