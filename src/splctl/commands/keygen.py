"""Keygen - write a new keypair in Solana CLI format."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..config import DEFAULT_KEYPAIR_PATH, Settings
from ..utils import explorer_address_url
from ..wallet.keypair import generate_keypair, save_keypair
from .common import echo_field, fail, pass_settings


@click.command()
@click.option(
    "--outfile",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Keypair file (default: --keypair, else ~/.config/solana/id.json)",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@pass_settings
def keygen(settings: Settings, outfile: Optional[Path], force: bool) -> None:
    """Generate a new keypair file."""
    target = outfile or settings.keypair_path or DEFAULT_KEYPAIR_PATH
    keypair = generate_keypair()
    try:
        path = save_keypair(keypair, target, force=force)
    except Exception as exc:
        fail(exc, "write keypair")

    click.secho("  Keypair written", fg="green", bold=True)
    echo_field("File:", path)
    echo_field("Address:", keypair.pubkey())
    echo_field(
        "Explorer:",
        explorer_address_url(str(keypair.pubkey()), settings.cluster, settings.rpc_url),
    )
    if settings.cluster in ("devnet", "testnet"):
        click.echo(
            click.style("  Fund it with: ", dim=True)
            + f"solana airdrop 1 {keypair.pubkey()} -u {settings.cluster}"
        )
