"""
Program - show and validate the on-chain program interface.

Checks that the loaded IDL exposes every instruction this client calls.
With --check-chain it also confirms the program account exists and is
executable on the configured cluster.
"""

from __future__ import annotations

import sys

import click
from solders.pubkey import Pubkey

from ..config import Settings
from ..chain.idl import get_instruction, instruction_names, load_idl, program_address
from ..chain.rpc import get_account_info
from ..utils import explorer_address_url
from .common import echo_field, fail, pass_settings

REQUIRED_INSTRUCTIONS = ("create_token", "mint_token", "transfer_tokens")


def _describe(ix: dict) -> str:
    args = ", ".join(f"{a['name']}: {a['type']}" for a in ix.get("args", []))
    return f"{ix['name']}({args})"


@click.command()
@click.option("--check-chain", is_flag=True, help="Also verify the program is deployed")
@pass_settings
def program(settings: Settings, check_chain: bool) -> None:
    """Show the program id and validate the IDL interface."""
    try:
        idl = load_idl(settings.idl_path)
    except Exception as exc:
        fail(exc, "load IDL")

    click.echo("=== Program Interface ===")
    click.echo()
    echo_field("Program:", settings.program_id)
    declared = program_address(idl)
    if declared and declared != settings.program_id:
        click.secho(
            f"  Warning: IDL declares program {declared}", fg="yellow"
        )
    echo_field(
        "Explorer:",
        explorer_address_url(settings.program_id, settings.cluster, settings.rpc_url),
    )
    click.echo()

    names = instruction_names(idl)
    missing = [name for name in REQUIRED_INSTRUCTIONS if name not in names]
    for name in names:
        ix = get_instruction(idl, name)
        marker = click.style("✓", fg="green") if name in REQUIRED_INSTRUCTIONS else "·"
        click.echo(f"  {marker} {_describe(ix)}")
    for name in missing:
        click.echo(f"  {click.style('✗', fg='red')} {name} (missing)")

    if check_chain:
        click.echo()
        try:
            info = get_account_info(
                settings.rpc_url,
                Pubkey.from_string(settings.program_id),
                commitment=settings.commitment,
                timeout=settings.rpc_timeout,
            )
        except Exception as exc:
            fail(exc, "query program account")
        if info is None:
            click.secho("  Program account not found on cluster", fg="red")
            sys.exit(1)
        if not info.get("executable"):
            click.secho("  Account exists but is not executable", fg="red")
            sys.exit(1)
        click.secho(f"  Deployed (owner {info.get('owner')})", fg="green")

    if missing:
        click.echo()
        click.secho(
            f"  IDL is missing instructions: {', '.join(missing)}", fg="red"
        )
        sys.exit(1)
