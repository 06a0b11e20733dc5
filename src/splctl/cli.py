"""
splctl CLI

Command-line client for the transfer_tokens Anchor program on Solana.

Identity = a local ed25519 keypair (Solana CLI format).  Every command
loads the keypair, derives the accounts it needs, submits at most one
transaction and prints the result.

Commands:
  create       - Create a new token with metadata
  mint         - Mint tokens to a recipient
  transfer     - Transfer tokens to a recipient
  balance      - Token balance of an owner
  sol-balance  - SOL balance of an address
  demo         - Scripted create -> mint -> transfer -> balance
  program      - Show and validate the program interface
  keygen       - Write a new keypair file
  whoami       - Show current wallet address
  info         - Show configuration
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import CLUSTER_URLS, COMMITMENTS, Settings
from .errors import SplctlError
from .wallet.keypair import load_keypair


# ============ Banner ============


def _print_banner() -> None:
    """Print the splctl banner."""
    border = click.style("  ◆ ═══════════════════════════════════════ ◆", fg="magenta")
    click.echo()
    click.echo(border)
    click.echo()
    click.echo(
        click.style("          S P L C T L", fg="bright_white", bold=True)
        + click.style(f"          v{__version__}", dim=True)
    )
    click.secho("        ─── Solana token program client ───", fg="magenta")
    click.echo()
    click.echo(border)
    click.echo()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.WARNING,
        format="[%(levelname)s] %(name)s %(message)s",
    )
    if verbose:
        logging.getLogger("splctl").setLevel(logging.DEBUG)


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="splctl")
@click.option("--rpc-url", envvar="SOLANA_RPC_URL", default=None, help="Solana RPC endpoint")
@click.option(
    "--cluster",
    envvar="SOLANA_CLUSTER",
    type=click.Choice(sorted(CLUSTER_URLS)),
    default=None,
    help="Cluster name (default: devnet)",
)
@click.option(
    "--keypair",
    "keypair_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Keypair file (default: SOLANA_PRIVATE_KEY, SOLANA_KEYPAIR, ~/.config/solana/id.json)",
)
@click.option("--program-id", envvar="SPLCTL_PROGRAM_ID", default=None, help="Token program id")
@click.option(
    "--commitment",
    envvar="SOLANA_COMMITMENT",
    type=click.Choice(COMMITMENTS),
    default=None,
    help="Commitment level (default: confirmed)",
)
@click.option(
    "--idl",
    "idl_path",
    envvar="SPLCTL_IDL",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Program IDL JSON (default: target/idl or bundled)",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    rpc_url: Optional[str],
    cluster: Optional[str],
    keypair_path: Optional[Path],
    program_id: Optional[str],
    commitment: Optional[str],
    idl_path: Optional[Path],
    verbose: bool,
) -> None:
    """splctl: create, mint and transfer tokens via the transfer_tokens program."""
    _configure_logging(verbose)

    try:
        ctx.obj = Settings.from_env(
            rpc_url=rpc_url,
            cluster=cluster,
            keypair_path=keypair_path,
            program_id=program_id,
            commitment=commitment,
            idl_path=idl_path,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.balance import balance, sol_balance
from .commands.create import create
from .commands.demo import demo
from .commands.keygen import keygen
from .commands.mint import mint
from .commands.program import program
from .commands.transfer import transfer

cli.add_command(create)
cli.add_command(mint)
cli.add_command(transfer)
cli.add_command(balance)
cli.add_command(sol_balance)
cli.add_command(demo)
cli.add_command(program)
cli.add_command(keygen)


# ============ Identity ============


@cli.command()
@click.pass_obj
def whoami(settings: Settings) -> None:
    """Show current wallet identity."""
    try:
        keypair = load_keypair(settings.keypair_path)
    except SplctlError as exc:
        click.echo(f"No wallet found: {exc}")
        click.echo("Run 'splctl keygen' to create one.")
        sys.exit(exc.exit_code)
    click.echo(f"Address: {keypair.pubkey()}")


# ============ Info ============


@cli.command()
@click.pass_obj
def info(settings: Settings) -> None:
    """Show configuration and available commands."""
    _print_banner()

    # ── Config ──
    click.secho("  Config ─────────────────────────────────", fg="magenta")
    click.echo()

    rows = [
        ("Cluster:    ", settings.cluster),
        ("RPC URL:    ", settings.rpc_url),
        ("Program:    ", settings.program_id),
        ("Commitment: ", settings.commitment),
        ("IDL:        ", str(settings.idl_path) if settings.idl_path else "auto"),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label}", dim=True) + click.style(value, fg="bright_white"))

    try:
        keypair = load_keypair(settings.keypair_path)
        click.echo(
            click.style("  Wallet:     ", dim=True)
            + click.style(str(keypair.pubkey()), fg="bright_white")
        )
    except SplctlError:
        click.echo(
            click.style("  Wallet:     ", dim=True)
            + click.style("not found", fg="yellow")
            + click.style("  (run: splctl keygen)", dim=True)
        )

    click.echo()

    # ── Commands ──
    click.secho("  Commands ───────────────────────────────", fg="magenta")
    click.echo()

    commands = [
        ("create     ", "Create a new token with metadata"),
        ("mint       ", "Mint tokens to a recipient"),
        ("transfer   ", "Transfer tokens to a recipient"),
        ("balance    ", "Token balance of an owner"),
        ("sol-balance", "SOL balance of an address"),
        ("demo       ", "Run a complete scripted demo"),
        ("program    ", "Show and validate the program interface"),
        ("keygen     ", "Write a new keypair file"),
        ("whoami     ", "Show current wallet address"),
    ]
    for cmd, desc in commands:
        click.echo(
            click.style("  ", dim=True)
            + click.style(cmd, fg="bright_white", bold=True)
            + click.style("  ◇  ", fg="magenta")
            + click.style(desc, dim=True)
        )

    click.echo()


# ============ Entry Points ============


def main() -> None:
    """splctl CLI entry point."""
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
