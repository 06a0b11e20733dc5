"""
Token operations against the transfer_tokens program.

Each operation builds one instruction from the IDL, sends it and waits
for confirmation. Amounts are whole tokens; the program scales them by
the mint's decimals on-chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..config import Settings
from ..errors import RpcError
from ..utils import check_u64, lamports_to_sol, ui_amount
from .accounts import get_associated_token_address
from .idl import load_idl
from .rpc import get_balance, get_token_account_balance
from .tx import send_program_tx

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateTokenResult:
    mint: Pubkey
    signature: str


@dataclass(frozen=True)
class MintTokenResult:
    token_account: Pubkey
    signature: str


@dataclass(frozen=True)
class TransferResult:
    sender_token_account: Pubkey
    recipient_token_account: Pubkey
    signature: str


def _idl(settings: Settings) -> dict[str, Any]:
    return load_idl(settings.idl_path)


def create_token(
    settings: Settings,
    payer: Keypair,
    name: str,
    symbol: str,
    uri: str,
    mint: Optional[Keypair] = None,
) -> CreateTokenResult:
    """
    Create a new mint with Metaplex metadata.

    Args:
        payer: Fee payer; becomes mint and freeze authority
        name: Token name
        symbol: Token symbol
        uri: Off-chain metadata JSON URI
        mint: Keypair for the new mint (default: freshly generated)
    """
    mint = mint or Keypair()
    LOGGER.info("Creating token %s (%s) at mint %s", name, symbol, mint.pubkey())

    result = send_program_tx(
        settings,
        _idl(settings),
        "create_token",
        [name, symbol, uri],
        {"payer": payer.pubkey(), "mint_account": mint.pubkey()},
        payer,
        signers=[mint],
    )
    return CreateTokenResult(mint=mint.pubkey(), signature=result["signature"])


def mint_token(
    settings: Settings,
    authority: Keypair,
    mint: Pubkey,
    recipient: Pubkey,
    amount: int,
) -> MintTokenResult:
    """
    Mint ``amount`` whole tokens to the recipient's associated token account.

    The token account is created by the program if it does not exist.
    """
    check_u64(amount)
    token_account = get_associated_token_address(mint, recipient)
    LOGGER.info("Minting %s tokens of %s to %s", amount, mint, token_account)

    result = send_program_tx(
        settings,
        _idl(settings),
        "mint_token",
        [amount],
        {
            "mint_authority": authority.pubkey(),
            "recipient": recipient,
            "mint_account": mint,
        },
        authority,
    )
    return MintTokenResult(token_account=token_account, signature=result["signature"])


def transfer_tokens(
    settings: Settings,
    sender: Keypair,
    mint: Pubkey,
    recipient: Pubkey,
    amount: int,
) -> TransferResult:
    """Transfer ``amount`` whole tokens from the sender's to the recipient's ATA."""
    check_u64(amount)
    sender_account = get_associated_token_address(mint, sender.pubkey())
    recipient_account = get_associated_token_address(mint, recipient)
    LOGGER.info(
        "Transferring %s tokens of %s from %s to %s",
        amount,
        mint,
        sender_account,
        recipient_account,
    )

    result = send_program_tx(
        settings,
        _idl(settings),
        "transfer_tokens",
        [amount],
        {
            "sender": sender.pubkey(),
            "recipient": recipient,
            "mint_account": mint,
        },
        sender,
    )
    return TransferResult(
        sender_token_account=sender_account,
        recipient_token_account=recipient_account,
        signature=result["signature"],
    )


def get_token_balance(settings: Settings, mint: Pubkey, owner: Pubkey) -> Decimal:
    """
    Token balance of ``owner`` for ``mint``, in UI units.

    Returns 0 when the associated token account does not exist.
    """
    token_account = get_associated_token_address(mint, owner)
    try:
        value = get_token_account_balance(
            settings.rpc_url,
            token_account,
            commitment=settings.commitment,
            timeout=settings.rpc_timeout,
        )
    except RpcError as exc:
        LOGGER.debug("No balance for %s: %s", token_account, exc)
        return Decimal(0)
    return ui_amount(value["amount"], int(value["decimals"]))


def get_sol_balance(settings: Settings, address: Pubkey) -> Decimal:
    """Native balance in SOL."""
    lamports = get_balance(
        settings.rpc_url,
        address,
        commitment=settings.commitment,
        timeout=settings.rpc_timeout,
    )
    return lamports_to_sol(lamports)
