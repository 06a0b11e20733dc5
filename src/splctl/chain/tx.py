"""
Transaction Builder - Build, sign, and send program transactions.

Uses solders for instruction/transaction encoding and signing, and the
httpx-based JSON-RPC client for sending. The payer signs and pays fees.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from ..config import Settings
from ..utils import snake_case
from .accounts import resolve_accounts
from .borsh import encode_args
from .idl import get_instruction, instruction_discriminator
from .rpc import get_latest_blockhash, send_raw_transaction, wait_for_confirmation

LOGGER = logging.getLogger(__name__)


def build_instruction(
    idl: dict[str, Any],
    name: str,
    args: Union[Sequence[Any], Mapping[str, Any]],
    accounts: Mapping[str, Pubkey],
    program_id: Pubkey,
) -> Instruction:
    """
    Build a program instruction from its IDL definition.

    Args:
        idl: Program IDL
        name: Instruction name (snake_case or camelCase)
        args: Instruction arguments, positional or by name
        accounts: Accounts the caller must supply; the rest are derived
        program_id: Program to invoke

    Returns:
        solders Instruction
    """
    ix_def = get_instruction(idl, name)
    arg_defs = ix_def.get("args", [])

    if isinstance(args, Mapping):
        named_args = dict(args)
    else:
        named_args = {snake_case(a["name"]): v for a, v in zip(arg_defs, args)}

    data = instruction_discriminator(ix_def) + encode_args(arg_defs, args)
    metas = resolve_accounts(ix_def, accounts, program_id, named_args)
    return Instruction(program_id, data, metas)


def sign_and_send(
    settings: Settings,
    instructions: Sequence[Instruction],
    payer: Keypair,
    signers: Sequence[Keypair] = (),
    wait: bool = True,
) -> dict[str, Any]:
    """
    Sign a transaction and send it.

    Args:
        settings: RPC endpoint, commitment and timeouts
        instructions: Instructions to include, in order
        payer: Fee payer (always signs)
        signers: Additional required signers (e.g. a new mint keypair)
        wait: Whether to wait for confirmation

    Returns:
        Dict with signature and, when waiting, the final status
    """
    blockhash = get_latest_blockhash(
        settings.rpc_url, settings.commitment, timeout=settings.rpc_timeout
    )

    keypairs = [payer, *[s for s in signers if s.pubkey() != payer.pubkey()]]
    tx = Transaction.new_signed_with_payer(
        list(instructions), payer.pubkey(), keypairs, blockhash
    )

    signature = send_raw_transaction(
        settings.rpc_url,
        bytes(tx),
        commitment=settings.commitment,
        timeout=settings.rpc_timeout,
    )
    LOGGER.info("Sent transaction %s", signature)
    result: dict[str, Any] = {"signature": signature}

    if wait:
        status = wait_for_confirmation(
            settings.rpc_url,
            signature,
            commitment=settings.commitment,
            timeout=settings.confirm_timeout,
            poll_interval=settings.poll_interval,
            rpc_timeout=settings.rpc_timeout,
        )
        result["status"] = status
        result["slot"] = status.get("slot")

    return result


def send_program_tx(
    settings: Settings,
    idl: dict[str, Any],
    name: str,
    args: Union[Sequence[Any], Mapping[str, Any]],
    accounts: Mapping[str, Pubkey],
    payer: Keypair,
    signers: Sequence[Keypair] = (),
    wait: bool = True,
) -> dict[str, Any]:
    """
    Build, sign, and send a single program instruction.

    Convenience function combining build_instruction + sign_and_send.

    Returns:
        Dict with signature, status, slot
    """
    program_id = Pubkey.from_string(settings.program_id)
    ix = build_instruction(idl, name, args, accounts, program_id)
    LOGGER.info("Invoking %s on program %s", name, program_id)
    return sign_and_send(settings, [ix], payer, signers=signers, wait=wait)
