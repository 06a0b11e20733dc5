"""
Account derivation and IDL account resolution.

Well-known program ids, associated token account and Metaplex metadata
PDAs, plus the resolver that turns an IDL instruction's account list
into ordered ``AccountMeta`` entries.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from solders.instruction import AccountMeta
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.sysvar import RENT

from ..errors import IdlError
from ..utils import snake_case
from .borsh import encode_value

LOGGER = logging.getLogger(__name__)

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
TOKEN_2022_PROGRAM_ID = Pubkey.from_string("TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")
TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")

# Accounts Anchor clients fill in by name when the IDL carries no address
WELL_KNOWN_ACCOUNTS: dict[str, Pubkey] = {
    "system_program": SYSTEM_PROGRAM_ID,
    "token_program": TOKEN_PROGRAM_ID,
    "associated_token_program": ASSOCIATED_TOKEN_PROGRAM_ID,
    "token_metadata_program": TOKEN_METADATA_PROGRAM_ID,
    "rent": RENT,
}


def get_associated_token_address(
    mint: Pubkey,
    owner: Pubkey,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Deterministic token account holding ``mint`` for ``owner``."""
    address, _ = Pubkey.find_program_address(
        [bytes(owner), bytes(token_program), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return address


def get_metadata_address(mint: Pubkey) -> Pubkey:
    """Metaplex metadata PDA for a mint."""
    address, _ = Pubkey.find_program_address(
        [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)],
        TOKEN_METADATA_PROGRAM_ID,
    )
    return address


def _seed_bytes(
    seed: dict[str, Any],
    resolved: Mapping[str, Pubkey],
    args: Mapping[str, Any],
    arg_types: Mapping[str, Any],
) -> Optional[bytes]:
    """Bytes for one PDA seed, or None while its dependency is unresolved."""
    kind = seed.get("kind")
    if kind == "const":
        return bytes(seed["value"])
    if kind == "account":
        # Nested paths (``account.field``) need account data; not supported
        name = snake_case(seed["path"])
        if "." in name:
            raise IdlError(f"Unsupported PDA seed path: {seed['path']}")
        found = resolved.get(name)
        return bytes(found) if found is not None else None
    if kind == "arg":
        name = snake_case(seed["path"])
        if name not in args:
            raise IdlError(f"PDA seed refers to unknown argument '{seed['path']}'")
        type_def = arg_types.get(name, seed.get("type"))
        if type_def == "string":
            # String seeds are the raw UTF-8 bytes, without a length prefix
            return str(args[name]).encode("utf-8")
        return encode_value(type_def, args[name])
    raise IdlError(f"Unsupported PDA seed kind: {kind}")


def _derive_pda(
    pda: dict[str, Any],
    program_id: Pubkey,
    resolved: Mapping[str, Pubkey],
    args: Mapping[str, Any],
    arg_types: Mapping[str, Any],
) -> Optional[Pubkey]:
    seeds = []
    for seed in pda.get("seeds", []):
        value = _seed_bytes(seed, resolved, args, arg_types)
        if value is None:
            return None
        seeds.append(value)

    owner = program_id
    program = pda.get("program")
    if program is not None:
        value = _seed_bytes(program, resolved, args, arg_types)
        if value is None:
            return None
        owner = Pubkey.from_bytes(value)

    address, _ = Pubkey.find_program_address(seeds, owner)
    return address


def resolve_accounts(
    instruction: dict[str, Any],
    provided: Mapping[str, Pubkey],
    program_id: Pubkey,
    args: Optional[Mapping[str, Any]] = None,
) -> list[AccountMeta]:
    """
    Resolve every account an IDL instruction needs, in IDL order.

    Args:
        instruction: IDL instruction definition
        provided: Caller-supplied accounts (snake_case or camelCase keys)
        program_id: Program being invoked (default PDA owner)
        args: Instruction arguments by name, for ``arg`` PDA seeds

    Returns:
        AccountMeta list ready for an Instruction

    Raises:
        IdlError: If an account cannot be resolved
    """
    defs = instruction.get("accounts", [])
    for acc in defs:
        if "accounts" in acc:
            raise IdlError(
                f"Composite account group '{acc['name']}' is not supported"
            )

    resolved: dict[str, Pubkey] = {snake_case(k): v for k, v in provided.items()}
    arg_values = {snake_case(k): v for k, v in (args or {}).items()}
    arg_types = {snake_case(a["name"]): a["type"] for a in instruction.get("args", [])}

    # PDAs may depend on one another, so iterate until nothing changes
    progress = True
    while progress:
        progress = False
        for acc in defs:
            name = snake_case(acc["name"])
            if name in resolved:
                continue
            address: Optional[Pubkey] = None
            if "address" in acc:
                address = Pubkey.from_string(acc["address"])
            elif "pda" in acc:
                address = _derive_pda(
                    acc["pda"], program_id, resolved, arg_values, arg_types
                )
            elif name in WELL_KNOWN_ACCOUNTS:
                address = WELL_KNOWN_ACCOUNTS[name]
            elif acc.get("optional") or acc.get("isOptional"):
                # Anchor encodes an absent optional account as the program id
                address = program_id
            if address is not None:
                LOGGER.debug("Resolved account %s = %s", name, address)
                resolved[name] = address
                progress = True

    metas = []
    for acc in defs:
        name = snake_case(acc["name"])
        if name not in resolved:
            raise IdlError(
                f"Missing account '{name}' for instruction '{instruction['name']}'"
            )
        metas.append(
            AccountMeta(
                pubkey=resolved[name],
                is_signer=bool(acc.get("signer", acc.get("isSigner", False))),
                is_writable=bool(acc.get("writable", acc.get("isMut", False))),
            )
        )
    return metas
