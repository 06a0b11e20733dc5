"""
Keypair Management for splctl.

Handles the ed25519 keypair that pays for and signs every transaction.

Lookup order for ``load_keypair``:
1. explicit path argument (``--keypair``)
2. SOLANA_PRIVATE_KEY (base58 secret, from environment or ~/.splctl/.env)
3. SOLANA_KEYPAIR (path)
4. ~/.config/solana/id.json (Solana CLI default)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..config import DEFAULT_KEYPAIR_PATH, load_env_file
from ..errors import InvalidAddressError, KeypairError

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def generate_keypair() -> Keypair:
    """Generate a fresh random ed25519 keypair."""
    return Keypair()


def save_keypair(keypair: Keypair, path: PathLike, force: bool = False) -> Path:
    """
    Write a keypair in Solana CLI JSON format.

    Args:
        keypair: Keypair to persist
        path: Destination file
        force: Overwrite an existing file

    Returns:
        Path to the written file

    Raises:
        FileExistsError: If the file exists and force is False
    """
    path = Path(path).expanduser()
    if path.exists() and not force:
        raise FileExistsError(f"Refusing to overwrite existing keypair: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")

    # Set secure permissions on Unix
    if os.name != "nt":
        path.chmod(0o600)

    return path


def read_keypair_file(path: PathLike) -> Keypair:
    """
    Read a Solana CLI keypair file.

    Raises:
        KeypairError: If the file is missing, not JSON, or not 64 bytes
    """
    path = Path(path).expanduser()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list) or len(data) != 64:
            raise ValueError("expected a JSON array of 64 integers")
        return Keypair.from_bytes(bytes(data))
    except (OSError, ValueError, TypeError) as exc:
        raise KeypairError(f"Failed to load secret key from {path}: {exc}") from exc


def load_keypair(path: Optional[PathLike] = None) -> Keypair:
    """
    Load the signing keypair.

    Args:
        path: Explicit keypair file. If None, falls back to the
              environment and then the Solana CLI default location.

    Returns:
        solders Keypair

    Raises:
        KeypairError: If no usable key could be loaded
    """
    if path is not None:
        return read_keypair_file(path)

    load_env_file()

    secret = os.environ.get("SOLANA_PRIVATE_KEY")
    if secret:
        try:
            return Keypair.from_bytes(base58.b58decode(secret.strip()))
        except ValueError as exc:
            raise KeypairError(
                f"Failed to load secret key from SOLANA_PRIVATE_KEY: {exc}"
            ) from exc

    env_file = os.environ.get("SOLANA_KEYPAIR")
    resolved = Path(env_file).expanduser() if env_file else DEFAULT_KEYPAIR_PATH
    LOGGER.debug("Loading keypair from %s", resolved)
    return read_keypair_file(resolved)


def parse_pubkey(value: Union[str, Pubkey], label: str = "address") -> Pubkey:
    """
    Parse a base58 address.

    Raises:
        InvalidAddressError: If the value is not a valid 32-byte public key
    """
    if isinstance(value, Pubkey):
        return value
    try:
        return Pubkey.from_string(value.strip())
    except ValueError as exc:
        raise InvalidAddressError(f"Invalid {label} '{value}': {exc}") from exc
