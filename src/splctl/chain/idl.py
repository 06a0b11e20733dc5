"""
IDL Loader - Loads the Anchor program interface description.

Lookup order:
1. explicit path (``--idl`` / SPLCTL_IDL)
2. target/idl/transfer_tokens.json, searched upward from the working
   directory (``anchor build`` output)
3. the IDL bundled with this package

Both the Anchor 0.30 format and the legacy camelCase format are read.
"""

from __future__ import annotations

import hashlib
import json
import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Optional, Union

from ..errors import IdlError
from ..utils import snake_case

LOGGER = logging.getLogger(__name__)

PROGRAM_NAME = "transfer_tokens"


def _find_anchor_idl(start: Optional[Path] = None) -> Optional[Path]:
    """Search from ``start`` (default: cwd) upward for target/idl/<program>.json."""
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        candidate = parent / "target" / "idl" / f"{PROGRAM_NAME}.json"
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=8)
def _read_idl(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise IdlError(f"Failed to load IDL from {path}: {exc}") from exc


def bundled_idl() -> dict[str, Any]:
    """The IDL shipped inside the package."""
    text = (
        resources.files("splctl")
        .joinpath("data")
        .joinpath(f"{PROGRAM_NAME}.json")
        .read_text(encoding="utf-8")
    )
    return json.loads(text)


def load_idl(path: Optional[Union[str, Path]] = None) -> dict[str, Any]:
    """
    Load the program IDL.

    Args:
        path: Explicit IDL file; skips discovery when given

    Returns:
        IDL as a dict

    Raises:
        IdlError: If an explicit path cannot be read or parsed
    """
    if path is not None:
        return _read_idl(Path(path).expanduser().resolve())

    found = _find_anchor_idl()
    if found is not None:
        LOGGER.debug("Using IDL from %s", found)
        return _read_idl(found)

    LOGGER.debug("Using bundled IDL")
    return bundled_idl()


def instruction_names(idl: dict[str, Any]) -> list[str]:
    return [snake_case(ix["name"]) for ix in idl.get("instructions", [])]


def get_instruction(idl: dict[str, Any], name: str) -> dict[str, Any]:
    """
    Find an instruction definition by name (snake_case or camelCase).

    Raises:
        IdlError: If the IDL has no such instruction
    """
    wanted = snake_case(name)
    for ix in idl.get("instructions", []):
        if snake_case(ix["name"]) == wanted:
            return ix
    raise IdlError(
        f"Instruction '{name}' not found in IDL "
        f"(available: {', '.join(instruction_names(idl)) or 'none'})"
    )


def instruction_discriminator(instruction: dict[str, Any]) -> bytes:
    """
    8-byte Anchor instruction discriminator.

    Anchor uses the first 8 bytes of sha256("global:<snake_case_name>").
    A ``discriminator`` array in the IDL takes precedence.
    """
    explicit = instruction.get("discriminator")
    if explicit:
        return bytes(explicit)
    preimage = f"global:{snake_case(instruction['name'])}".encode("utf-8")
    return hashlib.sha256(preimage).digest()[:8]


def program_address(idl: dict[str, Any]) -> Optional[str]:
    """Program id declared by the IDL, if any."""
    return idl.get("address") or idl.get("metadata", {}).get("address")
