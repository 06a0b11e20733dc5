"""
Configuration for splctl.

Values come from (highest priority first): explicit overrides (CLI
options), process environment, ``~/.splctl/.env``, then built-in
defaults for Solana devnet.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

# Default config directory
SPLCTL_DIR = Path.home() / ".splctl"
SPLCTL_ENV = SPLCTL_DIR / ".env"

DEFAULT_CLUSTER = "devnet"
DEFAULT_PROGRAM_ID = "2V3eUpxJK3n1ionrg2xsy5HAVuHzxArnZ3Xg6vbV5Pzb"
DEFAULT_COMMITMENT = "confirmed"
DEFAULT_KEYPAIR_PATH = Path.home() / ".config" / "solana" / "id.json"

CLUSTER_URLS: dict[str, str] = {
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "localnet": "http://127.0.0.1:8899",
}

COMMITMENTS = ("processed", "confirmed", "finalized")


def env_path() -> Path:
    """Location of the dotenv file (``SPLCTL_ENV`` overrides the default)."""
    override = os.environ.get("SPLCTL_ENV")
    return Path(override).expanduser() if override else SPLCTL_ENV


def load_env_file(path: Optional[Path] = None) -> bool:
    """Load the dotenv file without clobbering variables already set.

    Returns True if a file was found and loaded.
    """
    path = path or env_path()
    if not path.exists():
        return False
    LOGGER.debug("Loading environment from %s", path)
    return load_dotenv(path, override=False)


@dataclass(frozen=True)
class Settings:
    """Resolved client configuration shared by every command."""

    cluster: str = DEFAULT_CLUSTER
    rpc_url: str = CLUSTER_URLS[DEFAULT_CLUSTER]
    program_id: str = DEFAULT_PROGRAM_ID
    commitment: str = DEFAULT_COMMITMENT
    keypair_path: Optional[Path] = None
    idl_path: Optional[Path] = None
    rpc_timeout: float = 30.0
    confirm_timeout: float = 60.0
    poll_interval: float = 1.0

    @classmethod
    def from_env(cls, **overrides: object) -> "Settings":
        """Build settings from the environment, then apply non-None overrides."""
        load_env_file()

        cluster = os.environ.get("SOLANA_CLUSTER", DEFAULT_CLUSTER)
        idl = os.environ.get("SPLCTL_IDL")

        settings = cls(
            cluster=cluster,
            rpc_url=os.environ.get("SOLANA_RPC_URL", ""),
            program_id=os.environ.get("SPLCTL_PROGRAM_ID", DEFAULT_PROGRAM_ID),
            commitment=os.environ.get("SOLANA_COMMITMENT", DEFAULT_COMMITMENT),
            idl_path=Path(idl).expanduser() if idl else None,
            rpc_timeout=float(os.environ.get("SPLCTL_RPC_TIMEOUT", "30")),
            confirm_timeout=float(os.environ.get("SPLCTL_CONFIRM_TIMEOUT", "60")),
        )

        applied = {k: v for k, v in overrides.items() if v is not None}
        for key in ("keypair_path", "idl_path"):
            if key in applied:
                applied[key] = Path(str(applied[key])).expanduser()
        settings = replace(settings, **applied)

        # An RPC URL only falls back to the cluster default when nobody set one
        if not settings.rpc_url:
            settings = replace(settings, rpc_url=cluster_url(settings.cluster))

        settings.validate()
        return settings

    def validate(self) -> None:
        if self.commitment not in COMMITMENTS:
            raise ValueError(
                f"Invalid commitment '{self.commitment}' "
                f"(expected one of: {', '.join(COMMITMENTS)})"
            )
        if not self.rpc_url:
            raise ValueError("RPC URL is empty")


def cluster_url(cluster: str) -> str:
    """Public RPC endpoint for a named cluster."""
    try:
        return CLUSTER_URLS[cluster]
    except KeyError:
        raise ValueError(
            f"Unknown cluster '{cluster}'. Set SOLANA_RPC_URL or use one of: "
            f"{', '.join(CLUSTER_URLS)}"
        ) from None
