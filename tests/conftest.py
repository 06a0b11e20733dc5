from __future__ import annotations

import json
from pathlib import Path

import pytest
from solders.keypair import Keypair

from splctl.config import Settings

_ENV_VARS = (
    "SOLANA_RPC_URL",
    "SOLANA_CLUSTER",
    "SOLANA_KEYPAIR",
    "SOLANA_PRIVATE_KEY",
    "SOLANA_COMMITMENT",
    "SPLCTL_PROGRAM_ID",
    "SPLCTL_IDL",
    "SPLCTL_RPC_TIMEOUT",
    "SPLCTL_CONFIRM_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the real environment and ~/.splctl/.env out of every test."""
    for var in _ENV_VARS:
        # setenv first so monkeypatch restores the variable even if a
        # dotenv load sets it during the test
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    env_file = tmp_path / "splctl.env"
    monkeypatch.setenv("SPLCTL_ENV", str(env_file))
    return env_file


@pytest.fixture()
def keypair() -> Keypair:
    return Keypair()


@pytest.fixture()
def keypair_file(tmp_path: Path, keypair: Keypair) -> Path:
    """Solana CLI style keypair file for ``keypair``."""
    path = tmp_path / "id.json"
    path.write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")
    return path


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        cluster="devnet",
        rpc_url="http://rpc.test",
        commitment="confirmed",
        confirm_timeout=5.0,
        poll_interval=0.0,
    )
