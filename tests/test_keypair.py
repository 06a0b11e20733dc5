"""Unit tests for wallet/keypair.py."""

from __future__ import annotations

import json
import os
from pathlib import Path

import base58
import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from splctl.errors import InvalidAddressError, KeypairError
from splctl.wallet import keypair as keypair_mod
from splctl.wallet.keypair import (
    generate_keypair,
    load_keypair,
    parse_pubkey,
    read_keypair_file,
    save_keypair,
)


def _secret(kp: Keypair) -> str:
    return base58.b58encode(bytes(kp)).decode("ascii")


class TestReadKeypairFile:
    def test_reads_solana_cli_format(self, keypair: Keypair, keypair_file: Path) -> None:
        loaded = read_keypair_file(keypair_file)
        assert loaded.pubkey() == keypair.pubkey()

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nope.json"
        with pytest.raises(KeypairError, match="Failed to load secret key from"):
            read_keypair_file(path)

    def test_not_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(KeypairError):
            read_keypair_file(path)

    def test_wrong_length(self, tmp_path: Path) -> None:
        path = tmp_path / "short.json"
        path.write_text(json.dumps([1] * 32), encoding="utf-8")
        with pytest.raises(KeypairError, match="64 integers"):
            read_keypair_file(path)


class TestLoadKeypair:
    def test_explicit_path(self, keypair: Keypair, keypair_file: Path) -> None:
        assert load_keypair(keypair_file).pubkey() == keypair.pubkey()

    def test_base58_env_secret(self, keypair: Keypair, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOLANA_PRIVATE_KEY", _secret(keypair))
        assert load_keypair().pubkey() == keypair.pubkey()

    def test_base58_secret_from_env_file(
        self, keypair: Keypair, isolated_env: Path
    ) -> None:
        isolated_env.write_text(f"SOLANA_PRIVATE_KEY={_secret(keypair)}\n", encoding="utf-8")
        assert load_keypair().pubkey() == keypair.pubkey()

    def test_invalid_base58_secret(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOLANA_PRIVATE_KEY", "not-a-key")
        with pytest.raises(KeypairError, match="SOLANA_PRIVATE_KEY"):
            load_keypair()

    def test_keypair_env_path(
        self, keypair: Keypair, keypair_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SOLANA_KEYPAIR", str(keypair_file))
        assert load_keypair().pubkey() == keypair.pubkey()

    def test_default_location(
        self, tmp_path: Path, keypair: Keypair, keypair_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(keypair_mod, "DEFAULT_KEYPAIR_PATH", keypair_file)
        assert load_keypair().pubkey() == keypair.pubkey()

    def test_default_location_missing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(keypair_mod, "DEFAULT_KEYPAIR_PATH", tmp_path / "missing.json")
        with pytest.raises(KeypairError, match="missing.json"):
            load_keypair()


class TestSaveKeypair:
    def test_round_trip(self, tmp_path: Path) -> None:
        kp = generate_keypair()
        path = save_keypair(kp, tmp_path / "sub" / "kp.json")
        assert path.exists()
        assert read_keypair_file(path).pubkey() == kp.pubkey()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_permissions(self, tmp_path: Path) -> None:
        path = save_keypair(generate_keypair(), tmp_path / "kp.json")
        assert path.stat().st_mode & 0o777 == 0o600

    def test_refuses_overwrite(self, keypair_file: Path) -> None:
        with pytest.raises(FileExistsError):
            save_keypair(generate_keypair(), keypair_file)

    def test_force_overwrite(self, keypair_file: Path) -> None:
        kp = generate_keypair()
        save_keypair(kp, keypair_file, force=True)
        assert read_keypair_file(keypair_file).pubkey() == kp.pubkey()


class TestParsePubkey:
    def test_valid(self) -> None:
        key = Keypair().pubkey()
        assert parse_pubkey(str(key)) == key

    def test_passthrough(self) -> None:
        key = Keypair().pubkey()
        assert parse_pubkey(key) is key

    def test_strips_whitespace(self) -> None:
        key = Keypair().pubkey()
        assert parse_pubkey(f"  {key}\n") == key

    def test_invalid(self) -> None:
        with pytest.raises(InvalidAddressError, match="Invalid recipient 'xyz'"):
            parse_pubkey("xyz", "recipient")

    def test_invalid_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_pubkey("0OIl")

    def test_system_program(self) -> None:
        assert parse_pubkey("11111111111111111111111111111111") == Pubkey.default()
