"""Unit tests for chain/idl.py."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

import pytest

from splctl.chain.idl import (
    bundled_idl,
    get_instruction,
    instruction_discriminator,
    instruction_names,
    load_idl,
    program_address,
)
from splctl.config import DEFAULT_PROGRAM_ID
from splctl.errors import IdlError


def _global(name: str) -> bytes:
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


class TestBundledIdl:
    def test_has_all_instructions(self) -> None:
        assert instruction_names(bundled_idl()) == [
            "create_token",
            "mint_token",
            "transfer_tokens",
        ]

    def test_address_matches_default_program(self) -> None:
        assert program_address(bundled_idl()) == DEFAULT_PROGRAM_ID

    def test_create_token_args(self) -> None:
        ix = get_instruction(bundled_idl(), "create_token")
        assert [a["name"] for a in ix["args"]] == ["token_name", "token_symbol", "token_uri"]
        assert all(a["type"] == "string" for a in ix["args"])

    def test_amount_is_u64(self) -> None:
        for name in ("mint_token", "transfer_tokens"):
            ix = get_instruction(bundled_idl(), name)
            assert ix["args"] == [{"name": "amount", "type": "u64"}]


class TestLoadIdl:
    def test_falls_back_to_bundled(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_idl() == bundled_idl()

    def test_discovers_anchor_target(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        idl_dir = tmp_path / "target" / "idl"
        idl_dir.mkdir(parents=True)
        custom = {"address": "x", "instructions": [{"name": "only_one", "accounts": [], "args": []}]}
        (idl_dir / "transfer_tokens.json").write_text(json.dumps(custom), encoding="utf-8")
        nested = tmp_path / "app" / "scripts"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert instruction_names(load_idl()) == ["only_one"]

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "idl.json"
        path.write_text(json.dumps({"instructions": []}), encoding="utf-8")
        assert load_idl(path) == {"instructions": []}

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(IdlError, match="Failed to load IDL"):
            load_idl(tmp_path / "missing.json")

    def test_explicit_path_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(IdlError):
            load_idl(path)


class TestInstructions:
    def test_lookup_accepts_camel_case(self) -> None:
        ix = get_instruction(bundled_idl(), "transferTokens")
        assert ix["name"] == "transfer_tokens"

    def test_lookup_legacy_camel_case_idl(self) -> None:
        idl = {"instructions": [{"name": "mintToken", "accounts": [], "args": []}]}
        assert get_instruction(idl, "mint_token")["name"] == "mintToken"

    def test_missing_instruction(self) -> None:
        with pytest.raises(IdlError, match="Instruction 'burn' not found"):
            get_instruction(bundled_idl(), "burn")

    def test_discriminator_is_sighash(self) -> None:
        ix = get_instruction(bundled_idl(), "create_token")
        assert instruction_discriminator(ix) == _global("create_token")

    def test_discriminator_snake_cases_legacy_names(self) -> None:
        assert instruction_discriminator({"name": "transferTokens"}) == _global("transfer_tokens")

    def test_explicit_discriminator_wins(self) -> None:
        ix = {"name": "mint_token", "discriminator": [1, 2, 3, 4, 5, 6, 7, 8]}
        assert instruction_discriminator(ix) == bytes(range(1, 9))

    def test_program_address_legacy_metadata(self) -> None:
        assert program_address({"metadata": {"address": "abc"}}) == "abc"
        assert program_address({}) is None
