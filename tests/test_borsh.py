"""Unit tests for chain/borsh.py."""

from __future__ import annotations

import struct

import pytest
from solders.keypair import Keypair

from splctl.chain.borsh import encode_args, encode_value, layout_for
from splctl.errors import IdlError


class TestEncodeValue:
    def test_u64_little_endian(self) -> None:
        assert encode_value("u64", 100) == bytes([100, 0, 0, 0, 0, 0, 0, 0])

    def test_u64_max(self) -> None:
        assert encode_value("u64", 2**64 - 1) == b"\xff" * 8

    def test_u64_overflow(self) -> None:
        with pytest.raises(ValueError, match="cannot be encoded as u64"):
            encode_value("u64", 2**64)

    def test_u64_negative(self) -> None:
        with pytest.raises(ValueError):
            encode_value("u64", -1)

    def test_i64_negative(self) -> None:
        assert encode_value("i64", -1) == b"\xff" * 8

    def test_u128(self) -> None:
        assert encode_value("u128", 1) == b"\x01" + b"\x00" * 15

    def test_rejects_bool_as_int(self) -> None:
        with pytest.raises(ValueError, match="expects an int"):
            encode_value("u8", True)

    def test_string_has_u32_length_prefix(self) -> None:
        assert encode_value("string", "MTK") == b"\x03\x00\x00\x00MTK"

    def test_string_utf8_length_counts_bytes(self) -> None:
        encoded = encode_value("string", "é")
        assert encoded[:4] == struct.pack("<I", 2)

    def test_bool(self) -> None:
        assert encode_value("bool", True) == b"\x01"
        assert encode_value("bool", False) == b"\x00"

    def test_pubkey_from_string(self) -> None:
        key = Keypair().pubkey()
        assert encode_value("pubkey", str(key)) == bytes(key)
        assert encode_value("publicKey", key) == bytes(key)

    def test_option(self) -> None:
        assert encode_value({"option": "u8"}, None) == b"\x00"
        assert encode_value({"option": "u8"}, 7) == b"\x01\x07"

    def test_vec(self) -> None:
        assert encode_value({"vec": "u8"}, [1, 2]) == b"\x02\x00\x00\x00\x01\x02"

    def test_option_of_negative_u64(self) -> None:
        with pytest.raises(ValueError, match="cannot be encoded as option<u64>"):
            encode_value({"option": "u64"}, -5)

    def test_vec_rejects_bool_items(self) -> None:
        with pytest.raises(ValueError, match="u8 expects an int"):
            encode_value({"vec": "u8"}, [1, True])

    def test_fixed_array(self) -> None:
        assert encode_value({"array": ["u16", 2]}, [1, 2]) == b"\x01\x00\x02\x00"

    def test_f64(self) -> None:
        assert encode_value("f64", 1.5) == struct.pack("<d", 1.5)

    def test_bytes_has_u32_length_prefix(self) -> None:
        assert encode_value("bytes", b"\xaa\xbb") == b"\x02\x00\x00\x00\xaa\xbb"

    def test_unsupported(self) -> None:
        with pytest.raises(IdlError):
            encode_value("u256", 1)
        with pytest.raises(IdlError):
            encode_value({"defined": "Thing"}, {})


class TestLayoutFor:
    def test_pubkey_layout_round_trips(self) -> None:
        key = Keypair().pubkey()
        layout = layout_for("pubkey")
        assert layout.parse(layout.build(key)) == key

    def test_string_layout_parses(self) -> None:
        assert layout_for("string").parse(b"\x02\x00\x00\x00hi") == "hi"


class TestEncodeArgs:
    ARGS = [
        {"name": "token_name", "type": "string"},
        {"name": "amount", "type": "u64"},
    ]

    def test_positional(self) -> None:
        assert encode_args(self.ARGS, ["A", 5]) == b"\x01\x00\x00\x00A" + struct.pack("<Q", 5)

    def test_mapping_in_declaration_order(self) -> None:
        assert encode_args(self.ARGS, {"amount": 5, "tokenName": "A"}) == encode_args(
            self.ARGS, ["A", 5]
        )

    def test_missing_named_argument(self) -> None:
        with pytest.raises(ValueError, match="Missing argument 'amount'"):
            encode_args(self.ARGS, {"token_name": "A"})

    def test_wrong_positional_count(self) -> None:
        with pytest.raises(ValueError, match="Expected 2 arguments, got 1"):
            encode_args(self.ARGS, ["A"])

    def test_no_args(self) -> None:
        assert encode_args([], []) == b""

    def test_out_of_range_argument(self) -> None:
        with pytest.raises(ValueError, match="Cannot encode instruction arguments"):
            encode_args(self.ARGS, ["A", 2**64])

    def test_create_token_args(self) -> None:
        args = [
            {"name": "token_name", "type": "string"},
            {"name": "token_symbol", "type": "string"},
            {"name": "token_uri", "type": "string"},
        ]
        assert encode_args(args, ["Tok", "T", "u"]) == (
            b"\x03\x00\x00\x00Tok" + b"\x01\x00\x00\x00T" + b"\x01\x00\x00\x00u"
        )
