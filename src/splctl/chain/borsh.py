"""
Borsh serialization for Anchor instruction arguments.

IDL types are mapped onto borsh-construct layouts, the same codec
anchorpy uses: fixed-width integers, floats, bool, string, bytes,
public keys, Option<T>, Vec<T> and fixed arrays. The instruction's
argument list becomes a ``CStruct`` built in declaration order.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Union

from borsh_construct import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    Bool,
    Bytes,
    CStruct,
    Option,
    String,
    Vec,
)
from construct import Adapter, Construct, ConstructError
from construct import Bytes as FixedBytes
from solders.pubkey import Pubkey

from ..errors import IdlError
from ..utils import snake_case

_INT_LAYOUTS: dict[str, Construct] = {
    "u8": U8,
    "i8": I8,
    "u16": U16,
    "i16": I16,
    "u32": U32,
    "i32": I32,
    "u64": U64,
    "i64": I64,
    "u128": U128,
    "i128": I128,
}

_SCALAR_LAYOUTS: dict[str, Construct] = {
    "f32": F32,
    "f64": F64,
    "bool": Bool,
    "string": String,
    "bytes": Bytes,
}


class _IntAdapter(Adapter):
    """Reject non-int values (bool included) before they reach the codec."""

    def __init__(self, subcon: Construct, type_name: str) -> None:
        super().__init__(subcon)
        self.type_name = type_name

    def _encode(self, obj: Any, context: Any, path: Any) -> int:
        if isinstance(obj, bool) or not isinstance(obj, int):
            raise ValueError(f"{self.type_name} expects an int, got {obj!r}")
        return obj

    def _decode(self, obj: int, context: Any, path: Any) -> int:
        return obj


class _PubkeyAdapter(Adapter):
    def _encode(self, obj: Union[str, Pubkey], context: Any, path: Any) -> bytes:
        if isinstance(obj, str):
            obj = Pubkey.from_string(obj)
        return bytes(obj)

    def _decode(self, obj: bytes, context: Any, path: Any) -> Pubkey:
        return Pubkey.from_bytes(obj)


PUBKEY = _PubkeyAdapter(FixedBytes(32))


def layout_for(type_def: Union[str, dict]) -> Construct:
    """borsh-construct layout for an IDL type."""
    if isinstance(type_def, dict):
        if "option" in type_def:
            return Option(layout_for(type_def["option"]))
        if "vec" in type_def:
            return Vec(layout_for(type_def["vec"]))
        if "array" in type_def:
            inner, length = type_def["array"]
            return layout_for(inner)[int(length)]
        raise IdlError(f"Unsupported IDL type: {type_def}")

    if type_def in _INT_LAYOUTS:
        return _IntAdapter(_INT_LAYOUTS[type_def], type_def)
    if type_def in _SCALAR_LAYOUTS:
        return _SCALAR_LAYOUTS[type_def]
    if type_def in ("pubkey", "publicKey"):
        return PUBKEY
    raise IdlError(f"Unsupported IDL type: {type_def}")


def _type_name(type_def: Union[str, dict]) -> str:
    if isinstance(type_def, dict):
        kind, inner = next(iter(type_def.items()))
        return f"{kind}<{inner}>"
    return type_def


def encode_value(type_def: Union[str, dict], value: Any) -> bytes:
    """Borsh-encode a single value according to its IDL type."""
    layout = layout_for(type_def)
    try:
        return layout.build(value)
    except ConstructError as exc:
        raise ValueError(
            f"{value!r} cannot be encoded as {_type_name(type_def)}: {exc}"
        ) from exc


def encode_args(
    arg_defs: Sequence[dict[str, Any]],
    values: Union[Sequence[Any], Mapping[str, Any]],
) -> bytes:
    """
    Encode instruction arguments in declaration order.

    Args:
        arg_defs: The ``args`` list of an IDL instruction
        values: Positional values, or a mapping keyed by argument name
                (snake_case or camelCase)

    Returns:
        Borsh bytes of the argument struct

    Raises:
        ValueError: On a missing argument or a value the type cannot hold
    """
    names = [snake_case(arg["name"]) for arg in arg_defs]

    if isinstance(values, Mapping):
        by_name = {snake_case(k): v for k, v in values.items()}
        for arg, name in zip(arg_defs, names):
            if name not in by_name:
                raise ValueError(f"Missing argument '{arg['name']}'")
    else:
        ordered = list(values)
        if len(ordered) != len(arg_defs):
            raise ValueError(
                f"Expected {len(arg_defs)} arguments, got {len(ordered)}"
            )
        by_name = dict(zip(names, ordered))

    layout = CStruct(
        *(name / layout_for(arg["type"]) for arg, name in zip(arg_defs, names))
    )
    try:
        return layout.build({name: by_name[name] for name in names})
    except ConstructError as exc:
        raise ValueError(f"Cannot encode instruction arguments: {exc}") from exc
