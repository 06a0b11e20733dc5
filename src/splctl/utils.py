from __future__ import annotations

import re
from decimal import Decimal
from typing import Optional, Union
from urllib.parse import quote

LAMPORTS_PER_SOL = 1_000_000_000
U64_MAX = 2**64 - 1

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def snake_case(name: str) -> str:
    """``mintAccount`` -> ``mint_account``; snake_case input is unchanged."""
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def lamports_to_sol(lamports: int) -> Decimal:
    return Decimal(lamports) / LAMPORTS_PER_SOL


def ui_amount(raw_amount: Union[int, str], decimals: int) -> Decimal:
    """Convert a raw token amount into UI units (raw / 10**decimals)."""
    return Decimal(int(raw_amount)).scaleb(-decimals)


def format_amount(value: Decimal) -> str:
    """Render a Decimal without exponent notation or trailing zeros."""
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return format(value.normalize(), "f")


def check_u64(amount: int, label: str = "amount") -> int:
    if not 0 <= amount <= U64_MAX:
        raise ValueError(f"{label} must be between 0 and {U64_MAX}, got {amount}")
    return amount


EXPLORER_URL = "https://explorer.solana.com"


def _explorer_query(cluster: str, rpc_url: Optional[str]) -> str:
    # Explorer only knows the public clusters; anything local goes through customUrl
    if not cluster or cluster == "mainnet-beta":
        return ""
    if cluster == "localnet":
        custom = rpc_url or "http://127.0.0.1:8899"
        return f"?cluster=custom&customUrl={quote(custom, safe='')}"
    return f"?cluster={cluster}"


def explorer_tx_url(signature: str, cluster: str, rpc_url: Optional[str] = None) -> str:
    """Solana Explorer link for a transaction signature."""
    return f"{EXPLORER_URL}/tx/{signature}{_explorer_query(cluster, rpc_url)}"


def explorer_address_url(address: str, cluster: str, rpc_url: Optional[str] = None) -> str:
    return f"{EXPLORER_URL}/address/{address}{_explorer_query(cluster, rpc_url)}"
