"""
JSON-RPC Client for Solana.

Lightweight alternative to solana-py: uses httpx for HTTP + solders for
key and hash types. Supports balance queries, blockhash lookup,
transaction submission and signature-status polling.
"""

from __future__ import annotations

import base64
import logging
import time
from itertools import count
from typing import Any, Optional

import httpx
from solders.hash import Hash
from solders.pubkey import Pubkey

from ..config import COMMITMENTS
from ..errors import ConfirmationTimeoutError, RpcError, TransactionFailedError

LOGGER = logging.getLogger(__name__)

_REQUEST_IDS = count(1)


def rpc_call(
    rpc_url: str,
    method: str,
    params: Optional[list] = None,
    timeout: float = 30.0,
) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        rpc_url: RPC endpoint URL
        method: RPC method name (e.g., "getBalance")
        params: RPC parameters
        timeout: HTTP timeout in seconds

    Returns:
        Result field from the RPC response

    Raises:
        RpcError: If the node returns a JSON-RPC error object
        httpx.HTTPError: On transport or HTTP status failures
    """
    payload = {
        "jsonrpc": "2.0",
        "id": next(_REQUEST_IDS),
        "method": method,
        "params": params or [],
    }
    LOGGER.debug("RPC %s -> %s", method, rpc_url)

    with httpx.Client(timeout=timeout) as client:
        response = client.post(rpc_url, json=payload)
        response.raise_for_status()
        data = response.json()

    if "error" in data:
        error = data["error"] or {}
        raise RpcError(
            error.get("message", str(error)),
            code=error.get("code"),
            data=error.get("data"),
        )

    return data.get("result")


def get_balance(
    rpc_url: str,
    pubkey: Pubkey,
    commitment: str = "confirmed",
    timeout: float = 30.0,
) -> int:
    """
    Get the native balance of an account.

    Returns:
        Balance in lamports
    """
    result = rpc_call(
        rpc_url,
        "getBalance",
        [str(pubkey), {"commitment": commitment}],
        timeout=timeout,
    )
    return int(result["value"])


def get_token_account_balance(
    rpc_url: str,
    token_account: Pubkey,
    commitment: str = "confirmed",
    timeout: float = 30.0,
) -> dict[str, Any]:
    """
    Get the balance of an SPL token account.

    Returns:
        Dict with ``amount`` (raw, string), ``decimals`` and ``uiAmountString``

    Raises:
        RpcError: If the account does not exist or is not a token account
    """
    result = rpc_call(
        rpc_url,
        "getTokenAccountBalance",
        [str(token_account), {"commitment": commitment}],
        timeout=timeout,
    )
    return result["value"]


def get_account_info(
    rpc_url: str,
    pubkey: Pubkey,
    commitment: str = "confirmed",
    timeout: float = 30.0,
) -> Optional[dict[str, Any]]:
    """
    Fetch account metadata (owner, lamports, executable).

    Returns:
        Account info dict, or None if the account does not exist
    """
    result = rpc_call(
        rpc_url,
        "getAccountInfo",
        [str(pubkey), {"commitment": commitment, "encoding": "base64"}],
        timeout=timeout,
    )
    return result["value"]


def get_latest_blockhash(
    rpc_url: str,
    commitment: str = "confirmed",
    timeout: float = 30.0,
) -> Hash:
    """Get a recent blockhash to anchor a new transaction."""
    result = rpc_call(
        rpc_url,
        "getLatestBlockhash",
        [{"commitment": commitment}],
        timeout=timeout,
    )
    return Hash.from_string(result["value"]["blockhash"])


def send_raw_transaction(
    rpc_url: str,
    raw_tx: bytes,
    commitment: str = "confirmed",
    skip_preflight: bool = False,
    timeout: float = 30.0,
) -> str:
    """
    Send a signed, serialized transaction.

    Args:
        raw_tx: Wire-format transaction bytes

    Returns:
        Transaction signature (base58)
    """
    encoded = base64.b64encode(raw_tx).decode("ascii")
    return rpc_call(
        rpc_url,
        "sendTransaction",
        [
            encoded,
            {
                "encoding": "base64",
                "skipPreflight": skip_preflight,
                "preflightCommitment": commitment,
            },
        ],
        timeout=timeout,
    )


def get_signature_status(
    rpc_url: str,
    signature: str,
    timeout: float = 30.0,
) -> Optional[dict[str, Any]]:
    """Status of a single signature, or None if the node has not seen it."""
    result = rpc_call(
        rpc_url,
        "getSignatureStatuses",
        [[signature], {"searchTransactionHistory": False}],
        timeout=timeout,
    )
    statuses = result["value"]
    return statuses[0] if statuses else None


def commitment_reached(status: dict[str, Any], commitment: str) -> bool:
    """True once a signature status is at or beyond the wanted commitment."""
    reached = status.get("confirmationStatus")
    if reached is None:
        # Older nodes only report confirmations; None means rooted
        return status.get("confirmations") is None
    return COMMITMENTS.index(reached) >= COMMITMENTS.index(commitment)


def wait_for_confirmation(
    rpc_url: str,
    signature: str,
    commitment: str = "confirmed",
    timeout: float = 60.0,
    poll_interval: float = 1.0,
    rpc_timeout: float = 30.0,
) -> dict[str, Any]:
    """
    Poll until a transaction reaches the requested commitment.

    Args:
        signature: Transaction signature
        commitment: processed, confirmed or finalized
        timeout: Maximum wait time in seconds
        poll_interval: Polling interval in seconds
        rpc_timeout: HTTP timeout for each status request

    Returns:
        Final signature status dict

    Raises:
        TransactionFailedError: If the transaction landed with an error
        ConfirmationTimeoutError: If not confirmed within timeout
    """
    start = time.monotonic()
    while time.monotonic() - start < timeout:
        status = get_signature_status(rpc_url, signature, timeout=rpc_timeout)
        if status is not None:
            if status.get("err") is not None:
                raise TransactionFailedError(signature, status["err"])
            if commitment_reached(status, commitment):
                LOGGER.debug(
                    "Signature %s reached %s at slot %s",
                    signature,
                    status.get("confirmationStatus"),
                    status.get("slot"),
                )
                return status
        time.sleep(poll_interval)

    raise ConfirmationTimeoutError(signature, timeout)
