"""
Error hierarchy for splctl.

Library code raises these; only the CLI layer catches them and turns
them into a message plus a process exit code.
"""

from __future__ import annotations

from typing import Any, Optional


class SplctlError(RuntimeError):
    exit_code: int = 1


class KeypairError(SplctlError):
    pass


class InvalidAddressError(SplctlError, ValueError):
    pass


class IdlError(SplctlError):
    exit_code = 3


class RpcError(SplctlError):
    """JSON-RPC ``error`` object returned by the node."""

    exit_code = 4

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.data = data

    @property
    def logs(self) -> list[str]:
        """Program logs from a failed preflight simulation, if any."""
        if isinstance(self.data, dict):
            return list(self.data.get("logs") or [])
        return []

    def __str__(self) -> str:
        base = super().__str__()
        if self.code is not None:
            return f"RPC error {self.code}: {base}"
        return f"RPC error: {base}"


class TransactionFailedError(SplctlError):
    exit_code = 5

    def __init__(self, signature: str, err: Any) -> None:
        super().__init__(f"Transaction {signature} failed: {err}")
        self.signature = signature
        self.err = err


class ConfirmationTimeoutError(SplctlError):
    exit_code = 6

    def __init__(self, signature: str, timeout: float) -> None:
        super().__init__(
            f"Transaction {signature} not confirmed within {timeout:g}s"
        )
        self.signature = signature
        self.timeout = timeout
