"""
Chain - On-chain interaction layer for splctl.

Provides a JSON-RPC client, IDL handling, Borsh encoding, account
derivation and transaction utilities for invoking an Anchor token
program on Solana.

Uses httpx + solders instead of the heavyweight solana-py/anchorpy stack.
"""
