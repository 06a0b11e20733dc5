"""
Wallet - local Solana keypair handling.

Keys are ed25519 keypairs in the Solana CLI JSON format (an array of
64 integers), or a base58 secret in SOLANA_PRIVATE_KEY.
"""
