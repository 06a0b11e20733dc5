"""
Commands - CLI command implementations for splctl.

Each module corresponds to a top-level CLI command:
- create:      Create a new token with metadata
- mint:        Mint tokens to a recipient
- transfer:    Transfer tokens from the wallet
- balance:     Token and SOL balance queries
- demo:        Scripted create -> mint -> transfer -> balance run
- program:     Show and validate the program interface
- keygen:      Write a new keypair file
"""
