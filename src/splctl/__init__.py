__version__ = "0.1.0"

__all__ = [
    # Config
    "Settings",
    # Errors
    "SplctlError",
    "KeypairError",
    "InvalidAddressError",
    "IdlError",
    "RpcError",
    "TransactionFailedError",
    "ConfirmationTimeoutError",
    # Wallet
    "generate_keypair",
    "load_keypair",
    "parse_pubkey",
    "save_keypair",
    # Accounts
    "get_associated_token_address",
    "get_metadata_address",
    # Token operations
    "CreateTokenResult",
    "MintTokenResult",
    "TransferResult",
    "create_token",
    "mint_token",
    "transfer_tokens",
    "get_token_balance",
    "get_sol_balance",
]

from .config import Settings
from .errors import (
    ConfirmationTimeoutError,
    IdlError,
    InvalidAddressError,
    KeypairError,
    RpcError,
    SplctlError,
    TransactionFailedError,
)
from .wallet.keypair import generate_keypair, load_keypair, parse_pubkey, save_keypair
from .chain.accounts import get_associated_token_address, get_metadata_address
from .chain.token import (
    CreateTokenResult,
    MintTokenResult,
    TransferResult,
    create_token,
    get_sol_balance,
    get_token_balance,
    mint_token,
    transfer_tokens,
)
