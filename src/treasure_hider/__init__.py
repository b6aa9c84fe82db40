"""treasure-hider.

Prepare ComposableCoW transactions for a treasure hunt: bury a loot
conditional order among decoys in a Merkle tree, and dig it back out with a
zk proof.
"""

__version__ = "0.1.0"

from .config import HiderConfig, load_config, COMPOSABLE_COW_ADDRESS
from .errors import (
    TreasureHiderError,
    InvalidArgumentError,
    ConflictingProofLocationError,
    ParseError,
    NetworkError,
    ProofNotFoundError,
    ProofVerificationError,
)
from .rpc import RpcClient
from .calls import Transaction, assemble_bury, assemble_dig
from .commands import BuryOptions, BuryResult, bury, DigOptions, DigResult, dig

__all__ = [
    "__version__",
    # Config
    "HiderConfig",
    "load_config",
    "COMPOSABLE_COW_ADDRESS",
    # Errors
    "TreasureHiderError",
    "InvalidArgumentError",
    "ConflictingProofLocationError",
    "ParseError",
    "NetworkError",
    "ProofNotFoundError",
    "ProofVerificationError",
    # RPC
    "RpcClient",
    # Calls
    "Transaction",
    "assemble_bury",
    "assemble_dig",
    # Commands
    "BuryOptions",
    "BuryResult",
    "bury",
    "DigOptions",
    "DigResult",
    "dig",
]
