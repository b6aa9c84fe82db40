"""Loot Module.

This module provides the loot conditional order hidden in the treasure tree.

Key components:
- Loot data encoding (ABI struct stored as the order's static input)
- Decoy conditional orders (cryptographically random filler leaves)
- zk proof reading and encoding for redemption
- Secret digest helpers for the zk circuit

Example usage:
    ```python
    from treasure_hider.config import load_config
    from treasure_hider.loot import LootParams, create_conditional_order
    from treasure_hider.rpc import RpcClient

    config = load_config(loot_handler="0x...")

    with RpcClient("http://localhost:8545") as rpc:
        params = create_conditional_order(
            LootParams(
                address="0x...",  # treasure chest Safe
                sell_token_address="0x...",
                buy_token_address="0x...",
                buy_amount=1,
                app_data="0x" + "00" * 32,
                start_time=1700000000,
                duration=3600 * 24 * 180,  # 180 days
                d0="0x...",
                d1="0x...",
            ),
            rpc,
            config,
        )
    ```
"""

from .types import (
    LootParams,
    LootOrder,
    ConditionalOrderParams,
    G1Point,
    G2Point,
    ZkProof,
    ProofLocation,
    ProofLocationData,
    LOOT_DATA_ABI,
    CONDITIONAL_ORDER_ABI,
    PROOF_WITH_ADDRESS_ABI,
)
from .utils import (
    generate_secure_random,
    generate_random_conditional_order,
    parse_bytes32,
)
from .codec import (
    encode_loot_order,
    decode_loot_order,
    conditional_order_value,
    conditional_order_from_value,
    encode_proof_with_address,
    decode_proof_with_address,
)
from .zk_proof import load_zk_proof, parse_zk_proof
from .chest import (
    SecretDigest,
    split_digest,
    compute_secret_digest,
    compute_receiver_hash,
    digest_to_bytes32,
)
from .order import validate_loot_params, create_loot_order, create_conditional_order

__all__ = [
    # Types
    "LootParams",
    "LootOrder",
    "ConditionalOrderParams",
    "G1Point",
    "G2Point",
    "ZkProof",
    "ProofLocation",
    "ProofLocationData",
    "LOOT_DATA_ABI",
    "CONDITIONAL_ORDER_ABI",
    "PROOF_WITH_ADDRESS_ABI",
    # Utils
    "generate_secure_random",
    "generate_random_conditional_order",
    "parse_bytes32",
    # Codec
    "encode_loot_order",
    "decode_loot_order",
    "conditional_order_value",
    "conditional_order_from_value",
    "encode_proof_with_address",
    "decode_proof_with_address",
    # zk proof
    "load_zk_proof",
    "parse_zk_proof",
    # Secret digests
    "SecretDigest",
    "split_digest",
    "compute_secret_digest",
    "compute_receiver_hash",
    "digest_to_bytes32",
    # Orders
    "validate_loot_params",
    "create_loot_order",
    "create_conditional_order",
]
