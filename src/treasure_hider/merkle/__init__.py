"""Merkle tree of conditional orders and the proof location published with its root."""

from .tree import (
    StandardMerkleTree,
    find_and_prove,
    hash_pair,
    standard_leaf_hash,
)
from .location import (
    select_proof_location,
    encode_proof_location,
    encode_proof_location_emit,
    encode_proof_location_swarm,
    encode_proof_location_ipfs,
)

__all__ = [
    "StandardMerkleTree",
    "find_and_prove",
    "hash_pair",
    "standard_leaf_hash",
    "select_proof_location",
    "encode_proof_location",
    "encode_proof_location_emit",
    "encode_proof_location_swarm",
    "encode_proof_location_ipfs",
]
