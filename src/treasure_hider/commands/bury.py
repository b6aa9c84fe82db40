"""Bury the treasure.

Creates the loot conditional order, hides it among random decoy orders in a
Merkle tree, checks the inclusion proof and assembles the ``setRoot``
transaction for the treasure chest Safe.

The tree is not persisted. The operator must keep the root, the proof (or
the dumped tree) and the salt; ``dig`` cannot recompute the proof because the
decoys are not known to the digger.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..calls import Transaction, assemble_bury
from ..config import HiderConfig
from ..errors import InvalidArgumentError, ProofNotFoundError, ProofVerificationError
from ..loot import (
    CONDITIONAL_ORDER_ABI,
    ConditionalOrderParams,
    LootParams,
    ProofLocationData,
    conditional_order_value,
    create_conditional_order,
    generate_random_conditional_order,
)
from ..loot.utils import bytes32_from_hex
from ..merkle import (
    StandardMerkleTree,
    encode_proof_location,
    find_and_prove,
    select_proof_location,
)
from ..rpc import RpcClient

logger = logging.getLogger(__name__)


@dataclass
class BuryOptions:
    """Options for ``bury``."""

    loot: LootParams
    num_decoys: int
    """Total number of orders in the tree, the loot order included."""
    swarm: Optional[str] = None
    """Swarm CAC that contains the proof JSON."""
    ipfs: Optional[str] = None
    """IPFS CID digest that contains the proof JSON."""
    emit_proof: bool = False
    """Emit the proof on-chain."""


@dataclass
class BuryResult:
    params: ConditionalOrderParams
    root: str
    proof: List[str]
    proof_location: ProofLocationData
    transaction: Transaction
    tree: StandardMerkleTree = field(repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conditionalOrder": self.params.to_dict(),
            "merkleRoot": self.root,
            "merkleProof": self.proof,
            "proofLocation": self.proof_location.to_dict(),
            "transaction": self.transaction.to_dict(),
        }


def generate_decoys(count: int) -> List[ConditionalOrderParams]:
    return [generate_random_conditional_order() for _ in range(count)]


def _validate_options(options: BuryOptions, config: HiderConfig) -> None:
    """Checks that need no network access."""
    config.require_loot_handler()
    if not isinstance(options.num_decoys, int) or options.num_decoys < 1:
        raise InvalidArgumentError(
            f"Invalid num_decoys: {options.num_decoys}. Must be at least 1"
        )
    select_proof_location(
        emit_proof=options.emit_proof, swarm=options.swarm, ipfs=options.ipfs
    )
    if options.swarm is not None:
        bytes32_from_hex("swarm CAC", options.swarm)
    if options.ipfs is not None:
        bytes32_from_hex("IPFS CID", options.ipfs)


def bury(options: BuryOptions, rpc: RpcClient, config: HiderConfig) -> BuryResult:
    """Bury the treasure.

    Args:
        options: Loot parameters, decoy count and proof location
        rpc: JSON-RPC client used to read the sell token balance
        config: Contract addresses

    Returns:
        BuryResult with the root, proof and ``setRoot`` transaction

    Raises:
        InvalidArgumentError: On malformed options (before any network call)
        NetworkError: If the balance query fails
        ProofNotFoundError: If the loot order is missing from the tree
        ProofVerificationError: If the proof does not reproduce the root
    """
    _validate_options(options, config)
    handler = config.require_loot_handler()

    params = create_conditional_order(options.loot, rpc, config)
    logger.info("Conditional order: %s", params.to_dict())

    # Mix the loot order with the decoys
    orders = generate_decoys(options.num_decoys - 1) + [params]
    values = [[conditional_order_value(order)] for order in orders]
    tree = StandardMerkleTree.of(values, [CONDITIONAL_ORDER_ABI])
    logger.info("Merkle root: %s (%d orders)", tree.root, len(tree))

    proof = find_and_prove(tree, lambda value: value[0][0].lower() == handler.lower())
    if proof is None:
        logger.error("Loot order %s not found in the Merkle tree", handler)
        raise ProofNotFoundError(f"Loot order with handler {handler} not found in tree")
    logger.info("Proof generated: %s", proof)

    # For sanity, verify the proof before publishing the root
    if not StandardMerkleTree.verify(
        tree.root, [CONDITIONAL_ORDER_ABI], [conditional_order_value(params)], proof
    ):
        raise ProofVerificationError(f"Proof does not verify against root {tree.root}")
    logger.info("Proof verified")

    proof_location = encode_proof_location(
        emit_proof=options.emit_proof,
        swarm=options.swarm,
        ipfs=options.ipfs,
        proof=proof,
        params=params,
    )

    transaction = assemble_bury(tree.root, proof_location, config)

    return BuryResult(
        params=params,
        root=tree.root,
        proof=proof,
        proof_location=proof_location,
        transaction=transaction,
        tree=tree,
    )
