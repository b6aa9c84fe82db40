"""Dig towards the treasure.

Rebuilds the loot conditional order from the same inputs (and salt) used to
bury it, attaches the receiver's zk proof and the Merkle proof, and assembles
the ``getTradeableOrderWithSignature`` staticcall.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ..calls import Transaction, assemble_dig
from ..config import HiderConfig
from ..errors import InvalidArgumentError
from ..loot import (
    ConditionalOrderParams,
    LootParams,
    create_conditional_order,
    encode_proof_with_address,
    load_zk_proof,
)
from ..loot.utils import bytes32_from_hex
from ..rpc import RpcClient
from ..utils import checksum_address

logger = logging.getLogger(__name__)


@dataclass
class DigOptions:
    """Options for ``dig``."""

    loot: LootParams
    """Loot parameters; ``salt`` must be the one the order was buried with."""
    receiver: str
    """Address attested by the zk proof."""
    zk_proof_file: Union[str, Path]
    """proof.json produced by ZoKrates."""
    merkle_nodes: List[str] = field(default_factory=list)
    """Merkle proof from ``bury``, in order."""


@dataclass
class DigResult:
    params: ConditionalOrderParams
    transaction: Transaction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conditionalOrder": self.params.to_dict(),
            "transaction": self.transaction.to_dict(),
        }


def dig(options: DigOptions, rpc: RpcClient, config: HiderConfig) -> DigResult:
    """Dig towards the treasure.

    Args:
        options: Loot parameters, receiver, zk proof file and Merkle proof
        rpc: JSON-RPC client used to read the sell token balance
        config: Contract addresses

    Returns:
        DigResult with the staticcall descriptor

    Raises:
        InvalidArgumentError: On malformed options (before any network call)
        ParseError: If the zk proof file has the wrong shape
        NetworkError: If the balance query fails
    """
    config.require_loot_handler()
    if options.loot.salt is None:
        raise InvalidArgumentError("dig requires the salt the order was buried with")
    receiver = checksum_address("receiver", options.receiver)
    merkle_nodes = [
        "0x" + bytes32_from_hex("merkle node", node).hex() for node in options.merkle_nodes
    ]
    zk_proof = load_zk_proof(options.zk_proof_file)
    logger.debug("Merkle proof: %s", merkle_nodes)

    params = create_conditional_order(options.loot, rpc, config)
    logger.info("Conditional order: %s", params.to_dict())

    offchain_input = encode_proof_with_address(receiver, zk_proof)
    transaction = assemble_dig(
        checksum_address("address", options.loot.address),
        params,
        offchain_input,
        merkle_nodes,
        config,
    )

    return DigResult(params=params, transaction=transaction)
