"""Proof location encoding for ``setRoot``.

Tells watch-towers and the digger where the ``(proof, params)`` pair for the
hidden order can be found:

- PRIVATE: nowhere public, data is empty
- EMITTED: the pair is logged on-chain, data = abi.encode(bytes32[], params)
- SWARM / IPFS: data = abi.encode(bytes32) of the content address
"""

import logging
from typing import List, Optional

from eth_abi import encode

from ..errors import ConflictingProofLocationError, InvalidArgumentError
from ..loot.codec import conditional_order_value
from ..loot.types import (
    CONTENT_ADDRESS_ABI,
    EMITTED_PROOF_ABI,
    ConditionalOrderParams,
    ProofLocation,
    ProofLocationData,
)
from ..loot.utils import bytes32_from_hex

logger = logging.getLogger(__name__)


def select_proof_location(
    emit_proof: bool = False,
    swarm: Optional[str] = None,
    ipfs: Optional[str] = None,
) -> ProofLocation:
    """Resolve the location flags into exactly one ProofLocation.

    Raises:
        ConflictingProofLocationError: If more than one location is selected
    """
    selected = [
        location
        for location, chosen in (
            (ProofLocation.EMITTED, emit_proof),
            (ProofLocation.SWARM, swarm is not None),
            (ProofLocation.IPFS, ipfs is not None),
        )
        if chosen
    ]
    if len(selected) > 1:
        raise ConflictingProofLocationError(
            "Only one proof location may be given, got: "
            + ", ".join(location.name for location in selected)
        )
    return selected[0] if selected else ProofLocation.PRIVATE


def encode_proof_location_emit(
    proof: List[str], params: ConditionalOrderParams
) -> ProofLocationData:
    data = encode(
        EMITTED_PROOF_ABI,
        [
            [bytes32_from_hex("proof node", node) for node in proof],
            conditional_order_value(params),
        ],
    )
    return ProofLocationData(location=ProofLocation.EMITTED, data=data)


def encode_proof_location_swarm(swarm_cac: str) -> ProofLocationData:
    data = encode(CONTENT_ADDRESS_ABI, [bytes32_from_hex("swarm CAC", swarm_cac)])
    return ProofLocationData(location=ProofLocation.SWARM, data=data)


def encode_proof_location_ipfs(ipfs_cid: str) -> ProofLocationData:
    data = encode(CONTENT_ADDRESS_ABI, [bytes32_from_hex("IPFS CID", ipfs_cid)])
    return ProofLocationData(location=ProofLocation.IPFS, data=data)


def encode_proof_location(
    *,
    emit_proof: bool = False,
    swarm: Optional[str] = None,
    ipfs: Optional[str] = None,
    proof: Optional[List[str]] = None,
    params: Optional[ConditionalOrderParams] = None,
) -> ProofLocationData:
    """Encode the ``Proof`` struct for ``setRoot``.

    Args:
        emit_proof: Emit the proof and params on-chain
        swarm: Swarm content address (bytes32 hex) holding the proof JSON
        ipfs: IPFS CID digest (bytes32 hex) holding the proof JSON
        proof: Merkle proof, required when emitting
        params: Conditional order, required when emitting

    Returns:
        ProofLocationData, PRIVATE with empty data when nothing is selected

    Raises:
        ConflictingProofLocationError: If more than one location is selected
        InvalidArgumentError: If the selected location is missing its payload
    """
    location = select_proof_location(emit_proof=emit_proof, swarm=swarm, ipfs=ipfs)
    logger.debug("Proof location: %s", location.name)

    if location == ProofLocation.EMITTED:
        if proof is None or params is None:
            raise InvalidArgumentError("Emitting the proof requires the proof and params")
        return encode_proof_location_emit(proof, params)
    if location == ProofLocation.SWARM:
        return encode_proof_location_swarm(swarm)
    if location == ProofLocation.IPFS:
        return encode_proof_location_ipfs(ipfs)
    return ProofLocationData(location=ProofLocation.PRIVATE, data=b"")
