"""ComposableCoW call assembly.

Builds the transaction descriptors printed by ``bury`` and ``dig``. Nothing
here talks to the network; the operator signs and broadcasts (or staticcalls)
the result elsewhere.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from .config import HiderConfig
from .loot.codec import conditional_order_value
from .loot.types import (
    CONDITIONAL_ORDER_ABI,
    GET_TRADEABLE_ORDER_WITH_SIGNATURE_SIGNATURE,
    PROOF_LOCATION_ABI,
    SET_ROOT_SIGNATURE,
    ConditionalOrderParams,
    ProofLocationData,
)
from .loot.utils import bytes32_from_hex
from .utils import checksum_address

SET_ROOT_SELECTOR = function_signature_to_4byte_selector(SET_ROOT_SIGNATURE)
GET_TRADEABLE_ORDER_WITH_SIGNATURE_SELECTOR = function_signature_to_4byte_selector(
    GET_TRADEABLE_ORDER_WITH_SIGNATURE_SIGNATURE
)


@dataclass
class Transaction:
    """A transaction (or staticcall) descriptor."""

    to: str
    data: str
    """Calldata (hex string)."""
    value: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"to": self.to, "value": self.value, "data": self.data}


def encode_set_root(root: str, proof_location: ProofLocationData) -> bytes:
    """Calldata for ``setRoot(bytes32 root, Proof proof)``."""
    return SET_ROOT_SELECTOR + encode(
        ["bytes32", PROOF_LOCATION_ABI],
        [bytes32_from_hex("root", root), proof_location.as_abi_value()],
    )


def encode_get_tradeable_order_with_signature(
    owner: str,
    params: ConditionalOrderParams,
    offchain_input: bytes,
    proof: List[str],
) -> bytes:
    """Calldata for ``getTradeableOrderWithSignature(owner, params, offchainInput, proof)``."""
    return GET_TRADEABLE_ORDER_WITH_SIGNATURE_SELECTOR + encode(
        ["address", CONDITIONAL_ORDER_ABI, "bytes", "bytes32[]"],
        [
            checksum_address("owner", owner),
            conditional_order_value(params),
            offchain_input,
            [bytes32_from_hex("merkle node", node) for node in proof],
        ],
    )


def assemble_bury(
    root: str, proof_location: ProofLocationData, config: HiderConfig
) -> Transaction:
    """The transaction that sets the Merkle root on ComposableCoW.

    Args:
        root: Merkle root of the treasure tree
        proof_location: Where the proof for the hidden order is published
        config: Configuration providing the ComposableCoW address

    Returns:
        Transaction to be signed by the treasure chest Safe
    """
    return Transaction(
        to=config.composable_cow,
        data="0x" + encode_set_root(root, proof_location).hex(),
    )


def assemble_dig(
    owner: str,
    params: ConditionalOrderParams,
    offchain_input: bytes,
    proof: List[str],
    config: HiderConfig,
) -> Transaction:
    """The staticcall that returns the tradeable loot order and its signature.

    Args:
        owner: Address of the treasure chest Safe that set the root
        params: The loot conditional order, exactly as buried
        offchain_input: ABI-encoded receiver and zk proof
        proof: Merkle proof returned by ``bury``, verbatim
        config: Configuration providing the ComposableCoW address
    """
    return Transaction(
        to=config.composable_cow,
        data="0x"
        + encode_get_tradeable_order_with_signature(owner, params, offchain_input, proof).hex(),
    )
