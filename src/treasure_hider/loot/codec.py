"""ABI codecs for the loot order, conditional orders and zk proofs.

The layouts here are a cross-system contract with the on-chain handler and
verifier, so every field is validated before encoding instead of relying on
padding.
"""

from typing import Tuple

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address

from ..errors import InvalidArgumentError
from ..utils import checksum_address
from .types import (
    LOOT_DATA_ABI,
    PROOF_WITH_ADDRESS_ABI,
    ConditionalOrderParams,
    G1Point,
    G2Point,
    LootOrder,
    ZkProof,
)
from .utils import bytes32_from_hex, check_uint, hex_to_bytes


def encode_loot_order(order: LootOrder) -> bytes:
    """ABI-encode the loot data struct.

    Args:
        order: Loot order with ``sell_amount`` already resolved

    Returns:
        ABI-encoded ``Data`` struct

    Raises:
        InvalidArgumentError: If any field is missing, malformed or out of range
    """
    check_uint("valid_to", order.valid_to, 32)
    check_uint("start_time", order.start_time, 32)
    if order.valid_to <= order.start_time:
        raise InvalidArgumentError(
            f"Invalid time window: valid_to ({order.valid_to}) must be after "
            f"start_time ({order.start_time})"
        )

    return encode(
        [LOOT_DATA_ABI],
        [
            (
                checksum_address("sell_token", order.sell_token),
                checksum_address("buy_token", order.buy_token),
                check_uint("sell_amount", order.sell_amount, 256),
                check_uint("buy_amount", order.buy_amount, 256),
                bytes32_from_hex("app_data", order.app_data),
                order.valid_to,
                order.start_time,
                bytes32_from_hex("d0", order.d0),
                bytes32_from_hex("d1", order.d1),
            )
        ],
    )


def decode_loot_order(data: bytes) -> LootOrder:
    """Decode an ABI-encoded loot data struct.

    Raises:
        InvalidArgumentError: If the data is not a valid encoding
    """
    try:
        (fields,) = decode([LOOT_DATA_ABI], data)
    except DecodingError as e:
        raise InvalidArgumentError(f"Invalid loot data: {e}") from e

    (
        sell_token,
        buy_token,
        sell_amount,
        buy_amount,
        app_data,
        valid_to,
        start_time,
        d0,
        d1,
    ) = fields
    return LootOrder(
        sell_token=to_checksum_address(sell_token),
        buy_token=to_checksum_address(buy_token),
        sell_amount=sell_amount,
        buy_amount=buy_amount,
        app_data="0x" + app_data.hex(),
        valid_to=valid_to,
        start_time=start_time,
        d0="0x" + d0.hex(),
        d1="0x" + d1.hex(),
    )


def conditional_order_value(params: ConditionalOrderParams) -> Tuple[str, bytes, bytes]:
    """The ``(handler, salt, staticInput)`` tuple used as a Merkle leaf and call argument."""
    return (
        checksum_address("handler", params.handler),
        bytes32_from_hex("salt", params.salt),
        hex_to_bytes("static_input", params.static_input),
    )


def conditional_order_from_value(value: Tuple[str, bytes, bytes]) -> ConditionalOrderParams:
    handler, salt, static_input = value
    return ConditionalOrderParams(
        handler=to_checksum_address(handler),
        salt="0x" + salt.hex(),
        static_input="0x" + static_input.hex(),
    )


def encode_proof_with_address(receiver: str, proof: ZkProof) -> bytes:
    """ABI-encode the zk proof with the address of the receiver.

    This is the ``offchainInput`` argument of
    ``getTradeableOrderWithSignature``.

    Args:
        receiver: Address of the receiver attested by the zk proof
        proof: Groth16 proof points

    Returns:
        ABI-encoded ``(address, G1Point a, G2Point b, G1Point c)``
    """
    if len(proof.b.x) != 2 or len(proof.b.y) != 2:
        raise InvalidArgumentError("Invalid zk proof: b.x and b.y must have 2 elements")

    values = [
        checksum_address("receiver", receiver),
        (bytes32_from_hex("a.x", proof.a.x), bytes32_from_hex("a.y", proof.a.y)),
        (
            tuple(bytes32_from_hex("b.x", v) for v in proof.b.x),
            tuple(bytes32_from_hex("b.y", v) for v in proof.b.y),
        ),
        (bytes32_from_hex("c.x", proof.c.x), bytes32_from_hex("c.y", proof.c.y)),
    ]
    return encode(PROOF_WITH_ADDRESS_ABI, values)


def decode_proof_with_address(data: bytes) -> Tuple[str, ZkProof]:
    """Decode an ``offchainInput`` blob back into the receiver and proof."""
    try:
        receiver, a, b, c = decode(PROOF_WITH_ADDRESS_ABI, data)
    except DecodingError as e:
        raise InvalidArgumentError(f"Invalid proof with address: {e}") from e

    def _hex(value: bytes) -> str:
        return "0x" + value.hex()

    proof = ZkProof(
        a=G1Point(x=_hex(a[0]), y=_hex(a[1])),
        b=G2Point(x=[_hex(v) for v in b[0]], y=[_hex(v) for v in b[1]]),
        c=G1Point(x=_hex(c[0]), y=_hex(c[1])),
    )
    return to_checksum_address(receiver), proof
