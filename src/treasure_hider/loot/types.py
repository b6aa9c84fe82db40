"""Loot Types for the treasure hunt.

User-facing types for the loot order, the conditional order wrapping it,
and the zk proof that redeems it.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class LootParams:
    """User inputs needed to build the loot conditional order."""

    address: str
    """Address of the treasure chest Safe holding the sell token."""

    sell_token_address: str
    """Token sold from the chest to pay out the reward."""

    buy_token_address: str
    """Token bought with the reward."""

    buy_amount: int
    """Amount of buy token (in token decimals)."""

    app_data: str
    """App data tag (bytes32 hex string)."""

    start_time: int
    """Unix timestamp (seconds) the hunt starts."""

    duration: int
    """Seconds the hunt lasts. valid_to = start_time + duration."""

    d0: str
    """First half of the secret's digest (bytes32 hex string)."""

    d1: str
    """Second half of the secret's digest (bytes32 hex string)."""

    salt: Optional[str] = None
    """Salt of the conditional order. Freshly random when omitted."""

    @property
    def valid_to(self) -> int:
        return self.start_time + self.duration


@dataclass
class LootOrder:
    """The loot data struct, ABI-encoded into the conditional order's static input."""

    sell_token: str
    buy_token: str
    sell_amount: int
    """Balance of the sell token held by the chest at encode time."""
    buy_amount: int
    app_data: str
    valid_to: int
    start_time: int
    d0: str
    d1: str


@dataclass
class ConditionalOrderParams:
    """A ComposableCoW conditional order: one leaf of the Merkle tree."""

    handler: str
    """Handler contract address identifying the order type."""

    salt: str
    """Unique salt (bytes32 hex string)."""

    static_input: str = "0x"
    """Handler-specific input (hex string). Empty for decoys."""

    def to_dict(self) -> Dict[str, str]:
        return {
            "handler": self.handler,
            "salt": self.salt,
            "staticInput": self.static_input,
        }


@dataclass
class G1Point:
    x: str
    y: str


@dataclass
class G2Point:
    x: List[str] = field(default_factory=list)
    """Two bytes32 hex strings."""
    y: List[str] = field(default_factory=list)
    """Two bytes32 hex strings."""


@dataclass
class ZkProof:
    """Groth16 proof (a, b, c) as produced by ZoKrates."""

    a: G1Point
    b: G2Point
    c: G1Point


class ProofLocation(IntEnum):
    """Where the (proof, params) pair needed to redeem an order is published.

    Values match ComposableCoW's ``ProofLocation`` enum.
    """

    PRIVATE = 0
    EMITTED = 1
    SWARM = 2
    WAKU = 3
    RESERVED = 4
    IPFS = 5


@dataclass
class ProofLocationData:
    """The ``Proof`` struct passed to ``setRoot``."""

    location: ProofLocation
    data: bytes = b""

    def as_abi_value(self) -> Tuple[int, bytes]:
        return (int(self.location), self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {"location": self.location.name, "data": "0x" + self.data.hex()}


# ABI types. Fixed by the deployed contracts; addresses live in HiderConfig.
LOOT_DATA_ABI = (
    "(address,address,uint256,uint256,bytes32,uint32,uint32,bytes32,bytes32)"
)
CONDITIONAL_ORDER_ABI = "(address,bytes32,bytes)"
PROOF_WITH_ADDRESS_ABI = [
    "address",
    "(bytes32,bytes32)",
    "(bytes32[2],bytes32[2])",
    "(bytes32,bytes32)",
]
PROOF_LOCATION_ABI = "(uint256,bytes)"
EMITTED_PROOF_ABI = ["bytes32[]", CONDITIONAL_ORDER_ABI]
CONTENT_ADDRESS_ABI = ["bytes32"]

# Contract entry points
SET_ROOT_SIGNATURE = f"setRoot(bytes32,{PROOF_LOCATION_ABI})"
GET_TRADEABLE_ORDER_WITH_SIGNATURE_SIGNATURE = (
    f"getTradeableOrderWithSignature(address,{CONDITIONAL_ORDER_ABI},bytes,bytes32[])"
)
