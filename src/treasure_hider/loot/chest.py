"""Secret digests for the treasure chest.

The zk circuit proves knowledge of a secret phrase whose SHA-256 digest,
chained with the digest of the previous phrase, equals ``(d0, d1)`` stored in
the loot order. A second hash binds the secret to the receiver address so a
proof cannot be replayed for someone else.

All 32-byte digests are split into two big-endian 128-bit halves, the width
the circuit works with.
"""

import hashlib
from dataclasses import dataclass
from typing import Tuple

from eth_utils import to_canonical_address

from ..utils import checksum_address
from .utils import to_bytes32_hex


@dataclass
class SecretDigest:
    """Digest parts of the current and previous secret phrases."""

    a: int
    """First half of sha256(current)."""
    b: int
    """Second half of sha256(current)."""
    pa: int
    """First half of sha256(previous), 0 when there is none."""
    pb: int
    """Second half of sha256(previous), 0 when there is none."""
    d0: int
    """First half of sha256(sha256(current) || sha256(previous))."""
    d1: int
    """Second half of the chained digest."""


def split_digest(digest: bytes) -> Tuple[int, int]:
    """Split a 32-byte digest into two big-endian u128."""
    if len(digest) != 32:
        raise ValueError(f"Expected a 32-byte digest, got {len(digest)} bytes")
    return int.from_bytes(digest[:16], "big"), int.from_bytes(digest[16:], "big")


def compute_secret_digest(current: bytes, previous: bytes = b"") -> SecretDigest:
    """Compute the digest parts for a secret phrase.

    Args:
        current: Current secret phrase
        previous: Previous secret phrase, empty for the first hunt

    Returns:
        SecretDigest with the preimage halves and the chained digest halves
    """
    previous_digest = hashlib.sha256(previous).digest() if previous else bytes(32)
    current_digest = hashlib.sha256(current).digest()

    a, b = split_digest(current_digest)
    pa, pb = split_digest(previous_digest)
    d0, d1 = split_digest(hashlib.sha256(current_digest + previous_digest).digest())

    return SecretDigest(a=a, b=b, pa=pa, pb=pb, d0=d0, d1=d1)


def compute_receiver_hash(address: str, a: int, b: int) -> Tuple[int, int, int]:
    """Bind the secret preimage halves to a receiver address.

    The address is split into its first 16 bytes and last 4 bytes; the last
    part is zero padded to 16 bytes before hashing.

    Args:
        address: Receiver address
        a: First half of sha256(current)
        b: Second half of sha256(current)

    Returns:
        (receiver as an integer, c0, c1)
    """
    address_bytes = to_canonical_address(checksum_address("address", address))

    hasher = hashlib.sha256()
    hasher.update(a.to_bytes(16, "big"))
    hasher.update(b.to_bytes(16, "big"))
    hasher.update(address_bytes[:16])
    hasher.update(bytes(12))
    hasher.update(address_bytes[16:])
    c0, c1 = split_digest(hasher.digest())

    return int.from_bytes(address_bytes, "big"), c0, c1


def digest_to_bytes32(value: int) -> str:
    """Format a digest half as the bytes32 accepted by ``--d0`` / ``--d1``."""
    return to_bytes32_hex(value)
