"""Utility functions for the treasure hunt."""

import secrets

from eth_utils import decode_hex, is_hex, keccak, to_checksum_address

from ..errors import InvalidArgumentError
from .types import ConditionalOrderParams

UINT32_MAX = 2**32 - 1
UINT256_MAX = 2**256 - 1


def hex_to_bytes(name: str, value: str) -> bytes:
    """Decode a ``0x`` hex string.

    Raises:
        InvalidArgumentError: If the value is not hex
    """
    if not isinstance(value, str) or not value.startswith("0x") or not is_hex(value):
        raise InvalidArgumentError(f"Invalid {name}: {value!r} is not a 0x hex string")
    if len(value) % 2:
        raise InvalidArgumentError(f"Invalid {name}: {value!r} has odd length")
    return decode_hex(value)


def bytes32_from_hex(name: str, value: str) -> bytes:
    """Decode a bytes32 hex string, requiring exactly 32 bytes.

    Raises:
        InvalidArgumentError: If the value is not exactly 32 bytes of hex
    """
    data = hex_to_bytes(name, value)
    if len(data) != 32:
        raise InvalidArgumentError(
            f"Invalid {name}: expected 32 bytes, got {len(data)}"
        )
    return data


def to_bytes32_hex(value: int) -> str:
    """Left-pad an unsigned integer into a bytes32 hex string."""
    if value < 0 or value > UINT256_MAX:
        raise InvalidArgumentError(f"Value out of bytes32 range: {value}")
    return "0x" + value.to_bytes(32, "big").hex()


def parse_bytes32(name: str, value: str) -> str:
    """Parse a bytes32 given as ``0x`` hex (exactly 32 bytes) or a decimal integer.

    Decimal input is convenient for the digest halves printed by ``prepare``.

    Returns:
        Normalised lowercase bytes32 hex string
    """
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Invalid {name}: {value!r} is not a string")
    value = value.strip()
    if value.isascii() and value.isdigit():
        return to_bytes32_hex(int(value))
    return "0x" + bytes32_from_hex(name, value).hex()


def check_uint(name: str, value: int, bits: int) -> int:
    """Check an integer fits an unsigned ``bits``-bit ABI type."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid {name}: {value!r} is not an integer")
    if value < 0 or value >= 2**bits:
        raise InvalidArgumentError(f"Invalid {name}: {value} does not fit uint{bits}")
    return value


def generate_secure_random(length: int = 32) -> str:
    """Cryptographically secure random bytes.

    32 bytes from the OS CSPRNG are hashed with keccak256 and truncated.

    Args:
        length: Number of bytes (1 to 32)

    Returns:
        Hex string of ``length`` bytes
    """
    if length < 1 or length > 32:
        raise InvalidArgumentError(f"Invalid random length: {length}. Must be 1..32")
    digest = keccak(secrets.token_bytes(32))
    return "0x" + digest[:length].hex()


def generate_random_conditional_order() -> ConditionalOrderParams:
    """A random conditional order, used as a decoy leaf in the Merkle tree.

    Decoys are indistinguishable in shape from a real leaf: random handler,
    random salt, empty static input.
    """
    return ConditionalOrderParams(
        handler=to_checksum_address(generate_secure_random(20)),
        salt=generate_secure_random(),
        static_input="0x",
    )
