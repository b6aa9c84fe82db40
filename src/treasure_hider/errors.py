"""Errors raised by treasure-hider.

Every error propagates to the CLI entry point, which prints it and maps it
to an exit code. Nothing is retried.
"""


class TreasureHiderError(Exception):
    """Base class for all treasure-hider errors."""


class InvalidArgumentError(TreasureHiderError, ValueError):
    """Malformed address, integer, hex value or flag combination."""


class ConflictingProofLocationError(InvalidArgumentError):
    """More than one proof location was requested."""


class ParseError(InvalidArgumentError):
    """A zk proof artifact does not have the expected shape."""


class NetworkError(TreasureHiderError):
    """The JSON-RPC balance query failed."""


class ProofNotFoundError(TreasureHiderError):
    """The loot order leaf is missing from the assembled tree."""


class ProofVerificationError(TreasureHiderError):
    """The inclusion proof does not reproduce the Merkle root."""
