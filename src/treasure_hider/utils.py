"""Address validation shared by config, rpc and the loot order."""

from eth_utils import is_address, to_checksum_address

from .errors import InvalidArgumentError


def checksum_address(name: str, address: str) -> str:
    """Validate an address and return its checksum form.

    Raises:
        InvalidArgumentError: If the address is invalid
    """
    if not isinstance(address, str) or not is_address(address):
        raise InvalidArgumentError(f"Invalid {name}: {address}")
    return to_checksum_address(address)
