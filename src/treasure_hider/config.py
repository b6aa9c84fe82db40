"""Configuration for treasure-hider.

Well-known contract addresses live in an immutable ``HiderConfig`` that is
passed explicitly to every operation, so tests can swap in test-network
values.

Environment Variables:
    TREASURE_COMPOSABLE_COW     ComposableCoW contract address
    TREASURE_LOOT_HANDLER       Loot order handler contract address
    TREASURE_RPC_TIMEOUT        JSON-RPC timeout in seconds (default: 30)
    TREASURE_LOG_LEVEL          Log level (default: INFO)
    TREASURE_RPC_URL            Default for --provider
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from .errors import InvalidArgumentError
from .utils import checksum_address


# Environment variable prefix
ENV_PREFIX = "TREASURE_"

# ComposableCoW is deployed at the same address on every chain
COMPOSABLE_COW_ADDRESS = "0xfdaFc9d1902f4e0b84f65F49f244b32b31013b74"


@dataclass(frozen=True)
class HiderConfig:
    """Resolved configuration with all defaults applied."""

    composable_cow: str = COMPOSABLE_COW_ADDRESS
    """ComposableCoW contract that receives setRoot and the dig staticcall."""

    loot_handler: Optional[str] = None
    """Handler contract identifying the loot order type. No default."""

    rpc_timeout: float = 30.0
    """Timeout in seconds for the balance query."""

    log_level: str = "INFO"

    def require_loot_handler(self) -> str:
        """Return the loot handler address or fail if it is not configured.

        Raises:
            InvalidArgumentError: If no loot handler is configured
        """
        if not self.loot_handler:
            raise InvalidArgumentError(
                "Loot handler address not configured. "
                f"Set {ENV_PREFIX}LOOT_HANDLER or pass --loot-handler."
            )
        return self.loot_handler


def load_config_from_env() -> HiderConfig:
    """Load configuration from environment variables."""
    config = HiderConfig()

    if os.getenv(f"{ENV_PREFIX}COMPOSABLE_COW"):
        config = replace(config, composable_cow=os.environ[f"{ENV_PREFIX}COMPOSABLE_COW"])
    if os.getenv(f"{ENV_PREFIX}LOOT_HANDLER"):
        config = replace(config, loot_handler=os.environ[f"{ENV_PREFIX}LOOT_HANDLER"])
    if os.getenv(f"{ENV_PREFIX}RPC_TIMEOUT"):
        try:
            timeout = float(os.environ[f"{ENV_PREFIX}RPC_TIMEOUT"])
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid {ENV_PREFIX}RPC_TIMEOUT: {os.environ[f'{ENV_PREFIX}RPC_TIMEOUT']}"
            )
        config = replace(config, rpc_timeout=timeout)
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config = replace(config, log_level=os.environ[f"{ENV_PREFIX}LOG_LEVEL"])

    return config


def load_config(
    composable_cow: Optional[str] = None,
    loot_handler: Optional[str] = None,
    rpc_timeout: Optional[float] = None,
    log_level: Optional[str] = None,
) -> HiderConfig:
    """Load configuration: defaults, then environment, then explicit overrides.

    Args:
        composable_cow: Override for the ComposableCoW address
        loot_handler: Override for the loot handler address
        rpc_timeout: Override for the JSON-RPC timeout
        log_level: Override for the log level

    Returns:
        Validated HiderConfig with checksummed addresses

    Raises:
        InvalidArgumentError: If a configured address is invalid
    """
    config = load_config_from_env()

    if composable_cow:
        config = replace(config, composable_cow=composable_cow)
    if loot_handler:
        config = replace(config, loot_handler=loot_handler)
    if rpc_timeout is not None:
        config = replace(config, rpc_timeout=rpc_timeout)
    if log_level:
        config = replace(config, log_level=log_level)

    return replace(
        config,
        composable_cow=checksum_address("ComposableCoW address", config.composable_cow),
        loot_handler=(
            checksum_address("loot handler address", config.loot_handler)
            if config.loot_handler
            else None
        ),
    )
