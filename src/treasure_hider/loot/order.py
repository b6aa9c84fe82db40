"""Loot conditional order construction.

The loot order sells the chest's entire balance of the sell token, so the
sell amount is read live from the chain when the order is built. That value
is frozen into the static input, and the order only matches on-chain while
the balance is unchanged.
"""

import logging

from ..config import HiderConfig
from ..errors import InvalidArgumentError
from ..rpc import RpcClient, get_sell_token_balance
from ..utils import checksum_address
from .codec import encode_loot_order
from .types import ConditionalOrderParams, LootOrder, LootParams
from .utils import (
    UINT32_MAX,
    check_uint,
    generate_secure_random,
    parse_bytes32,
)

logger = logging.getLogger(__name__)


def validate_loot_params(params: LootParams) -> LootParams:
    """Validate user inputs before any network call.

    Returns:
        A copy with checksummed addresses and normalised bytes32 values

    Raises:
        InvalidArgumentError: If any input is malformed
    """
    check_uint("buy_amount", params.buy_amount, 256)
    check_uint("start_time", params.start_time, 32)
    check_uint("duration", params.duration, 32)
    if params.duration <= 0:
        raise InvalidArgumentError(f"Invalid duration: {params.duration}. Must be positive")
    if params.valid_to > UINT32_MAX:
        raise InvalidArgumentError(
            f"Invalid time window: start_time + duration ({params.valid_to}) overflows uint32"
        )

    return LootParams(
        address=checksum_address("address", params.address),
        sell_token_address=checksum_address("sell_token_address", params.sell_token_address),
        buy_token_address=checksum_address("buy_token_address", params.buy_token_address),
        buy_amount=params.buy_amount,
        app_data=parse_bytes32("app_data", params.app_data),
        start_time=params.start_time,
        duration=params.duration,
        d0=parse_bytes32("d0", params.d0),
        d1=parse_bytes32("d1", params.d1),
        salt=parse_bytes32("salt", params.salt) if params.salt is not None else None,
    )


def create_loot_order(params: LootParams, rpc: RpcClient) -> LootOrder:
    """Create the loot data struct, querying the chest's sell token balance.

    Args:
        params: Validated loot parameters
        rpc: JSON-RPC client for the chain the chest lives on

    Returns:
        LootOrder with ``sell_amount`` resolved

    Raises:
        NetworkError: If the balance query fails
    """
    sell_amount = get_sell_token_balance(rpc, params.sell_token_address, params.address)

    return LootOrder(
        sell_token=params.sell_token_address,
        buy_token=params.buy_token_address,
        sell_amount=sell_amount,
        buy_amount=params.buy_amount,
        app_data=params.app_data,
        valid_to=params.valid_to,
        start_time=params.start_time,
        d0=params.d0,
        d1=params.d1,
    )


def create_conditional_order(
    params: LootParams, rpc: RpcClient, config: HiderConfig
) -> ConditionalOrderParams:
    """Build the loot conditional order that is hidden in the Merkle tree.

    Args:
        params: Loot parameters (validated here)
        rpc: JSON-RPC client used for the balance query
        config: Configuration providing the loot handler address

    Returns:
        ConditionalOrderParams with the ABI-encoded loot data as static input
    """
    handler = config.require_loot_handler()
    params = validate_loot_params(params)
    order = create_loot_order(params, rpc)

    return ConditionalOrderParams(
        handler=handler,
        salt=params.salt if params.salt is not None else generate_secure_random(),
        static_input="0x" + encode_loot_order(order).hex(),
    )
