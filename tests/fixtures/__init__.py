"""Shared test data and a fake JSON-RPC node."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
from eth_abi import encode
from eth_utils import to_checksum_address

from treasure_hider.config import HiderConfig
from treasure_hider.loot import LootParams
from treasure_hider.rpc import RpcClient

FIXTURES_DIR = Path(__file__).resolve().parent
ZK_PROOF_FILE = FIXTURES_DIR / "zk_proof.json"

# Test contracts (DO NOT use in production)
LOOT_HANDLER = to_checksum_address("0x081b" + "00" * 16 + "6218")
SALT = "0xbeae" + "0" * 55 + "a04f6"
TREASURE_CHEST = to_checksum_address("0x2557ed03e34f0141722a643589f007836a683af7")
RECEIVER = to_checksum_address("0x075e706842751c28aafcc326c8e7a26777fe3cc2")
SELL_TOKEN = to_checksum_address("0xaf204776c7245bf4147c2612bf6e5972ee483701")
BUY_TOKEN = to_checksum_address("0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee")

APP_DATA = "0x" + b"Loot".hex() + "00" * 28
D0 = "0x0000000000000000000000000000000007939c599df6f6e49309e43f492a0ff0"
D1 = "0x000000000000000000000000000000007b65103d891a382ad52fa097fb284bc9"
START_TIME = 1700000000
DURATION = 3600 * 24 * 180  # 180 days
BUY_AMOUNT = 1
BALANCE = 42 * 10**18

TEST_CONFIG = HiderConfig(loot_handler=LOOT_HANDLER)


def make_loot_params(salt: Optional[str] = SALT, **overrides: Any) -> LootParams:
    fields: Dict[str, Any] = dict(
        address=TREASURE_CHEST,
        sell_token_address=SELL_TOKEN,
        buy_token_address=BUY_TOKEN,
        buy_amount=BUY_AMOUNT,
        app_data=APP_DATA,
        start_time=START_TIME,
        duration=DURATION,
        d0=D0,
        d1=D1,
        salt=salt,
    )
    fields.update(overrides)
    return LootParams(**fields)


class FakeNode:
    """Answers balance queries and records every JSON-RPC request."""

    def __init__(
        self,
        balance: int = BALANCE,
        error: Optional[Dict[str, Any]] = None,
        unreachable: bool = False,
    ):
        self.balance = balance
        self.error = error
        self.unreachable = unreachable
        self.requests: List[Dict[str, Any]] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)

        body = json.loads(request.content)
        self.requests.append(body)

        if self.error is not None:
            return httpx.Response(
                200, json={"jsonrpc": "2.0", "id": body["id"], "error": self.error}
            )
        if body["method"] == "eth_call":
            result = "0x" + encode(["uint256"], [self.balance]).hex()
        elif body["method"] == "eth_getBalance":
            result = hex(self.balance)
        else:
            return httpx.Response(
                200,
                json={
                    "jsonrpc": "2.0",
                    "id": body["id"],
                    "error": {"code": -32601, "message": "Method not found"},
                },
            )
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    def client(self, url: str = "http://node.test", timeout: float = 30.0) -> RpcClient:
        return RpcClient(url, timeout=timeout, transport=httpx.MockTransport(self.handle))
