"""Tests for ComposableCoW call assembly."""

import pytest
from eth_abi import decode
from eth_utils import function_signature_to_4byte_selector

from treasure_hider.calls import (
    GET_TRADEABLE_ORDER_WITH_SIGNATURE_SELECTOR,
    SET_ROOT_SELECTOR,
    assemble_bury,
    assemble_dig,
)
from treasure_hider.config import COMPOSABLE_COW_ADDRESS, HiderConfig
from treasure_hider.errors import InvalidArgumentError
from treasure_hider.loot import ConditionalOrderParams, ProofLocation, ProofLocationData

from fixtures import LOOT_HANDLER, SALT, TEST_CONFIG, TREASURE_CHEST

ROOT = "0x" + "77" * 32
PARAMS = ConditionalOrderParams(handler=LOOT_HANDLER, salt=SALT, static_input="0xc0ffee")


class TestSelectors:
    """Tests for the function selectors."""

    def test_set_root(self):
        """Test setRoot(bytes32,(uint256,bytes))."""
        assert SET_ROOT_SELECTOR == function_signature_to_4byte_selector(
            "setRoot(bytes32,(uint256,bytes))"
        )

    def test_get_tradeable_order_with_signature(self):
        """Test getTradeableOrderWithSignature(address,(address,bytes32,bytes),bytes,bytes32[])."""
        assert GET_TRADEABLE_ORDER_WITH_SIGNATURE_SELECTOR == function_signature_to_4byte_selector(
            "getTradeableOrderWithSignature(address,(address,bytes32,bytes),bytes,bytes32[])"
        )


class TestAssembleBury:
    """Tests for the setRoot transaction."""

    def test_set_root(self):
        """Test the transaction targets ComposableCoW with the root and location."""
        location = ProofLocationData(location=ProofLocation.IPFS, data=b"\x01" * 32)

        tx = assemble_bury(ROOT, location, TEST_CONFIG)

        assert tx.to == COMPOSABLE_COW_ADDRESS
        assert tx.value == 0
        data = bytes.fromhex(tx.data[2:])
        assert data[:4] == SET_ROOT_SELECTOR
        root, (kind, payload) = decode(["bytes32", "(uint256,bytes)"], data[4:])
        assert "0x" + root.hex() == ROOT
        assert kind == 5
        assert payload == b"\x01" * 32

    def test_private(self):
        """Test PRIVATE encodes location 0 with empty data."""
        tx = assemble_bury(ROOT, ProofLocationData(location=ProofLocation.PRIVATE), TEST_CONFIG)

        _, (kind, payload) = decode(["bytes32", "(uint256,bytes)"], bytes.fromhex(tx.data[10:]))
        assert kind == 0
        assert payload == b""

    def test_waku_passthrough(self):
        """Test a location without an encoder is passed through with its data."""
        location = ProofLocationData(location=ProofLocation.WAKU, data=b"topic")

        tx = assemble_bury(ROOT, location, TEST_CONFIG)

        _, (kind, payload) = decode(["bytes32", "(uint256,bytes)"], bytes.fromhex(tx.data[10:]))
        assert kind == 3
        assert payload == b"topic"

    def test_custom_composable_cow(self):
        """Test the ComposableCoW address comes from config."""
        other = "0x" + "22" * 20
        config = HiderConfig(composable_cow=other, loot_handler=LOOT_HANDLER)

        tx = assemble_bury(ROOT, ProofLocationData(location=ProofLocation.PRIVATE), config)

        assert tx.to == other

    def test_invalid_root(self):
        """Test that the root must be bytes32."""
        with pytest.raises(InvalidArgumentError):
            assemble_bury("0x1234", ProofLocationData(location=ProofLocation.PRIVATE), TEST_CONFIG)

    def test_to_dict(self):
        """Test the JSON form of the transaction."""
        tx = assemble_bury(ROOT, ProofLocationData(location=ProofLocation.PRIVATE), TEST_CONFIG)

        assert tx.to_dict() == {"to": COMPOSABLE_COW_ADDRESS, "value": 0, "data": tx.data}


class TestAssembleDig:
    """Tests for the getTradeableOrderWithSignature staticcall."""

    def test_get_tradeable_order_with_signature(self):
        """Test the staticcall arguments."""
        proof = ["0x" + "01" * 32, "0x" + "02" * 32, "0x" + "03" * 32]

        tx = assemble_dig(TREASURE_CHEST, PARAMS, b"offchain", proof, TEST_CONFIG)

        assert tx.to == COMPOSABLE_COW_ADDRESS
        data = bytes.fromhex(tx.data[2:])
        assert data[:4] == GET_TRADEABLE_ORDER_WITH_SIGNATURE_SELECTOR
        owner, (handler, salt, static_input), offchain, nodes = decode(
            ["address", "(address,bytes32,bytes)", "bytes", "bytes32[]"], data[4:]
        )
        assert owner.lower() == TREASURE_CHEST.lower()
        assert handler.lower() == LOOT_HANDLER.lower()
        assert "0x" + salt.hex() == SALT
        assert static_input == bytes.fromhex("c0ffee")
        assert offchain == b"offchain"
        assert ["0x" + node.hex() for node in nodes] == proof

    def test_invalid_owner(self):
        """Test that the owner must be an address."""
        with pytest.raises(InvalidArgumentError, match="Invalid owner"):
            assemble_dig("0x1234", PARAMS, b"", [], TEST_CONFIG)

    def test_invalid_proof_node(self):
        """Test that Merkle nodes must be bytes32."""
        with pytest.raises(InvalidArgumentError, match="merkle node"):
            assemble_dig(TREASURE_CHEST, PARAMS, b"", ["0x01"], TEST_CONFIG)
