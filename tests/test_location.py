"""Tests for proof location encoding."""

import pytest
from eth_abi import decode

from treasure_hider.errors import (
    ConflictingProofLocationError,
    InvalidArgumentError,
)
from treasure_hider.loot import ConditionalOrderParams, ProofLocation
from treasure_hider.merkle import encode_proof_location, select_proof_location

from fixtures import LOOT_HANDLER, SALT

SWARM_CAC = "0x" + "5a" * 32
IPFS_CID = "0x" + "1f" * 32
PROOF = ["0x" + "01" * 32, "0x" + "02" * 32]
PARAMS = ConditionalOrderParams(handler=LOOT_HANDLER, salt=SALT, static_input="0xdeadbeef")


class TestProofLocationEnum:
    """Tests for the ProofLocation values."""

    def test_values(self):
        """Test the on-chain enum values."""
        assert ProofLocation.PRIVATE == 0
        assert ProofLocation.EMITTED == 1
        assert ProofLocation.SWARM == 2
        assert ProofLocation.WAKU == 3
        assert ProofLocation.RESERVED == 4
        assert ProofLocation.IPFS == 5


class TestSelectProofLocation:
    """Tests for resolving the location flags."""

    def test_default_private(self):
        """Test that no flags means PRIVATE."""
        assert select_proof_location() == ProofLocation.PRIVATE

    @pytest.mark.parametrize(
        "kwargs, expected",
        [
            ({"emit_proof": True}, ProofLocation.EMITTED),
            ({"swarm": SWARM_CAC}, ProofLocation.SWARM),
            ({"ipfs": IPFS_CID}, ProofLocation.IPFS),
        ],
    )
    def test_single_flag(self, kwargs, expected):
        """Test each flag on its own."""
        assert select_proof_location(**kwargs) == expected

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"emit_proof": True, "swarm": SWARM_CAC},
            {"emit_proof": True, "ipfs": IPFS_CID},
            {"swarm": SWARM_CAC, "ipfs": IPFS_CID},
            {"emit_proof": True, "swarm": SWARM_CAC, "ipfs": IPFS_CID},
        ],
    )
    def test_conflicts(self, kwargs):
        """Test that more than one location is rejected."""
        with pytest.raises(ConflictingProofLocationError, match="Only one proof location"):
            select_proof_location(**kwargs)

    def test_conflict_is_invalid_argument(self):
        """Test that conflicts are reported as invalid arguments."""
        with pytest.raises(InvalidArgumentError):
            select_proof_location(swarm=SWARM_CAC, ipfs=IPFS_CID)


class TestEncodeProofLocation:
    """Tests for the Proof struct payloads."""

    def test_private(self):
        """Test PRIVATE has empty data."""
        location = encode_proof_location(proof=PROOF, params=PARAMS)

        assert location.location == ProofLocation.PRIVATE
        assert location.data == b""
        assert location.as_abi_value() == (0, b"")

    def test_emitted(self):
        """Test EMITTED carries the proof and the order params."""
        location = encode_proof_location(emit_proof=True, proof=PROOF, params=PARAMS)

        proof, (handler, salt, static_input) = decode(
            ["bytes32[]", "(address,bytes32,bytes)"], location.data
        )
        assert location.location == ProofLocation.EMITTED
        assert ["0x" + node.hex() for node in proof] == PROOF
        assert handler.lower() == LOOT_HANDLER.lower()
        assert "0x" + salt.hex() == SALT
        assert static_input == bytes.fromhex("deadbeef")

    def test_emitted_empty_proof(self):
        """Test EMITTED with a single-leaf tree proof."""
        location = encode_proof_location(emit_proof=True, proof=[], params=PARAMS)

        proof, _ = decode(["bytes32[]", "(address,bytes32,bytes)"], location.data)
        assert list(proof) == []

    def test_emitted_requires_proof(self):
        """Test EMITTED without proof and params is rejected."""
        with pytest.raises(InvalidArgumentError, match="requires the proof"):
            encode_proof_location(emit_proof=True, params=PARAMS)

    def test_swarm(self):
        """Test SWARM carries the content address."""
        location = encode_proof_location(swarm=SWARM_CAC)

        assert location.location == ProofLocation.SWARM
        assert location.data == bytes.fromhex("5a" * 32)

    def test_ipfs(self):
        """Test IPFS carries the CID digest."""
        location = encode_proof_location(ipfs=IPFS_CID)

        assert location.location == ProofLocation.IPFS
        assert decode(["bytes32"], location.data) == (bytes.fromhex("1f" * 32),)

    def test_invalid_content_address(self):
        """Test that a content address must be 32 bytes of hex."""
        with pytest.raises(InvalidArgumentError, match="swarm CAC"):
            encode_proof_location(swarm="0x1234")
        with pytest.raises(InvalidArgumentError, match="IPFS CID"):
            encode_proof_location(ipfs="Qm" + "1" * 44)

    def test_to_dict(self):
        """Test the JSON form."""
        location = encode_proof_location(swarm=SWARM_CAC)

        assert location.to_dict() == {"location": "SWARM", "data": SWARM_CAC}
