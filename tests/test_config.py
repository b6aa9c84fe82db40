"""Tests for configuration loading and address validation."""

import pytest

from treasure_hider.config import COMPOSABLE_COW_ADDRESS, HiderConfig, load_config
from treasure_hider.errors import InvalidArgumentError
from treasure_hider.utils import checksum_address

from fixtures import LOOT_HANDLER, SELL_TOKEN, TREASURE_CHEST


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("COMPOSABLE_COW", "LOOT_HANDLER", "RPC_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(f"TREASURE_{name}", raising=False)


class TestChecksumAddress:
    """Tests for the shared address check."""

    def test_lowercase_is_checksummed(self):
        """Test that a lowercase address comes back checksummed."""
        assert checksum_address("owner", TREASURE_CHEST.lower()) == TREASURE_CHEST

    @pytest.mark.parametrize("address", ["0x1234", "not an address", None, 42])
    def test_invalid(self, address):
        """Test that anything but a 20-byte address is rejected with its name."""
        with pytest.raises(InvalidArgumentError, match="Invalid owner"):
            checksum_address("owner", address)


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        """Test the defaults without environment or overrides."""
        config = load_config()

        assert config.composable_cow.lower() == COMPOSABLE_COW_ADDRESS.lower()
        assert config.loot_handler is None

    def test_environment(self, monkeypatch):
        """Test that the environment is read and addresses are checksummed."""
        monkeypatch.setenv("TREASURE_LOOT_HANDLER", LOOT_HANDLER.lower())
        monkeypatch.setenv("TREASURE_RPC_TIMEOUT", "5")
        monkeypatch.setenv("TREASURE_LOG_LEVEL", "DEBUG")

        config = load_config()

        assert config.loot_handler == LOOT_HANDLER
        assert config.rpc_timeout == 5.0
        assert config.log_level == "DEBUG"

    def test_overrides_win(self, monkeypatch):
        """Test that explicit overrides take precedence over the environment."""
        monkeypatch.setenv("TREASURE_COMPOSABLE_COW", TREASURE_CHEST)

        config = load_config(composable_cow=SELL_TOKEN.lower())

        assert config.composable_cow == SELL_TOKEN

    def test_invalid_loot_handler(self, monkeypatch):
        """Test that a malformed configured address is rejected."""
        monkeypatch.setenv("TREASURE_LOOT_HANDLER", "0x1234")

        with pytest.raises(InvalidArgumentError, match="Invalid loot handler address"):
            load_config()

    def test_invalid_timeout(self, monkeypatch):
        """Test that a non-numeric timeout is rejected."""
        monkeypatch.setenv("TREASURE_RPC_TIMEOUT", "soon")

        with pytest.raises(InvalidArgumentError, match="TREASURE_RPC_TIMEOUT"):
            load_config()

    def test_require_loot_handler(self):
        """Test the error raised when no loot handler is configured."""
        with pytest.raises(InvalidArgumentError, match="TREASURE_LOOT_HANDLER"):
            HiderConfig().require_loot_handler()


class TestRpcAddressValidation:
    """Tests for address checks in the JSON-RPC client."""

    def test_invalid_token(self, rpc, node):
        """Test that an invalid token address fails before the request."""
        with pytest.raises(InvalidArgumentError, match="Invalid token address"):
            rpc.get_token_balance("0x1234", TREASURE_CHEST)

        assert node.requests == []

    def test_invalid_account(self, rpc, node):
        """Test that an invalid account address fails before the request."""
        with pytest.raises(InvalidArgumentError, match="Invalid account address"):
            rpc.get_balance("0xdead")

        assert node.requests == []
