"""Tests for the ledger client module."""

from unittest.mock import MagicMock, patch

import pytest
from pydantic import SecretStr

from mission_control.blockchain.client import GAS_LIMIT, GAS_PRICE, WEI_PER_TOKEN, LedgerClient
from mission_control.core.wallet import EnvironmentWallet

# Test private key (DO NOT USE IN PRODUCTION - this is a well-known test key)
TEST_PRIVATE_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_ADDRESS = "0xFCAd0B19bB29D4674531d6f115237E16AfCE377c"
TEST_RECIPIENT = "0x742d35Cc6634C0532925a3b844Bc9e7595f8fE00"


@pytest.fixture
def wallet():
    """Create a real wallet for testing."""
    return EnvironmentWallet(private_key=SecretStr(TEST_PRIVATE_KEY))


@pytest.fixture
def mock_web3():
    """Create a mock Web3 instance."""
    with patch("mission_control.blockchain.client.Web3") as mock_w3_class:
        mock_w3 = MagicMock()
        mock_w3_class.return_value = mock_w3
        mock_w3_class.HTTPProvider = MagicMock()
        mock_w3_class.to_checksum_address = lambda x: x
        mock_w3.is_connected.return_value = True
        mock_w3.eth.chain_id = 65100000
        mock_w3.eth.get_balance.return_value = 5 * WEI_PER_TOKEN
        mock_w3.eth.get_transaction_count.return_value = 7
        mock_w3.eth.send_raw_transaction.return_value = bytes.fromhex("ab" * 32)
        mock_w3.eth.wait_for_transaction_receipt.return_value = {
            "status": 1,
            "transactionHash": bytes.fromhex("ab" * 32),
        }
        yield mock_w3_class, mock_w3


class TestTransferConstants:
    """Tests for fixed transfer parameters."""

    def test_gas_parameters(self):
        """Gas price and limit match the development network settings."""
        assert GAS_PRICE == 1
        assert GAS_LIMIT == 0x21000

    def test_token_decimals(self):
        """One token is 10**18 smallest units."""
        assert WEI_PER_TOKEN == 10**18


class TestLedgerClient:
    """Tests for LedgerClient."""

    def test_client_initialization(self, wallet, mock_web3):
        """Client initializes with RPC endpoint and wallet."""
        mock_w3_class, _ = mock_web3

        LedgerClient("http://localhost:8545", wallet)

        mock_w3_class.HTTPProvider.assert_called_once_with("http://localhost:8545")

    def test_connected_property(self, wallet, mock_web3):
        """Connected property returns Web3 connection status."""
        _, mock_w3 = mock_web3

        client = LedgerClient("http://localhost:8545", wallet)

        assert client.connected is True
        mock_w3.is_connected.return_value = False
        assert client.connected is False

    def test_chain_id_property(self, wallet, mock_web3):
        """Chain ID property returns network chain ID."""
        client = LedgerClient("http://localhost:8545", wallet)

        assert client.chain_id == 65100000

    def test_wallet_address_property(self, wallet, mock_web3):
        """Wallet address property returns faucet address."""
        client = LedgerClient("http://localhost:8545", wallet)

        assert client.wallet_address == TEST_ADDRESS

    def test_get_balance(self, wallet, mock_web3):
        """get_balance returns smallest units from the node."""
        _, mock_w3 = mock_web3

        client = LedgerClient("http://localhost:8545", wallet)
        balance = client.get_balance(TEST_RECIPIENT)

        assert balance == 5 * WEI_PER_TOKEN
        mock_w3.eth.get_balance.assert_called_once_with(TEST_RECIPIENT)

    def test_build_transfer(self, wallet, mock_web3):
        """Transfer uses fixed gas settings, nonce and chain ID."""
        _, mock_w3 = mock_web3

        client = LedgerClient("http://localhost:8545", wallet)
        tx = client.build_transfer(TEST_RECIPIENT, 10 * WEI_PER_TOKEN)

        assert tx == {
            "value": 10 * WEI_PER_TOKEN,
            "gasPrice": 0x01,
            "gas": 0x21000,
            "to": TEST_RECIPIENT,
            "nonce": 7,
            "chainId": 65100000,
        }
        mock_w3.eth.get_transaction_count.assert_called_once_with(TEST_ADDRESS)

    def test_sign_transaction(self, wallet, mock_web3):
        """Transactions are signed with the faucet key."""
        client = LedgerClient("http://localhost:8545", wallet)
        # Self-transfer keeps the recipient a valid checksum address
        tx = client.build_transfer(TEST_ADDRESS, WEI_PER_TOKEN)

        signed = client.sign_transaction(tx)

        assert len(signed.raw_transaction) > 0

    def test_send_signed_transaction(self, wallet, mock_web3):
        """Signed payload is broadcast and the receipt awaited."""
        _, mock_w3 = mock_web3
        signed = MagicMock()
        signed.raw_transaction = b"\x01\x02"

        client = LedgerClient("http://localhost:8545", wallet)
        receipt = client.send_signed_transaction(signed, timeout=30)

        assert receipt["status"] == 1
        mock_w3.eth.send_raw_transaction.assert_called_once_with(b"\x01\x02")
        mock_w3.eth.wait_for_transaction_receipt.assert_called_once_with(
            bytes.fromhex("ab" * 32), timeout=30
        )

    def test_transfer(self, mock_web3):
        """transfer signs, broadcasts and returns the hash."""
        _, mock_w3 = mock_web3

        # Fully mocked wallet to avoid real signing
        mock_wallet = MagicMock()
        mock_wallet.address = TEST_ADDRESS
        mock_account = MagicMock()
        mock_account.sign_transaction.return_value = MagicMock(raw_transaction=b"signed")
        mock_wallet.get_account.return_value = mock_account

        client = LedgerClient("http://localhost:8545", mock_wallet)
        tx_hash = client.transfer(TEST_RECIPIENT, 10 * WEI_PER_TOKEN)

        assert tx_hash == "0x" + "ab" * 32
        mock_w3.eth.send_raw_transaction.assert_called_once_with(b"signed")
        signed_tx = mock_account.sign_transaction.call_args.args[0]
        assert signed_tx["to"] == TEST_RECIPIENT
        assert signed_tx["value"] == 10 * WEI_PER_TOKEN

    def test_transfer_rpc_failure_propagates(self, wallet, mock_web3):
        """RPC errors during broadcast propagate to the caller."""
        _, mock_w3 = mock_web3
        mock_w3.eth.send_raw_transaction.side_effect = ConnectionError("refused")

        client = LedgerClient("http://localhost:8545", wallet)

        with pytest.raises(ConnectionError):
            client.transfer(TEST_ADDRESS, WEI_PER_TOKEN)
