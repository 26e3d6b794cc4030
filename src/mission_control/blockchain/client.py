"""Ledger JSON-RPC client for faucet transfers and balance queries."""

import logging

from eth_account.datastructures import SignedTransaction
from web3 import Web3
from web3.types import TxParams, TxReceipt

from mission_control.core.wallet import WalletProvider
from mission_control.observability.metrics import LEDGER_CALL_DURATION

logger = logging.getLogger(__name__)

TOKEN_DECIMALS = 18
WEI_PER_TOKEN = 10**TOKEN_DECIMALS

# Fixed transfer parameters expected by the development network
GAS_PRICE = 0x01
GAS_LIMIT = 0x21000


class LedgerClient:
    """Thin wrapper around web3 for the faucet account.

    Parameters
    ----------
    rpc_url : str
        The ledger RPC endpoint URL.
    wallet : WalletProvider
        Provider of the faucet signing key.
    """

    def __init__(self, rpc_url: str, wallet: WalletProvider):
        self._w3 = Web3(Web3.HTTPProvider(rpc_url))
        self._wallet = wallet

    @property
    def connected(self) -> bool:
        """Whether the RPC endpoint is reachable."""
        return self._w3.is_connected()

    @property
    def chain_id(self) -> int:
        """Chain ID reported by the endpoint."""
        return self._w3.eth.chain_id

    @property
    def wallet_address(self) -> str:
        """Checksummed faucet account address."""
        return self._wallet.address

    def build_transfer(self, to: str, value_wei: int) -> TxParams:
        """Build a native token transfer from the faucet account.

        Parameters
        ----------
        to : str
            Recipient address with its ``0x`` prefix.
        value_wei : int
            Amount in smallest units.

        Returns
        -------
        TxParams
            Unsigned transaction with nonce and chain ID filled in.
        """
        return {
            "value": value_wei,
            "gasPrice": GAS_PRICE,
            "gas": GAS_LIMIT,
            "to": Web3.to_checksum_address(to),
            "nonce": self._w3.eth.get_transaction_count(self._wallet.address),
            "chainId": self._w3.eth.chain_id,
        }

    def sign_transaction(self, tx: TxParams) -> SignedTransaction:
        """Sign a transaction with the faucet key."""
        return self._wallet.get_account().sign_transaction(tx)

    def send_signed_transaction(self, signed: SignedTransaction, timeout: int = 120) -> TxReceipt:
        """Broadcast a signed transaction and wait for its receipt.

        Parameters
        ----------
        signed : SignedTransaction
            Transaction returned by :meth:`sign_transaction`.
        timeout : int, optional
            Maximum time to wait for the receipt in seconds. Default is 120.

        Returns
        -------
        TxReceipt
            The mined transaction receipt.

        Raises
        ------
        web3.exceptions.TimeExhausted
            If the transaction is not mined within the timeout.
        """
        with LEDGER_CALL_DURATION.labels(operation="send_transaction").time():
            tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
            receipt = self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)

        logger.info(
            "Transfer mined",
            extra={"tx_hash": f"0x{bytes(tx_hash).hex()}", "status": receipt["status"]},
        )
        return receipt

    def transfer(self, to: str, value_wei: int) -> str:
        """Sign and broadcast a transfer, returning the transaction hash.

        Parameters
        ----------
        to : str
            Recipient address with its ``0x`` prefix.
        value_wei : int
            Amount in smallest units.

        Returns
        -------
        str
            The transaction hash.
        """
        tx = self.build_transfer(to, value_wei)
        signed = self.sign_transaction(tx)
        receipt = self.send_signed_transaction(signed)

        tx_hash = f"0x{bytes(receipt['transactionHash']).hex()}"
        logger.info(
            "Faucet transfer submitted",
            extra={"tx_hash": tx_hash, "to": tx["to"], "value_wei": str(value_wei)},
        )
        return tx_hash

    def get_balance(self, address: str) -> int:
        """Get the balance of an account in smallest units.

        Parameters
        ----------
        address : str
            Account address with its ``0x`` prefix.

        Returns
        -------
        int
            Balance in smallest units.
        """
        with LEDGER_CALL_DURATION.labels(operation="get_balance").time():
            return self._w3.eth.get_balance(Web3.to_checksum_address(address))
