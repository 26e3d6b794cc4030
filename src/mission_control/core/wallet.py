"""Signing key providers for the faucet account."""

from abc import ABC, abstractmethod

from eth_account import Account
from eth_account.signers.local import LocalAccount
from pydantic import SecretStr


class WalletProvider(ABC):
    """Source of the account that signs faucet transfers."""

    @abstractmethod
    def get_account(self) -> LocalAccount:
        """Get the signing account.

        Returns
        -------
        LocalAccount
            Account holding the faucet signing key.
        """
        ...

    @property
    def address(self) -> str:
        """Checksummed address of the faucet account."""
        return self.get_account().address


class EnvironmentWallet(WalletProvider):
    """Faucet account loaded from the ``ACCOUNT_KEY`` setting.

    Parameters
    ----------
    private_key : SecretStr
        Hex encoded signing key, with or without ``0x``. Surrounding
        whitespace, as left by ``$(cat key)`` or an env file, is ignored.

    Raises
    ------
    ValueError
        If the key is empty or not a valid signing key.
    """

    def __init__(self, private_key: SecretStr):
        key = private_key.get_secret_value().strip()
        if not key:
            raise ValueError("Signing key is empty")
        self._account = Account.from_key(key)

    def get_account(self) -> LocalAccount:
        return self._account
