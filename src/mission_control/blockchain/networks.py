"""Network details used to build block explorer links.

Everything here comes from the RPC endpoint or the environment;
no network is hardcoded.
"""

from dataclasses import dataclass


@dataclass
class NetworkInfo:
    """Network information derived from runtime config.

    Attributes
    ----------
    rpc_url : str
        The ledger RPC endpoint URL.
    block_explorer_url : str | None
        Optional block explorer base URL.
    chain_id : int | None
        Chain ID, when already known. Explorer links do not need it.
    """

    rpc_url: str
    block_explorer_url: str | None = None
    chain_id: int | None = None

    def _explorer_link(self, kind: str, value: str) -> str | None:
        if not self.block_explorer_url:
            return None
        return f"{self.block_explorer_url.rstrip('/')}/{kind}/{value}"

    def get_tx_url(self, tx_hash: str) -> str | None:
        """Explorer URL for a transaction, or None without an explorer."""
        return self._explorer_link("tx", tx_hash)

    def get_address_url(self, address: str) -> str | None:
        """Explorer URL for an account, or None without an explorer."""
        return self._explorer_link("address", address)
