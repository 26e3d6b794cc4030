"""Core Mission Control components."""

from .wallet import EnvironmentWallet, WalletProvider

__all__ = [
    "EnvironmentWallet",
    "WalletProvider",
]
