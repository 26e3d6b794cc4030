"""Ledger integration for Mission Control."""

from .client import LedgerClient
from .health import LedgerHealthCheck
from .networks import NetworkInfo

__all__ = ["LedgerClient", "LedgerHealthCheck", "NetworkInfo"]
