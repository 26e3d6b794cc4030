"""Faucet components for Mission Control."""

from .address import normalize_address, validate_address
from .rate_limiter import RateLimiter, RateLimitResult, format_wait
from .service import BalanceReport, FaucetService, Rejection, RejectionKind, TransferReceipt

__all__ = [
    "BalanceReport",
    "FaucetService",
    "RateLimitResult",
    "RateLimiter",
    "Rejection",
    "RejectionKind",
    "TransferReceipt",
    "format_wait",
    "normalize_address",
    "validate_address",
]
