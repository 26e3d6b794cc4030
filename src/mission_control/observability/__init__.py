"""Observability for the Mission Control bot."""

from .health import HealthCheck, HealthServer, HealthStatus
from .logging import clear_request_id, configure_logging, get_logger, set_request_id
from .metrics import (
    FAUCET_BALANCE,
    LEDGER_CALL_DURATION,
    REQUEST_DURATION,
    REQUESTS,
    TOKENS_DISTRIBUTED,
)

__all__ = [
    # Health
    "HealthCheck",
    "HealthServer",
    "HealthStatus",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "set_request_id",
    # Metrics
    "FAUCET_BALANCE",
    "LEDGER_CALL_DURATION",
    "REQUEST_DURATION",
    "REQUESTS",
    "TOKENS_DISTRIBUTED",
]
