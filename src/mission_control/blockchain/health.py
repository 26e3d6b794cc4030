"""Readiness check for the ledger RPC endpoint."""

import asyncio

from mission_control.observability.health import CheckResult, HealthCheck, HealthStatus
from mission_control.observability.metrics import FAUCET_BALANCE

from .client import WEI_PER_TOKEN, LedgerClient


class LedgerHealthCheck(HealthCheck):
    """Readiness check against the ledger RPC endpoint.

    The bot is ready when the endpoint answers and the faucet wallet can
    still fund at least one grant. Every probe that reaches the ledger
    refreshes the faucet balance gauge.

    Parameters
    ----------
    client : LedgerClient
        Client for the configured RPC endpoint.
    min_balance : int
        Whole tokens the faucet must hold to report ready.
    """

    def __init__(self, client: LedgerClient, min_balance: int = 0):
        self._client = client
        self._min_balance = min_balance

    @property
    def name(self) -> str:
        return "ledger"

    async def check(self) -> CheckResult:
        connected = await asyncio.to_thread(lambda: self._client.connected)
        if not connected:
            return CheckResult(self.name, HealthStatus.NOT_READY, "RPC endpoint unreachable")

        balance_wei = await asyncio.to_thread(
            self._client.get_balance, self._client.wallet_address
        )
        balance = balance_wei // WEI_PER_TOKEN
        FAUCET_BALANCE.set(balance)

        if balance < self._min_balance:
            return CheckResult(
                self.name,
                HealthStatus.NOT_READY,
                f"Faucet balance {balance} below {self._min_balance}",
            )
        return CheckResult(self.name, HealthStatus.OK)
