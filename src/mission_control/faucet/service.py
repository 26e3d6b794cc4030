"""Faucet Service for Mission Control.

Coordinates the faucet components:
- Address validation
- Rate limiter
- Ledger client

Handlers return explicit result types. Ledger failures are not caught
here; they propagate to the chat layer, which reports them.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from mission_control.blockchain.client import WEI_PER_TOKEN, LedgerClient
from mission_control.observability.metrics import TOKENS_DISTRIBUTED

from .address import normalize_address, validate_address
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class RejectionKind(str, Enum):
    """Reason a faucet request was refused."""

    INVALID_ADDRESS = "invalid_address"
    COOLDOWN_ACTIVE = "cooldown_active"


@dataclass
class Rejection:
    """A request refused before any ledger call was made."""

    kind: RejectionKind
    address: str
    remaining: str | None = None  # Formatted wait for COOLDOWN_ACTIVE


@dataclass
class TransferReceipt:
    """Result of a successful faucet transfer."""

    address: str  # Canonical form, without 0x
    amount: int  # Whole tokens sent
    balance: int  # Recipient balance in whole tokens after the transfer
    tx_hash: str


@dataclass
class BalanceReport:
    """Result of a balance query."""

    address: str  # Canonical form, without 0x
    balance: int  # Whole tokens


class FaucetService:
    """Main faucet service orchestrating all components.

    Parameters
    ----------
    rate_limiter : RateLimiter
        Grant table shared by every send request.
    client : LedgerClient
        Ledger client used to transfer funds and read balances.
    token_count : int
        Whole tokens sent per grant.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        client: LedgerClient,
        token_count: int = 10,
    ):
        self._rate_limiter = rate_limiter
        self._client = client
        self._token_count = token_count

    @property
    def token_count(self) -> int:
        """Whole tokens sent per grant."""
        return self._token_count

    @property
    def cooldown_minutes(self) -> int:
        """Minutes between grants for one requester."""
        return int(self._rate_limiter.cooldown.total_seconds() // 60)

    async def handle_send(self, user_id: str, address: str) -> TransferReceipt | Rejection:
        """Handle a ``!faucet send`` request.

        The grant is recorded as soon as the request is admitted and
        before the transfer is awaited, so a slow or failing broadcast
        still consumes the requester's cooldown window.

        Parameters
        ----------
        user_id : str
            Requester identifier for rate limiting.
        address : str
            Recipient address, with or without ``0x``.

        Returns
        -------
        TransferReceipt | Rejection
            The transfer result, or why it was refused.
        """
        rate_result = self._rate_limiter.check_limit(user_id)
        if not rate_result.allowed:
            logger.info(
                "Faucet request rejected by cooldown",
                extra={"user_id": user_id, "remaining": rate_result.reason},
            )
            return Rejection(
                kind=RejectionKind.COOLDOWN_ACTIVE,
                address=address,
                remaining=rate_result.reason,
            )

        if not validate_address(address):
            return Rejection(kind=RejectionKind.INVALID_ADDRESS, address=address)

        address = normalize_address(address)
        # No await between the check above and this record
        self._rate_limiter.record_grant(user_id)

        value_wei = self._token_count * WEI_PER_TOKEN
        tx_hash = await asyncio.to_thread(self._client.transfer, f"0x{address}", value_wei)
        balance_wei = await asyncio.to_thread(self._client.get_balance, f"0x{address}")

        TOKENS_DISTRIBUTED.inc(self._token_count)
        logger.info(
            "Faucet transfer complete",
            extra={"user_id": user_id, "to": address, "amount": self._token_count},
        )

        return TransferReceipt(
            address=address,
            amount=self._token_count,
            balance=balance_wei // WEI_PER_TOKEN,
            tx_hash=tx_hash,
        )

    async def handle_balance(self, address: str) -> BalanceReport | Rejection:
        """Handle a ``!balance`` request.

        Parameters
        ----------
        address : str
            Account address, with or without ``0x``.

        Returns
        -------
        BalanceReport | Rejection
            The balance in whole tokens, or why the query was refused.
        """
        if not validate_address(address):
            return Rejection(kind=RejectionKind.INVALID_ADDRESS, address=address)

        address = normalize_address(address)
        balance_wei = await asyncio.to_thread(self._client.get_balance, f"0x{address}")

        return BalanceReport(address=address, balance=balance_wei // WEI_PER_TOKEN)
