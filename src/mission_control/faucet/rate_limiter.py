"""Rate Limiter for the Mission Control faucet.

Features:
- One grant per requester per cooldown window
- Latest grant timestamp only, kept in memory for the process lifetime
- Human readable remaining wait time
"""

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_wait(remaining: timedelta) -> str:
    """Format a remaining wait for user display.

    Uses seconds below one minute, minutes below one hour and hours
    otherwise, each rounded to the nearest whole unit.

    Parameters
    ----------
    remaining : timedelta
        Time left until the requester is eligible again.

    Returns
    -------
    str
        e.g. ``"30 second(s)"``, ``"1 minute(s)"`` or ``"2 hour(s)"``.
    """
    seconds = remaining.total_seconds()
    if seconds < SECONDS_PER_MINUTE:
        return f"{_round_half_up(seconds)} second(s)"
    if seconds < SECONDS_PER_HOUR:
        return f"{_round_half_up(seconds / SECONDS_PER_MINUTE)} minute(s)"
    return f"{_round_half_up(seconds / SECONDS_PER_HOUR)} hour(s)"


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""

    allowed: bool
    remaining: timedelta | None  # Time until next grant allowed
    reason: str | None  # Formatted wait if not allowed


class RateLimiter:
    """In-memory grant table for faucet requests.

    Holds the timestamp of the latest grant per requester. Entries are
    overwritten on every grant and never removed; they stop mattering
    once the cooldown window has elapsed.

    The check and the record are synchronous so that a caller running
    on an event loop can perform both without yielding in between.

    Parameters
    ----------
    cooldown_minutes : int
        Minutes required between grants.
    clock : Callable[[], float]
        Source of the current time in seconds since the epoch.
    """

    def __init__(
        self,
        cooldown_minutes: int = 60,
        clock: Callable[[], float] = time.time,
    ):
        self._cooldown_seconds = cooldown_minutes * SECONDS_PER_MINUTE
        self._clock = clock
        self._grants: dict[str, float] = {}

    @property
    def cooldown(self) -> timedelta:
        """Cooldown window between grants."""
        return timedelta(seconds=self._cooldown_seconds)

    def _now(self, now: float | None) -> float:
        return self._clock() if now is None else now

    def last_grant(self, user_id: str) -> float | None:
        """Get the timestamp of the latest grant, if any."""
        return self._grants.get(user_id)

    def is_eligible(self, user_id: str, now: float | None = None) -> bool:
        """Check whether a requester may receive funds.

        Parameters
        ----------
        user_id : str
            Requester identifier (e.g., Slack user ID).
        now : float | None
            Current time in seconds; defaults to the limiter clock.

        Returns
        -------
        bool
            True if there is no grant on record or the cooldown has elapsed.
        """
        last = self._grants.get(user_id)
        if last is None:
            return True
        return self._now(now) - last >= self._cooldown_seconds

    def record_grant(self, user_id: str, now: float | None = None) -> None:
        """Record a grant for a requester, replacing any previous one.

        Parameters
        ----------
        user_id : str
            Requester identifier.
        now : float | None
            Grant time in seconds; defaults to the limiter clock.
        """
        self._grants[user_id] = self._now(now)
        logger.debug("Grant recorded", extra={"user_id": user_id})

    def time_until_eligible(self, user_id: str, now: float | None = None) -> timedelta:
        """Get the time left until a requester is eligible again.

        Parameters
        ----------
        user_id : str
            Requester identifier.
        now : float | None
            Current time in seconds; defaults to the limiter clock.

        Returns
        -------
        timedelta
            Remaining wait, zero if already eligible.
        """
        last = self._grants.get(user_id)
        if last is None:
            return timedelta(0)
        remaining = last + self._cooldown_seconds - self._now(now)
        return timedelta(seconds=max(0.0, remaining))

    def check_limit(self, user_id: str, now: float | None = None) -> RateLimitResult:
        """Check a requester against the cooldown window.

        Parameters
        ----------
        user_id : str
            Requester identifier.
        now : float | None
            Current time in seconds; defaults to the limiter clock.

        Returns
        -------
        RateLimitResult
            Whether a grant is allowed and, if not, the remaining wait.
        """
        now = self._now(now)
        if self.is_eligible(user_id, now):
            return RateLimitResult(allowed=True, remaining=None, reason=None)

        remaining = self.time_until_eligible(user_id, now)
        return RateLimitResult(
            allowed=False,
            remaining=remaining,
            reason=format_wait(remaining),
        )
