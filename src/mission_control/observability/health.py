"""Probe and metrics HTTP server for the Mission Control bot.

Routes:
- /health: liveness, answers as long as the event loop is serving
- /ready: readiness, 200 only when every registered check reports ok
- /metrics: Prometheus exposition of the default registry
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

logger = logging.getLogger(__name__)


class HealthStatus(Enum):
    """Outcome of a probe."""

    OK = "ok"
    ERROR = "error"
    NOT_READY = "not_ready"


@dataclass
class CheckResult:
    """Outcome of one readiness check."""

    name: str
    status: HealthStatus
    message: str | None = None

    @property
    def summary(self) -> str:
        if self.status == HealthStatus.OK:
            return "ok"
        return self.message or self.status.value


@dataclass
class HealthResult:
    """Aggregate readiness of the bot."""

    status: HealthStatus
    checks: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_checks(cls, results: list[CheckResult]) -> "HealthResult":
        ready = all(r.status == HealthStatus.OK for r in results)
        return cls(
            status=HealthStatus.OK if ready else HealthStatus.NOT_READY,
            checks={r.name: r.summary for r in results},
        )

    def to_dict(self) -> dict:
        """Convert to a JSON body."""
        body: dict = {"status": self.status.value}
        if self.checks:
            body["checks"] = self.checks
        return body


class HealthCheck(ABC):
    """A dependency the bot needs before it can serve faucet requests."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Key under which the result is reported."""
        ...

    @abstractmethod
    async def check(self) -> CheckResult:
        ...


class HealthServer:
    """aiohttp server exposing probes and metrics.

    Parameters
    ----------
    host : str
        Interface to bind.
    port : int
        Port to bind.
    """

    def __init__(self, host: str = "0.0.0.0", port: int = 8080):  # noqa: S104
        self._host = host
        self._port = port
        self._checks: list[HealthCheck] = []
        self._runner: web.AppRunner | None = None

    @property
    def checks(self) -> list[HealthCheck]:
        return list(self._checks)

    def add_check(self, check: HealthCheck) -> None:
        """Register a readiness check."""
        self._checks.append(check)

    def create_app(self) -> web.Application:
        """Build the application with the probe and metrics routes."""
        app = web.Application()
        app.add_routes(
            [
                web.get("/health", self._handle_health),
                web.get("/ready", self._handle_ready),
                web.get("/metrics", self._handle_metrics),
            ]
        )
        return app

    async def start(self) -> None:
        """Bind and start serving."""
        runner = web.AppRunner(self.create_app())
        await runner.setup()
        await web.TCPSite(runner, self._host, self._port).start()
        self._runner = runner
        logger.info("Health server listening", extra={"host": self._host, "port": self._port})

    async def stop(self) -> None:
        """Stop serving; a no-op when not started."""
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        logger.info("Health server stopped")

    async def _handle_health(self, _request: web.Request) -> web.Response:
        return web.json_response({"status": HealthStatus.OK.value})

    async def _handle_ready(self, _request: web.Request) -> web.Response:
        result = await self.check_readiness()
        return web.json_response(
            result.to_dict(),
            status=200 if result.status == HealthStatus.OK else 503,
        )

    async def _handle_metrics(self, _request: web.Request) -> web.Response:
        return web.Response(
            body=generate_latest(REGISTRY),
            headers={"Content-Type": CONTENT_TYPE_LATEST},
        )

    async def _run_check(self, check: HealthCheck) -> CheckResult:
        try:
            return await check.check()
        except Exception as e:
            logger.exception("Readiness check raised", extra={"check": check.name})
            return CheckResult(
                name=check.name,
                status=HealthStatus.ERROR,
                message=f"error: {type(e).__name__}: {e}",
            )

    async def check_readiness(self) -> HealthResult:
        """Run every registered check concurrently.

        A check that raises is reported as an error instead of failing
        the probe request.
        """
        results = await asyncio.gather(*(self._run_check(c) for c in self._checks))
        return HealthResult.from_checks(list(results))
