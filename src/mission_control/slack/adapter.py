"""Slack connection for the Mission Control faucet.

The bot reads channel messages over Socket Mode, so it needs no public
webhook endpoint.
"""

import logging

from pydantic import SecretStr
from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.async_app import AsyncApp

from mission_control.observability.health import CheckResult, HealthCheck, HealthStatus

logger = logging.getLogger(__name__)


class SlackAdapter:
    """Owns the Bolt app and its Socket Mode connection.

    Listeners are registered on ``app`` before ``start`` is awaited.

    Parameters
    ----------
    bot_token : SecretStr
        Bot token (xoxb-...) used for the Web API.
    app_token : SecretStr
        App-level token (xapp-...) used for Socket Mode.
    """

    def __init__(self, bot_token: SecretStr, app_token: SecretStr):
        self._app_token = app_token
        self._app = AsyncApp(token=bot_token.get_secret_value())
        self._handler: AsyncSocketModeHandler | None = None

    @property
    def app(self) -> AsyncApp:
        return self._app

    @property
    def is_running(self) -> bool:
        return self._handler is not None

    async def start(self) -> None:
        """Open the Socket Mode connection.

        Raises
        ------
        Exception
            Whatever the Slack SDK raises when the connection fails; the
            adapter is left stopped.
        """
        if self._handler is not None:
            logger.warning("Slack connection already open")
            return

        handler = AsyncSocketModeHandler(self._app, self._app_token.get_secret_value())
        logger.info("Opening Slack Socket Mode connection")
        try:
            await handler.connect_async()
        except Exception as e:
            logger.error("Slack connection failed", extra={"error": str(e)})
            raise
        self._handler = handler
        logger.info("Slack connection open")

    async def stop(self) -> None:
        """Close the Socket Mode connection if open."""
        handler, self._handler = self._handler, None
        if handler is None:
            return
        await handler.close_async()
        logger.info("Slack connection closed")


class SlackHealthCheck(HealthCheck):
    """Readiness check reporting whether the bot is listening on Slack."""

    def __init__(self, adapter: SlackAdapter):
        self._adapter = adapter

    @property
    def name(self) -> str:
        return "slack"

    async def check(self) -> CheckResult:
        if self._adapter.is_running:
            return CheckResult(self.name, HealthStatus.OK)
        return CheckResult(self.name, HealthStatus.NOT_READY, "Socket Mode not connected")
