"""Chat command handlers for the Mission Control faucet.

Commands (plain channel messages, not slash commands):
- !faucet send <address> - Request tokens
- !balance <address> - Check an account balance

Only messages posted in the configured channel are considered. Any
other text is ignored without a reply.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum

from slack_bolt.async_app import AsyncApp

from mission_control.faucet.service import FaucetService, Rejection
from mission_control.observability.logging import clear_request_id, set_request_id
from mission_control.observability.metrics import REQUEST_DURATION, REQUESTS

from .formatter import MessageFormatter

logger = logging.getLogger(__name__)


class Command(str, Enum):
    """Recognised chat commands, keyed by their prefix."""

    FAUCET_SEND = "!faucet send"
    BALANCE = "!balance"


# Checked in order; first match wins
COMMAND_PREFIXES = (Command.FAUCET_SEND, Command.BALANCE)

# Metric label per command
COMMAND_LABELS = {
    Command.FAUCET_SEND: "faucet_send",
    Command.BALANCE: "balance",
}


@dataclass
class Action:
    """A routed chat command."""

    command: Command
    user_id: str
    address: str


class CommandDispatcher:
    """Routes chat messages from one channel to faucet commands.

    Parameters
    ----------
    channel : str
        ID of the only channel the bot answers in.
    """

    def __init__(self, channel: str):
        self._channel = channel

    @property
    def channel(self) -> str:
        """Channel the bot answers in."""
        return self._channel

    def dispatch(
        self, origin_channel: str | None, author_id: str | None, text: str | None
    ) -> Action | None:
        """Match a message against the known command prefixes.

        Parameters
        ----------
        origin_channel : str | None
            Channel the message was posted in.
        author_id : str | None
            Author of the message.
        text : str | None
            Message text.

        Returns
        -------
        Action | None
            The routed command, or None if the message should be ignored.
        """
        if origin_channel != self._channel or not author_id or not text:
            return None

        for command in COMMAND_PREFIXES:
            if text.startswith(command.value):
                address = text[len(command.value) :].strip()
                return Action(command=command, user_id=author_id, address=address)

        return None


def register_commands(
    app: AsyncApp,
    faucet: FaucetService,
    dispatcher: CommandDispatcher,
    formatter: MessageFormatter,
) -> None:
    """Register the channel message listener with the Slack app.

    Parameters
    ----------
    app : AsyncApp
        Slack Bolt async app instance.
    faucet : FaucetService
        Faucet service for handling requests.
    dispatcher : CommandDispatcher
        Channel filter and command router.
    formatter : MessageFormatter
        Reply formatter.
    """

    @app.event("message")
    async def handle_message(event, say):
        """Handle a message posted in a channel the bot is in."""
        action = dispatcher.dispatch(event.get("channel"), event.get("user"), event.get("text"))
        if action is None:
            return

        await handle_action(action, event.get("ts") or "", faucet, formatter, say)


async def handle_action(
    action: Action,
    request_id: str,
    faucet: FaucetService,
    formatter: MessageFormatter,
    say,
) -> None:
    """Run a routed command and post the reply.

    Faults raised by the faucet service are logged, counted and answered
    with a generic error; they never escape into the Slack listener.
    """
    command = COMMAND_LABELS[action.command]
    set_request_id(request_id)
    start = time.monotonic()

    logger.info(
        "Received chat command",
        extra={"user_id": action.user_id, "command": command, "address": action.address},
    )

    try:
        if action.command == Command.FAUCET_SEND:
            result = await faucet.handle_send(action.user_id, action.address)
            reply = (
                formatter.format_rejection(result)
                if isinstance(result, Rejection)
                else formatter.format_transfer(result)
            )
        else:
            result = await faucet.handle_balance(action.address)
            reply = (
                formatter.format_rejection(result)
                if isinstance(result, Rejection)
                else formatter.format_balance(result)
            )
        status = result.kind.value if isinstance(result, Rejection) else "success"
    except Exception:
        logger.exception(
            "Error handling chat command",
            extra={"user_id": action.user_id, "command": command},
        )
        status = "error"
        if action.command == Command.FAUCET_SEND:
            reply = formatter.format_error("Transaction failed", formatter.limit_footer)
        else:
            reply = formatter.format_error("Balance query failed", "Please try again later")
    finally:
        REQUEST_DURATION.labels(command=command).observe(time.monotonic() - start)
        clear_request_id()

    REQUESTS.labels(command=command, status=status).inc()
    await say(**reply)
