"""Slack integration for the Mission Control faucet."""

from .adapter import SlackAdapter, SlackHealthCheck
from .commands import CommandDispatcher, register_commands
from .formatter import MessageFormatter

__all__ = [
    "CommandDispatcher",
    "MessageFormatter",
    "SlackAdapter",
    "SlackHealthCheck",
    "register_commands",
]
