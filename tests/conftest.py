"""Pytest configuration and fixtures for Mission Control tests."""

import logging
import os

import pytest

from mission_control.observability import logging as log_module

ENV_PREFIXES = ("MISSION_CONTROL_", "SLACK_", "FAUCET_", "TOKEN_")
ENV_KEYS = ("RPC_URL", "ACCOUNT_KEY", "BLOCK_EXPLORER_URL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear Mission Control environment variables before each test."""
    for key in list(os.environ.keys()):
        if key.startswith(ENV_PREFIXES) or key in ENV_KEYS:
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_log_handler():
    """Remove the root handler installed by configure_logging after each test."""
    yield
    if log_module._handler is not None:
        logging.getLogger().removeHandler(log_module._handler)
        log_module._handler = None
