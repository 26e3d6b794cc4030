#!/usr/bin/env python3
"""Mission Control - faucet and balance bot for development networks.

Entry point for the Mission Control service.
"""

import asyncio
import os
import signal
import sys
import tempfile
from pathlib import Path

from eth_account import Account
from pydantic import ValidationError

from mission_control.blockchain.client import LedgerClient
from mission_control.blockchain.health import LedgerHealthCheck
from mission_control.blockchain.networks import NetworkInfo
from mission_control.cli import create_parser, run_cli
from mission_control.config import MissionControlConfig
from mission_control.core.wallet import EnvironmentWallet
from mission_control.faucet import FaucetService, RateLimiter
from mission_control.observability.health import HealthServer
from mission_control.observability.logging import configure_logging, get_logger
from mission_control.slack.adapter import SlackAdapter, SlackHealthCheck
from mission_control.slack.commands import CommandDispatcher, register_commands
from mission_control.slack.formatter import MessageFormatter


def generate_wallet(output_path: str) -> None:
    """Generate a new faucet key and save it to a file.

    Parameters
    ----------
    output_path : str
        Path to save the key file.
    """
    account = Account.create()

    key_path = Path(output_path)
    key_path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the target directory so the rename stays on one filesystem
    fd, temp_path = tempfile.mkstemp(dir=key_path.parent, prefix=".mission-control-key-")
    fd_closed = False
    try:
        os.fchmod(fd, 0o600)
        os.write(fd, account.key.hex().encode())
        os.close(fd)
        fd_closed = True
        os.rename(temp_path, key_path)
    except Exception:
        if not fd_closed:
            os.close(fd)
        Path(temp_path).unlink(missing_ok=True)
        raise

    print(f"""
Faucet key generated successfully!

  Address:     {account.address}
  Private Key: {key_path.absolute()}

Next steps:

  1. Fund this address with native tokens on your development network

  2. Launch Mission Control with this key:

     export ACCOUNT_KEY=$(cat {key_path.absolute()})
     mission-control run

IMPORTANT: Keep this key secure. Anyone with access can spend the faucet funds.
""")


def parse_args():
    """Parse command line arguments."""
    return create_parser().parse_args()


async def run_service() -> None:
    """Run the Mission Control bot (long-running mode).

    Wires up and starts all service components:
    - HealthServer for liveness/readiness probes and metrics
    - Faucet wallet and LedgerClient
    - RateLimiter and FaucetService
    - SlackAdapter listening on the configured channel
    """
    try:
        config = MissionControlConfig()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(level=config.log_level, log_format=config.log_format)

    logger = get_logger(__name__)
    logger.info(
        "Mission Control starting",
        rpc_url=config.rpc_url,
        channel=config.slack_channel,
        token_count=config.token_count,
        cooldown_minutes=config.cooldown_minutes,
    )

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def on_shutdown_signal(sig_name: str) -> None:
        logger.info("Shutdown signal received", signal=sig_name)
        shutdown_event.set()

    loop.add_signal_handler(signal.SIGTERM, lambda: on_shutdown_signal("SIGTERM"))
    loop.add_signal_handler(signal.SIGINT, lambda: on_shutdown_signal("SIGINT"))

    wallet = EnvironmentWallet(private_key=config.account_key)
    logger.info("Faucet wallet loaded", address=wallet.address)

    # The ledger is first contacted by a chat request or a readiness probe
    client = LedgerClient(config.rpc_url, wallet)

    network = None
    if config.block_explorer_url:
        network = NetworkInfo(rpc_url=config.rpc_url, block_explorer_url=config.block_explorer_url)

    faucet = FaucetService(
        rate_limiter=RateLimiter(cooldown_minutes=config.cooldown_minutes),
        client=client,
        token_count=config.token_count,
    )

    slack_adapter = SlackAdapter(
        bot_token=config.slack_bot_token,
        app_token=config.slack_app_token,
    )
    register_commands(
        slack_adapter.app,
        faucet,
        CommandDispatcher(config.slack_channel),
        MessageFormatter(
            network,
            token_symbol=config.token_symbol,
            cooldown_minutes=config.cooldown_minutes,
        ),
    )

    health_server = HealthServer(port=config.metrics_port)
    health_server.add_check(LedgerHealthCheck(client, min_balance=config.token_count))
    health_server.add_check(SlackHealthCheck(slack_adapter))

    try:
        await health_server.start()
        await slack_adapter.start()
        logger.info("Mission Control ready")

        await shutdown_event.wait()
        logger.info("Mission Control shutting down")
    finally:
        await slack_adapter.stop()
        await health_server.stop()
        loop.remove_signal_handler(signal.SIGTERM)
        loop.remove_signal_handler(signal.SIGINT)
        logger.info("Mission Control shutdown complete")


async def main() -> None:
    """Main entry point for Mission Control."""
    args = parse_args()

    if args.generate_wallet:
        generate_wallet(args.generate_wallet)
        return

    if args.command and args.command != "run":
        exit_code = run_cli(args)
        if exit_code >= 0:
            sys.exit(exit_code)
        create_parser().print_help()
        sys.exit(0)

    await run_service()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
