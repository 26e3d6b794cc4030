"""CLI subcommands for Mission Control operators.

Provides command-line access to:
- Faucet wallet information (address, balance)
- Account balance queries
- One-off transfers outside the chat rate limit
"""

import argparse
import json
import sys

from mission_control.blockchain.client import WEI_PER_TOKEN, LedgerClient
from mission_control.config import MissionControlConfig
from mission_control.core.wallet import EnvironmentWallet
from mission_control.faucet.address import normalize_address, validate_address

INVALID_ADDRESS_MESSAGE = "Invalid address: addresses must follow the H160 address format"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mission-control",
        description="Mission Control - faucet and balance bot for development networks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would happen without executing",
    )
    parser.add_argument(
        "--generate-wallet",
        metavar="FILE",
        help="Generate a new faucet key and save it to FILE, then exit",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    wallet_parser = subparsers.add_parser("wallet", help="Faucet wallet information")
    wallet_sub = wallet_parser.add_subparsers(dest="wallet_command")
    wallet_sub.add_parser("address", help="Show faucet wallet address")
    wallet_sub.add_parser("balance", help="Show faucet wallet balance")

    balance_parser = subparsers.add_parser("balance", help="Show the balance of an account")
    balance_parser.add_argument("address", type=str, help="Account address")

    send_parser = subparsers.add_parser(
        "send", help="Send the configured token amount to an account (no rate limit)"
    )
    send_parser.add_argument("address", type=str, help="Recipient address")

    subparsers.add_parser("run", help="Start the bot")

    return parser


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(
        self,
        config: MissionControlConfig,
        dry_run: bool = False,
        json_output: bool = False,
    ):
        self.config = config
        self.dry_run = dry_run
        self.json_output = json_output
        self._wallet: EnvironmentWallet | None = None
        self._client: LedgerClient | None = None

    @property
    def wallet(self) -> EnvironmentWallet:
        """Get faucet wallet (lazy loaded)."""
        if self._wallet is None:
            self._wallet = EnvironmentWallet(private_key=self.config.account_key)
        return self._wallet

    @property
    def client(self) -> LedgerClient:
        """Get ledger client (lazy loaded)."""
        if self._client is None:
            self._client = LedgerClient(self.config.rpc_url, self.wallet)
        return self._client

    def output(self, data: dict) -> None:
        """Output data in the appropriate format."""
        if self.json_output:
            print(json.dumps(data, indent=2))
        else:
            for key, value in data.items():
                print(f"{key}: {value}")


def _tokens(wei: int, symbol: str) -> str:
    return f"{wei // WEI_PER_TOKEN} {symbol}"


def cmd_wallet_address(ctx: CLIContext) -> int:
    """Show faucet wallet address."""
    try:
        ctx.output({"address": ctx.wallet.address})
        return 0
    except Exception as e:
        ctx.output({"error": str(e)})
        return 1


def cmd_wallet_balance(ctx: CLIContext) -> int:
    """Show faucet wallet balance."""
    try:
        if not ctx.client.connected:
            ctx.output({"error": "Not connected to RPC endpoint"})
            return 1

        wei = ctx.client.get_balance(ctx.wallet.address)
        ctx.output(
            {
                "address": ctx.wallet.address,
                "balance": _tokens(wei, ctx.config.token_symbol),
                "rpc": ctx.config.rpc_url,
                "chain_id": ctx.client.chain_id,
            }
        )
        return 0
    except Exception as e:
        ctx.output({"error": str(e)})
        return 1


def cmd_balance(ctx: CLIContext, address: str) -> int:
    """Show the balance of an account."""
    if not validate_address(address):
        ctx.output({"error": INVALID_ADDRESS_MESSAGE})
        return 1

    account = f"0x{normalize_address(address)}"
    try:
        wei = ctx.client.get_balance(account)
        ctx.output({"account": account, "balance": _tokens(wei, ctx.config.token_symbol)})
        return 0
    except Exception as e:
        ctx.output({"error": str(e)})
        return 1


def cmd_send(ctx: CLIContext, address: str) -> int:
    """Send the configured token amount to an account."""
    if not validate_address(address):
        ctx.output({"error": INVALID_ADDRESS_MESSAGE})
        return 1

    account = f"0x{normalize_address(address)}"
    amount = f"{ctx.config.token_count} {ctx.config.token_symbol}"

    try:
        if ctx.dry_run:
            # Nonce and chain ID are read from the endpoint; nothing is signed
            tx = ctx.client.build_transfer(account, ctx.config.token_count * WEI_PER_TOKEN)
            ctx.output(
                {
                    "dry_run": True,
                    "action": "transfer",
                    "amount": amount,
                    "transaction": dict(tx),
                    "message": f"Would send {amount} to {account}",
                }
            )
            return 0

        tx_hash = ctx.client.transfer(account, ctx.config.token_count * WEI_PER_TOKEN)
        wei = ctx.client.get_balance(account)
        ctx.output(
            {
                "success": True,
                "action": "transfer",
                "to": account,
                "amount": amount,
                "tx_hash": tx_hash,
                "balance": _tokens(wei, ctx.config.token_symbol),
            }
        )
        return 0
    except Exception as e:
        ctx.output({"error": str(e)})
        return 1


def run_cli(args: argparse.Namespace) -> int:
    """Execute CLI command based on parsed arguments.

    Returns
    -------
    int
        Exit code: 0 for success, positive for error, -1 signals caller
        to show help (no CLI command specified).
    """
    try:
        config = MissionControlConfig()
    except Exception as e:
        if args.json:
            print(json.dumps({"error": f"Configuration error: {e}"}))
        else:
            print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    ctx = CLIContext(config, dry_run=args.dry_run, json_output=args.json)

    if args.command == "wallet":
        if args.wallet_command == "address":
            return cmd_wallet_address(ctx)
        elif args.wallet_command == "balance":
            return cmd_wallet_balance(ctx)
        else:
            print("Usage: mission-control wallet [address|balance]", file=sys.stderr)
            return 1

    elif args.command == "balance":
        return cmd_balance(ctx, args.address)

    elif args.command == "send":
        return cmd_send(ctx, args.address)

    else:
        return -1
