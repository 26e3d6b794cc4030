"""Mission Control - faucet and balance bot for development networks."""

__version__ = "0.1.0"
