"""Prometheus metrics for the Mission Control faucet.

Metrics:
- mission_control_requests_total: Counter of chat commands by command and outcome
- mission_control_tokens_distributed_total: Counter of whole tokens sent
- mission_control_faucet_balance: Gauge of the faucet account balance
- mission_control_request_duration_seconds: Histogram of command handling time
- mission_control_ledger_call_duration_seconds: Histogram of ledger RPC calls
"""

from prometheus_client import Counter, Gauge, Histogram

# Counters
REQUESTS = Counter(
    "mission_control_requests_total",
    "Total number of chat commands handled",
    ["command", "status"],
)

TOKENS_DISTRIBUTED = Counter(
    "mission_control_tokens_distributed_total",
    "Total whole tokens sent by the faucet",
)

# Gauges
FAUCET_BALANCE = Gauge(
    "mission_control_faucet_balance",
    "Faucet account balance in whole tokens",
)

# Histograms
REQUEST_DURATION = Histogram(
    "mission_control_request_duration_seconds",
    "Chat command processing duration",
    ["command"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

LEDGER_CALL_DURATION = Histogram(
    "mission_control_ledger_call_duration_seconds",
    "Ledger RPC call duration",
    ["operation"],
    buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
)
