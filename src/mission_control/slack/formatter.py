"""Message formatter for Slack replies."""

from mission_control.blockchain.networks import NetworkInfo
from mission_control.faucet.service import (
    BalanceReport,
    Rejection,
    RejectionKind,
    TransferReceipt,
)

SUCCESS_COLOR = "#642f95"
ERROR_COLOR = "#c0392b"


def _field(title: str, value: str, short: bool = False) -> dict:
    return {"title": title, "value": value, "short": short}


def _message(
    title: str,
    color: str,
    fields: list[dict] | None = None,
    footer: str | None = None,
) -> dict:
    """Build a reply as a single Slack attachment.

    ``text`` carries the title for notifications and clients that do not
    render attachments.
    """
    attachment: dict = {"color": color, "title": title, "fallback": title}
    if fields:
        attachment["fields"] = fields
    if footer:
        attachment["footer"] = footer
    return {"text": title, "attachments": [attachment]}


class MessageFormatter:
    """Formats faucet results as Slack attachments.

    Parameters
    ----------
    network : NetworkInfo | None
        Network info for generating explorer links.
    token_symbol : str
        Symbol shown next to amounts.
    cooldown_minutes : int
        Cooldown window, quoted in reply footers.
    """

    def __init__(
        self,
        network: NetworkInfo | None = None,
        token_symbol: str = "DEV",
        cooldown_minutes: int = 60,
    ):
        self._network = network
        self._symbol = token_symbol
        self._cooldown_minutes = cooldown_minutes

    @property
    def limit_footer(self) -> str:
        """Footer describing how often funds can be requested."""
        if self._cooldown_minutes == 60:
            period = "once per hour"
        elif self._cooldown_minutes % 60 == 0:
            period = f"once every {self._cooldown_minutes // 60} hours"
        else:
            period = f"once every {self._cooldown_minutes} minutes"
        return f"Funds transactions are limited to {period}"

    def _amount(self, value: int) -> str:
        return f"{value} {self._symbol}"

    def format_transfer(self, receipt: TransferReceipt) -> dict:
        """Format a successful faucet transfer.

        Parameters
        ----------
        receipt : TransferReceipt
            The transfer result.

        Returns
        -------
        dict
            Keyword arguments for ``say``.
        """
        fields = [
            _field("To account", f"0x{receipt.address}", short=True),
            _field("Amount sent", self._amount(receipt.amount), short=True),
            _field("Current account balance", self._amount(receipt.balance)),
        ]

        if self._network and receipt.tx_hash:
            tx_url = self._network.get_tx_url(receipt.tx_hash)
            if tx_url:
                fields.append(_field("Transaction", f"<{tx_url}|{receipt.tx_hash[:16]}...>"))

        return _message("Transaction of funds", SUCCESS_COLOR, fields, self.limit_footer)

    def format_balance(self, report: BalanceReport) -> dict:
        """Format a balance query result.

        Parameters
        ----------
        report : BalanceReport
            The balance report.

        Returns
        -------
        dict
            Keyword arguments for ``say``.
        """
        account = f"0x{report.address}"
        if self._network:
            address_url = self._network.get_address_url(account)
            if address_url:
                account = f"<{address_url}|{account}>"

        fields = [
            _field("Account", account, short=True),
            _field("Balance", self._amount(report.balance), short=True),
        ]
        return _message("Account Balance", SUCCESS_COLOR, fields)

    def format_rejection(self, rejection: Rejection) -> dict:
        """Format a refused request.

        Parameters
        ----------
        rejection : Rejection
            Why the request was refused.

        Returns
        -------
        dict
            Keyword arguments for ``say``.
        """
        if rejection.kind == RejectionKind.COOLDOWN_ACTIVE:
            wait = f"You still need to wait {rejection.remaining} to receive more tokens"
            return _message(
                "You already received tokens!",
                ERROR_COLOR,
                [_field("Remaining time", wait)],
                self.limit_footer,
            )

        return _message(
            "Invalid address",
            ERROR_COLOR,
            footer="Addresses must follow the H160 address format",
        )

    def format_error(self, title: str, message: str | None = None) -> dict:
        """Format a generic error.

        Parameters
        ----------
        title : str
            Short error title.
        message : str | None
            Optional detail shown as the footer.

        Returns
        -------
        dict
            Keyword arguments for ``say``.
        """
        return _message(title, ERROR_COLOR, footer=message)
