"""H160 account address validation.

Any 40 alphanumeric characters are accepted; no checksum is verified.
"""

import re

# 40 alphanumeric characters once an optional 0x prefix is removed
H160_PATTERN = re.compile(r"[a-zA-Z0-9]{40}")


def normalize_address(address: str) -> str:
    """Strip a single leading ``0x`` prefix.

    Parameters
    ----------
    address : str
        Address as typed by the user.

    Returns
    -------
    str
        The address without its ``0x`` prefix.
    """
    if address.startswith("0x"):
        return address[2:]
    return address


def validate_address(address: str) -> bool:
    """Validate H160 address format.

    Parameters
    ----------
    address : str
        Address to validate, with or without the ``0x`` prefix.

    Returns
    -------
    bool
        True if the address is 40 alphanumeric characters long.
    """
    return bool(H160_PATTERN.fullmatch(normalize_address(address)))
