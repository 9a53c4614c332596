"""
reflectmath: share/balance accounting for fee-on-transfer reflection tokens.

The package logs fixup traces at DEBUG level under the ``reflectmath`` logger
and installs no handlers of its own.
"""

import logging

from .core.reflect import (
    BASIS,
    DEFAULT_PARAMS,
    EngineParams,
    get_burn_shares,
    get_deliver_shares,
    get_transfer_all_shares,
    get_transfer_shares,
    load_params,
    to_balance,
)
from .state import ShareTable

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BASIS",
    "DEFAULT_PARAMS",
    "EngineParams",
    "get_burn_shares",
    "get_deliver_shares",
    "get_transfer_all_shares",
    "get_transfer_shares",
    "load_params",
    "to_balance",
    "ShareTable",
]
