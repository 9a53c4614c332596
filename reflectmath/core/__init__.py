"""
Core conversion algorithms
"""

from .reflect import (
    get_burn_shares,
    get_deliver_shares,
    get_transfer_all_shares,
    get_transfer_shares,
)

__all__ = [
    "get_transfer_shares",
    "get_transfer_all_shares",
    "get_deliver_shares",
    "get_burn_shares",
]
