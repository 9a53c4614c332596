"""Invariant checkers for converted shares.

Each function takes the request and the engine's result and returns True when
the invariant holds. `check_transfer()`, `check_transfer_all()` and
`check_deliver()` return the list of violated invariant IDs (empty = all pass).

These are per-conversion invariants over the two parties and the implicit
uninvolved pool; ledger-wide conservation is `ShareTable.verify_conservation`.

Balance-based checks report False for negative or empty share counts rather
than raising.
"""

from __future__ import annotations

from typing import Callable

from .math import receiver_bounds, to_balance
from .types import (
    DeliverRequest,
    DeliverShares,
    TransferAllRequest,
    TransferAllShares,
    TransferRequest,
    TransferShares,
)


# ---------------------------------------------------------------------------
# Transfer
# ---------------------------------------------------------------------------

def inv_transfer_conservation(req: TransferRequest, out: TransferShares) -> bool:
    return out.new_from_shares + out.new_to_shares + req.uninvolved_shares == out.new_total_shares


def inv_transfer_non_negative(req: TransferRequest, out: TransferShares) -> bool:
    return out.new_from_shares >= 0 and out.new_to_shares >= 0 and out.new_total_shares > 0


def inv_transfer_sender_exact(req: TransferRequest, out: TransferShares) -> bool:
    if not inv_transfer_non_negative(req, out):
        return False
    before = to_balance(req.from_shares, req.total_supply, req.total_shares)
    after = to_balance(out.new_from_shares, req.total_supply, out.new_total_shares)
    return before - req.amount == after


def inv_transfer_receiver_in_band(req: TransferRequest, out: TransferShares) -> bool:
    if not inv_transfer_non_negative(req, out):
        return False
    before = to_balance(req.to_shares, req.total_supply, req.total_shares)
    low, high = receiver_bounds(before, req.amount, req.fee_rate)
    after = to_balance(out.new_to_shares, req.total_supply, out.new_total_shares)
    return low <= after <= high


# ---------------------------------------------------------------------------
# Transfer-all
# ---------------------------------------------------------------------------

def inv_transfer_all_conservation(req: TransferAllRequest, out: TransferAllShares) -> bool:
    return out.new_to_shares + req.uninvolved_shares == out.new_total_shares


def inv_transfer_all_non_negative(req: TransferAllRequest, out: TransferAllShares) -> bool:
    return out.new_to_shares >= 0 and out.new_total_shares > 0


def inv_transfer_all_receiver_not_short(req: TransferAllRequest, out: TransferAllShares) -> bool:
    """Receiver gets at least the low end of its band.

    The upper end is not checked: a clamped receiver may keep more than the
    band allows.
    """
    if not inv_transfer_all_non_negative(req, out):
        return False
    amount = to_balance(req.from_shares, req.total_supply, req.total_shares)
    before = to_balance(req.to_shares, req.total_supply, req.total_shares)
    low, _ = receiver_bounds(before, amount, req.fee_rate)
    after = to_balance(out.new_to_shares, req.total_supply, out.new_total_shares)
    return low <= after


# ---------------------------------------------------------------------------
# Deliver
# ---------------------------------------------------------------------------

def inv_deliver_conservation(req: DeliverRequest, out: DeliverShares) -> bool:
    return out.new_from_shares + req.uninvolved_shares == out.new_total_shares


def inv_deliver_non_negative(req: DeliverRequest, out: DeliverShares) -> bool:
    return out.new_from_shares >= 0 and out.new_total_shares > 0


def inv_deliver_sender_exact(req: DeliverRequest, out: DeliverShares) -> bool:
    if not inv_deliver_non_negative(req, out):
        return False
    before = to_balance(req.from_shares, req.total_supply, req.total_shares)
    after = to_balance(out.new_from_shares, req.total_supply, out.new_total_shares)
    return before - req.amount == after


# ---------------------------------------------------------------------------
# Registries + check_*
# ---------------------------------------------------------------------------

TRANSFER_INVARIANTS: dict[str, Callable[[TransferRequest, TransferShares], bool]] = {
    "inv_transfer_conservation": inv_transfer_conservation,
    "inv_transfer_non_negative": inv_transfer_non_negative,
    "inv_transfer_sender_exact": inv_transfer_sender_exact,
    "inv_transfer_receiver_in_band": inv_transfer_receiver_in_band,
}

TRANSFER_ALL_INVARIANTS: dict[str, Callable[[TransferAllRequest, TransferAllShares], bool]] = {
    "inv_transfer_all_conservation": inv_transfer_all_conservation,
    "inv_transfer_all_non_negative": inv_transfer_all_non_negative,
    "inv_transfer_all_receiver_not_short": inv_transfer_all_receiver_not_short,
}

DELIVER_INVARIANTS: dict[str, Callable[[DeliverRequest, DeliverShares], bool]] = {
    "inv_deliver_conservation": inv_deliver_conservation,
    "inv_deliver_non_negative": inv_deliver_non_negative,
    "inv_deliver_sender_exact": inv_deliver_sender_exact,
}


def check_transfer(req: TransferRequest, out: TransferShares) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [inv_id for inv_id, check_fn in TRANSFER_INVARIANTS.items() if not check_fn(req, out)]


def check_transfer_all(req: TransferAllRequest, out: TransferAllShares) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [inv_id for inv_id, check_fn in TRANSFER_ALL_INVARIANTS.items() if not check_fn(req, out)]


def check_deliver(req: DeliverRequest, out: DeliverShares) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [inv_id for inv_id, check_fn in DELIVER_INVARIANTS.items() if not check_fn(req, out)]
