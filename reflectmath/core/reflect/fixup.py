"""Rounding fixup for truncated share conversions.

Each conversion divides twice (or once) with floor semantics, so the raw
share counts can miss the exact balance-level expectation by a few units.
The helpers here nudge a holder's shares and the total shares together, in
lock-step, until the recomputed balance lands inside its target band.

Nudges are whole shares and sized from the current deficit (see
`shares_to_reach` / `shares_to_shed`), so one step usually suffices; the loops
are still bounded by an explicit round count.

Intermediate balances are logged at DEBUG level.
"""

from __future__ import annotations

import logging

from .math import shares_to_reach, shares_to_shed, to_balance
from .types import Balance, Shares

logger = logging.getLogger(__name__)


def _nudge(shares: Shares, total_shares: Shares, total_supply: Balance, low: Balance, high: Balance) -> Shares:
    """Signed share adjustment that moves a holder's balance into ``[low, high]``."""
    balance = to_balance(shares, total_supply, total_shares)
    if balance < low:
        return shares_to_reach(shares, total_shares, total_supply, low)
    if balance > high:
        return -shares_to_shed(shares, total_shares, total_supply, high)
    return 0


def _settle_low(
    shares: Shares,
    total_shares: Shares,
    total_supply: Balance,
    low: Balance,
    high: Balance,
    floor_shares: Shares = 0,
) -> Shares:
    """Like `_nudge`, but a balance above `low` is shed down to exactly `low`.

    The shed is only taken when it lands on `low` without going below
    `floor_shares`; otherwise any balance within ``[low, high]`` is kept.
    """
    if to_balance(shares, total_supply, total_shares) > low:
        d = shares_to_shed(shares, total_shares, total_supply, low)
        if 0 < d <= shares - floor_shares and to_balance(shares - d, total_supply, total_shares - d) == low:
            return -d
    return _nudge(shares, total_shares, total_supply, low, high)


def fixup_transfer(
    *,
    total_supply: Balance,
    new_from_shares: Shares,
    new_to_shares: Shares,
    new_total_shares: Shares,
    from_target: Balance,
    to_low: Balance,
    to_high: Balance,
    rounds: int,
) -> tuple[Shares, Shares, Shares]:
    """Correct both sides of a two-party transfer.

    The sender must land exactly on `from_target`; the receiver on `to_low`
    when some share count reaches it exactly, else anywhere in
    ``[to_low, to_high]``. Each round fixes the sender first, then the receiver
    against the updated total. Stops at the first round without a nudge.
    """
    for round_no in range(rounds):
        d_from = _nudge(new_from_shares, new_total_shares, total_supply, from_target, from_target)
        new_from_shares += d_from
        new_total_shares += d_from

        d_to = _settle_low(new_to_shares, new_total_shares, total_supply, to_low, to_high)
        new_to_shares += d_to
        new_total_shares += d_to

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "transfer fixup round %d: from %+d -> %d (want %d), to %+d -> %d (want [%d, %d])",
                round_no,
                d_from,
                to_balance(new_from_shares, total_supply, new_total_shares),
                from_target,
                d_to,
                to_balance(new_to_shares, total_supply, new_total_shares),
                to_low,
                to_high,
            )

        if d_from == 0 and d_to == 0:
            break

    return new_from_shares, new_to_shares, new_total_shares


def fixup_receiver(
    *,
    total_supply: Balance,
    new_to_shares: Shares,
    uninvolved_shares: Shares,
    to_low: Balance,
    to_high: Balance,
    floor_shares: Shares,
    rounds: int,
) -> tuple[Shares, Shares]:
    """Correct the receiver of a transfer-all; the sender ends with zero shares.

    Settles on `to_low` when that is reachable exactly. A downward nudge
    never takes the receiver below `floor_shares`: if it would, the receiver
    is clamped there, the total is recomputed from the uninvolved shares and
    the loop ends.
    """
    new_total_shares = uninvolved_shares + new_to_shares
    for round_no in range(rounds):
        before = to_balance(new_to_shares, total_supply, new_total_shares)
        delta = _settle_low(new_to_shares, new_total_shares, total_supply, to_low, to_high, floor_shares)
        if delta == 0:
            break
        if new_to_shares + delta < floor_shares:
            logger.debug(
                "transfer-all fixup round %d: clamping receiver at %d shares (nudge %+d), to %d -> %d",
                round_no,
                floor_shares,
                delta,
                before,
                to_balance(floor_shares, total_supply, uninvolved_shares + floor_shares),
            )
            new_to_shares = floor_shares
            new_total_shares = uninvolved_shares + new_to_shares
            break
        new_to_shares += delta
        new_total_shares += delta
        logger.debug(
            "transfer-all fixup round %d: to %+d shares, %d -> %d (want [%d, %d])",
            round_no,
            delta,
            before,
            to_balance(new_to_shares, total_supply, new_total_shares),
            to_low,
            to_high,
        )
    return new_to_shares, new_total_shares


def fixup_deliver(
    *,
    total_supply: Balance,
    new_from_shares: Shares,
    uninvolved_shares: Shares,
    from_target: Balance,
) -> tuple[Shares, Shares]:
    """Single-step correction of a delivery.

    Truncation can only lower the sender's balance here, so the one nudge is
    always upward and sized to reach `from_target` directly.
    """
    new_total_shares = uninvolved_shares + new_from_shares
    before = to_balance(new_from_shares, total_supply, new_total_shares)
    if before < from_target:
        d = shares_to_reach(new_from_shares, new_total_shares, total_supply, from_target)
        new_from_shares += d
        new_total_shares += d
        logger.debug("deliver fixup: from %d -> +%d shares (want %d)", before, d, from_target)
    return new_from_shares, new_total_shares
