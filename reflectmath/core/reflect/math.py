"""Pure arithmetic for the reflect conversion engine.

Every function is stateless and operates on plain Python ints; products go
through the wide kernel so each intermediate is range-checked against the
256/512-bit representation.

Rounding is explicit: balances floor, fee and net-amount bounds ceil.
"""

from __future__ import annotations

from ...kernels.python.wide import (
    BalanceXBasisPoints,
    BalanceXShares,
    div,
    div_up,
    mul,
    sub,
)
from .types import Balance, BasisPoints, Shares

BASIS: int = 10_000


def to_balance(shares: Shares, total_supply: Balance, total_shares: Shares) -> Balance:
    """``floor(shares * total_supply / total_shares)``."""
    return div(mul(BalanceXShares, shares, total_supply), total_shares)


def fee_up(amount: Balance, fee_rate: BasisPoints) -> Balance:
    """Fee charged on `amount`: ``ceil(amount * fee_rate / BASIS)``."""
    return div_up(mul(BalanceXBasisPoints, amount, fee_rate), BASIS)


def net_up(amount: Balance, fee_rate: BasisPoints) -> Balance:
    """``ceil(amount * (BASIS - fee_rate) / BASIS)``."""
    return div_up(mul(BalanceXBasisPoints, amount, BASIS - fee_rate), BASIS)


def receiver_bounds(before: Balance, amount: Balance, fee_rate: BasisPoints) -> tuple[Balance, Balance]:
    """Acceptable receiver balance after receiving `amount` minus the fee.

    The band is ``[before + amount - ceil(fee), before + ceil(net)]`` and is at
    most one unit wide.
    """
    return before + amount - fee_up(amount, fee_rate), before + net_up(amount, fee_rate)


def shares_to_reach(shares: Shares, total_shares: Shares, total_supply: Balance, target: Balance) -> Shares:
    """Fewest shares to add to both a holder and the total so its balance reaches `target`.

    Solves ``(shares + d) * S >= target * (total + d)`` for the minimal ``d``.
    Returns 0 when the balance already reaches `target`, or when no finite
    ``d`` can (``target >= S``).
    """
    have = mul(BalanceXShares, shares, total_supply)
    want = mul(BalanceXShares, target, total_shares)
    if have >= want or total_supply <= target:
        return 0
    return div_up(sub(want, have), total_supply - target)


def shares_to_shed(shares: Shares, total_shares: Shares, total_supply: Balance, ceiling: Balance) -> Shares:
    """Fewest shares to remove from both a holder and the total so its balance is at most `ceiling`.

    Solves ``(shares - d) * S < (ceiling + 1) * (total - d)`` for the minimal ``d``.
    Returns 0 when the balance is already within `ceiling`, or when removing
    shares cannot lower it (the holder owns every share).
    """
    have = mul(BalanceXShares, shares, total_supply)
    limit = mul(BalanceXShares, ceiling + 1, total_shares)
    if have < limit or shares >= total_shares or total_supply <= ceiling + 1:
        return 0
    return div(sub(have, limit), total_supply - ceiling - 1) + 1
