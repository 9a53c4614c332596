"""Share conversions for a fee-on-transfer reflection token.

Notation used below: ``S`` total supply, ``T`` total shares, ``B`` = `BASIS`,
``u`` uninvolved shares (held by neither party). `total_supply` never changes
here; the fee is paid to the uninvolved holders by shrinking ``T`` while ``u``
stays fixed, which raises the value of every uninvolved share.

Entry points:
- `get_transfer_shares`: two-party transfer, the sender pays ``amount`` and the
  receiver gets ``amount`` minus the fee.
- `get_transfer_all_shares`: the sender's whole position moves to the receiver.
- `get_deliver_shares`: the sender gives up ``amount`` to all other holders.
- `get_burn_shares`: not implemented.

The `*_or_raise` wrappers run the caller guards before and the invariant
checkers after a conversion.

Every new total is derived as ``u + new party shares``, so share conservation
holds by construction; the fixup only moves a party and the total together.
"""

from __future__ import annotations

from ...kernels.python.wide import (
    BalanceXBasisPoints,
    BalanceXBasisPointsXShares,
    BalanceXBasisPointsXShares2,
    BalanceXShares,
    BalanceXShares2,
    DivisionByZero,
    Shares2XBasisPoints,
    SharesXBasisPoints,
    add,
    div,
    mul,
    require_word,
    scale,
    sub,
    total,
)
from .errors import BurnNotImplementedError, ReflectGuardError, ReflectInvariantError
from .fixup import fixup_deliver, fixup_receiver, fixup_transfer
from .guards import guard_deliver, guard_transfer, guard_transfer_all
from .invariants import check_deliver, check_transfer, check_transfer_all
from .math import BASIS, receiver_bounds, to_balance
from .params import DEFAULT_PARAMS, EngineParams
from .types import (
    Balance,
    BasisPoints,
    DeliverRequest,
    DeliverShares,
    Shares,
    TransferAllRequest,
    TransferAllShares,
    TransferRequest,
    TransferShares,
)


def _uninvolved(total_shares: Shares, *party_shares: Shares) -> Shares:
    rest = require_word("total_shares", total_shares)
    if rest == 0:
        raise DivisionByZero("total_shares is zero: no shares exist")
    for i, s in enumerate(party_shares):
        rest = rest - require_word(f"party_shares[{i}]", s)
    return require_word("uninvolved_shares", rest)


def get_transfer_shares(
    amount: Balance,
    fee_rate: BasisPoints,
    total_supply: Balance,
    total_shares: Shares,
    from_shares: Shares,
    to_shares: Shares,
    *,
    params: EngineParams = DEFAULT_PARAMS,
) -> TransferShares:
    """
    New share counts after moving `amount` from sender to receiver with a fee.

    Solves, for a fixed supply and fixed uninvolved shares ``u``:
        sender balance   drops by exactly ``amount``
        receiver balance rises by ``amount * (B - fee_rate) / B``
        uninvolved balance rises by the fee

    which gives
        D        = u*S*B + amount*fee_rate*T
        new_from = u*B*(from*S - amount*T) / D
        new_to   = u*(to*S*B + amount*(B - fee_rate)*T) / D
        new_total = u + new_from + new_to

    Both divisions floor; `fixup_transfer` then corrects the sender to exactly
    ``floor(from*S/T) - amount`` and the receiver into its one-unit band.

    Raises:
        Underflow: `amount` exceeds what the sender's shares are worth.
        DivisionByZero: `total_shares` is zero, or ``D == 0`` (no uninvolved
            shares and no fee).
    """
    require_word("amount", amount)
    require_word("fee_rate", fee_rate)
    require_word("total_supply", total_supply)
    u = _uninvolved(total_shares, from_shares, to_shares)
    if amount == 0:
        return TransferShares(
            new_from_shares=from_shares,
            new_to_shares=to_shares,
            new_total_shares=total_shares,
        )

    from_value = mul(BalanceXShares, from_shares, total_supply)
    amount_value = mul(BalanceXShares, amount, total_shares)
    from_after = sub(from_value, amount_value)
    n_from = scale(BalanceXBasisPointsXShares2, scale(BalanceXBasisPointsXShares, from_after, BASIS), u)

    to_value = scale(BalanceXBasisPointsXShares, mul(BalanceXShares, to_shares, total_supply), BASIS)
    net_value = scale(BalanceXBasisPointsXShares, mul(BalanceXBasisPoints, amount, BASIS - fee_rate), total_shares)
    n_to = scale(BalanceXBasisPointsXShares2, add(to_value, net_value), u)

    d = total(
        BalanceXBasisPointsXShares,
        scale(BalanceXBasisPointsXShares, mul(BalanceXShares, u, total_supply), BASIS),
        scale(BalanceXBasisPointsXShares, mul(BalanceXBasisPoints, amount, fee_rate), total_shares),
    )

    new_from = div(n_from, d)
    new_to = div(n_to, d)
    new_total = u + new_from + new_to

    from_target = to_balance(from_shares, total_supply, total_shares) - amount
    to_low, to_high = receiver_bounds(to_balance(to_shares, total_supply, total_shares), amount, fee_rate)

    new_from, new_to, new_total = fixup_transfer(
        total_supply=total_supply,
        new_from_shares=new_from,
        new_to_shares=new_to,
        new_total_shares=new_total,
        from_target=from_target,
        to_low=to_low,
        to_high=to_high,
        rounds=params.transfer_fixup_rounds,
    )
    return TransferShares(new_from_shares=new_from, new_to_shares=new_to, new_total_shares=new_total)


def get_transfer_all_shares(
    fee_rate: BasisPoints,
    total_supply: Balance,
    total_shares: Shares,
    from_shares: Shares,
    to_shares: Shares,
    *,
    params: EngineParams = DEFAULT_PARAMS,
) -> TransferAllShares:
    """
    New receiver shares and total after the sender transfers its whole position.

    The sender ends with zero shares. With the amount expressed in shares the
    supply cancels out:
        new_to    = u*(to*B + from*(B - fee_rate)) / (u*B + from*fee_rate)
        new_total = u + new_to

    The receiver is then corrected into the band for
    ``amount = floor(from*S/T)``; a downward correction never takes it below
    ``min(to_shares, new_to)``.
    """
    require_word("fee_rate", fee_rate)
    require_word("total_supply", total_supply)
    u = _uninvolved(total_shares, from_shares, to_shares)
    if from_shares == 0:
        return TransferAllShares(new_to_shares=to_shares, new_total_shares=total_shares)

    kept = add(mul(SharesXBasisPoints, to_shares, BASIS), mul(SharesXBasisPoints, from_shares, BASIS - fee_rate))
    n_to = scale(Shares2XBasisPoints, kept, u)
    d = add(mul(SharesXBasisPoints, u, BASIS), mul(SharesXBasisPoints, from_shares, fee_rate))
    new_to = div(n_to, d)

    amount = to_balance(from_shares, total_supply, total_shares)
    to_low, to_high = receiver_bounds(to_balance(to_shares, total_supply, total_shares), amount, fee_rate)

    new_to, new_total = fixup_receiver(
        total_supply=total_supply,
        new_to_shares=new_to,
        uninvolved_shares=u,
        to_low=to_low,
        to_high=to_high,
        floor_shares=min(to_shares, new_to),
        rounds=params.transfer_all_fixup_rounds,
    )
    return TransferAllShares(new_to_shares=new_to, new_total_shares=new_total)


def get_deliver_shares(
    amount: Balance,
    total_supply: Balance,
    total_shares: Shares,
    from_shares: Shares,
) -> DeliverShares:
    """
    New sender shares and total after the sender gives `amount` to everyone else.

    Equivalent to burning shares worth `amount` while keeping the supply:
        new_from  = u*(from*S - amount*T) / (u*S + amount*T)
        new_total = u + new_from

    One floor division, then one upward correction to
    ``floor(from*S/T) - amount``.
    """
    require_word("amount", amount)
    require_word("total_supply", total_supply)
    u = _uninvolved(total_shares, from_shares)
    if amount == 0:
        return DeliverShares(new_from_shares=from_shares, new_total_shares=total_shares)

    from_after = sub(mul(BalanceXShares, from_shares, total_supply), mul(BalanceXShares, amount, total_shares))
    n_from = scale(BalanceXShares2, from_after, u)
    d = add(mul(BalanceXShares, u, total_supply), mul(BalanceXShares, amount, total_shares))
    new_from = div(n_from, d)

    new_from, new_total = fixup_deliver(
        total_supply=total_supply,
        new_from_shares=new_from,
        uninvolved_shares=u,
        from_target=to_balance(from_shares, total_supply, total_shares) - amount,
    )
    return DeliverShares(new_from_shares=new_from, new_total_shares=new_total)


def get_burn_shares(
    amount: Balance,
    total_supply: Balance,
    total_shares: Shares,
    from_shares: Shares,
) -> tuple[Shares, Shares, Balance]:
    """
    Not implemented.

    A burn differs from a delivery in that it must also reduce the supply: the
    sender's balance drops by `amount`, ``total_supply`` drops by `amount`, and
    every other holder's balance stays unchanged. An implementation would
    return ``(new_from_shares, new_total_shares, new_total_supply)``.
    """
    raise BurnNotImplementedError("get_burn_shares is not implemented")


def transfer_or_raise(req: TransferRequest, *, params: EngineParams = DEFAULT_PARAMS) -> TransferShares:
    """Guarded, invariant-checked `get_transfer_shares`.

    Raises:
        ReflectGuardError: A precondition is not satisfied.
        ReflectInvariantError: The converted shares violate one or more invariants.
    """
    reason = guard_transfer(req)
    if reason is not None:
        raise ReflectGuardError(reason)
    out = get_transfer_shares(
        req.amount,
        req.fee_rate,
        req.total_supply,
        req.total_shares,
        req.from_shares,
        req.to_shares,
        params=params,
    )
    violations = check_transfer(req, out)
    if violations:
        raise ReflectInvariantError(violations)
    return out


def transfer_all_or_raise(req: TransferAllRequest, *, params: EngineParams = DEFAULT_PARAMS) -> TransferAllShares:
    """Guarded, invariant-checked `get_transfer_all_shares`."""
    reason = guard_transfer_all(req)
    if reason is not None:
        raise ReflectGuardError(reason)
    out = get_transfer_all_shares(
        req.fee_rate,
        req.total_supply,
        req.total_shares,
        req.from_shares,
        req.to_shares,
        params=params,
    )
    violations = check_transfer_all(req, out)
    if violations:
        raise ReflectInvariantError(violations)
    return out


def deliver_or_raise(req: DeliverRequest) -> DeliverShares:
    """Guarded, invariant-checked `get_deliver_shares`."""
    reason = guard_deliver(req)
    if reason is not None:
        raise ReflectGuardError(reason)
    out = get_deliver_shares(req.amount, req.total_supply, req.total_shares, req.from_shares)
    violations = check_deliver(req, out)
    if violations:
        raise ReflectInvariantError(violations)
    return out
