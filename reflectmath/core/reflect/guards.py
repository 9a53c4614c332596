"""Caller-side precondition checks for the conversion engine.

The engine assumes its inputs are sane; it only fails when the arithmetic
itself breaks (`Underflow`, `DivisionByZero`). These guards are what a caller
runs first. Each returns None when the conversion may proceed, or a short
rejection reason.
"""

from __future__ import annotations

from .math import BASIS, to_balance
from .types import DeliverRequest, TransferAllRequest, TransferRequest


def _not_int(v: object) -> bool:
    return not isinstance(v, int) or isinstance(v, bool)


def _common(total_supply: int, total_shares: int, fee_rate: int | None, **party: int) -> str | None:
    values = {"total_supply": total_supply, "total_shares": total_shares, **party}
    if fee_rate is not None:
        values["fee_rate"] = fee_rate
    for name, v in values.items():
        if _not_int(v):
            return f"type:{name}"
        if v < 0:
            return f"negative:{name}"
    if fee_rate is not None and fee_rate > BASIS:
        return "fee_rate_above_basis"
    if total_supply == 0:
        return "empty_supply"
    if total_shares == 0:
        return "no_shares"
    involved = sum(v for k, v in party.items() if k.endswith("_shares"))
    if involved > total_shares:
        return "shares_exceed_total"
    if involved == total_shares:
        return "no_uninvolved_shares"
    return None


def guard_transfer(req: TransferRequest) -> str | None:
    reason = _common(
        req.total_supply,
        req.total_shares,
        req.fee_rate,
        amount=req.amount,
        from_shares=req.from_shares,
        to_shares=req.to_shares,
    )
    if reason is not None:
        return reason
    if req.amount > to_balance(req.from_shares, req.total_supply, req.total_shares):
        return "insufficient_balance"
    return None


def guard_transfer_all(req: TransferAllRequest) -> str | None:
    return _common(
        req.total_supply,
        req.total_shares,
        req.fee_rate,
        from_shares=req.from_shares,
        to_shares=req.to_shares,
    )


def guard_deliver(req: DeliverRequest) -> str | None:
    reason = _common(
        req.total_supply,
        req.total_shares,
        None,
        amount=req.amount,
        from_shares=req.from_shares,
    )
    if reason is not None:
        return reason
    if req.amount > to_balance(req.from_shares, req.total_supply, req.total_shares):
        return "insufficient_balance"
    return None
