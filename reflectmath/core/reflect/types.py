"""Data types for the reflect conversion engine.

All types are frozen dataclasses (immutable) over plain ints.

Units/conventions:
- `Balance` is a user-facing token amount.
- `Shares` is the internal ledger unit; `balance = shares * total_supply // total_shares`.
- `BasisPoints` is a fee rate in 1/10_000.
- `uninvolved_shares` is everything not held by either party of a conversion.
"""

from __future__ import annotations

from dataclasses import dataclass


Balance = int
Shares = int
BasisPoints = int


@dataclass(frozen=True)
class TransferRequest:
    """Inputs of a fee-on-transfer between two named holders."""

    amount: Balance
    fee_rate: BasisPoints
    total_supply: Balance
    total_shares: Shares
    from_shares: Shares
    to_shares: Shares

    @property
    def uninvolved_shares(self) -> Shares:
        return self.total_shares - self.from_shares - self.to_shares


@dataclass(frozen=True)
class TransferAllRequest:
    """Inputs of a transfer that moves the sender's whole position."""

    fee_rate: BasisPoints
    total_supply: Balance
    total_shares: Shares
    from_shares: Shares
    to_shares: Shares

    @property
    def uninvolved_shares(self) -> Shares:
        return self.total_shares - self.from_shares - self.to_shares


@dataclass(frozen=True)
class DeliverRequest:
    """Inputs of a delivery (value redistributed to every other holder)."""

    amount: Balance
    total_supply: Balance
    total_shares: Shares
    from_shares: Shares

    @property
    def uninvolved_shares(self) -> Shares:
        return self.total_shares - self.from_shares


@dataclass(frozen=True)
class TransferShares:
    new_from_shares: Shares
    new_to_shares: Shares
    new_total_shares: Shares


@dataclass(frozen=True)
class TransferAllShares:
    new_to_shares: Shares
    new_total_shares: Shares


@dataclass(frozen=True)
class DeliverShares:
    new_from_shares: Shares
    new_total_shares: Shares
