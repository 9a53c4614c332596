"""
Holder share tracking for a reflection token.

Implements ShareTable[Holder] -> Shares plus the token's total supply and
total shares. Conversions go through the guarded engine wrappers, so a
rejected or invariant-violating conversion leaves the table untouched.
"""

from typing import Dict

from ..core.reflect.engine import deliver_or_raise, transfer_all_or_raise, transfer_or_raise
from ..core.reflect.errors import ReflectGuardError
from ..core.reflect.math import to_balance
from ..core.reflect.params import DEFAULT_PARAMS, EngineParams
from ..core.reflect.types import (
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


Holder = str  # Opaque holder identifier (address or account name)


class ShareTable:
    """
    Share table mapping holder -> shares, with the supply they divide.

    Note: this class stores shares in a plain dict. Do not rely on dict
    iteration order; callers that serialize the table should sort holders.
    """

    def __init__(self, total_supply: Balance, params: EngineParams = DEFAULT_PARAMS):
        """Initialize an empty table over `total_supply` token units."""
        if not isinstance(total_supply, int) or isinstance(total_supply, bool):
            raise TypeError("total_supply must be an int")
        if total_supply <= 0:
            raise ValueError(f"total_supply must be positive: {total_supply}")
        self.total_supply = total_supply
        self.params = params
        self._shares: Dict[Holder, Shares] = {}
        self._total_shares: Shares = 0

    @property
    def total_shares(self) -> Shares:
        return self._total_shares

    def shares_of(self, holder: Holder) -> Shares:
        """Get shares for `holder`. Returns 0 if not found."""
        return self._shares.get(holder, 0)

    def balance_of(self, holder: Holder) -> Balance:
        """User-facing balance of `holder` at the current exchange rate."""
        if self._total_shares == 0:
            return 0
        return to_balance(self.shares_of(holder), self.total_supply, self._total_shares)

    def set_shares(self, holder: Holder, shares: Shares) -> None:
        """
        Set shares for `holder`, adjusting total shares by the difference.

        This is how shares enter the table (initial allocation); it does not
        keep the total supply fixed relative to other holders.

        Raises:
            ValueError: If shares is negative
        """
        if not isinstance(shares, int) or isinstance(shares, bool):
            raise TypeError("shares must be an int")
        if shares < 0:
            raise ValueError(f"Shares cannot be negative: {shares}")
        self._total_shares += shares - self.shares_of(holder)
        self._put(holder, shares)

    def transfer(self, sender: Holder, receiver: Holder, amount: Balance, fee_rate: BasisPoints) -> TransferShares:
        """
        Move `amount` from `sender` to `receiver`, charging `fee_rate` to the other holders' benefit.

        Raises:
            ReflectGuardError: Self-transfer, insufficient balance or invalid inputs
            ReflectInvariantError: If the converted shares fail a post-check
        """
        if sender == receiver:
            raise ReflectGuardError("self_transfer")
        out = transfer_or_raise(
            TransferRequest(
                amount=amount,
                fee_rate=fee_rate,
                total_supply=self.total_supply,
                total_shares=self._total_shares,
                from_shares=self.shares_of(sender),
                to_shares=self.shares_of(receiver),
            ),
            params=self.params,
        )
        self._put(sender, out.new_from_shares)
        self._put(receiver, out.new_to_shares)
        self._total_shares = out.new_total_shares
        return out

    def transfer_all(self, sender: Holder, receiver: Holder, fee_rate: BasisPoints) -> TransferAllShares:
        """Move the sender's whole position to `receiver`, charging `fee_rate`."""
        if sender == receiver:
            raise ReflectGuardError("self_transfer")
        out = transfer_all_or_raise(
            TransferAllRequest(
                fee_rate=fee_rate,
                total_supply=self.total_supply,
                total_shares=self._total_shares,
                from_shares=self.shares_of(sender),
                to_shares=self.shares_of(receiver),
            ),
            params=self.params,
        )
        self._put(sender, 0)
        self._put(receiver, out.new_to_shares)
        self._total_shares = out.new_total_shares
        return out

    def deliver(self, sender: Holder, amount: Balance) -> DeliverShares:
        """Give `amount` of the sender's balance to every other holder pro rata."""
        out = deliver_or_raise(
            DeliverRequest(
                amount=amount,
                total_supply=self.total_supply,
                total_shares=self._total_shares,
                from_shares=self.shares_of(sender),
            )
        )
        self._put(sender, out.new_from_shares)
        self._total_shares = out.new_total_shares
        return out

    def get_all_shares(self) -> Dict[Holder, Shares]:
        return dict(self._shares)

    def verify_conservation(self) -> bool:
        """
        Verify holder shares sum to total shares.

        Returns:
            True if sum(shares) == total_shares
        """
        return sum(self._shares.values()) == self._total_shares

    def _put(self, holder: Holder, shares: Shares) -> None:
        if shares == 0:
            # Remove zero entries to keep table sparse
            self._shares.pop(holder, None)
        else:
            self._shares[holder] = shares

    def __repr__(self) -> str:
        return f"ShareTable({len(self._shares)} holders, {self._total_shares} shares)"
