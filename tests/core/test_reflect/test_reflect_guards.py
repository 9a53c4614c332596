# [TESTER] v1

from __future__ import annotations

from dataclasses import replace

import pytest

from reflectmath.core.reflect.guards import guard_deliver, guard_transfer, guard_transfer_all
from reflectmath.core.reflect.types import DeliverRequest, TransferAllRequest, TransferRequest


def _transfer(**kw) -> TransferRequest:
    base = TransferRequest(
        amount=10_000,
        fee_rate=30,
        total_supply=1_000_000,
        total_shares=1_000_000,
        from_shares=100_000,
        to_shares=50_000,
    )
    return replace(base, **kw)


def _transfer_all(**kw) -> TransferAllRequest:
    base = TransferAllRequest(
        fee_rate=30,
        total_supply=1_000_000,
        total_shares=1_000_000,
        from_shares=100_000,
        to_shares=50_000,
    )
    return replace(base, **kw)


def _deliver(**kw) -> DeliverRequest:
    base = DeliverRequest(amount=10_000, total_supply=1_000_000, total_shares=1_000_000, from_shares=100_000)
    return replace(base, **kw)


class TestGuardTransfer:
    def test_ok(self):
        assert guard_transfer(_transfer()) is None

    def test_whole_balance_ok(self):
        assert guard_transfer(_transfer(amount=100_000)) is None

    @pytest.mark.parametrize(
        "kw, reason",
        [
            ({"amount": 1.5}, "type:amount"),
            ({"from_shares": True}, "type:from_shares"),
            ({"total_supply": -1}, "negative:total_supply"),
            ({"to_shares": -1}, "negative:to_shares"),
            ({"fee_rate": 10_001}, "fee_rate_above_basis"),
            ({"total_supply": 0}, "empty_supply"),
            ({"total_shares": 0, "from_shares": 0, "to_shares": 0}, "no_shares"),
            ({"total_shares": 140_000}, "shares_exceed_total"),
            ({"total_shares": 150_000}, "no_uninvolved_shares"),
            ({"amount": 100_001}, "insufficient_balance"),
        ],
    )
    def test_rejects(self, kw, reason):
        assert guard_transfer(_transfer(**kw)) == reason

    def test_amount_is_not_counted_as_shares(self):
        # A large amount must not trip the share-sum checks.
        assert guard_transfer(_transfer(total_supply=10**12, amount=10**10)) is None


class TestGuardTransferAll:
    def test_ok(self):
        assert guard_transfer_all(_transfer_all()) is None

    def test_full_fee_ok(self):
        assert guard_transfer_all(_transfer_all(fee_rate=10_000)) is None

    def test_rejects_fee_above_basis(self):
        assert guard_transfer_all(_transfer_all(fee_rate=10_001)) == "fee_rate_above_basis"

    def test_rejects_no_uninvolved(self):
        assert guard_transfer_all(_transfer_all(total_shares=150_000)) == "no_uninvolved_shares"


class TestGuardDeliver:
    def test_ok(self):
        assert guard_deliver(_deliver()) is None

    def test_rejects_sole_holder(self):
        assert guard_deliver(_deliver(total_shares=100_000)) == "no_uninvolved_shares"

    def test_rejects_overdraw(self):
        assert guard_deliver(_deliver(amount=100_001)) == "insufficient_balance"

    def test_rejects_negative_amount(self):
        assert guard_deliver(_deliver(amount=-1)) == "negative:amount"
