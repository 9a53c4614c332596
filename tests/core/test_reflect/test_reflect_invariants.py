"""Tests for reflectmath/core/reflect/invariants.py: post-conversion checkers."""

from reflectmath.core.reflect.engine import get_deliver_shares, get_transfer_all_shares, get_transfer_shares
from reflectmath.core.reflect.invariants import (
    DELIVER_INVARIANTS,
    TRANSFER_ALL_INVARIANTS,
    TRANSFER_INVARIANTS,
    check_deliver,
    check_transfer,
    check_transfer_all,
)
from reflectmath.core.reflect.types import (
    DeliverRequest,
    DeliverShares,
    TransferAllRequest,
    TransferAllShares,
    TransferRequest,
    TransferShares,
)

TRANSFER = TransferRequest(
    amount=10_000, fee_rate=30, total_supply=1_000_000, total_shares=1_000_000, from_shares=100_000, to_shares=50_000
)
TRANSFER_ALL = TransferAllRequest(
    fee_rate=30, total_supply=1_000_000, total_shares=1_000_000, from_shares=100_000, to_shares=50_000
)
DELIVER = DeliverRequest(amount=10_000, total_supply=1_000_000, total_shares=1_000_000, from_shares=100_000)


class TestRegistries:
    def test_sizes(self):
        assert len(TRANSFER_INVARIANTS) == 4
        assert len(TRANSFER_ALL_INVARIANTS) == 3
        assert len(DELIVER_INVARIANTS) == 3


class TestTransferInvariants:
    def test_engine_output_passes(self):
        out = get_transfer_shares(
            TRANSFER.amount,
            TRANSFER.fee_rate,
            TRANSFER.total_supply,
            TRANSFER.total_shares,
            TRANSFER.from_shares,
            TRANSFER.to_shares,
        )
        assert check_transfer(TRANSFER, out) == []

    def test_raw_truncated_output_misses_both_parties(self):
        raw = TransferShares(new_from_shares=89_996, new_to_shares=59_967, new_total_shares=999_963)
        assert check_transfer(TRANSFER, raw) == ["inv_transfer_sender_exact", "inv_transfer_receiver_in_band"]

    def test_lost_shares(self):
        out = TransferShares(new_from_shares=89_997, new_to_shares=59_968, new_total_shares=999_966)
        assert "inv_transfer_conservation" in check_transfer(TRANSFER, out)

    def test_negative_shares(self):
        out = TransferShares(new_from_shares=-1, new_to_shares=59_968, new_total_shares=909_967)
        assert "inv_transfer_non_negative" in check_transfer(TRANSFER, out)


class TestTransferAllInvariants:
    def test_engine_output_passes(self):
        out = get_transfer_all_shares(30, 1_000_000, 1_000_000, 100_000, 50_000)
        assert check_transfer_all(TRANSFER_ALL, out) == []

    def test_raw_truncated_output_misses_band(self):
        raw = TransferAllShares(new_to_shares=149_647, new_total_shares=999_647)
        assert check_transfer_all(TRANSFER_ALL, raw) == ["inv_transfer_all_receiver_not_short"]

    def test_sender_shares_not_released(self):
        out = TransferAllShares(new_to_shares=149_648, new_total_shares=1_099_648)
        assert "inv_transfer_all_conservation" in check_transfer_all(TRANSFER_ALL, out)


class TestDeliverInvariants:
    def test_engine_output_passes(self):
        out = get_deliver_shares(10_000, 1_000_000, 1_000_000, 100_000)
        assert check_deliver(DELIVER, out) == []

    def test_raw_truncated_output_misses_sender(self):
        raw = DeliverShares(new_from_shares=89_010, new_total_shares=989_010)
        assert check_deliver(DELIVER, raw) == ["inv_deliver_sender_exact"]

    def test_empty_total(self):
        out = DeliverShares(new_from_shares=0, new_total_shares=0)
        violations = check_deliver(DELIVER, out)
        assert "inv_deliver_non_negative" in violations
        assert "inv_deliver_conservation" in violations
