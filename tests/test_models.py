import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    AccountSnapshot,
    ClientAccount,
    DisputeState,
    ProcessingStats,
    Transaction,
    TransactionRecord,
    TransactionType,
)
from money import Money


class TestTransaction:
    def test_create_deposit(self):
        transaction = Transaction(
            transaction_type=TransactionType.DEPOSIT,
            client_id=1,
            transaction_id=1,
            amount=Money.from_decimal_string("100.0"),
        )
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 1
        assert transaction.amount == Money(1_000_000)

    def test_create_dispute_no_amount(self):
        transaction = Transaction(
            transaction_type=TransactionType.DISPUTE,
            client_id=1,
            transaction_id=1,
        )
        assert transaction.amount is None

    def test_carries_amount(self):
        assert TransactionType.DEPOSIT.carries_amount
        assert TransactionType.WITHDRAWAL.carries_amount
        assert not TransactionType.DISPUTE.carries_amount
        assert not TransactionType.RESOLVE.carries_amount
        assert not TransactionType.CHARGEBACK.carries_amount


class TestTransactionRecord:
    def test_starts_clean(self):
        record = TransactionRecord(client_id=1, transaction_type=TransactionType.DEPOSIT, amount=Money(5))
        assert record.dispute_state == DisputeState.CLEAN


class TestClientAccount:
    def test_default_values(self):
        account = ClientAccount(client_id=1)
        assert account.available == Money.ZERO
        assert account.held == Money.ZERO
        assert account.locked is False

    def test_total_property(self):
        account = ClientAccount(
            client_id=1,
            available=Money.from_decimal_string("100"),
            held=Money.from_decimal_string("50"),
        )
        assert account.total == Money.from_decimal_string("150")

    def test_snapshot(self):
        account = ClientAccount(client_id=7, available=Money(3), held=Money(4), locked=True)
        assert account.snapshot() == AccountSnapshot(
            client_id=7,
            available=Money(3),
            held=Money(4),
            total=Money(7),
            locked=True,
        )


class TestProcessingStats:
    def test_counts(self):
        stats = ProcessingStats()
        stats.record_success()
        stats.record_success()
        stats.record_failure("NotDisputed")
        stats.record_failure("AccountLocked")
        stats.record_failure("NotDisputed")

        assert stats.processed == 2
        assert stats.failed == 3
        assert stats.failures_by_kind["NotDisputed"] == 2
        assert stats.summary() == "Processed: 2, Failed: 3 (AccountLocked: 1, NotDisputed: 2)"

    def test_summary_without_failures(self):
        assert ProcessingStats().summary() == "Processed: 0, Failed: 0"
