from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from money import Money


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class DisputeState(Enum):
    CLEAN = "clean"
    DISPUTED = "disputed"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class Transaction:
    """One incoming record, as decoded from the input stream."""

    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Money] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class TransactionRecord:
    """
    Disputable history entry, kept for every applied deposit and withdrawal.
    Never removed: a transaction may be disputed again after a resolve.
    """

    client_id: int
    transaction_type: TransactionType
    amount: Money
    dispute_state: DisputeState = DisputeState.CLEAN


@dataclass
class ClientAccount:
    client_id: int
    available: Money = Money.ZERO
    held: Money = Money.ZERO
    locked: bool = False

    @property
    def total(self) -> Money:
        return self.available.checked_add(self.held)

    def snapshot(self) -> "AccountSnapshot":
        return AccountSnapshot(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )


@dataclass(frozen=True)
class AccountSnapshot:
    client_id: int
    available: Money
    held: Money
    total: Money
    locked: bool


@dataclass
class ProcessingStats:
    """Counters for one replay, with failures broken down by error kind."""

    processed: int = 0
    failed: int = 0
    failures_by_kind: Counter = field(default_factory=Counter)

    def record_success(self) -> None:
        self.processed += 1

    def record_failure(self, kind: str) -> None:
        self.failed += 1
        self.failures_by_kind[kind] += 1

    def summary(self) -> str:
        breakdown = ", ".join(f"{kind}: {count}" for kind, count in sorted(self.failures_by_kind.items()))
        report = f"Processed: {self.processed}, Failed: {self.failed}"
        return f"{report} ({breakdown})" if breakdown else report
