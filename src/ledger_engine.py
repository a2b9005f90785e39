import logging
from typing import Iterable, List

from csv_io import parse_row, read_rows
from errors import RecordError
from models import AccountSnapshot, ProcessingStats, Transaction
from state_manager import StateManager
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Replays transactions strictly in arrival order against per-client accounts.

    One engine owns the state of one replay. Rejected records are logged and
    skipped; they never abort the replay or leave state partially updated.
    """

    def __init__(self):
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self.stats = ProcessingStats()

    def apply(self, transaction: Transaction) -> None:
        """Apply one transaction. Raises a RecordError subclass if it is rejected."""
        logger.debug(f"Applying {transaction}")
        self._processor.process_transaction(transaction)

    def process_transactions(self, transactions: Iterable[Transaction]) -> None:
        for transaction in transactions:
            self._apply_and_record(transaction)

    def process_file(self, filepath: str) -> List[AccountSnapshot]:
        """Process CSV file and return final account snapshots."""
        logger.info(f"Processing {filepath}")

        for row in read_rows(filepath):
            try:
                transaction = parse_row(row)
            except RecordError as e:
                self._reject(e)
                continue
            self._apply_and_record(transaction)

        logger.info(self.stats.summary())
        return self.finalize()

    def finalize(self) -> List[AccountSnapshot]:
        """Snapshot of every account that was ever referenced, ordered by client id."""
        return [account.snapshot() for account in self._state.get_all_accounts()]

    def _apply_and_record(self, transaction: Transaction) -> None:
        try:
            self.apply(transaction)
        except RecordError as e:
            self._reject(e)
            return
        self.stats.record_success()

    def _reject(self, error: RecordError) -> None:
        self.stats.record_failure(error.kind)
        logger.info(f"Rejected {error.transaction or 'row'}: {error.kind}: {error}")
