import logging

from errors import (
    AccountLocked,
    AlreadyDisputed,
    ClientMismatch,
    DuplicateTransaction,
    InsufficientFunds,
    MissingAmount,
    NotDisputed,
    RecordError,
    UnknownTransaction,
)
from models import ClientAccount, DisputeState, Transaction, TransactionRecord, TransactionType
from money import Money
from state_manager import StateManager

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions against state.
    Raises a RecordError subclass when a transaction is rejected. New balances are
    computed with checked arithmetic before anything is assigned, so a rejected
    transaction never leaves an account or history entry half updated.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(self, transaction: Transaction) -> None:
        account = self._state.get_account(transaction.client_id)
        # Unknown clients only get an account once a transaction for them succeeds
        is_new_account = account is None
        if is_new_account:
            account = ClientAccount(client_id=transaction.client_id)

        try:
            if account.locked:
                raise AccountLocked(f"client {transaction.client_id} account is locked")

            match transaction.transaction_type:
                case TransactionType.DEPOSIT:
                    self._handle_deposit(account, transaction)
                case TransactionType.WITHDRAWAL:
                    self._handle_withdrawal(account, transaction)
                case TransactionType.DISPUTE:
                    self._handle_dispute(account, transaction)
                case TransactionType.RESOLVE:
                    self._handle_resolve(account, transaction)
                case TransactionType.CHARGEBACK:
                    self._handle_chargeback(account, transaction)
        except RecordError as e:
            # Money arithmetic errors are raised without knowing the record
            if e.transaction is None:
                e.transaction = transaction
            raise

        if is_new_account:
            self._state.add_account(account)

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> None:
        amount = self._require_new_transaction(transaction)

        new_available = account.available.checked_add(amount)
        # total must stay within bounds as well
        new_available.checked_add(account.held)

        account.available = new_available
        self._store(transaction, amount)

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> None:
        amount = self._require_new_transaction(transaction)

        if account.available < amount:
            raise InsufficientFunds(
                f"Withdrawal tx {transaction.transaction_id}: available {account.available} is less than {amount}"
            )

        account.available = account.available.checked_sub(amount)
        self._store(transaction, amount)

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._find_original(transaction)

        if original.dispute_state == DisputeState.DISPUTED:
            raise AlreadyDisputed(f"Dispute for tx {transaction.transaction_id}: transaction already disputed")

        if account.available < original.amount:
            raise InsufficientFunds(
                f"Dispute for tx {transaction.transaction_id}: available {account.available} cannot cover {original.amount}"
            )

        new_available = account.available.checked_sub(original.amount)
        new_held = account.held.checked_add(original.amount)

        account.available = new_available
        account.held = new_held
        original.dispute_state = DisputeState.DISPUTED
        logger.debug(f"Dispute for tx {transaction.transaction_id}: holding {original.amount}")

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._find_original(transaction)

        if original.dispute_state != DisputeState.DISPUTED:
            raise NotDisputed(
                f"Resolve for tx {transaction.transaction_id}: transaction is {original.dispute_state.value}, not disputed"
            )

        new_held = account.held.checked_sub(original.amount)
        new_available = account.available.checked_add(original.amount)

        account.held = new_held
        account.available = new_available
        original.dispute_state = DisputeState.RESOLVED
        logger.debug(f"Resolve for tx {transaction.transaction_id}: releasing {original.amount}")

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._find_original(transaction)

        if original.dispute_state != DisputeState.DISPUTED:
            raise NotDisputed(
                f"Chargeback for tx {transaction.transaction_id}: transaction is {original.dispute_state.value}, not disputed"
            )

        account.held = account.held.checked_sub(original.amount)
        account.locked = True
        logger.debug(f"Chargeback for tx {transaction.transaction_id}: client {account.client_id} locked")

    def _require_new_transaction(self, transaction: Transaction) -> Money:
        """Amount of a deposit or withdrawal whose tx id has not been used yet."""
        name = transaction.transaction_type.value.capitalize()
        if transaction.amount is None:
            raise MissingAmount(f"{name} tx {transaction.transaction_id}: amount is missing")

        if self._state.has_transaction(transaction.transaction_id):
            raise DuplicateTransaction(f"{name} tx {transaction.transaction_id}: transaction id already used")

        return transaction.amount

    def _find_original(self, transaction: Transaction) -> TransactionRecord:
        """Stored deposit or withdrawal referenced by a dispute, resolve or chargeback."""
        name = transaction.transaction_type.value.capitalize()
        original = self._state.get_transaction(transaction.transaction_id)

        if original is None:
            raise UnknownTransaction(f"{name} for tx {transaction.transaction_id}: transaction not found")

        if original.client_id != transaction.client_id:
            raise ClientMismatch(
                f"{name} for tx {transaction.transaction_id}: client mismatch "
                f"(expected {original.client_id}, got {transaction.client_id})",
                expected_client_id=original.client_id,
            )

        return original

    def _store(self, transaction: Transaction, amount: Money) -> None:
        self._state.store_transaction(
            transaction.transaction_id,
            TransactionRecord(
                client_id=transaction.client_id,
                transaction_type=transaction.transaction_type,
                amount=amount,
            ),
        )
