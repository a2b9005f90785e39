from typing import Dict, List, Optional

from models import ClientAccount, TransactionRecord


class StateManager:
    """
    Single-owner state for one replay.
    Stores client accounts and transaction history for dispute lookups.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._transactions: Dict[int, TransactionRecord] = {}

    def add_account(self, account: ClientAccount) -> None:
        """Register an account created by a successfully applied transaction."""
        self._accounts[account.client_id] = account

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def store_transaction(self, transaction_id: int, record: TransactionRecord) -> None:
        """Store transaction for future dispute lookups."""
        self._transactions[transaction_id] = record

    def get_transaction(self, transaction_id: int) -> Optional[TransactionRecord]:
        """Retrieve stored transaction by ID."""
        return self._transactions.get(transaction_id)

    def has_transaction(self, transaction_id: int) -> bool:
        return transaction_id in self._transactions

    def get_all_accounts(self) -> List[ClientAccount]:
        """Return all accounts ordered by client id (for final output)."""
        return [self._accounts[client_id] for client_id in sorted(self._accounts)]
