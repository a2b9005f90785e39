from typing import Optional


class LedgerError(Exception):
    """Base class for every error raised by the ledger."""


class InputError(LedgerError):
    """
    Input cannot be read or a row cannot be decoded into a Transaction.
    Fatal: aborts the whole run.
    """


class RecordError(LedgerError):
    """
    A single record was rejected.
    Recoverable: the record is skipped and state is left untouched.
    """

    def __init__(self, message: str, transaction=None):
        super().__init__(message)
        self.transaction = transaction

    @property
    def kind(self) -> str:
        return type(self).__name__


class MalformedAmount(RecordError):
    pass


class MissingAmount(RecordError):
    pass


class Overflow(RecordError):
    pass


class Underflow(RecordError):
    pass


class InsufficientFunds(Underflow):
    pass


class AccountLocked(RecordError):
    pass


class UnknownTransaction(RecordError):
    pass


class ClientMismatch(RecordError):
    def __init__(self, message: str, transaction=None, expected_client_id: Optional[int] = None):
        super().__init__(message, transaction)
        self.expected_client_id = expected_client_id


class AlreadyDisputed(RecordError):
    pass


class NotDisputed(RecordError):
    pass


class DuplicateTransaction(RecordError):
    pass
