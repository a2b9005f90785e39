import csv
from typing import Dict, Iterable, Iterator, TextIO

from errors import InputError
from models import AccountSnapshot, Transaction, TransactionType
from money import Money

REQUIRED_COLUMNS = ("type", "client", "tx")
OUTPUT_COLUMNS = ("client", "available", "held", "total", "locked")

MAX_CLIENT_ID = 2 ** 16 - 1
MAX_TRANSACTION_ID = 2 ** 32 - 1


def read_rows(filepath: str) -> Iterator[Dict[str, str]]:
    """Yield normalized CSV rows. Headers and values are trimmed, missing trailing columns become ""."""
    try:
        with open(filepath, "r", newline="") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                raise InputError(f"{filepath}: input is empty")

            header = [name.strip() for name in reader.fieldnames]
            missing = [column for column in REQUIRED_COLUMNS if column not in header]
            if missing:
                raise InputError(f"{filepath}: header is missing columns {', '.join(missing)}")

            for row in reader:
                yield {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise InputError(f"Failed to read {filepath}: {e}") from e


def parse_row(row: Dict[str, str]) -> Transaction:
    """
    Parse a normalized CSV row into a Transaction.

    Raises InputError when type, client or tx cannot be decoded, and
    MalformedAmount when the amount column holds something that is not a valid amount.
    Amounts on dispute, resolve and chargeback rows are ignored.
    """
    try:
        transaction_type = TransactionType(row["type"].lower())
        client_id = _parse_id(row["client"], MAX_CLIENT_ID)
        transaction_id = _parse_id(row["tx"], MAX_TRANSACTION_ID)
    except (KeyError, ValueError) as e:
        raise InputError(f"Failed to parse row {row}: {e}") from e

    amount = None
    amount_str = row.get("amount", "")
    if amount_str and transaction_type.carries_amount:
        amount = Money.from_decimal_string(amount_str)

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(text: str, maximum: int) -> int:
    value = int(text)
    if not 0 <= value <= maximum:
        raise ValueError(f"{value} is outside 0..{maximum}")
    return value


def write_snapshots(snapshots: Iterable[AccountSnapshot], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_COLUMNS)
    for snapshot in snapshots:
        writer.writerow([
            snapshot.client_id,
            str(snapshot.available),
            str(snapshot.held),
            str(snapshot.total),
            str(snapshot.locked).lower(),
        ])
