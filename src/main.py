import argparse
import logging
import sys
from typing import List, Optional

from csv_io import write_snapshots
from errors import InputError
from ledger_engine import LedgerEngine


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="processor",
        description="Replay a CSV of transactions and print the final state of every client account.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every applied and rejected transaction")
    parser.add_argument("path", help="Path to the input CSV (type, client, tx, amount)")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    engine = LedgerEngine()
    try:
        snapshots = engine.process_file(args.path)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    write_snapshots(snapshots, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
