import argparse
import logging
import sys
from typing import List, Optional, TextIO

from amounts import format_ticks
from errors import PaymentsError
from models import AccountSnapshot
from payments_engine import PaymentsEngine

OUTPUT_HEADER = "client,available,held,total,locked"


def format_snapshot_row(account: AccountSnapshot) -> str:
    return (
        f"{account.client_id},"
        f"{format_ticks(account.available)},"
        f"{format_ticks(account.held)},"
        f"{format_ticks(account.total)},"
        f"{str(account.locked).lower()}"
    )


def write_accounts(accounts: List[AccountSnapshot], out: TextIO) -> None:
    print(OUTPUT_HEADER, file=out)
    for account in accounts:
        print(format_snapshot_row(account), file=out)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Apply a CSV of transactions and print final client balances.")
    parser.add_argument("input", help="path to the transactions CSV")
    parser.add_argument("-v", "--verbose", action="store_true", help="log ignored records")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(args.input)
    except PaymentsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
