import csv
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Iterable, Iterator, List, Optional, Sequence

from amounts import to_ticks
from errors import InputFileError, InvalidRecordError
from models import AccountSnapshot, ProcessingStats, TransactionRecord, TransactionType
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)

CSV_HEADER = ("type", "client", "tx", "amount")
MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1
MAX_AMOUNT_DIGITS = 64

AMOUNT_TYPES = (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class PaymentsEngine:
    """
    Streams CSV rows through a TransactionProcessor.
    Each row is fully applied or dropped before the next one is read.
    """

    def __init__(self, processor: Optional[TransactionProcessor] = None):
        self._processor = processor if processor is not None else TransactionProcessor()
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> List[AccountSnapshot]:
        """Process CSV file and return final account states ordered by client id."""
        logger.info(f"Processing {filepath}")
        try:
            with open(filepath, "r", newline="") as f:
                self.process_records(self._read_transactions(f))
        except (FileNotFoundError, IsADirectoryError) as e:
            raise InputFileError(filepath) from e
        except PermissionError as e:
            raise InputFileError(filepath, "permission denied") from e

        # Print final processing report to stderr
        print(
            f"Applied: {self._stats.applied}, "
            f"Ignored: {self._stats.ignored}, "
            f"Unparseable: {self._stats.unparseable}",
            file=sys.stderr,
        )

        return self._processor.snapshot()

    def process_records(self, records: Iterable[TransactionRecord]) -> List[AccountSnapshot]:
        """Apply already-typed records in order and return the final snapshot."""
        for record in records:
            result = self._processor.process_transaction(record)
            self._stats.record(result)
        return self._processor.snapshot()

    def _read_transactions(self, lines: Iterable[str]) -> Iterator[TransactionRecord]:
        """Lazily yield parsed records, skipping an optional header and malformed rows."""
        reader = csv.reader(lines, skipinitialspace=True)
        seen_data = False
        for line_number, row in enumerate(reader, start=1):
            if not row or all(not field.strip() for field in row):
                continue
            first_row, seen_data = not seen_data, True
            if first_row and is_header(row):
                continue
            try:
                yield parse_csv_row(row)
            except InvalidRecordError as e:
                self._stats.record_unparseable()
                logger.warning(f"Line {line_number}: {e.reason}, skipping {row}")


def is_header(row: Sequence[str]) -> bool:
    normalized = tuple(field.strip().lower() for field in row if field.strip())
    return normalized == CSV_HEADER


def parse_csv_row(row: Sequence[str]) -> TransactionRecord:
    """Parse a `type, client, tx[, amount]` row into a TransactionRecord."""
    normalized = [field.strip() for field in row]
    if len(normalized) < 3:
        raise InvalidRecordError(row, "expected at least type, client and tx columns")

    try:
        transaction_type = TransactionType(normalized[0].lower())
    except ValueError:
        raise InvalidRecordError(row, f"unknown transaction type {normalized[0]!r}") from None

    client_id = _parse_id(row, normalized[1], "client", MAX_CLIENT_ID)
    transaction_id = _parse_id(row, normalized[2], "tx", MAX_TRANSACTION_ID)

    amount = None
    amount_str = normalized[3] if len(normalized) > 3 else ""
    if transaction_type in AMOUNT_TYPES:
        if not amount_str:
            raise InvalidRecordError(row, f"{transaction_type.value} requires an amount")
        amount = _parse_amount(row, amount_str)

    return TransactionRecord(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(row: Sequence[str], value: str, field: str, maximum: int) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise InvalidRecordError(row, f"{field} {value!r} is not an integer") from None
    if not 0 <= parsed <= maximum:
        raise InvalidRecordError(row, f"{field} {parsed} out of range 0..{maximum}")
    return parsed


def _parse_amount(row: Sequence[str], value: str) -> int:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise InvalidRecordError(row, f"amount {value!r} is not a finite number") from None
    if not amount.is_finite():
        raise InvalidRecordError(row, f"amount {value!r} is not a finite number")
    if amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidRecordError(row, f"amount {value!r} has more than {MAX_AMOUNT_DIGITS} integer digits")
    ticks = to_ticks(amount)
    if ticks < 0:
        raise InvalidRecordError(row, f"amount {value!r} is negative")
    return ticks
