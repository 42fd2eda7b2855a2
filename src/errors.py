class PaymentsError(Exception):
    """Base class for errors raised outside the ledger core."""


class InputFileError(PaymentsError):
    """Input file is missing or cannot be read."""

    def __init__(self, path: str, reason: str = "file not found"):
        self.path = path
        super().__init__(f"{reason}: {path}")


class InvalidRecordError(PaymentsError):
    """A CSV row cannot be turned into a TransactionRecord."""

    def __init__(self, row, reason: str):
        self.row = row
        self.reason = reason
        super().__init__(f"Invalid record {row}: {reason}")
