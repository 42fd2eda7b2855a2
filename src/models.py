from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class TransactionDirection(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class DisputeStatus(Enum):
    NORMAL = "normal"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    CHARGED_BACK = "charged_back"

    @property
    def is_terminal(self) -> bool:
        return self in (DisputeStatus.RESOLVED, DisputeStatus.CHARGED_BACK)


class ProcessingResult(Enum):
    APPLIED = "applied"
    IGNORED = "ignored"


class IgnoreReason(Enum):
    MISSING_AMOUNT = "missing_amount"
    NEGATIVE_AMOUNT = "negative_amount"
    DUPLICATE_TRANSACTION = "duplicate_transaction"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    ACCOUNT_LOCKED = "account_locked"
    TRANSACTION_NOT_FOUND = "transaction_not_found"
    CLIENT_MISMATCH = "client_mismatch"
    NOT_A_DEPOSIT = "not_a_deposit"
    INVALID_TRANSITION = "invalid_transition"


@dataclass
class TransactionRecord:
    """One input row. Amounts are already converted to ticks."""

    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[int] = None

    def __repr__(self) -> str:
        return f"TransactionRecord({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class StoredTransaction:
    """A registered deposit or withdrawal. Only `status` changes after creation."""

    transaction_id: int
    client_id: int
    direction: TransactionDirection
    amount: int
    status: DisputeStatus = DisputeStatus.NORMAL


@dataclass
class ClientAccount:
    """
    Balances in ticks. `available` never drops below zero: when a dispute
    holds more than is available, the difference is kept in `shortfall` and
    paid back from later credits before `available` grows again.
    """

    client_id: int
    available: int = 0
    held: int = 0
    locked: bool = False
    shortfall: int = 0

    @property
    def total(self) -> int:
        return self.available + self.held

    def credit(self, amount: int) -> None:
        covered = min(amount, self.shortfall)
        self.shortfall -= covered
        self.available += amount - covered

    def debit(self, amount: int) -> None:
        self.available -= amount

    def hold(self, amount: int) -> None:
        taken = min(amount, self.available)
        self.available -= taken
        self.shortfall += amount - taken
        self.held += amount

    def release_hold(self, amount: int) -> None:
        self.held -= amount
        self.credit(amount)

    def remove_held(self, amount: int) -> None:
        self.held -= amount

    def to_snapshot(self) -> "AccountSnapshot":
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
    available: int
    held: int
    total: int
    locked: bool


@dataclass
class ProcessingStats:
    """Counters for one engine run."""

    applied: int = 0
    ignored: int = 0
    unparseable: int = 0

    def record(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.APPLIED:
            self.applied += 1
        else:
            self.ignored += 1

    def record_unparseable(self) -> None:
        self.unparseable += 1
