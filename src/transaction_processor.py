import logging
from typing import List, Optional

from dispute import AccountEffect, DisputeOperation, evaluate
from ledger_store import LedgerStore
from models import (
    AccountSnapshot,
    IgnoreReason,
    ProcessingResult,
    StoredTransaction,
    TransactionDirection,
    TransactionRecord,
    TransactionType,
)
from transaction_registry import TransactionRegistry

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transaction records to a ledger, one at a time, in arrival order.
    Returns ProcessingResult to indicate whether the record changed anything.
    Invalid requests are ignored, never raised.
    """

    def __init__(self, store: Optional[LedgerStore] = None, registry: Optional[TransactionRegistry] = None):
        self._store = store if store is not None else LedgerStore()
        self._registry = registry if registry is not None else TransactionRegistry()
        self.last_ignore_reason: Optional[IgnoreReason] = None

    @property
    def store(self) -> LedgerStore:
        return self._store

    @property
    def registry(self) -> TransactionRegistry:
        return self._registry

    def process_transaction(self, record: TransactionRecord) -> ProcessingResult:
        """
        Process a single record.

        Returns:
            APPLIED: State changed (or a failed withdrawal was registered)
            IGNORED: Record dropped; `last_ignore_reason` says why
        """
        self.last_ignore_reason = None
        account = self._store.get_or_create(record.client_id)

        match record.transaction_type:
            case TransactionType.DEPOSIT | TransactionType.WITHDRAWAL:
                if account.locked:
                    return self._ignore(record, IgnoreReason.ACCOUNT_LOCKED)
                if record.transaction_type == TransactionType.DEPOSIT:
                    return self._handle_deposit(record)
                return self._handle_withdrawal(record)
            case TransactionType.DISPUTE | TransactionType.RESOLVE | TransactionType.CHARGEBACK:
                return self._handle_dispute_request(record)

    def snapshot(self) -> List[AccountSnapshot]:
        return self._store.snapshot()

    def _handle_deposit(self, record: TransactionRecord) -> ProcessingResult:
        reason = self._check_amount(record)
        if reason is not None:
            return self._ignore(record, reason)

        stored = StoredTransaction(record.transaction_id, record.client_id, TransactionDirection.DEPOSIT, record.amount)
        if not self._registry.insert_if_absent(stored):
            return self._ignore(record, IgnoreReason.DUPLICATE_TRANSACTION)

        self._store.apply_deposit(record.client_id, record.amount)
        return ProcessingResult.APPLIED

    def _handle_withdrawal(self, record: TransactionRecord) -> ProcessingResult:
        reason = self._check_amount(record)
        if reason is not None:
            return self._ignore(record, reason)

        stored = StoredTransaction(record.transaction_id, record.client_id, TransactionDirection.WITHDRAWAL, record.amount)
        if not self._registry.insert_if_absent(stored):
            return self._ignore(record, IgnoreReason.DUPLICATE_TRANSACTION)

        # The id stays registered even when the debit is refused.
        if not self._store.apply_withdrawal(record.client_id, record.amount):
            return self._ignore(record, IgnoreReason.INSUFFICIENT_FUNDS)
        return ProcessingResult.APPLIED

    def _handle_dispute_request(self, record: TransactionRecord) -> ProcessingResult:
        operation = DisputeOperation.from_transaction_type(record.transaction_type)
        original = self._registry.lookup(record.transaction_id)
        account = self._store.get_or_create(record.client_id)

        result = evaluate(original, operation, record.client_id, account)
        if not result.applied:
            return self._ignore(record, result.ignore_reason)

        if result.effect == AccountEffect.HOLD:
            self._store.hold(original.client_id, original.amount)
        elif result.effect == AccountEffect.RELEASE:
            self._store.release(original.client_id, original.amount)
        elif result.effect == AccountEffect.CHARGEBACK:
            self._store.chargeback(original.client_id, original.amount)
            logger.info(f"Client {original.client_id} locked after chargeback of tx {original.transaction_id}")

        self._registry.update_status(original.transaction_id, result.status)
        return ProcessingResult.APPLIED

    @staticmethod
    def _check_amount(record: TransactionRecord) -> Optional[IgnoreReason]:
        if record.amount is None:
            return IgnoreReason.MISSING_AMOUNT
        if record.amount < 0:
            return IgnoreReason.NEGATIVE_AMOUNT
        return None

    def _ignore(self, record: TransactionRecord, reason: IgnoreReason) -> ProcessingResult:
        self.last_ignore_reason = reason
        logger.debug(f"Ignoring {record}: {reason.value}")
        return ProcessingResult.IGNORED
