from typing import Dict, Optional

from models import DisputeStatus, StoredTransaction


class TransactionRegistry:
    """Stores deposits and withdrawals for duplicate-id checks and dispute lookups."""

    def __init__(self):
        self._transactions: Dict[int, StoredTransaction] = {}

    def insert_if_absent(self, transaction: StoredTransaction) -> bool:
        """Store transaction unless its id is already taken."""
        if transaction.transaction_id in self._transactions:
            return False
        self._transactions[transaction.transaction_id] = transaction
        return True

    def lookup(self, transaction_id: int) -> Optional[StoredTransaction]:
        """Retrieve stored transaction by ID."""
        return self._transactions.get(transaction_id)

    def update_status(self, transaction_id: int, status: DisputeStatus) -> None:
        self._transactions[transaction_id].status = status

    def __len__(self) -> int:
        return len(self._transactions)
