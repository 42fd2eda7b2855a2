import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import DisputeStatus, StoredTransaction, TransactionDirection
from transaction_registry import TransactionRegistry


class TestTransactionRegistry:
    def setup_method(self):
        self.registry = TransactionRegistry()

    def test_insert_and_lookup(self):
        stored = StoredTransaction(1, 1, TransactionDirection.DEPOSIT, 100)
        assert self.registry.insert_if_absent(stored)
        assert self.registry.lookup(1) is stored
        assert self.registry.lookup(2) is None

    def test_duplicate_id_not_inserted(self):
        first = StoredTransaction(1, 1, TransactionDirection.DEPOSIT, 100)
        second = StoredTransaction(1, 2, TransactionDirection.WITHDRAWAL, 999)
        self.registry.insert_if_absent(first)
        assert self.registry.insert_if_absent(second) is False
        assert self.registry.lookup(1) is first
        assert len(self.registry) == 1

    def test_update_status(self):
        self.registry.insert_if_absent(StoredTransaction(4, 1, TransactionDirection.DEPOSIT, 100))
        self.registry.update_status(4, DisputeStatus.DISPUTED)
        assert self.registry.lookup(4).status == DisputeStatus.DISPUTED
