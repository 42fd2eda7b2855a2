from typing import Dict, List

from models import AccountSnapshot, ClientAccount


class LedgerStore:
    """
    Owns client accounts for a single run.
    Every mutator is a no-op on a locked account.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def get_or_create(self, client_id: int) -> ClientAccount:
        """Get existing account or create a zeroed, unlocked one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def apply_deposit(self, client_id: int, amount: int) -> bool:
        account = self.get_or_create(client_id)
        if account.locked:
            return False
        account.credit(amount)
        return True

    def apply_withdrawal(self, client_id: int, amount: int) -> bool:
        """Debit available funds. Returns False, leaving the account untouched, on insufficient funds."""
        account = self.get_or_create(client_id)
        if account.locked or account.available < amount:
            return False
        account.debit(amount)
        return True

    def hold(self, client_id: int, amount: int) -> bool:
        account = self.get_or_create(client_id)
        if account.locked:
            return False
        account.hold(amount)
        return True

    def release(self, client_id: int, amount: int) -> bool:
        account = self.get_or_create(client_id)
        if account.locked:
            return False
        account.release_hold(amount)
        return True

    def chargeback(self, client_id: int, amount: int) -> bool:
        """Remove held funds from the account entirely and lock it."""
        account = self.get_or_create(client_id)
        if account.locked:
            return False
        account.remove_held(amount)
        account.locked = True
        return True

    def snapshot(self) -> List[AccountSnapshot]:
        """Return all accounts ordered by client id (for final output)."""
        return [self._accounts[client_id].to_snapshot() for client_id in sorted(self._accounts)]

    def __len__(self) -> int:
        return len(self._accounts)
