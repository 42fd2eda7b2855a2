"""Dispute state machine.

States: normal -> disputed -> resolved | charged_back

Resolved and charged_back are terminal. Only deposits can be disputed.
The functions here are pure: they inspect values handed in by the caller and
return a Transition describing what should happen. The caller applies it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from models import ClientAccount, DisputeStatus, IgnoreReason, StoredTransaction, TransactionDirection, TransactionType


class DisputeOperation(Enum):
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @classmethod
    def from_transaction_type(cls, transaction_type: TransactionType) -> "DisputeOperation":
        return cls(transaction_type.value)


class AccountEffect(Enum):
    HOLD = "hold"
    RELEASE = "release"
    CHARGEBACK = "chargeback"


DISPUTE_TRANSITIONS: Dict[Tuple[DisputeStatus, DisputeOperation], Tuple[DisputeStatus, AccountEffect]] = {
    (DisputeStatus.NORMAL, DisputeOperation.DISPUTE): (DisputeStatus.DISPUTED, AccountEffect.HOLD),
    (DisputeStatus.DISPUTED, DisputeOperation.RESOLVE): (DisputeStatus.RESOLVED, AccountEffect.RELEASE),
    (DisputeStatus.DISPUTED, DisputeOperation.CHARGEBACK): (DisputeStatus.CHARGED_BACK, AccountEffect.CHARGEBACK),
}


@dataclass(frozen=True)
class Transition:
    status: Optional[DisputeStatus]
    effect: Optional[AccountEffect] = None
    ignore_reason: Optional[IgnoreReason] = None

    @property
    def applied(self) -> bool:
        return self.ignore_reason is None

    @classmethod
    def ignored(cls, status: Optional[DisputeStatus], reason: IgnoreReason) -> "Transition":
        return cls(status=status, ignore_reason=reason)


def transition(status: DisputeStatus, operation: DisputeOperation, account_locked: bool) -> Transition:
    """Look up the next status and account effect for a request against a transaction."""
    if account_locked:
        return Transition.ignored(status, IgnoreReason.ACCOUNT_LOCKED)

    if status.is_terminal:
        return Transition.ignored(status, IgnoreReason.INVALID_TRANSITION)

    target = DISPUTE_TRANSITIONS.get((status, operation))
    if target is None:
        return Transition.ignored(status, IgnoreReason.INVALID_TRANSITION)

    new_status, effect = target
    return Transition(status=new_status, effect=effect)


def evaluate(
    transaction: Optional[StoredTransaction],
    operation: DisputeOperation,
    client_id: int,
    account: ClientAccount,
) -> Transition:
    """
    Check every guard for a dispute, resolve or chargeback request.

    `account` is the requesting client's account; it only matters once the
    transaction is known to belong to that client.
    """
    if transaction is None:
        return Transition.ignored(None, IgnoreReason.TRANSACTION_NOT_FOUND)

    if transaction.client_id != client_id:
        return Transition.ignored(transaction.status, IgnoreReason.CLIENT_MISMATCH)

    if operation == DisputeOperation.DISPUTE and transaction.direction != TransactionDirection.DEPOSIT:
        return Transition.ignored(transaction.status, IgnoreReason.NOT_A_DEPOSIT)

    return transition(transaction.status, operation, account.locked)
