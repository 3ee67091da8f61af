"""Mini README: Error hierarchy for ledger, storage and customer lookups.

Every error carries a stable ``kind`` string and the notification
``category`` a presentation layer should use when surfacing it
(``warning``, ``danger`` or ``info``).
"""

from __future__ import annotations

from typing import Dict


class TrackerError(Exception):
    """Base class for all tracker errors."""

    kind = "tracker_error"
    category = "danger"

    def as_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "category": self.category, "message": str(self)}


class InvalidAmount(TrackerError, ValueError):
    """Raised when an amount is not a finite positive number."""

    kind = "invalid_amount"
    category = "warning"


class InsufficientFunds(TrackerError):
    """Raised when a withdrawal exceeds the current balance."""

    kind = "insufficient_funds"

    def __init__(self, amount: object, balance: object) -> None:
        super().__init__(
            f"Insufficient funds: cannot withdraw {amount} from a balance of {balance}"
        )
        self.amount = amount
        self.balance = balance


class TransactionNotFound(TrackerError, KeyError):
    """Raised when a transaction id is not present in the ledger."""

    kind = "not_found"

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes.
        return str(self.args[0])


class PersistenceError(TrackerError):
    """Raised when the snapshot cannot be read, written or parsed."""

    kind = "persistence_error"
    category = "warning"


class ProfileFetchError(TrackerError):
    """Raised when the customer lookup fails or returns an unusable document."""

    kind = "profile_fetch_error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidTransactionKind(TrackerError, ValueError):
    """Raised when the transaction kind is neither deposit nor withdrawal."""

    kind = "invalid_kind"
    category = "warning"
