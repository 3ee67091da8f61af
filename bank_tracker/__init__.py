"""Mini README: Core package initializer for the banking transaction tracker.

The ledger, its snapshot storage, and the customer lookup live in their own
subpackages; this module re-exports the pieces an application entry point
needs to wire them together.
"""

from .errors import (
    InsufficientFunds,
    InvalidAmount,
    InvalidTransactionKind,
    PersistenceError,
    ProfileFetchError,
    TrackerError,
    TransactionNotFound,
)
from .ledger import Ledger, Transaction, TransactionKind
from .logging_utils import get_logger

__all__ = [
    "InsufficientFunds",
    "InvalidAmount",
    "InvalidTransactionKind",
    "Ledger",
    "PersistenceError",
    "ProfileFetchError",
    "TrackerError",
    "Transaction",
    "TransactionKind",
    "TransactionNotFound",
    "get_logger",
]
