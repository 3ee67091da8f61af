"""Mini README: The transaction ledger and its value types.

``Ledger`` is the single authority over transactions and the balance. The
snapshot codec defines how that state is written to storage.
"""

from .models import LedgerStatistics, Transaction, TransactionKind
from .snapshot import LedgerSnapshot, decode_snapshot, encode_snapshot
from .ledger import Ledger

__all__ = [
    "Ledger",
    "LedgerSnapshot",
    "LedgerStatistics",
    "Transaction",
    "TransactionKind",
    "decode_snapshot",
    "encode_snapshot",
]
