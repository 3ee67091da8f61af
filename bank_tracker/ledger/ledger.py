"""Mini README: Transaction ledger with a derived running balance.

Structure:
    * Ledger - owns the newest-first transaction list, the balance derived
      from it, and the last known customer profile.

Balance handling:
    ``add`` adjusts the balance incrementally by the new entry's signed
    amount. ``remove`` and hydration call ``recompute`` which folds the whole
    list again, so any drift is corrected on the next structural change.
    Nothing else writes ``_balance``.

Persistence:
    When constructed with a ``PersistenceAdapter`` every successful mutation
    saves a full snapshot. A failed save never undoes the mutation; the error
    is logged and kept on ``last_persistence_error`` until the next successful
    save. Without a store the ledger is purely in-memory.
"""

from __future__ import annotations

import secrets
import string
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Set

from ..customers.profile import CustomerProfile
from ..errors import InsufficientFunds, InvalidTransactionKind, PersistenceError, TransactionNotFound
from ..logging_utils import get_logger
from .models import (
    LedgerStatistics,
    Transaction,
    TransactionKind,
    parse_amount,
    truncate_to_millis,
)
from .snapshot import LedgerSnapshot

if TYPE_CHECKING:
    from ..persistence.base import PersistenceAdapter

LOGGER = get_logger(__name__)

ZERO = Decimal("0.00")
_ID_ALPHABET = string.ascii_lowercase + string.digits


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ledger:
    """Ordered deposits and withdrawals plus their derived balance."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        *,
        store: Optional["PersistenceAdapter"] = None,
        customer: Optional[CustomerProfile] = None,
        max_amount: Optional[Decimal] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._transactions: List[Transaction] = []
        self._ids: Set[str] = set()
        self._balance = ZERO
        self._customer = customer
        self._store = store
        self._clock = clock
        self.max_amount = max_amount
        self.last_persistence_error: Optional[PersistenceError] = None
        for transaction in transactions or ():
            if transaction.transaction_id in self._ids:
                raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
            self._ids.add(transaction.transaction_id)
            self._transactions.append(transaction)
        self.recompute()
        LOGGER.debug("Ledger initialised with %s transactions", len(self._transactions))

    @classmethod
    def hydrate(cls, store: "PersistenceAdapter", **options) -> "Ledger":
        """Build a ledger from ``store``, starting empty if nothing usable is stored."""

        try:
            snapshot = store.load()
        except PersistenceError as error:
            LOGGER.warning("Discarding unreadable ledger snapshot: %s", error)
            ledger = cls(store=store, **options)
            ledger.last_persistence_error = error
            return ledger

        if snapshot is None:
            return cls(store=store, **options)

        ledger = cls(snapshot.transactions, store=store, customer=snapshot.customer, **options)
        if ledger.balance != snapshot.current_balance:
            LOGGER.warning(
                "Stored balance %s disagrees with transactions; using recomputed %s",
                snapshot.current_balance,
                ledger.balance,
            )
        LOGGER.info("Ledger hydrated with %s transactions", len(ledger))
        return ledger

    def __len__(self) -> int:
        return len(self._transactions)

    @property
    def transactions(self) -> List[Transaction]:
        """Copy of the transactions, newest first."""

        return list(self._transactions)

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def customer(self) -> Optional[CustomerProfile]:
        return self._customer

    def get(self, transaction_id: str) -> Transaction:
        for transaction in self._transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise TransactionNotFound(transaction_id)

    def add(self, kind: object, amount: object) -> Transaction:
        """Record a deposit or withdrawal and return the new entry."""

        try:
            transaction_kind = TransactionKind.from_str(kind)
        except ValueError as error:
            raise InvalidTransactionKind(str(error)) from error
        value = parse_amount(amount, max_amount=self.max_amount)
        if transaction_kind is TransactionKind.WITHDRAWAL and value > self._balance:
            raise InsufficientFunds(value, self._balance)

        transaction = Transaction(
            transaction_id=self._next_id(),
            kind=transaction_kind,
            amount=value,
            created_at=truncate_to_millis(self._clock()),
        )
        self._transactions.insert(0, transaction)
        self._ids.add(transaction.transaction_id)
        self._balance += transaction.signed_amount
        LOGGER.info(
            "Recorded %s %s of %s; balance now %s",
            transaction.kind.value,
            transaction.transaction_id,
            transaction.amount,
            self._balance,
        )
        self._persist()
        return transaction

    def remove(self, transaction_id: str) -> Transaction:
        """Delete a transaction and recompute the balance from what remains."""

        for index, transaction in enumerate(self._transactions):
            if transaction.transaction_id == transaction_id:
                break
        else:
            raise TransactionNotFound(transaction_id)

        del self._transactions[index]
        self._ids.discard(transaction_id)
        self.recompute()
        LOGGER.info("Removed %s %s; balance now %s", transaction.kind.value, transaction_id, self._balance)
        self._persist()
        return transaction

    def recompute(self) -> Decimal:
        """Re-derive the balance from the transaction list."""

        self._balance = sum((transaction.signed_amount for transaction in self._transactions), ZERO)
        return self._balance

    def statistics(self) -> LedgerStatistics:
        deposits = [t.amount for t in self._transactions if t.kind is TransactionKind.DEPOSIT]
        withdrawals = [t.amount for t in self._transactions if t.kind is TransactionKind.WITHDRAWAL]
        return LedgerStatistics(
            count=len(self._transactions),
            total_deposits=sum(deposits, ZERO),
            total_withdrawals=sum(withdrawals, ZERO),
            deposit_count=len(deposits),
            withdrawal_count=len(withdrawals),
            balance=self._balance,
        )

    def clear(self) -> None:
        """Drop every transaction and the customer, and delete the stored snapshot."""

        self._transactions.clear()
        self._ids.clear()
        self._balance = ZERO
        self._customer = None
        LOGGER.info("Ledger cleared")
        if self._store is None:
            return
        try:
            self._store.delete()
        except PersistenceError as error:
            LOGGER.warning("Failed to delete stored ledger: %s", error)
            self.last_persistence_error = error
        else:
            self.last_persistence_error = None

    def set_customer(self, profile: Optional[CustomerProfile]) -> None:
        """Replace the customer profile as a whole and persist it."""

        self._customer = profile
        LOGGER.info("Customer set to %s", profile.name if profile else None)
        self._persist()

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            transactions=list(self._transactions),
            current_balance=self._balance,
            customer=self._customer,
            last_updated=truncate_to_millis(self._clock()),
        )

    def _next_id(self) -> str:
        """Return ``txn_<epoch millis>_<9 random chars>``, unique within this ledger."""

        while True:
            suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
            candidate = f"txn_{time.time_ns() // 1_000_000}_{suffix}"
            if candidate not in self._ids:
                return candidate

    def _persist(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save(self.snapshot())
        except PersistenceError as error:
            LOGGER.warning("Ledger change kept in memory but not saved: %s", error)
            self.last_persistence_error = error
        else:
            self.last_persistence_error = None
