"""Mini README: Snapshot codec turning ledger state into the stored JSON blob.

Structure:
    * LedgerSnapshot - full serialisable state (transactions, balance,
      customer, last update time).
    * encode_snapshot - snapshot to JSON text.
    * decode_snapshot - JSON text to snapshot, raising ``PersistenceError``
      on anything malformed.

Stored shape::

    {
      "transactions": [{"id": ..., "type": "deposit"|"withdrawal",
                        "amount": <number>, "timestamp": "<ISO-8601>"}],
      "currentBalance": <number>,
      "customer": {...} | null,
      "lastUpdated": "<ISO-8601>"
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from ..customers.profile import CustomerProfile
from ..errors import PersistenceError
from .models import (
    Transaction,
    TransactionKind,
    format_timestamp,
    parse_amount,
    parse_timestamp,
)


@dataclass(slots=True)
class LedgerSnapshot:
    """Serializable view of a ledger at a point in time."""

    transactions: List[Transaction] = field(default_factory=list)
    current_balance: Decimal = Decimal("0.00")
    customer: Optional[CustomerProfile] = None
    last_updated: Optional[datetime] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "transactions": [transaction.as_dict() for transaction in self.transactions],
            "currentBalance": float(self.current_balance),
            "customer": self.customer.as_dict() if self.customer else None,
            "lastUpdated": format_timestamp(self.last_updated) if self.last_updated else None,
        }


def encode_snapshot(snapshot: LedgerSnapshot) -> str:
    """Serialise ``snapshot`` to a JSON string."""

    return json.dumps(snapshot.as_dict())


def _decode_transaction(entry: Any, position: int) -> Transaction:
    if not isinstance(entry, Mapping):
        raise PersistenceError(f"Transaction #{position} is not an object")
    try:
        transaction_id = entry["id"]
        if not isinstance(transaction_id, (str, int)) or isinstance(transaction_id, bool):
            raise PersistenceError(f"Transaction #{position} has an invalid id")
        amount = entry["amount"]
        if isinstance(amount, str):
            raise PersistenceError(f"Transaction #{position} amount must be a number")
        return Transaction(
            transaction_id=str(transaction_id),
            kind=TransactionKind.from_str(entry["type"]),
            amount=parse_amount(amount),
            created_at=parse_timestamp(str(entry["timestamp"])),
        )
    except KeyError as error:
        raise PersistenceError(f"Transaction #{position} is missing field {error}") from error
    except ValueError as error:
        # InvalidAmount and bad timestamps/kinds all land here.
        raise PersistenceError(f"Transaction #{position}: {error}") from error


def decode_snapshot(blob: str) -> LedgerSnapshot:
    """Parse a stored blob, validating every transaction."""

    try:
        data = json.loads(blob)
    except (json.JSONDecodeError, TypeError, RecursionError) as error:
        raise PersistenceError(f"Stored snapshot is not valid JSON: {error}") from error
    if not isinstance(data, Mapping):
        raise PersistenceError("Stored snapshot must be a JSON object")

    raw_transactions = data.get("transactions") or []
    if not isinstance(raw_transactions, list):
        raise PersistenceError("Stored transactions must be a list")
    transactions = [
        _decode_transaction(entry, position) for position, entry in enumerate(raw_transactions)
    ]
    seen = set()
    for transaction in transactions:
        if transaction.transaction_id in seen:
            raise PersistenceError(f"Duplicate transaction id {transaction.transaction_id}")
        seen.add(transaction.transaction_id)

    raw_balance = data.get("currentBalance") or 0
    if isinstance(raw_balance, bool) or not isinstance(raw_balance, (int, float)):
        raise PersistenceError("Stored currentBalance must be a number")
    try:
        current_balance = Decimal(str(raw_balance)).quantize(Decimal("0.01"))
    except InvalidOperation as error:
        raise PersistenceError(f"Stored currentBalance is invalid: {raw_balance!r}") from error

    raw_customer = data.get("customer")
    if raw_customer is not None and not isinstance(raw_customer, Mapping):
        raise PersistenceError("Stored customer must be an object or null")
    customer = CustomerProfile.from_dict(raw_customer) if raw_customer else None

    raw_updated = data.get("lastUpdated")
    try:
        last_updated = parse_timestamp(raw_updated) if isinstance(raw_updated, str) else None
    except ValueError as error:
        raise PersistenceError(f"Stored lastUpdated is invalid: {raw_updated!r}") from error

    return LedgerSnapshot(
        transactions=transactions,
        current_balance=current_balance,
        customer=customer,
        last_updated=last_updated,
    )
