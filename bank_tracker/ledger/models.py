"""Mini README: Value types recorded by the ledger.

Structure:
    * TransactionKind - enum of deposit versus withdrawal entries.
    * Transaction - immutable dataclass for a single ledger entry.
    * LedgerStatistics - read-only aggregate returned by ``Ledger.statistics``.
    * parse_amount / parse_timestamp / format_timestamp - coercion helpers
      shared by the ledger and the snapshot codec.

Amounts are ``Decimal`` values quantized to cents. Timestamps are UTC and
truncated to milliseconds so they survive the ISO-8601 ``...Z`` form used in
the stored snapshot without loss.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Optional

from ..errors import InvalidAmount

CENT = Decimal("0.01")
# 15 significant digits survive a round trip through a JSON float.
MAX_STORABLE_AMOUNT = Decimal("9999999999999.99")


class TransactionKind(str, Enum):
    """Enumerate the supported transaction kinds."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def from_str(cls, value: object) -> "TransactionKind":
        """Coerce arbitrary casing into a valid transaction kind."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower()
            return cls(normalised)
        except ValueError as error:
            raise ValueError(f"Unsupported transaction kind: {value}") from error


def parse_amount(value: object, *, max_amount: Optional[Decimal] = None) -> Decimal:
    """Return ``value`` as a positive cent-precision ``Decimal`` or raise ``InvalidAmount``."""

    if isinstance(value, bool) or value is None:
        raise InvalidAmount(f"Amount must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    try:
        amount = Decimal(str(value).strip()) if not isinstance(value, Decimal) else value
    except (InvalidOperation, ValueError) as error:
        raise InvalidAmount(f"Amount must be a number, got {value!r}") from error
    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    try:
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as error:
        raise InvalidAmount(f"Amount is out of range: {value!r}") from error
    if amount <= 0:
        raise InvalidAmount(f"Amount must be greater than zero, got {value!r}")
    if amount > MAX_STORABLE_AMOUNT:
        raise InvalidAmount(f"Amount exceeds the largest storable value {MAX_STORABLE_AMOUNT}")
    if max_amount is not None and amount > max_amount:
        raise InvalidAmount(f"Maximum amount is {max_amount}, got {amount}")
    return amount


def truncate_to_millis(moment: datetime) -> datetime:
    """Normalise to UTC and drop sub-millisecond precision."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.replace(microsecond=(moment.microsecond // 1000) * 1000)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""

    moment = truncate_to_millis(moment)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 string, accepting a trailing ``Z`` for UTC."""

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return truncate_to_millis(datetime.fromisoformat(text))


@dataclass(frozen=True, slots=True)
class Transaction:
    """A deposit or withdrawal recorded in the ledger."""

    transaction_id: str
    kind: TransactionKind
    amount: Decimal
    created_at: datetime

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise InvalidAmount(f"Transaction amount must be positive, got {self.amount}")

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign it contributes to the balance."""

        return self.amount if self.kind is TransactionKind.DEPOSIT else -self.amount

    def as_dict(self) -> Dict[str, object]:
        """Export using the stored snapshot field names."""

        return {
            "id": self.transaction_id,
            "type": self.kind.value,
            "amount": float(self.amount),
            "timestamp": format_timestamp(self.created_at),
        }


@dataclass(frozen=True, slots=True)
class LedgerStatistics:
    """Aggregate counts and totals over the ledger's transactions."""

    count: int
    total_deposits: Decimal
    total_withdrawals: Decimal
    deposit_count: int
    withdrawal_count: int
    balance: Decimal

    def as_dict(self) -> Dict[str, object]:
        return {
            "count": self.count,
            "total_deposits": float(self.total_deposits),
            "total_withdrawals": float(self.total_withdrawals),
            "deposit_count": self.deposit_count,
            "withdrawal_count": self.withdrawal_count,
            "balance": float(self.balance),
        }
