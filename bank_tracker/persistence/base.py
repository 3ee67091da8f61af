"""Mini README: Abstract storage interface for ledger snapshots.

Structure:
    * PersistenceAdapter - stores one JSON blob under a fixed key and
      converts it to and from ``LedgerSnapshot`` objects.

Concrete adapters only implement raw blob access (``read_blob``,
``write_blob``, ``delete_blob``). The shared ``save``/``load``/``delete``
methods run the codec and convert I/O failures into ``PersistenceError`` so
callers only ever handle one error type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..errors import PersistenceError
from ..logging_utils import get_logger
from ..ledger.snapshot import LedgerSnapshot, decode_snapshot, encode_snapshot

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "bankingTransactionData"


class PersistenceAdapter(ABC):
    """Base interface for snapshot storage backends."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY) -> None:
        if not key:
            raise ValueError("Storage key must not be empty")
        self.key = key

    @abstractmethod
    def read_blob(self) -> Optional[str]:
        """Return the stored blob, or ``None`` when nothing was saved yet."""

    @abstractmethod
    def write_blob(self, blob: str) -> None:
        """Overwrite the stored blob in full."""

    @abstractmethod
    def delete_blob(self) -> None:
        """Remove the stored blob; a no-op when absent."""

    def save(self, snapshot: LedgerSnapshot) -> None:
        blob = encode_snapshot(snapshot)
        try:
            self.write_blob(blob)
        except OSError as error:
            raise PersistenceError(f"Failed to save ledger under '{self.key}': {error}") from error
        LOGGER.debug(
            "Saved %s transactions under '%s'", len(snapshot.transactions), self.key
        )

    def load(self) -> Optional[LedgerSnapshot]:
        try:
            blob = self.read_blob()
        except (OSError, UnicodeDecodeError) as error:
            raise PersistenceError(f"Failed to read ledger under '{self.key}': {error}") from error
        if blob is None:
            LOGGER.debug("No stored ledger under '%s'", self.key)
            return None
        return decode_snapshot(blob)

    def delete(self) -> None:
        try:
            self.delete_blob()
        except OSError as error:
            raise PersistenceError(f"Failed to delete ledger under '{self.key}': {error}") from error
        LOGGER.debug("Deleted stored ledger under '%s'", self.key)
