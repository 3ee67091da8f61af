"""Mini README: Snapshot persistence for the ledger.

The ledger talks to a ``PersistenceAdapter``; ``MemoryStore`` mirrors the
browser's local storage and ``JsonFileStore`` keeps the same blob on disk.
The JSON shape itself lives in ``bank_tracker.ledger.snapshot``.
"""

from .base import DEFAULT_STORAGE_KEY, PersistenceAdapter
from .stores import JsonFileStore, MemoryStore

__all__ = ["DEFAULT_STORAGE_KEY", "JsonFileStore", "MemoryStore", "PersistenceAdapter"]
