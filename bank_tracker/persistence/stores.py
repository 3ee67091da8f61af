"""Mini README: Concrete snapshot stores.

Structure:
    * MemoryStore - dictionary-backed store mirroring browser local storage;
      several stores may share one mapping under different keys.
    * JsonFileStore - ``<directory>/<key>.json`` file written atomically.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, MutableMapping, Optional

from .base import DEFAULT_STORAGE_KEY, PersistenceAdapter


class MemoryStore(PersistenceAdapter):
    """Keep the snapshot in a (possibly shared) mapping."""

    def __init__(
        self,
        key: str = DEFAULT_STORAGE_KEY,
        backing: Optional[MutableMapping[str, str]] = None,
    ) -> None:
        super().__init__(key)
        self.backing: MutableMapping[str, str] = backing if backing is not None else {}

    def read_blob(self) -> Optional[str]:
        return self.backing.get(self.key)

    def write_blob(self, blob: str) -> None:
        self.backing[self.key] = blob

    def delete_blob(self) -> None:
        self.backing.pop(self.key, None)


class JsonFileStore(PersistenceAdapter):
    """Persist the snapshot as a JSON file inside ``directory``."""

    def __init__(self, directory: Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        super().__init__(key)
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def read_blob(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write_blob(self, blob: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file and rename so readers never see half a blob.
        descriptor, temp_name = tempfile.mkstemp(
            prefix=f".{self.key}.", suffix=".tmp", dir=self.directory
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                handle.write(blob)
            os.replace(temp_name, self.path)
        except OSError:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def delete_blob(self) -> None:
        self.path.unlink(missing_ok=True)

    def describe(self) -> Dict[str, str]:
        """Return diagnostic details for logs and the CLI."""

        return {"key": self.key, "path": str(self.path)}
