"""JSON-file backed key-value store for a single device."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from dinner_concierge.domain.errors import PersistenceError
from dinner_concierge.services.order_store import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Keeps every key in one JSON object on disk."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored string for a key."""
        value = self._read().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise PersistenceError(f"Stored value for {key!r} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        """Store a string under a key, rewriting the file atomically.

        An unreadable file is replaced rather than blocking every later write.
        """
        try:
            entries = self._read()
        except PersistenceError:
            logger.warning(
                "Replacing unreadable store file",
                exc_info=True,
                extra={"path": str(self.path)},
            )
            entries = {}
        entries[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(entries, handle, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {self.path}") from exc

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            entries = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Failed to read {self.path}") from exc
        if not isinstance(entries, dict):
            raise PersistenceError(f"{self.path} does not hold a JSON object")
        return entries
