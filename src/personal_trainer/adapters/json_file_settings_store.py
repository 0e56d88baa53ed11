"""JSON file implementation of the key-value settings store."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from personal_trainer.errors import PersistenceError
from personal_trainer.services.store import SettingsStore

logger = logging.getLogger(__name__)


@dataclass
class JsonFileSettingsStore(SettingsStore):
    """Keeps every key in one JSON object file, rewritten on each set."""

    path: Path
    _values: dict[str, str] | None = field(default=None, init=False, repr=False)

    def get(self, key: str) -> str | None:
        """Return the blob stored under a key, if present."""
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a blob and rewrite the file atomically."""
        values = dict(self._read())
        values[key] = value
        self._write(values)
        self._values = values

    def _read(self) -> dict[str, str]:
        if self._values is not None:
            return self._values
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            data = {}
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable settings file %s", self.path)
            data = {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s without an object", self.path)
            data = {}
        self._values = {
            str(key): value for key, value in data.items() if isinstance(value, str)
        }
        return self._values

    def _write(self, values: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(values, handle)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}") from exc
