"""Key-value stores backing the tracker state."""

import json
import logging
import os
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Flat key-value store with an atomic read-modify-write primitive."""

    def get(self, key: str) -> object | None:
        """Return the stored value or None when the key is unset."""

    def set(self, key: str, value: object) -> None:
        """Store a single value."""

    def transaction(self) -> AbstractContextManager[dict[str, object]]:
        """Yield a mutable draft that is applied only if the block succeeds."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store; the base for file-backed stores."""

    _data: dict[str, object] = field(default_factory=dict)
    _lock: threading.RLock = field(
        init=False, repr=False, default_factory=threading.RLock
    )

    def get(self, key: str) -> object | None:
        """Return the stored value for a key."""
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: object) -> None:
        """Store a single value."""
        with self.transaction() as draft:
            draft[key] = value

    @contextmanager
    def transaction(self) -> Iterator[dict[str, object]]:
        """Apply all changes made to the draft at once, or none of them."""
        with self._lock:
            draft = dict(self._data)
            yield draft
            self._commit(draft)
            self._data = draft

    def _commit(self, data: dict[str, object]) -> None:
        return None


@dataclass
class JsonFileKeyValueStore(InMemoryKeyValueStore):
    """Store persisted as one JSON document, replaced atomically on commit."""

    path: Path = Path("hydration_tracker.json")

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._data = _read_document(self.path)

    def _commit(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        temp_path.write_text(json.dumps(data, indent=2, sort_keys=True))
        os.replace(temp_path, self.path)


def _read_document(path: Path) -> dict[str, object]:
    if not path.exists():
        return {}
    try:
        document = json.loads(path.read_text())
    except (OSError, ValueError):
        _logger.warning("Unreadable store file, starting empty: path=%s", path)
        return {}
    if not isinstance(document, dict):
        _logger.warning("Store file is not an object, starting empty: path=%s", path)
        return {}
    return document
