from __future__ import annotations

import json
import logging
from typing import Optional

from .errors import StorageReadError
from .model import Store
from .storage import Slot, utf8_size

logger = logging.getLogger(__name__)

FRESH_NOTEBOOK_NAME = "My First Notebook"
RECOVERED_NOTEBOOK_NAME = "Recovered Notebook"
SIZE_NOT_AVAILABLE = "n/a"


def dumps_store(store: Store, indent: Optional[int] = None) -> str:
    return json.dumps(store.to_dict(), indent=indent, ensure_ascii=False)


class StoreRepository:
    """Owns the single persisted blob behind one slot."""

    def __init__(self, slot: Slot) -> None:
        self.slot = slot

    def load(self) -> Store:
        """Read the slot, replacing a missing or corrupt value with a fresh store.

        A value is corrupt when it is not UTF-8 text, not JSON (including JSON
        nested too deeply to decode) or has no ``notebooks`` list.
        No partial repair is attempted; the slot is overwritten on recovery.
        """
        try:
            raw = self.slot.read()
        except UnicodeDecodeError as e:
            return self._recover(e)
        if raw is None:
            store = Store.with_notebook(FRESH_NOTEBOOK_NAME)
            logger.info("No stored notebooks under '%s'; created a fresh store", self.slot.key)
            self.persist(store)
            return store
        try:
            data = json.loads(raw)
            if not isinstance(data, dict) or not isinstance(data.get("notebooks"), list):
                raise ValueError("missing notebooks list")
            return Store.from_dict(data)
        except (ValueError, RecursionError) as e:
            return self._recover(e)

    def _recover(self, reason: Exception) -> Store:
        logger.warning(
            "Stored value under '%s' is corrupt (%s); replacing it", self.slot.key, reason
        )
        store = Store.with_notebook(RECOVERED_NOTEBOOK_NAME)
        self.persist(store)
        return store

    def persist(self, store: Store) -> None:
        """Write the whole store synchronously. StorageWriteError propagates."""
        text = dumps_store(store)
        self.slot.write(text)
        logger.debug("Persisted %d notebook(s), %d bytes", len(store.notebooks), utf8_size(text))

    def size_info(self) -> str:
        """Stored size in kilobytes to one decimal place, e.g. ``"12.3 KB"``."""
        try:
            raw = self.slot.read()
        except (StorageReadError, UnicodeDecodeError):
            logger.debug("Size lookup failed", exc_info=True)
            return SIZE_NOT_AVAILABLE
        if raw is None:
            return SIZE_NOT_AVAILABLE
        return f"{utf8_size(raw) / 1024:.1f} KB"
