from __future__ import annotations

from typing import Callable, Optional

from .config import Config
from .directory import NotebookDirectory
from .editor import PageEditor, now_ms
from .errors import StorageWriteError
from .importer import import_json, import_json_file
from .model import Store
from .repository import StoreRepository
from .storage import FileSlot, Slot


class Session:
    """Application handle owning the store and every component that uses it.

    The directory's selection events and completed imports both reset the
    editor to page 1 of the (new) current notebook.
    """

    def __init__(
        self,
        config: Config,
        slot: Optional[Slot] = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.config = config
        if slot is None:
            slot = FileSlot(config.storage_dir, config.storage_key, config.quota_bytes)
        self.repository = StoreRepository(slot)
        self.store: Store = self.repository.load()
        self.directory = NotebookDirectory(self.store, self.repository)
        self.editor = PageEditor(self.store, self.repository, clock=clock)
        self.directory.on_select(self.editor.reset)

    def import_json(self, text: str) -> Store:
        return self._import(import_json, text)

    def import_json_file(self, path: str) -> Store:
        return self._import(import_json_file, path)

    def _import(self, fn: Callable[..., Store], source: str) -> Store:
        try:
            fn(
                self.store,
                self.repository,
                source,
                validate_selection=self.config.validate_selection,
            )
        except StorageWriteError:
            # the in-memory store was already replaced
            self.editor.reset()
            raise
        self.editor.reset()
        return self.store

    def size_info(self) -> str:
        return self.repository.size_info()
