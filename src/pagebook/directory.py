from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from .errors import ValidationError
from .model import Notebook, Store
from .repository import StoreRepository

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Optional[str]], None]


class NotebookDirectory:
    """Selection and creation of notebooks.

    Listeners registered with on_select are called with the new selected id
    after every selection change, including the one made by create_notebook.
    """

    def __init__(self, store: Store, repository: StoreRepository) -> None:
        self.store = store
        self.repository = repository
        self._listeners: List[SelectionListener] = []

    def on_select(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.store.selected_id)

    def current_notebook(self) -> Optional[Notebook]:
        return self.store.current()

    def list_notebooks(self) -> List[Tuple[str, str, bool]]:
        cur = self.current_notebook()
        cur_id = cur.id if cur is not None else None
        return [(nb.id, nb.name, nb.id == cur_id) for nb in self.store.notebooks]

    def create_notebook(self, name: str) -> Notebook:
        name = _require_name(name)
        nb = Notebook.new(name)
        self.store.notebooks.append(nb)
        self.store.selected_id = nb.id
        logger.info("Created notebook '%s' (%s)", nb.name, nb.id)
        try:
            self.repository.persist(self.store)
        finally:
            self._notify()
        return nb

    def select_notebook(self, notebook_id: str) -> Notebook:
        nb = self.store.find(notebook_id)
        if nb is None:
            raise ValidationError(f"No notebook with id {notebook_id}")
        self.store.selected_id = nb.id
        try:
            self.repository.persist(self.store)
        finally:
            self._notify()
        return nb

    def rename_notebook(self, notebook_id: str, name: str) -> Notebook:
        name = _require_name(name)
        nb = self.store.find(notebook_id)
        if nb is None:
            raise ValidationError(f"No notebook with id {notebook_id}")
        nb.name = name
        self.repository.persist(self.store)
        return nb


def _require_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Notebook name must not be empty")
    return name
