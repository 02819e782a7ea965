from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .model import MAX_PAGES, Notebook, Page, Store, blank_pages
from .repository import StoreRepository

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def now_ms() -> int:
    return int(time.time() * 1000)


def clamp_page(value: object) -> int:
    """Coerce any input to a 1-based page index in [1, MAX_PAGES].

    Non-numeric input maps to 1; out-of-range input to the nearest bound.
    """
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        try:
            n = int(float(value))  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            return 1
    return max(1, min(MAX_PAGES, n))


def format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class PageBuffer:
    """Unsaved editable copy of one page's fields."""

    date: str = ""
    time: str = ""
    title: str = ""
    content: str = ""

    @classmethod
    def from_page(cls, page: Page) -> "PageBuffer":
        return cls(date=page.date, time=page.time, title=page.title, content=page.content)


class PageEditor:
    """Single-page view over the current notebook with explicit commits.

    Edits go to ``buffer`` and only reach the store through save().
    """

    def __init__(
        self,
        store: Store,
        repository: StoreRepository,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store
        self.repository = repository
        self.clock = clock
        self.index = 1
        self.buffer = PageBuffer()
        self.load()

    @property
    def notebook(self) -> Optional[Notebook]:
        return self.store.current()

    def page(self, index: Optional[int] = None) -> Page:
        nb = self._require_notebook()
        return nb.pages[clamp_page(self.index if index is None else index) - 1]

    def _require_notebook(self) -> Notebook:
        nb = self.notebook
        if nb is None:
            raise LookupError("Store holds no notebooks")
        return nb

    def load(self) -> PageBuffer:
        """Copy the current page into the buffer; lastModified is untouched."""
        if self.notebook is None:
            self.buffer = PageBuffer()
        else:
            self.buffer = PageBuffer.from_page(self.page())
        return self.buffer

    def reset(self, _selected_id: Optional[str] = None) -> None:
        """Back to page 1 and reload; hooked to selection changes."""
        self.index = 1
        self.load()

    def goto(self, value: object) -> PageBuffer:
        self.index = clamp_page(value)
        return self.load()

    def next(self) -> PageBuffer:
        return self.goto(self.index + 1)

    def prev(self) -> PageBuffer:
        return self.goto(self.index - 1)

    def save(
        self, buffer: Optional[PageBuffer] = None, index: Optional[object] = None
    ) -> PageBuffer:
        if index is not None:
            self.index = clamp_page(index)
        buf = self.buffer if buffer is None else buffer
        page = self.page()
        page.date = buf.date or ""
        page.time = buf.time or ""
        page.title = (buf.title or "").strip()
        page.content = buf.content or ""
        page.last_modified = self.clock()
        self.repository.persist(self.store)
        logger.info("Saved page %d of '%s'", self.index, self._require_notebook().name)
        return self.load()

    def clear(self, confirm: Confirm, index: Optional[object] = None) -> bool:
        """Blank one page after confirmation. Returns False when declined."""
        if index is not None:
            self.index = clamp_page(index)
        nb = self._require_notebook()
        if not confirm(f"Clear page {self.index} of '{nb.name}'?"):
            return False
        nb.pages[self.index - 1] = Page()
        self.repository.persist(self.store)
        logger.info("Cleared page %d of '%s'", self.index, nb.name)
        self.load()
        return True

    def erase_notebook(self, confirm: Confirm) -> bool:
        """Blank every page of the current notebook after confirmation."""
        nb = self._require_notebook()
        if not confirm(f"Erase all {MAX_PAGES} pages of '{nb.name}'?"):
            return False
        nb.pages[:] = blank_pages()
        self.repository.persist(self.store)
        logger.info("Erased notebook '%s'", nb.name)
        self.load()
        return True

    def status_line(self) -> str:
        nb = self.notebook
        if nb is None:
            return "no notebook"
        lm = self.page().last_modified
        saved = "never saved" if lm is None else f"saved {format_timestamp(lm)}"
        return f"{nb.name} - page {self.index}/{MAX_PAGES} - {saved}"
