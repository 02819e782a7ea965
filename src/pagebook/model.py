from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

MAX_PAGES = 100

_PAGE_TEXT_FIELDS = ("date", "time", "title", "content")


def _new_id() -> str:
    return str(uuid.uuid4())


def _text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass
class Page:
    """One dated note entry. Identified only by its position in a notebook.

    last_modified: milliseconds since the epoch, None until first saved.
    """

    date: str = ""
    time: str = ""
    title: str = ""
    content: str = ""
    last_modified: Optional[int] = None

    def to_dict(self) -> Dict:
        return {
            "date": self.date,
            "time": self.time,
            "title": self.title,
            "content": self.content,
            "lastModified": self.last_modified,
        }

    @classmethod
    def from_dict(cls, d: object) -> "Page":
        if not isinstance(d, dict):
            return cls()
        lm = d.get("lastModified")
        if isinstance(lm, bool) or not isinstance(lm, (int, float)):
            lm = None
        elif isinstance(lm, float) and not math.isfinite(lm):
            lm = None
        kwargs = {k: _text(d.get(k)) for k in _PAGE_TEXT_FIELDS}
        return cls(last_modified=int(lm) if lm is not None else None, **kwargs)


def blank_pages() -> List[Page]:
    return [Page() for _ in range(MAX_PAGES)]


@dataclass
class Notebook:
    """A named notebook holding exactly MAX_PAGES pages."""

    id: str
    name: str
    pages: List[Page] = field(default_factory=blank_pages)

    def __post_init__(self) -> None:
        if len(self.pages) != MAX_PAGES:
            raise ValueError(
                f"Notebook must hold exactly {MAX_PAGES} pages, got {len(self.pages)}"
            )

    @classmethod
    def new(cls, name: str) -> "Notebook":
        return cls(id=_new_id(), name=name)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "pages": [p.to_dict() for p in self.pages],
        }

    @classmethod
    def from_dict(cls, d: object) -> "Notebook":
        """Best-effort decode; pads or cuts the page list to MAX_PAGES."""
        if not isinstance(d, dict):
            d = {}
        raw_pages = d.get("pages")
        if not isinstance(raw_pages, list):
            raw_pages = []
        pages = [Page.from_dict(p) for p in raw_pages[:MAX_PAGES]]
        pages.extend(Page() for _ in range(MAX_PAGES - len(pages)))
        nb_id = d.get("id")
        return cls(
            id=_text(nb_id) if nb_id else _new_id(),
            name=_text(d.get("name")),
            pages=pages,
        )


@dataclass
class Store:
    """Full durable state: every notebook plus the selection pointer."""

    notebooks: List[Notebook] = field(default_factory=list)
    selected_id: Optional[str] = None

    def find(self, notebook_id: Optional[str]) -> Optional[Notebook]:
        if notebook_id is None:
            return None
        for nb in self.notebooks:
            if nb.id == notebook_id:
                return nb
        return None

    def current(self) -> Optional[Notebook]:
        # Falls back to the first notebook without touching selected_id
        nb = self.find(self.selected_id)
        if nb is None and self.notebooks:
            return self.notebooks[0]
        return nb

    def to_dict(self) -> Dict:
        return {
            "notebooks": [nb.to_dict() for nb in self.notebooks],
            "selectedId": self.selected_id,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "Store":
        sel = d.get("selectedId")
        return cls(
            notebooks=[Notebook.from_dict(nb) for nb in d.get("notebooks") or []],
            selected_id=None if sel is None else _text(sel),
        )

    @classmethod
    def with_notebook(cls, name: str) -> "Store":
        nb = Notebook.new(name)
        return cls(notebooks=[nb], selected_id=nb.id)
