"""Pagebook: fixed-size notebooks persisted in a single storage slot.

Models, slot-backed repository, notebook directory, page editor, and the
CSV/JSON export and JSON import pipeline.
"""

__all__ = [
    "MAX_PAGES",
    "Page",
    "Notebook",
    "Store",
    "StoreRepository",
    "NotebookDirectory",
    "PageEditor",
    "PageBuffer",
    "clamp_page",
    "export_csv",
    "export_json",
    "import_json",
    "Session",
]

__version__ = "0.1.0"

from .model import MAX_PAGES, Page, Notebook, Store  # noqa: E402
from .repository import StoreRepository  # noqa: E402
from .directory import NotebookDirectory  # noqa: E402
from .editor import PageEditor, PageBuffer, clamp_page  # noqa: E402
from .export import export_csv, export_json  # noqa: E402
from .importer import import_json  # noqa: E402
from .session import Session  # noqa: E402
