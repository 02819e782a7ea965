from __future__ import annotations

import csv
import io
import re
from pathlib import Path
from typing import List, Optional

from .model import Notebook, Store
from .repository import dumps_store

CSV_HEADER = ["notebook", "page", "date", "time", "title", "content"]

_FILENAME_UNSAFE = re.compile(r"[^\w-]+")


def _cell(value: object) -> str:
    return "" if value is None else str(value)


def csv_rows(nb: Notebook) -> List[List[str]]:
    rows = [list(CSV_HEADER)]
    for i, page in enumerate(nb.pages, start=1):
        rows.append(
            [
                _cell(nb.name),
                str(i),
                _cell(page.date),
                _cell(page.time),
                _cell(page.title),
                _cell(page.content),
            ]
        )
    return rows


def export_csv(nb: Notebook) -> str:
    """Render one notebook as CSV: a header row then one row per page.

    Rows end with CRLF. Fields holding a comma, a double quote, CR or LF
    are quoted with inner quotes doubled. lastModified and the notebook id are not exported.
    """
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerows(csv_rows(nb))
    return out.getvalue()


def csv_filename(nb: Notebook) -> str:
    return _FILENAME_UNSAFE.sub("_", nb.name) + "_notebook.csv"


def export_json(store: Store) -> str:
    """Full-fidelity backup of the store, pretty-printed with 2-space indent."""
    return dumps_store(store, indent=2) + "\n"


def export_csv_file(nb: Notebook, out_path: Optional[str] = None) -> Path:
    path = Path(out_path) if out_path else Path(csv_filename(nb))
    path.write_text(export_csv(nb), encoding="utf-8", newline="")
    return path


def export_json_file(store: Store, out_path: str) -> Path:
    path = Path(out_path)
    path.write_text(export_json(store), encoding="utf-8")
    return path
