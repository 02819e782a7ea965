from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import ImportDocumentError
from .model import Store
from .repository import StoreRepository

logger = logging.getLogger(__name__)


def parse_import(text: str) -> Store:
    """Decode an exported store document.

    Only the top level is checked: the value must be an object whose
    ``notebooks`` field is a list. Inner records are decoded leniently.
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ImportDocumentError(f"Import failed: not valid JSON ({e})") from e
    if not isinstance(data, dict) or not isinstance(data.get("notebooks"), list):
        raise ImportDocumentError("Import failed: document has no 'notebooks' list")
    return Store.from_dict(data)


def import_json(
    store: Store,
    repository: StoreRepository,
    text: str,
    *,
    validate_selection: bool = False,
) -> Store:
    """Replace the contents of ``store`` with an imported document and persist.

    With validate_selection false the imported selectedId is kept verbatim,
    even when it names no imported notebook. With it true a dangling id is
    replaced by the first imported notebook's id.
    On a parse failure nothing is changed.
    """
    incoming = parse_import(text)
    if validate_selection and incoming.find(incoming.selected_id) is None:
        fixed = incoming.notebooks[0].id if incoming.notebooks else None
        if fixed != incoming.selected_id:
            logger.info(
                "Imported selection %r does not resolve; using %r",
                incoming.selected_id,
                fixed,
            )
        incoming.selected_id = fixed
    store.notebooks = incoming.notebooks
    store.selected_id = incoming.selected_id
    logger.info("Imported %d notebook(s)", len(store.notebooks))
    repository.persist(store)
    return store


def import_json_file(
    store: Store,
    repository: StoreRepository,
    path: str,
    *,
    validate_selection: bool = False,
) -> Store:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ImportDocumentError(f"Import failed: cannot read {path} ({e})") from e
    return import_json(store, repository, text, validate_selection=validate_selection)
