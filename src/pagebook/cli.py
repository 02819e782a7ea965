from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import load_config
from .editor import PageBuffer
from .errors import PagebookError
from .export import export_csv, export_csv_file, export_json, export_json_file
from .session import Session


def _ask(question: str) -> bool:
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def _confirmer(assume_yes: bool):
    if assume_yes:
        return lambda _q: True
    return _ask


def _print_page(s: Session) -> None:
    buf = s.editor.buffer
    print(s.editor.status_line())
    print(f"date:    {buf.date}")
    print(f"time:    {buf.time}")
    print(f"title:   {buf.title}")
    print("content:")
    if buf.content:
        print(buf.content)


def _cmd_info(s: Session) -> int:
    nb = s.directory.current_notebook()
    print(f"Notebooks: {len(s.store.notebooks)}")
    print(f"Current:   {nb.name if nb else '-'}")
    print(f"Storage:   {s.size_info()}")
    return 0


def _cmd_list(s: Session) -> int:
    for nb_id, name, selected in s.directory.list_notebooks():
        marker = "*" if selected else " "
        print(f"{marker} {nb_id}  {name}")
    return 0


def _cmd_create(s: Session, name: str) -> int:
    nb = s.directory.create_notebook(name)
    print(f"Created notebook '{nb.name}' ({nb.id})")
    return 0


def _cmd_select(s: Session, nb_id: str) -> int:
    nb = s.directory.select_notebook(nb_id)
    print(f"Selected notebook '{nb.name}'")
    return 0


def _cmd_rename(s: Session, nb_id: str, name: str) -> int:
    nb = s.directory.rename_notebook(nb_id, name)
    print(f"Renamed notebook to '{nb.name}'")
    return 0


def _cmd_show(s: Session, page: Optional[str]) -> int:
    s.editor.goto(page if page is not None else 1)
    _print_page(s)
    return 0


def _cmd_save(s: Session, args: argparse.Namespace) -> int:
    s.editor.goto(args.page)
    cur = s.editor.buffer
    buf = PageBuffer(
        date=cur.date if args.date is None else args.date,
        time=cur.time if args.time is None else args.time,
        title=cur.title if args.title is None else args.title,
        content=cur.content if args.content is None else args.content,
    )
    s.editor.save(buf)
    print(s.editor.status_line())
    return 0


def _cmd_clear(s: Session, page: str, assume_yes: bool) -> int:
    if s.editor.clear(_confirmer(assume_yes), index=page):
        print(f"Cleared page {s.editor.index}")
    else:
        print("Cancelled")
    return 0


def _cmd_erase(s: Session, assume_yes: bool) -> int:
    if s.editor.erase_notebook(_confirmer(assume_yes)):
        print(f"Erased notebook '{s.editor.notebook.name}'")
    else:
        print("Cancelled")
    return 0


def _cmd_export_csv(s: Session, output: Optional[str]) -> int:
    nb = s.directory.current_notebook()
    if output == "-":
        print(export_csv(nb), end="")
        return 0
    path = export_csv_file(nb, output)
    print(f"Exported CSV: {path}")
    return 0


def _cmd_export_json(s: Session, output: Optional[str]) -> int:
    if not output:
        print(export_json(s.store), end="")
        return 0
    path = export_json_file(s.store, output)
    print(f"Exported JSON: {path}")
    return 0


def _cmd_import(s: Session, path: str) -> int:
    s.import_json_file(path)
    print(f"Imported {len(s.store.notebooks)} notebook(s) from {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="pagebook", description="Pagebook notebooks")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--dir", help="Storage directory (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("info", help="Show notebook count, selection and stored size")
    sub.add_parser("list", help="List notebooks (* marks the current one)")

    p_create = sub.add_parser("create", help="Create and select a notebook")
    p_create.add_argument("name")

    p_select = sub.add_parser("select", help="Select a notebook by id")
    p_select.add_argument("id")

    p_rename = sub.add_parser("rename", help="Rename a notebook")
    p_rename.add_argument("id")
    p_rename.add_argument("name")

    p_show = sub.add_parser("show", help="Show a page of the current notebook")
    p_show.add_argument("--page", default=None)

    p_save = sub.add_parser("save", help="Save fields into a page")
    p_save.add_argument("--page", required=True)
    p_save.add_argument("--date")
    p_save.add_argument("--time")
    p_save.add_argument("--title")
    p_save.add_argument("--content")

    p_clear = sub.add_parser("clear", help="Blank one page")
    p_clear.add_argument("--page", required=True)
    p_clear.add_argument("-y", "--yes", action="store_true", help="Do not ask")

    p_erase = sub.add_parser("erase", help="Blank every page of the current notebook")
    p_erase.add_argument("-y", "--yes", action="store_true", help="Do not ask")

    p_csv = sub.add_parser("export-csv", help="Export the current notebook as CSV")
    p_csv.add_argument(
        "-o", "--output", help="Output file ('-' for stdout, default: <name>_notebook.csv)"
    )

    p_json = sub.add_parser("export-json", help="Export all notebooks as JSON")
    p_json.add_argument("-o", "--output", help="Output file (default: stdout)")

    p_import = sub.add_parser("import", help="Replace all notebooks from a JSON export")
    p_import.add_argument("file")

    args = parser.parse_args(argv)

    if args.debug:
        log_level = logging.DEBUG
    elif args.verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    cmd = args.cmd
    try:
        config = load_config(args.config)
        if args.dir:
            config.storage_dir = Path(args.dir).expanduser()
        s = Session(config)

        if cmd == "info":
            return _cmd_info(s)
        if cmd == "list":
            return _cmd_list(s)
        if cmd == "create":
            return _cmd_create(s, args.name)
        if cmd == "select":
            return _cmd_select(s, args.id)
        if cmd == "rename":
            return _cmd_rename(s, args.id, args.name)
        if cmd == "show":
            return _cmd_show(s, args.page)
        if cmd == "save":
            return _cmd_save(s, args)
        if cmd == "clear":
            return _cmd_clear(s, args.page, args.yes)
        if cmd == "erase":
            return _cmd_erase(s, args.yes)
        if cmd == "export-csv":
            return _cmd_export_csv(s, args.output)
        if cmd == "export-json":
            return _cmd_export_json(s, args.output)
        if cmd == "import":
            return _cmd_import(s, args.file)
    except PagebookError as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.debug("Full traceback:", exc_info=True)
        return 1

    parser.error(f"unknown command {cmd}")
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
