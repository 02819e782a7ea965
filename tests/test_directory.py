import json
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from pagebook.directory import NotebookDirectory
from pagebook.editor import PageBuffer, PageEditor
from pagebook.errors import StorageWriteError, ValidationError
from pagebook.repository import StoreRepository
from pagebook.storage import MemorySlot


class TestNotebookDirectory(unittest.TestCase):
    def setUp(self):
        self.slot = MemorySlot()
        self.repo = StoreRepository(self.slot)
        self.store = self.repo.load()
        self.directory = NotebookDirectory(self.store, self.repo)
        self.events = []
        self.directory.on_select(self.events.append)

    def _persisted(self):
        return json.loads(self.slot.read())

    def test_create_appends_selects_and_persists(self):
        nb = self.directory.create_notebook("  Work  ")
        self.assertEqual(nb.name, "Work")
        self.assertEqual(len(nb.pages), 100)
        self.assertEqual(len(self.store.notebooks), 2)
        self.assertEqual(self.store.selected_id, nb.id)
        self.assertEqual(self.events, [nb.id])
        data = self._persisted()
        self.assertEqual(data["selectedId"], nb.id)
        self.assertEqual([n["name"] for n in data["notebooks"]], ["My First Notebook", "Work"])

    def test_create_rejects_blank_names(self):
        before = self.slot.read()
        for name in ["", "   "]:
            with self.assertRaises(ValidationError):
                self.directory.create_notebook(name)
        self.assertEqual(len(self.store.notebooks), 1)
        self.assertEqual(self.slot.read(), before)
        self.assertEqual(self.events, [])

    def test_select_changes_current_and_notifies(self):
        first = self.store.notebooks[0]
        second = self.directory.create_notebook("Second")
        self.directory.select_notebook(first.id)
        self.assertIs(self.directory.current_notebook(), first)
        self.assertEqual(self.events, [second.id, first.id])
        self.assertEqual(self._persisted()["selectedId"], first.id)

    def test_select_unknown_id(self):
        with self.assertRaises(ValidationError):
            self.directory.select_notebook("nope")
        self.assertEqual(self.events, [])

    def test_write_failure_still_resets_observers(self):
        editor = PageEditor(self.store, self.repo)
        self.directory.on_select(editor.reset)
        first = self.store.notebooks[0]
        editor.save(PageBuffer(title="draft"), index=30)
        self.slot.quota_bytes = 10

        with self.assertRaises(StorageWriteError):
            self.directory.create_notebook("Overflow")
        nb = self.store.notebooks[-1]
        self.assertEqual(self.store.selected_id, nb.id)
        self.assertEqual(editor.index, 1)
        self.assertIs(editor.notebook, nb)
        self.assertEqual(editor.buffer, PageBuffer())

        editor.goto(30)
        with self.assertRaises(StorageWriteError):
            self.directory.select_notebook(first.id)
        self.assertEqual(editor.index, 1)
        self.assertEqual(editor.goto(30).title, "draft")
        self.assertEqual(self.events, [nb.id, first.id])

    def test_rename(self):
        nb = self.store.notebooks[0]
        self.directory.rename_notebook(nb.id, " Diary ")
        self.assertEqual(nb.name, "Diary")
        self.assertEqual(self._persisted()["notebooks"][0]["name"], "Diary")
        with self.assertRaises(ValidationError):
            self.directory.rename_notebook(nb.id, " ")

    def test_list_marks_current(self):
        second = self.directory.create_notebook("Second")
        listing = self.directory.list_notebooks()
        self.assertEqual([x[1] for x in listing], ["My First Notebook", "Second"])
        self.assertEqual([x[2] for x in listing], [False, True])
        self.assertEqual(listing[1][0], second.id)

    def test_dangling_selection_falls_back_to_first(self):
        self.store.selected_id = "stale"
        self.assertIs(self.directory.current_notebook(), self.store.notebooks[0])
        self.assertEqual(self.directory.list_notebooks()[0][2], True)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
