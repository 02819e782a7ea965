import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from pagebook.model import MAX_PAGES, Notebook, Page, Store


class TestModel(unittest.TestCase):
    def test_new_notebook_has_blank_pages(self):
        nb = Notebook.new("Work")
        self.assertEqual(len(nb.pages), MAX_PAGES)
        for p in nb.pages:
            self.assertEqual((p.date, p.time, p.title, p.content), ("", "", "", ""))
            self.assertIsNone(p.last_modified)

    def test_new_notebooks_get_distinct_ids(self):
        self.assertNotEqual(Notebook.new("a").id, Notebook.new("b").id)

    def test_pages_not_shared_between_notebooks(self):
        a, b = Notebook.new("a"), Notebook.new("b")
        a.pages[0].title = "x"
        self.assertEqual(b.pages[0].title, "")
        self.assertEqual(a.pages[1].title, "")

    def test_wrong_page_count_rejected(self):
        with self.assertRaises(ValueError):
            Notebook(id="x", name="x", pages=[Page()])

    def test_page_dict_uses_camel_case(self):
        d = Page(title="t", last_modified=5).to_dict()
        self.assertEqual(
            d,
            {"date": "", "time": "", "title": "t", "content": "", "lastModified": 5},
        )

    def test_from_dict_pads_and_defaults(self):
        nb = Notebook.from_dict({"id": "n1", "name": "N", "pages": [{"title": "only"}, 7]})
        self.assertEqual(len(nb.pages), MAX_PAGES)
        self.assertEqual(nb.pages[0].title, "only")
        self.assertEqual(nb.pages[0].content, "")
        self.assertEqual(nb.pages[1], Page())

    def test_from_dict_cuts_extra_pages(self):
        pages = [{"title": str(i)} for i in range(MAX_PAGES + 5)]
        nb = Notebook.from_dict({"id": "n1", "name": "N", "pages": pages})
        self.assertEqual(len(nb.pages), MAX_PAGES)
        self.assertEqual(nb.pages[-1].title, str(MAX_PAGES - 1))

    def test_current_falls_back_without_mutating_selection(self):
        store = Store(notebooks=[Notebook.new("a"), Notebook.new("b")], selected_id="gone")
        self.assertIs(store.current(), store.notebooks[0])
        self.assertEqual(store.selected_id, "gone")

    def test_current_empty_store(self):
        self.assertIsNone(Store().current())

    def test_store_dict_roundtrip(self):
        store = Store.with_notebook("a")
        store.notebooks[0].pages[3] = Page(title="x", last_modified=123)
        self.assertEqual(Store.from_dict(store.to_dict()), store)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
